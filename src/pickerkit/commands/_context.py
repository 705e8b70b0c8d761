"""AppContext — shared Click context for all commands.

Created once by the root group; subcommands receive it through
``@click.pass_obj`` and hand their ServiceResult to :meth:`AppContext.emit`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pickerkit.config.logging import configure_logging
from pickerkit.output.formatters import OutputSettings, format_result
from pickerkit.services.temporal import TemporalService

if TYPE_CHECKING:
    from pickerkit.config.settings import PickerSettings
    from pickerkit.services.result import ServiceResult


class AppContext:
    """Settings plus a lazily built :class:`TemporalService`."""

    def __init__(self, settings: PickerSettings) -> None:
        self.settings = settings
        self._service: TemporalService | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> TemporalService:
        if self._service is None:
            self._service = TemporalService(self.settings)
        return self._service

    def emit(self, result: ServiceResult) -> None:
        """Print a ServiceResult; failures go to stderr and exit with code 1."""
        settings = OutputSettings(
            json_output=self.settings.json_output,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
