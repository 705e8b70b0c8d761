"""Rich/JSON rendering of ServiceResult.

Human mode prints a status line and a key/value table; ``--json`` dumps
the whole result model.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table

from pickerkit.output.console import create_console, get_output

if TYPE_CHECKING:
    from pickerkit.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Rendering switches derived from the global CLI flags."""

    json_output: bool = False
    verbose: bool = False
    no_color: bool = False


def _render_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return escape(json.dumps(value, separators=(",", ":")))
    if value is None:
        return "-"
    return escape(str(value))


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    console = create_console(no_color=settings.no_color)
    if not result.ok:
        message = result.error.message if result.error else "Unknown error"
        code = result.error.code if result.error else "error"
        console.print(f"[pk.error]ERROR[/] [pk.op]{result.op}[/] ({code}): {escape(message)}")
        if settings.verbose and result.error and result.error.detail:
            for key, value in result.error.detail.items():
                console.print(f"  [pk.key]{key}[/]: {_render_value(value)}")
        return get_output(console).rstrip("\n")

    console.print(f"[pk.ok]OK[/] [pk.op]{result.op}[/]")
    if result.data:
        table = Table(show_header=False, box=None, pad_edge=False)
        table.add_column(style="pk.key")
        table.add_column(style="pk.value")
        for key, value in result.data.items():
            table.add_row(key, _render_value(value))
        console.print(table)
    return get_output(console).rstrip("\n")
