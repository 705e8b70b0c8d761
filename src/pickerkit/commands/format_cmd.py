"""Command group: display formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pickerkit.commands._base import PickerGroup
from pickerkit.domain.types import DateDisplayFormat

if TYPE_CHECKING:
    from pickerkit.commands._context import AppContext


@click.group(
    "format",
    cls=PickerGroup,
    examples="""\
  pickerkit format date 2026-03-05
  pickerkit format date 2026-03-05 --format custom --pattern "DD MMMM YYYY"
  pickerkit format time 21:05 --12h""",
)
def format_group() -> None:
    """Format canonical values for display."""


@format_group.command("date")
@click.argument("iso")
@click.option(
    "--format",
    "fmt",
    type=click.Choice([f.value for f in DateDisplayFormat]),
    default=DateDisplayFormat.LOCALE.value,
    help="Display format.",
)
@click.option("--pattern", default=None, help="Token pattern for --format custom.")
@click.option("--locale", default=None, help="Display locale.")
@click.pass_obj
def format_date(
    app: AppContext, iso: str, fmt: str, pattern: str | None, locale: str | None
) -> None:
    """Format an ISO date."""
    app.emit(app.service.format_date(iso, fmt=fmt, pattern=pattern, locale=locale))


@format_group.command("time")
@click.argument("value")
@click.option("--12h", "twelve_hour", is_flag=True, help="Use the 12-hour clock.")
@click.option("--locale", default=None, help="Display locale.")
@click.pass_obj
def format_time(app: AppContext, value: str, twelve_hour: bool, locale: str | None) -> None:
    """Format a HH:mm[:ss] time."""
    app.emit(app.service.format_time(value, twelve_hour=twelve_hour, locale=locale))
