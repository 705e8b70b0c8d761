"""Command group: free-form date/time parsing."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pickerkit.commands._base import PickerGroup

if TYPE_CHECKING:
    from pickerkit.commands._context import AppContext


@click.group(
    cls=PickerGroup,
    examples="""\
  pickerkit parse date 03/05/2026
  pickerkit parse date 03.05.26 --locale de-DE
  pickerkit parse time "9:30 pm"
  pickerkit --json parse datetime "2026-03-05 14:30\"""",
)
def parse() -> None:
    """Parse typed date/time text into canonical values."""


@parse.command("date")
@click.argument("raw")
@click.option("--locale", default=None, help="Locale deciding month/day order.")
@click.pass_obj
def parse_date(app: AppContext, raw: str, locale: str | None) -> None:
    """Parse a date (ISO or locale numeric order)."""
    app.emit(app.service.parse_date(raw, locale=locale))


@parse.command("time")
@click.argument("raw")
@click.option("--seconds/--no-seconds", default=True, help="Accept a seconds component.")
@click.pass_obj
def parse_time(app: AppContext, raw: str, seconds: bool) -> None:
    """Parse a time (24h, or 12h with am/pm)."""
    app.emit(app.service.parse_time(raw, seconds=seconds))


@parse.command("datetime")
@click.argument("raw")
@click.option("--locale", default=None, help="Locale deciding month/day order.")
@click.pass_obj
def parse_datetime(app: AppContext, raw: str, locale: str | None) -> None:
    """Parse a date followed by a time."""
    app.emit(app.service.parse_datetime(raw, locale=locale))
