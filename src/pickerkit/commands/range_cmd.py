"""Command group: range normalization."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pickerkit.commands._base import PickerGroup

if TYPE_CHECKING:
    from pickerkit.commands._context import AppContext


@click.group("range", cls=PickerGroup)
def range_group() -> None:
    """Work with date ranges."""


@range_group.command(
    examples="""\
  pickerkit range normalize 2026-02-20 2026-02-18
  pickerkit range normalize 2026-02-20 2026-02-18 --no-auto-normalize
  pickerkit range normalize 2026-01-01 "" --no-partial
  pickerkit range normalize 2026-01-01 2026-03-01 --max 2026-02-15""",
)
@click.argument("start")
@click.argument("end")
@click.option("--min", "min_date", default=None, help="Lower bound (ISO).")
@click.option("--max", "max_date", default=None, help="Upper bound (ISO).")
@click.option("--auto-normalize/--no-auto-normalize", default=True, help="Swap reversed ends.")
@click.option("--partial/--no-partial", default=True, help="Allow one open end.")
@click.option("--same-day/--no-same-day", default=True, help="Allow start == end.")
@click.pass_obj
def normalize(
    app: AppContext,
    start: str,
    end: str,
    min_date: str | None,
    max_date: str | None,
    auto_normalize: bool,
    partial: bool,
    same_day: bool,
) -> None:
    """Clamp, order and validate a START..END range."""
    app.emit(
        app.service.normalize_range(
            start or None,
            end or None,
            min_date=min_date,
            max_date=max_date,
            auto_normalize=auto_normalize,
            allow_partial=partial,
            allow_same_day=same_day,
        )
    )
