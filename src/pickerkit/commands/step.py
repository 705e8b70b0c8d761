"""Command: time stepping."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pickerkit.commands._base import PickerCommand

if TYPE_CHECKING:
    from pickerkit.commands._context import AppContext


@click.command(
    cls=PickerCommand,
    examples="""\
  pickerkit step 09:58 --shift
  pickerkit step 23:58 --step 5
  pickerkit step 00:02 --delta -1""",
)
@click.argument("time")
@click.option("--step", type=click.IntRange(1, 60), default=None, help="Minutes per step.")
@click.option("--delta", type=int, default=1, show_default=True, help="Steps to move.")
@click.option("--shift", is_flag=True, help="Multiply the delta by 5.")
@click.pass_obj
def step(app: AppContext, time: str, step: int | None, delta: int, shift: bool) -> None:
    """Step TIME by whole step units, wrapping at midnight."""
    app.emit(app.service.step(time, step=step, delta=delta, shift=shift))
