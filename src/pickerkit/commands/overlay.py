"""Command group: overlay placement."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pickerkit.commands._base import PickerGroup, parse_numbers
from pickerkit.domain.types import PickerMode
from pickerkit.domain.values import Rect, Viewport

if TYPE_CHECKING:
    from pickerkit.commands._context import AppContext


@click.group(cls=PickerGroup)
def overlay() -> None:
    """Compute popover placement and presentation."""


@overlay.command(
    examples="""\
  pickerkit overlay place --anchor 100,700,200,40 --panel 320,300 --viewport 1200,800
  pickerkit overlay place --anchor 10,10,100,30 --panel 320,300 --viewport 375,700 --scroll 0,250""",
)
@click.option("--anchor", required=True, help="Anchor rect: LEFT,TOP,WIDTH,HEIGHT.")
@click.option("--panel", required=True, help="Panel size: WIDTH,HEIGHT.")
@click.option("--viewport", required=True, help="Viewport size: WIDTH,HEIGHT.")
@click.option("--scroll", default="0,0", show_default=True, help="Scroll offsets: X,Y.")
@click.pass_obj
def place(app: AppContext, anchor: str, panel: str, viewport: str, scroll: str) -> None:
    """Place a panel below (or above) an anchor."""
    left, top, width, height = parse_numbers(anchor, 4, "--anchor")
    panel_w, panel_h = parse_numbers(panel, 2, "--panel")
    view_w, view_h = parse_numbers(viewport, 2, "--viewport")
    scroll_x, scroll_y = parse_numbers(scroll, 2, "--scroll")
    app.emit(
        app.service.place_overlay(
            Rect(left, top, width, height),
            Rect(0, 0, panel_w, panel_h),
            Viewport(view_w, view_h, scroll_x, scroll_y),
        )
    )


@overlay.command()
@click.argument("width", type=float)
@click.option(
    "--mode",
    type=click.Choice([m.value for m in PickerMode]),
    default=PickerMode.POPOVER.value,
    help="Picker mode.",
)
@click.pass_obj
def presentation(app: AppContext, width: float, mode: str) -> None:
    """Sheet or popover for a viewport WIDTH."""
    app.emit(app.service.presentation(width, mode=mode))
