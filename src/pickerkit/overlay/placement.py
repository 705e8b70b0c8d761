"""Popover coordinate math and the sheet-vs-popover predicate.

Both functions are pure. Coordinates are document-relative: the viewport
scroll offsets are added to the viewport-relative anchor rect.
"""

from __future__ import annotations

from pickerkit.domain.types import Placement, PickerMode, Presentation
from pickerkit.domain.values import OverlayPosition, Rect, Viewport

DEFAULT_PADDING = 8
DEFAULT_GAP = 8
SHEET_BREAKPOINT = 640


def compute_popover_position(
    anchor: Rect,
    panel: Rect,
    viewport: Viewport,
    padding: float = DEFAULT_PADDING,
    gap: float = DEFAULT_GAP,
) -> OverlayPosition:
    """Place *panel* below *anchor*, flipping above when it would not fit.

    The left edge follows the anchor but is kept inside the viewport with
    *padding* on both sides; when the panel is wider than the viewport it
    sticks to the left padding.

    Examples:
        >>> pos = compute_popover_position(
        ...     Rect(100, 700, 200, 40), Rect(0, 0, 320, 300), Viewport(1200, 800)
        ... )
        >>> pos.placement, pos.top
        (<Placement.TOP: 'top'>, 392.0)
    """
    scroll_x = viewport.scroll_x
    scroll_y = viewport.scroll_y

    has_bottom_space = anchor.bottom + gap + panel.height <= viewport.height - padding
    if has_bottom_space:
        placement = Placement.BOTTOM
        top = anchor.bottom + gap + scroll_y
    else:
        placement = Placement.TOP
        top = anchor.top - panel.height - gap + scroll_y

    min_left = scroll_x + padding
    max_left = max(min_left, scroll_x + viewport.width - panel.width - padding)
    left = min(max(anchor.left + scroll_x, min_left), max_left)

    return OverlayPosition(top=float(top), left=float(left), placement=placement)


def should_use_sheet(
    mode: PickerMode | str,
    viewport_width: float,
    breakpoint: float = SHEET_BREAKPOINT,
) -> bool:
    """Whether an overlay should render as a bottom sheet.

    Inline pickers never use a sheet. Otherwise the sheet is used strictly
    below *breakpoint* pixels of viewport width.
    """
    if PickerMode(mode) is PickerMode.INLINE:
        return False
    return viewport_width < breakpoint


def presentation_for(
    mode: PickerMode | str,
    viewport_width: float,
    breakpoint: float = SHEET_BREAKPOINT,
) -> Presentation:
    if should_use_sheet(mode, viewport_width, breakpoint):
        return Presentation.SHEET
    return Presentation.POPOVER
