"""Overlay layer — anchored popover / bottom-sheet placement and lifecycle.

INVARIANT: Document-level listeners exist only while an overlay is open.
"""

from pickerkit.overlay.controller import OverlayController
from pickerkit.overlay.placement import compute_popover_position, should_use_sheet

__all__ = ["OverlayController", "compute_popover_position", "should_use_sheet"]
