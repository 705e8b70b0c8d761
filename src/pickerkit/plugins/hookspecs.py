"""Pluggy hook specifications for picker events.

One hook per public event. Every hook receives the emitting picker's id,
its kind, and the event payload model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from pickerkit.engine.details import EventDetail, InvalidDetail, OverlayDetail

PROJECT_NAME = "pickerkit"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class PickerHookSpec:
    """Hook specifications for the pickerkit event consumers."""

    @hookspec
    def picker_input(self, picker_id: str, kind: str, detail: EventDetail) -> None:
        """Called whenever the pending value changes."""

    @hookspec
    def picker_change(self, picker_id: str, kind: str, detail: EventDetail) -> None:
        """Called after the committed value changes."""

    @hookspec
    def picker_invalid(self, picker_id: str, kind: str, detail: InvalidDetail) -> None:
        """Called when a commit is rejected."""

    @hookspec
    def picker_open(self, picker_id: str, kind: str, detail: OverlayDetail) -> None:
        """Called after the overlay opens."""

    @hookspec
    def picker_close(self, picker_id: str, kind: str, detail: OverlayDetail) -> None:
        """Called after the overlay closes."""
