"""Animation-frame throttling.

:class:`FrameThrottle` coalesces bursts of ``run()`` calls (scroll, resize)
into at most one callback per animation frame, and can cancel the pending
frame so a closed overlay never repositions itself afterwards.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pickerkit.infrastructure.host import DocumentHost


class FrameThrottle:
    """Run *fn* at most once per animation frame."""

    def __init__(self, host: DocumentHost, fn: Callable[[], None]) -> None:
        self._host = host
        self._fn = fn
        self._handle: int | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def run(self) -> None:
        if self._handle is not None:
            return
        self._handle = self._host.request_frame(self._fire)

    def cancel(self) -> None:
        if self._handle is None:
            return
        self._host.cancel_frame(self._handle)
        self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self._fn()
