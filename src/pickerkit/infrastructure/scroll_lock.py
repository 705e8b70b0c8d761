"""Reference-counted body scroll lock shared by every sheet-mode overlay.

The first acquirer records the body's inline ``overflow`` and
``padding-right``, hides overflow, and pads by the scrollbar width.
Later acquirers only bump the counter. Each acquire returns a disposer;
the styles are restored only when the count returns to zero.
Disposers are idempotent: calling one twice releases once.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pickerkit.infrastructure.host import BodyStyle, DocumentHost

logger = logging.getLogger(__name__)


class ScrollLockManager:
    """Process-wide owner of the body scroll-lock counter."""

    def __init__(self) -> None:
        self._count = 0
        self._body: BodyStyle | None = None
        self._saved_overflow = ""
        self._saved_padding_right = ""

    @property
    def count(self) -> int:
        return self._count

    @property
    def locked(self) -> bool:
        return self._count > 0

    def acquire(self, host: DocumentHost) -> Callable[[], None]:
        """Lock body scrolling on *host*; return the matching release."""
        if self._count == 0:
            body = host.body
            self._body = body
            self._saved_overflow = body.overflow
            self._saved_padding_right = body.padding_right
            body.overflow = "hidden"
            width = host.scrollbar_width()
            if width > 0:
                body.padding_right = f"{width:g}px"
            logger.debug("Body scroll locked (scrollbar=%s)", width)
        self._count += 1

        released = False

        def release() -> None:
            nonlocal released
            if released:
                return
            released = True
            self._release()

        return release

    def _release(self) -> None:
        self._count = max(0, self._count - 1)
        if self._count == 0 and self._body is not None:
            self._body.overflow = self._saved_overflow
            self._body.padding_right = self._saved_padding_right
            self._body = None
            logger.debug("Body scroll lock released")


_shared = ScrollLockManager()


def shared_scroll_lock() -> ScrollLockManager:
    """The application-wide manager used when none is injected."""
    return _shared
