"""Document host contract — the narrow surface the engine needs from a page.

The engine never touches a real DOM. Pickers and overlays talk to a
:class:`DocumentHost`, which provides listener registration on the
``document``/``window`` targets, layout measurement of named elements,
the viewport, the body style used by the scroll lock, an animation-frame
clock, and a microtask queue.

:class:`HeadlessDocument` is an in-memory host used by tests and the CLI.
Frames and microtasks only run when flushed explicitly.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pickerkit.domain.values import Rect, Viewport

logger = logging.getLogger(__name__)

Handler = Callable[[dict[str, Any]], None]

DOCUMENT = "document"
WINDOW = "window"


@dataclass
class BodyStyle:
    """Mutable inline styles of the document body touched by the scroll lock."""

    overflow: str = ""
    padding_right: str = ""


class DocumentHost(ABC):
    """Abstract host document. Listener add/remove must be idempotent."""

    body: BodyStyle

    @abstractmethod
    def add_listener(self, target: str, event: str, handler: Handler, *, capture: bool = False) -> None:
        """Attach *handler*; attaching the same handler twice is a no-op."""

    @abstractmethod
    def remove_listener(
        self, target: str, event: str, handler: Handler, *, capture: bool = False
    ) -> None:
        """Detach *handler*; detaching an absent handler is harmless."""

    @abstractmethod
    def viewport(self) -> Viewport:
        """Current viewport size and scroll offsets."""

    @abstractmethod
    def scrollbar_width(self) -> float:
        """Width of the page scrollbar (window width minus client width)."""

    @abstractmethod
    def measure(self, key: str) -> Rect | None:
        """Bounding rect of the element registered under *key*, if present."""

    @abstractmethod
    def request_frame(self, callback: Callable[[], None]) -> int:
        """Schedule *callback* for the next animation frame; return a handle."""

    @abstractmethod
    def cancel_frame(self, handle: int) -> None:
        """Cancel a scheduled frame callback."""

    @abstractmethod
    def queue_microtask(self, callback: Callable[[], None]) -> None:
        """Run *callback* after the current render pass completes."""

    @abstractmethod
    def focus(self, key: str) -> bool:
        """Move focus to the element registered under *key*."""


class HeadlessDocument(DocumentHost):
    """In-memory :class:`DocumentHost` driven explicitly by the caller."""

    def __init__(
        self,
        *,
        width: float = 1200,
        height: float = 800,
        scrollbar: float = 0,
    ) -> None:
        self.body = BodyStyle()
        self._viewport = Viewport(width=width, height=height)
        self._scrollbar = scrollbar
        self._rects: dict[str, Rect] = {}
        self._listeners: dict[tuple[str, str, bool], list[Handler]] = {}
        self._frames: dict[int, Callable[[], None]] = {}
        self._next_frame = 1
        self._microtasks: list[Callable[[], None]] = []
        self.focused: str | None = None

    # ------------------------------------------------------------------
    # DocumentHost
    # ------------------------------------------------------------------

    def add_listener(self, target: str, event: str, handler: Handler, *, capture: bool = False) -> None:
        handlers = self._listeners.setdefault((target, event, capture), [])
        if handler not in handlers:
            handlers.append(handler)

    def remove_listener(
        self, target: str, event: str, handler: Handler, *, capture: bool = False
    ) -> None:
        handlers = self._listeners.get((target, event, capture))
        if handlers and handler in handlers:
            handlers.remove(handler)

    def viewport(self) -> Viewport:
        return self._viewport

    def scrollbar_width(self) -> float:
        return self._scrollbar

    def measure(self, key: str) -> Rect | None:
        return self._rects.get(key)

    def request_frame(self, callback: Callable[[], None]) -> int:
        handle = self._next_frame
        self._next_frame += 1
        self._frames[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._frames.pop(handle, None)

    def queue_microtask(self, callback: Callable[[], None]) -> None:
        self._microtasks.append(callback)

    def focus(self, key: str) -> bool:
        if key not in self._rects:
            return False
        self.focused = key
        return True

    # ------------------------------------------------------------------
    # Test / simulation controls
    # ------------------------------------------------------------------

    def set_viewport(
        self,
        width: float | None = None,
        height: float | None = None,
        *,
        scroll_x: float | None = None,
        scroll_y: float | None = None,
    ) -> None:
        current = self._viewport
        self._viewport = Viewport(
            width=current.width if width is None else width,
            height=current.height if height is None else height,
            scroll_x=current.scroll_x if scroll_x is None else scroll_x,
            scroll_y=current.scroll_y if scroll_y is None else scroll_y,
        )

    def set_rect(self, key: str, rect: Rect) -> None:
        self._rects[key] = rect

    def remove_rect(self, key: str) -> None:
        self._rects.pop(key, None)

    def dispatch(self, target: str, event: str, payload: dict[str, Any] | None = None) -> int:
        """Deliver an event to capture then bubble listeners; return the call count."""
        calls = 0
        for capture in (True, False):
            for handler in list(self._listeners.get((target, event, capture), [])):
                handler(payload or {})
                calls += 1
        return calls

    def listener_count(self, target: str | None = None, event: str | None = None) -> int:
        return sum(
            len(handlers)
            for (t, e, _capture), handlers in self._listeners.items()
            if (target is None or t == target) and (event is None or e == event)
        )

    @property
    def pending_frames(self) -> int:
        return len(self._frames)

    def flush_frames(self) -> int:
        """Run every scheduled frame callback once; return how many ran."""
        frames, self._frames = self._frames, {}
        for callback in frames.values():
            callback()
        return len(frames)

    def flush_microtasks(self) -> int:
        ran = 0
        while self._microtasks:
            callback = self._microtasks.pop(0)
            callback()
            ran += 1
        return ran
