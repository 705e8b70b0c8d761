"""Per-instance overlay lifecycle: listeners, scroll lock, repositioning, focus.

One :class:`OverlayController` belongs to one picker. ``open()`` attaches
document/window listeners (never in inline mode), acquires the shared
scroll lock in sheet mode, schedules a throttled reposition and defers
focus to a microtask. ``close()`` undoes all of it symmetrically; both are
idempotent.

INVARIANT: After close(), no listener, scheduled frame, or scroll-lock
reference owned by this controller remains.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from pickerkit.config.models import OverlayConfig
from pickerkit.domain.types import PickerMode, Presentation
from pickerkit.domain.values import OverlayPosition
from pickerkit.infrastructure.host import DOCUMENT, WINDOW
from pickerkit.infrastructure.scheduler import FrameThrottle
from pickerkit.overlay.placement import compute_popover_position, presentation_for

if TYPE_CHECKING:
    from pickerkit.infrastructure.host import DocumentHost
    from pickerkit.infrastructure.scroll_lock import ScrollLockManager

logger = logging.getLogger(__name__)


class OverlayController:
    """Own the document-facing side effects of one picker's overlay.

    Parameters:
        host: Document host to attach listeners to and measure against.
        scroll_lock: Shared body scroll-lock manager.
        element_id: Prefix for the measured elements ``{id}:anchor``,
            ``{id}:panel`` and ``{id}:toggle``.
        on_dismiss: Called with ``"outside"`` or ``"escape"`` when the
            user dismisses the overlay.
    """

    def __init__(
        self,
        host: DocumentHost,
        scroll_lock: ScrollLockManager,
        *,
        element_id: str,
        mode: PickerMode = PickerMode.POPOVER,
        config: OverlayConfig | None = None,
        on_dismiss: Callable[[str], None] | None = None,
    ) -> None:
        self._host = host
        self._scroll_lock = scroll_lock
        self._config = config or OverlayConfig()
        self._on_dismiss = on_dismiss
        self.element_id = element_id
        self.mode = mode
        self.is_open = False
        self.presentation: Presentation | None = None
        self.position: OverlayPosition | None = None
        self._release_lock: Callable[[], None] | None = None
        self._listening = False
        self._throttle = FrameThrottle(host, self.reposition)

    # ------------------------------------------------------------------
    # Element keys
    # ------------------------------------------------------------------

    @property
    def anchor_key(self) -> str:
        return f"{self.element_id}:anchor"

    @property
    def panel_key(self) -> str:
        return f"{self.element_id}:panel"

    @property
    def toggle_key(self) -> str:
        return f"{self.element_id}:toggle"

    @property
    def is_sheet(self) -> bool:
        return self.presentation is Presentation.SHEET

    @property
    def reposition_pending(self) -> bool:
        return self._throttle.pending

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> bool:
        """Open the overlay. Returns False when it was already open."""
        if self.is_open:
            return False
        self.is_open = True
        if self.mode is PickerMode.INLINE:
            self.presentation = None
            return True

        self.presentation = self._evaluate_presentation()
        self._attach()
        if self.is_sheet:
            self._lock()
        self._throttle.run()
        self._host.queue_microtask(self._focus_panel)
        logger.debug("Overlay %s opened as %s", self.element_id, self.presentation)
        return True

    def close(self, *, restore_focus: bool = True) -> bool:
        """Close the overlay. Returns False when it was already closed."""
        if not self.is_open:
            return False
        self.is_open = False
        self._throttle.cancel()
        self._detach()
        self._unlock()
        self.position = None
        was_inline = self.presentation is None
        self.presentation = None
        if restore_focus and not was_inline:
            self._host.focus(self.toggle_key)
        logger.debug("Overlay %s closed", self.element_id)
        return True

    def set_mode(self, mode: PickerMode) -> None:
        """Switch between inline and popover; an open popover is torn down."""
        mode = PickerMode(mode)
        if mode is self.mode:
            return
        if self.is_open:
            self.close(restore_focus=False)
        self.mode = mode

    def dispose(self) -> None:
        self.close(restore_focus=False)

    # ------------------------------------------------------------------
    # Positioning
    # ------------------------------------------------------------------

    def request_reposition(self) -> None:
        if self.is_open and self.mode is not PickerMode.INLINE:
            self._throttle.run()

    def reposition(self) -> OverlayPosition | None:
        """Recompute panel coordinates; missing elements make this a no-op."""
        if not self.is_open or self.is_sheet or self.mode is PickerMode.INLINE:
            return None
        anchor = self._host.measure(self.anchor_key)
        panel = self._host.measure(self.panel_key)
        if anchor is None or panel is None:
            return None
        self.position = compute_popover_position(
            anchor,
            panel,
            self._host.viewport(),
            padding=self._config.padding,
            gap=self._config.gap,
        )
        return self.position

    def _evaluate_presentation(self) -> Presentation:
        return presentation_for(
            self.mode, self._host.viewport().width, self._config.sheet_breakpoint
        )

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def _attach(self) -> None:
        if self._listening:
            return
        self._host.add_listener(DOCUMENT, "pointerdown", self._on_pointer_down, capture=True)
        self._host.add_listener(DOCUMENT, "keydown", self._on_key_down)
        self._host.add_listener(WINDOW, "resize", self._on_resize)
        self._host.add_listener(WINDOW, "scroll", self._on_scroll, capture=True)
        self._listening = True

    def _detach(self) -> None:
        self._host.remove_listener(DOCUMENT, "pointerdown", self._on_pointer_down, capture=True)
        self._host.remove_listener(DOCUMENT, "keydown", self._on_key_down)
        self._host.remove_listener(WINDOW, "resize", self._on_resize)
        self._host.remove_listener(WINDOW, "scroll", self._on_scroll, capture=True)
        self._listening = False

    def _on_pointer_down(self, event: dict[str, Any]) -> None:
        path = event.get("path") or ()
        if self.anchor_key in path or self.panel_key in path or self.toggle_key in path:
            return
        if self._on_dismiss is not None:
            self._on_dismiss("outside")

    def _on_key_down(self, event: dict[str, Any]) -> None:
        if event.get("key") == "Escape" and self._on_dismiss is not None:
            self._on_dismiss("escape")

    def _on_resize(self, _event: dict[str, Any]) -> None:
        if not self.is_open:
            return
        presentation = self._evaluate_presentation()
        if presentation is not self.presentation:
            self.presentation = presentation
            if self.is_sheet:
                self.position = None
                self._lock()
            else:
                self._unlock()
        self._throttle.run()

    def _on_scroll(self, _event: dict[str, Any]) -> None:
        self.request_reposition()

    # ------------------------------------------------------------------
    # Scroll lock / focus
    # ------------------------------------------------------------------

    def _lock(self) -> None:
        if self._release_lock is None:
            self._release_lock = self._scroll_lock.acquire(self._host)

    def _unlock(self) -> None:
        if self._release_lock is not None:
            self._release_lock()
            self._release_lock = None

    def _focus_panel(self) -> None:
        if self.is_open:
            self._host.focus(self.panel_key)
