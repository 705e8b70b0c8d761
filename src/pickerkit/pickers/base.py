"""Shared orchestration for every picker variant.

:class:`BasePicker` composes one :class:`ValueStateMachine` (value
semantics) with one :class:`OverlayController` (document side effects) and
routes their events through an :class:`EventBus` to pluggy consumers.
Variants only add their own input surfaces on top.

INVARIANT: The public API never raises for user input. Parse and range
failures become ``invalid`` events; clamping is silent.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

from pickerkit.config.models import OverlayConfig, PickerConfig
from pickerkit.domain.calendar import today_iso
from pickerkit.domain.parsing import is_truthy_attr
from pickerkit.domain.types import MachineState, PickerKind, PickerMode, Presentation, Source
from pickerkit.domain.values import DateValue, TimeValue
from pickerkit.engine.codecs import ValueCodec
from pickerkit.engine.details import OverlayDetail
from pickerkit.engine.machine import ValueStateMachine
from pickerkit.infrastructure.formatting import LocaleCache
from pickerkit.infrastructure.host import DocumentHost, HeadlessDocument
from pickerkit.infrastructure.scroll_lock import ScrollLockManager, shared_scroll_lock
from pickerkit.overlay.controller import OverlayController
from pickerkit.pickers.calendar import CalendarSelection, calendar_attributes, read_calendar_event
from pickerkit.plugins.event_bus import EventBus
from pickerkit.plugins.manager import PluginManager

V = TypeVar("V")

RECENT_LIMIT = 5

logger = logging.getLogger(__name__)

_ids = itertools.count(1)


class BasePicker(Generic[V]):
    """Generic picker orchestrator parameterized by a value codec.

    Parameters:
        config: Typed options; see :meth:`from_attributes` for markup input.
        value: Initial public value attribute.
        host: Document host (defaults to a fresh :class:`HeadlessDocument`).
        clock: Returns the current local time; drives today/now actions.
        locale_cache: Formatter cache shared by display formatting.
        scroll_lock: Shared body scroll-lock manager.
        overlay_config: Placement spacing and sheet breakpoint.
        plugin_manager: Receives events; one is created when omitted.
        picker_id: Stable id used in events and element keys.
    """

    kind: ClassVar[PickerKind]
    codec_class: ClassVar[type[ValueCodec[Any]]]

    def __init__(
        self,
        config: PickerConfig | None = None,
        *,
        value: str | None = None,
        host: DocumentHost | None = None,
        clock: Callable[[], datetime] | None = None,
        locale_cache: LocaleCache | None = None,
        scroll_lock: ScrollLockManager | None = None,
        overlay_config: OverlayConfig | None = None,
        plugin_manager: PluginManager | None = None,
        picker_id: str | None = None,
    ) -> None:
        self.config = config or PickerConfig()
        self.host = host or HeadlessDocument()
        self.picker_id = picker_id or f"{self.kind}-{next(_ids)}"
        self._clock = clock or datetime.now
        self.plugins = plugin_manager or PluginManager()
        self.bus = EventBus(self.plugins)
        self.attributes: dict[str, str] = {}
        self.recent: list[V] = []
        self._syncing = False

        self.codec: ValueCodec[V] = self.codec_class(self.config, locale_cache)
        initial = self.codec.deserialize(value)
        self.machine: ValueStateMachine[V] = ValueStateMachine(
            self.codec,
            self._emit,
            initial=initial,
            on_sync=self._reflect_value,
            can_commit=self._commit_allowed,
        )
        serialized = self.codec.serialize(initial)
        if serialized is not None:
            self.attributes["value"] = serialized

        self.overlay = OverlayController(
            self.host,
            scroll_lock or shared_scroll_lock(),
            element_id=self.picker_id,
            mode=self.config.mode,
            config=overlay_config,
            on_dismiss=self._on_dismiss,
        )

    @classmethod
    def from_attributes(cls, attrs: Mapping[str, str | None], **kwargs: Any) -> BasePicker[V]:
        """Construct from a markup-style attribute map (``value`` included)."""
        config = PickerConfig.from_attributes(attrs, cls.kind)
        picker = cls(config, value=attrs.get("value"), **kwargs)
        if is_truthy_attr(attrs.get("open"), False):
            picker.open(Source.API)
        return picker

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def value(self) -> str | None:
        """The public value attribute (None when removed)."""
        return self.attributes.get("value")

    @property
    def committed(self) -> V | None:
        return self.machine.committed

    @property
    def pending(self) -> V | None:
        return self.machine.pending

    @property
    def draft(self) -> str:
        return self.machine.draft

    @property
    def error(self) -> str | None:
        return self.machine.error

    @property
    def state(self) -> MachineState:
        return self.machine.state

    @property
    def display_value(self) -> str:
        return self.codec.display(self.machine.committed)

    @property
    def is_open(self) -> bool:
        return self.overlay.is_open

    @property
    def is_inline(self) -> bool:
        return self.config.mode is PickerMode.INLINE

    @property
    def presentation(self) -> Presentation | None:
        return self.overlay.presentation

    @property
    def close_on_select(self) -> bool:
        return self.config.resolve_close_on_select(self.kind)

    @property
    def show_apply(self) -> bool:
        """Whether an Apply action is offered; always true in sheet mode."""
        return not self.close_on_select or self.overlay.is_sheet

    @property
    def show_clear(self) -> bool:
        return self.config.clearable and not self.codec.is_empty(self.machine.committed)

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------

    def subscribe(self, plugin: object, name: str | None = None) -> str:
        return self.plugins.register_plugin(plugin, name)

    def unsubscribe(self, plugin: object) -> None:
        self.plugins.unregister(plugin)

    # ------------------------------------------------------------------
    # Overlay
    # ------------------------------------------------------------------

    def open(self, source: Source = Source.API) -> bool:
        """Open the overlay; disabled pickers stay closed."""
        if self.config.disabled or self.overlay.is_open:
            return False
        self.machine.reset_for_open()
        self._reset_input()
        self.overlay.open()
        self._store_attribute("open", "")
        self._emit("open", OverlayDetail(source=source, presentation=self.overlay.presentation))
        return True

    def close(self, source: Source = Source.API) -> bool:
        """Close the overlay without committing anything."""
        if not self.overlay.is_open:
            return False
        self._on_close()
        self.overlay.close(restore_focus=source is not Source.OUTSIDE)
        self._store_attribute("open", None)
        self._emit("close", OverlayDetail(source=source))
        return True

    def toggle(self) -> bool:
        if self.overlay.is_open:
            return self.close(Source.TOGGLE)
        return self.open(Source.TOGGLE)

    def dispose(self) -> None:
        """Tear down listeners and locks without emitting events."""
        self._on_close()
        self.overlay.dispose()

    def _on_dismiss(self, reason: str) -> None:
        self.close(Source(reason))

    def _close_after_select(self, source: Source) -> None:
        if not self.is_inline:
            self.close(source)

    # ------------------------------------------------------------------
    # Typed input and keys
    # ------------------------------------------------------------------

    def type_text(self, text: str) -> None:
        if not self._input_allowed():
            return
        self.machine.update_draft(text, Source.TYPING)

    def blur(self) -> bool:
        if not self._input_allowed():
            return False
        return self.machine.commit_draft(Source.BLUR)

    def press_key(self, key: str, *, shift: bool = False) -> bool:
        """Handle a key pressed in the text field. Returns True if handled."""
        if self._handle_key(key, shift=shift):
            return True
        if key == "Enter":
            if self._input_allowed() and self._commit_typed(Source.ENTER):
                self._close_after_select(Source.ENTER)
            return True
        if key == "Escape" and self.overlay.is_open and not self.is_inline:
            self.close(Source.ESCAPE)
            return True
        if key == "ArrowDown" and not self.overlay.is_open and not self.is_inline:
            # keyboard opening is reported as a toggle
            self.open(Source.TOGGLE)
            return True
        return False

    def _handle_key(self, key: str, *, shift: bool) -> bool:
        return False

    def _commit_typed(self, source: Source) -> bool:
        return self.machine.commit_draft(source)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def apply(self) -> bool:
        """Commit pending; the overlay closes when the commit succeeds."""
        if not self.machine.commit_pending(Source.APPLY):
            return False
        self._close_after_select(Source.APPLY)
        return True

    def cancel(self) -> None:
        """Restore pending to committed and close without emitting change."""
        self.machine.cancel()
        self._reset_input()
        self._close_after_select(Source.CANCEL)

    def clear(self) -> bool:
        if not self.config.clearable:
            return False
        return self.machine.commit(None, Source.CLEAR)

    def select_recent(self, index: int) -> bool:
        """Load a remembered value into pending; commits when close-on-select."""
        if not 0 <= index < len(self.recent):
            return False
        self.machine.update_pending(self.recent[index], Source.RECENT)
        if self.close_on_select and self.machine.commit_pending(Source.RECENT):
            self._close_after_select(Source.RECENT)
        return True

    def calendar_event(self, event: str, detail: Mapping[str, Any] | None) -> bool:
        """Feed a calendar ``select``/``change`` event into the picker."""
        if self.config.disabled or self.config.readonly:
            return False
        selection = read_calendar_event(event, detail)
        if selection is None:
            return False
        return self._on_calendar(selection)

    def _on_calendar(self, selection: CalendarSelection) -> bool:
        return False

    def calendar_attributes(self) -> dict[str, str]:
        return calendar_attributes("single", None, self.config)

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def set_value(self, raw: str | None) -> None:
        self.set_attribute("value", raw)

    def set_attribute(self, name: str, raw: str | None) -> None:
        """Apply an attribute write from outside the picker."""
        if name == "value":
            self._store_attribute(name, raw)
            if not self._syncing:
                self.machine.resync(raw)
                self._reset_input()
            return
        if name == "open":
            if is_truthy_attr(raw, False):
                self.open(Source.API)
            else:
                self.close(Source.API)
            return

        previous = self.config
        config = self.config.with_attribute(name, raw, self.kind)
        if config is previous:
            return
        self._store_attribute(name, raw)
        if config.mode is not previous.mode or (config.disabled and not previous.disabled):
            self.close(Source.API)
        self.config = config
        self.codec.config = config
        self.overlay.set_mode(config.mode)
        self.machine.refresh_display()

    def _store_attribute(self, name: str, raw: str | None) -> None:
        if raw is None:
            self.attributes.pop(name, None)
        else:
            self.attributes[name] = raw

    def _reflect_value(self, serialized: str | None) -> None:
        self._syncing = True
        try:
            self.set_attribute("value", serialized)
        finally:
            self._syncing = False

    # ------------------------------------------------------------------
    # Hooks and helpers
    # ------------------------------------------------------------------

    def _emit(self, event: str, detail: BaseModel) -> None:
        if event == "change":
            self._remember(self.machine.committed)
            self._reset_input()
        self.bus.dispatch(self.picker_id, str(self.kind), event, detail)

    def _remember(self, value: V | None) -> None:
        if self.codec.is_empty(value):
            return
        assert value is not None
        self.recent = [value, *(v for v in self.recent if v != value)][:RECENT_LIMIT]

    def _commit_allowed(self) -> bool:
        return not (self.config.disabled or self.config.readonly)

    def _input_allowed(self) -> bool:
        return self.config.allow_input and self._commit_allowed()

    def _reset_input(self) -> None:
        """Drop variant-specific typed drafts; the machine owns the main one."""

    def _on_close(self) -> None:
        """Cancel in-flight interaction tracking when the overlay closes."""

    def clock_now(self) -> datetime:
        return self._clock()

    def today_iso(self) -> DateValue:
        return today_iso(self._clock())

    def current_time(self, *, with_seconds: bool = False) -> TimeValue:
        moment = self._clock()
        return TimeValue(moment.hour, moment.minute, moment.second if with_seconds else 0)
