"""Synchronous event dispatch from pickers to pluggy hooks.

Events are delivered in emission order on the caller's stack, so a
commit's ``input`` always reaches consumers before its ``change``.
Each dispatch is recorded in a bounded history for inspection.

INVARIANT: Plugin failures are warnings, never errors.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from pickerkit.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

HOOKS = {
    "input": "picker_input",
    "change": "picker_change",
    "invalid": "picker_invalid",
    "open": "picker_open",
    "close": "picker_close",
}

DEFAULT_HISTORY = 256


@dataclass(frozen=True)
class DispatchedEvent:
    """One entry of :attr:`EventBus.history`."""

    picker_id: str
    kind: str
    event: str
    detail: BaseModel


class EventBus:
    """Dispatch picker events to registered plugins.

    Parameters:
        plugin_manager: PluginManager whose hooks receive the events.
        history_size: Number of dispatched events kept in :attr:`history`
            (and of failure messages kept in :attr:`warnings`).
    """

    def __init__(self, plugin_manager: PluginManager, *, history_size: int = DEFAULT_HISTORY) -> None:
        self._pm = plugin_manager
        self.history: deque[DispatchedEvent] = deque(maxlen=history_size)
        self.warnings: deque[str] = deque(maxlen=history_size)

    def dispatch(self, picker_id: str, kind: str, event: str, detail: BaseModel) -> None:
        """Deliver *event* to every plugin implementing its hook."""
        hook_name = HOOKS.get(event)
        if hook_name is None:
            raise ValueError(f"Unknown picker event: {event!r}")
        self.history.append(DispatchedEvent(picker_id, kind, event, detail))

        hook_caller = getattr(self._pm.hook, hook_name)
        args = {"picker_id": picker_id, "kind": kind, "detail": detail}
        # pluggy call order: last registered first
        for impl in reversed(hook_caller.get_hookimpls()):
            try:
                impl.function(**{name: args[name] for name in impl.argnames})
            except Exception as exc:
                msg = f"Hook {hook_name} failed in {impl.plugin_name} for {picker_id}: {exc}"
                logger.warning(msg, exc_info=True)
                self.warnings.append(msg)

    def events(self, event: str | None = None) -> list[DispatchedEvent]:
        """History entries, optionally filtered by event name."""
        return [e for e in self.history if event is None or e.event == event]

    def clear(self) -> None:
        self.history.clear()
        self.warnings.clear()
