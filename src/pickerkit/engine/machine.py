"""The pending/committed value state machine shared by every picker.

States::

    CLEAN ──input──▶ DIRTY ──commit ok──▶ COMMITTED
      ▲                │  └──commit rejected──▶ INVALID
      └──cancel/open───┘

- Input surfaces call :meth:`ValueStateMachine.update_pending` (or
  :meth:`update_draft` for typed text). Pending changes and an ``input``
  event fires; committed never changes.
- Commit triggers call :meth:`commit` / :meth:`commit_draft`. The candidate
  is resolved through the codec; on success pending becomes committed, the
  public value is synced, and ``input`` then ``change`` fire with the same
  source. On rejection an ``invalid`` event fires and committed is kept.
- :meth:`cancel` and :meth:`reset_for_open` put pending back to committed
  without events. :meth:`resync` handles external writes of the public
  value: both values are replaced and any inline error is cleared.

INVARIANT: committed is only ever written by a successful commit or resync.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

import structlog
from pydantic import BaseModel

from pickerkit.domain.types import InvalidReason, MachineState, Source
from pickerkit.engine.codecs import ValueCodec
from pickerkit.engine.details import InvalidDetail

V = TypeVar("V")

Emit = Callable[[str, BaseModel], None]

log = structlog.get_logger("pickerkit.engine.machine")


class ValueStateMachine(Generic[V]):
    """Committed value, pending value and draft text for one picker.

    Parameters:
        codec: Variant codec used to parse, resolve and serialize values.
        emit: Receives ``(event_name, detail)`` for ``input``, ``change``
            and ``invalid``.
        on_sync: Receives the serialized committed value after each commit
            (None when the public attribute should be removed).
        can_commit: Guard consulted before every commit; a False return
            makes the commit a silent no-op (readonly / disabled).
    """

    def __init__(
        self,
        codec: ValueCodec[V],
        emit: Emit,
        *,
        initial: V | None = None,
        on_sync: Callable[[str | None], None] | None = None,
        can_commit: Callable[[], bool] | None = None,
    ) -> None:
        self.codec = codec
        self._emit = emit
        self._on_sync = on_sync
        self._can_commit = can_commit or (lambda: True)
        self.committed: V | None = initial
        self.pending: V | None = initial
        self.draft: str = codec.display(initial)
        self.draft_typed = False
        self.error: str | None = None
        self.state = MachineState.CLEAN

    @property
    def is_dirty(self) -> bool:
        return self.pending != self.committed

    @property
    def serialized(self) -> str | None:
        return self.codec.serialize(self.committed)

    # ------------------------------------------------------------------
    # Input surfaces
    # ------------------------------------------------------------------

    def update_pending(self, value: V | None, source: Source) -> None:
        """Replace pending from an input surface and emit ``input``."""
        self.pending = value
        self.draft = self.codec.display(value)
        self.draft_typed = False
        self._refresh_state()
        self._emit("input", self.codec.detail(self.pending, source))

    def update_draft(self, text: str, source: Source = Source.TYPING) -> None:
        """Record typed text; pending follows whenever the text parses."""
        self.draft = text
        self.draft_typed = True
        self.error = None
        stripped = text.strip()
        if stripped:
            parsed = self.codec.parse_text(stripped)
            if parsed is not None:
                self.pending = parsed
        self._refresh_state()
        self._emit("input", self.codec.detail(self.pending, source))

    # ------------------------------------------------------------------
    # Commit triggers
    # ------------------------------------------------------------------

    def commit(self, value: V | None, source: Source) -> bool:
        """Resolve *value* and make it the committed value.

        Returns True when the value was accepted. A blocked commit
        (readonly / disabled) returns False without emitting anything.
        """
        if not self._can_commit():
            return False
        resolution = self.codec.resolve(value)
        if not resolution.ok:
            assert resolution.reason is not None
            self.reject(self.codec.raw_for(value), resolution.reason, source)
            return False

        self.committed = resolution.value
        self.pending = resolution.value
        self.draft = self.codec.display(resolution.value)
        self.draft_typed = False
        self.error = None
        self.state = MachineState.COMMITTED
        serialized = self.codec.serialize(self.committed)
        if self._on_sync is not None:
            self._on_sync(serialized)
        log.debug("machine.commit", kind=str(self.codec.kind), source=str(source), value=serialized)
        self._emit("input", self.codec.detail(self.pending, source))
        self._emit("change", self.codec.detail(self.committed, source))
        return True

    def commit_pending(self, source: Source) -> bool:
        return self.commit(self.pending, source)

    def commit_draft(self, source: Source) -> bool:
        """Commit the field: typed text is parsed, otherwise pending is committed.

        Empty typed text clears; unparseable typed text is rejected. A draft
        rendered by another input surface commits pending, and a clean
        untouched draft is a no-op.
        """
        if not self._can_commit():
            return False
        if not self.draft_typed:
            if not self.is_dirty:
                return True
            return self.commit_pending(source)
        text = self.draft.strip()
        if not text:
            return self.commit(None, source)
        parsed = self.codec.parse_text(text)
        if parsed is None and text == self.codec.display(self.committed).strip():
            # untouched locale-formatted display text
            return True
        if parsed is None:
            self.reject(text, InvalidReason.PARSE, source)
            return False
        return self.commit(parsed, source)

    def reject(self, raw: str, reason: InvalidReason, source: Source) -> None:
        """Enter INVALID: keep committed, set the inline error, emit ``invalid``."""
        self.error = self.codec.error_message(reason)
        self.state = MachineState.INVALID
        log.debug("machine.invalid", kind=str(self.codec.kind), reason=str(reason), raw=raw)
        self._emit("invalid", InvalidDetail(raw=raw, reason=reason, source=source))

    # ------------------------------------------------------------------
    # Resets
    # ------------------------------------------------------------------

    def cancel(self) -> None:
        """Drop the pending value without emitting ``change``."""
        self.pending = self.committed
        self.draft = self.codec.display(self.committed)
        self.draft_typed = False
        self.error = None
        self.state = MachineState.CLEAN

    def reset_for_open(self) -> None:
        self.cancel()

    def resync(self, raw: str | None) -> None:
        """Adopt an externally written public value."""
        value = self.codec.deserialize(raw)
        self.committed = value
        self.pending = value
        self.draft = self.codec.display(value)
        self.draft_typed = False
        self.error = None
        self.state = MachineState.CLEAN
        log.debug("machine.resync", kind=str(self.codec.kind), raw=raw)

    def refresh_display(self) -> None:
        """Re-render the draft after a display-affecting config change."""
        if not self.is_dirty:
            self.draft = self.codec.display(self.committed)

    def _refresh_state(self) -> None:
        self.state = MachineState.DIRTY if self.is_dirty else MachineState.CLEAN
