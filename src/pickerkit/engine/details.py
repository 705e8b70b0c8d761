"""Event payloads delivered to subscribers.

Every payload carries the :class:`~pickerkit.domain.types.Source` that
produced it so consumers can tell user-driven changes from programmatic
ones.
"""

from __future__ import annotations

from pydantic import BaseModel

from pickerkit.domain.types import InvalidReason, Presentation, Source

# Values of EventDetail.mode
MODE_SINGLE = "single"
MODE_TIME = "time"
MODE_DATETIME = "datetime"
MODE_RANGE = "range"
MODE_DATETIME_RANGE = "datetimerange"


class EventDetail(BaseModel):
    """Payload of ``input`` and ``change`` events.

    ``value`` is the canonical public value: a string for single-valued
    pickers, ``{"start", "end"}`` for ranges (only when both ends are set).
    Range pickers also fill ``start``/``end``; the date-time picker fills
    ``date``/``time``.
    """

    model_config = {"frozen": True}

    mode: str
    value: str | dict[str, str] | None = None
    display_value: str = ""
    source: Source
    start: str | None = None
    end: str | None = None
    date: str | None = None
    time: str | None = None


class InvalidDetail(BaseModel):
    """Payload of ``invalid`` events: the rejected raw input and why."""

    model_config = {"frozen": True}

    raw: str
    reason: InvalidReason
    source: Source


class OverlayDetail(BaseModel):
    """Payload of ``open`` and ``close`` events."""

    model_config = {"frozen": True}

    source: Source
    presentation: Presentation | None = None
