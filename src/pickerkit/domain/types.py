"""Closed vocabularies shared by every picker variant.

Event sources, invalid-reason codes, presentation modes, and display
formats. Every emitted event carries exactly one :class:`Source`.
"""

from __future__ import annotations

from enum import StrEnum


class PickerKind(StrEnum):
    """The five picker variants."""

    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    DATE_RANGE = "date-range"
    DATETIME_RANGE = "datetime-range"


class Source(StrEnum):
    """Provenance tag attached to every emitted event."""

    TYPING = "typing"
    BLUR = "blur"
    ENTER = "enter"
    CALENDAR = "calendar"
    APPLY = "apply"
    CLEAR = "clear"
    TODAY = "today"
    NOW = "now"
    PRESET = "preset"
    RECENT = "recent"
    DRAG = "drag"
    SLIDER = "slider"
    PICKER = "picker"
    KEYBOARD_STEP = "keyboard-step"
    API = "api"
    OUTSIDE = "outside"
    ESCAPE = "escape"
    TOGGLE = "toggle"
    CANCEL = "cancel"


class InvalidReason(StrEnum):
    """Reason codes carried by ``invalid`` events."""

    PARSE = "parse"
    RANGE = "range"
    ORDER = "order"
    PARTIAL = "partial"


class PickerMode(StrEnum):
    """Inline panel vs. anchored overlay."""

    INLINE = "inline"
    POPOVER = "popover"


class Presentation(StrEnum):
    """How an open overlay is presented."""

    SHEET = "sheet"
    POPOVER = "popover"


class Placement(StrEnum):
    """Vertical side of the anchor an overlay panel sits on."""

    TOP = "top"
    BOTTOM = "bottom"


class DateDisplayFormat(StrEnum):
    """Display formats for date values."""

    ISO = "iso"
    LOCALE = "locale"
    CUSTOM = "custom"


class TimeFormat(StrEnum):
    """Clock convention for time display."""

    H12 = "12h"
    H24 = "24h"


class RangeVariant(StrEnum):
    """Typed-input layout of the date range picker."""

    TWO_FIELDS = "two-fields"
    SINGLE_FIELD = "single-field"


class MachineState(StrEnum):
    """States of the pending/committed value state machine."""

    CLEAN = "clean"
    DIRTY = "dirty"
    COMMITTED = "committed"
    INVALID = "invalid"
