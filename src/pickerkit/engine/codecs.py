"""Value codecs: the per-variant half of the picker engine.

A codec knows how to read typed text and the public value attribute, how
to write the attribute back, how to display a value, and how to resolve a
candidate value against the picker's constraints (clamping for single
values, full normalization for ranges). The
:class:`~pickerkit.engine.machine.ValueStateMachine` is written only
against :class:`ValueCodec`.
"""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Generic, TypeVar

from pickerkit.domain.compare import clamp_date, clamp_datetime, clamp_time
from pickerkit.domain.parsing import (
    normalize_date_iso,
    parse_constraint_time,
    parse_date_freeform,
    parse_datetime_freeform,
    parse_time,
    split_datetime,
)
from pickerkit.domain.ranges import normalize_date_range, normalize_datetime_range
from pickerkit.domain.types import InvalidReason, PickerKind, Source, TimeFormat
from pickerkit.domain.values import DateTimeValue, DateValue, RangeValue, TimeValue
from pickerkit.engine.details import (
    MODE_DATETIME,
    MODE_DATETIME_RANGE,
    MODE_RANGE,
    MODE_SINGLE,
    MODE_TIME,
    EventDetail,
)
from pickerkit.infrastructure.formatting import (
    LocaleCache,
    default_locale_cache,
    format_date,
    format_time,
    to_12h_display,
)

if TYPE_CHECKING:
    from pickerkit.config.models import PickerConfig

V = TypeVar("V")

RANGE_SEPARATOR = " — "
_SINGLE_FIELD_SPLIT_RE = re.compile(r"\s*[—–]\s*|\s+-\s+")


@dataclass(frozen=True)
class Resolution(Generic[V]):
    """Outcome of resolving a candidate value against constraints."""

    value: V | None
    reason: InvalidReason | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None


class ValueCodec(ABC, Generic[V]):
    """Parse / serialize / display / resolve for one picker variant."""

    kind: ClassVar[PickerKind]
    mode: ClassVar[str]
    messages: ClassVar[dict[InvalidReason, str]] = {}

    def __init__(self, config: PickerConfig, locale_cache: LocaleCache | None = None) -> None:
        self.config = config
        self.locale_cache = locale_cache or default_locale_cache()

    @abstractmethod
    def parse_text(self, raw: str) -> V | None:
        """Interpret non-empty typed text; None when it cannot be parsed."""

    @abstractmethod
    def deserialize(self, raw: str | None) -> V | None:
        """Read the public value attribute; invalid text reads as no value."""

    @abstractmethod
    def serialize(self, value: V | None) -> str | None:
        """Public attribute text; None means the attribute is removed."""

    @abstractmethod
    def display(self, value: V | None) -> str:
        """Human-readable text for the input field."""

    @abstractmethod
    def resolve(self, value: V | None) -> Resolution[V]:
        """Clamp/normalize a candidate value, or reject it with a reason."""

    @abstractmethod
    def detail(self, value: V | None, source: Source) -> EventDetail:
        """Build the ``input``/``change`` payload for *value*."""

    def raw_for(self, value: V | None) -> str:
        """Raw text reported in ``invalid`` events for a rejected value."""
        return self.serialize(value) or ""

    def error_message(self, reason: InvalidReason) -> str:
        if self.config.error:
            return self.config.error
        return self.messages.get(reason, "Invalid value")

    def is_empty(self, value: V | None) -> bool:
        return value is None

    # Shared helpers

    def _date_display(self, iso: DateValue | None) -> str:
        return format_date(
            iso,
            self.config.locale,
            self.config.date_format,
            self.config.display_format,
            cache=self.locale_cache,
        )

    def _time_display(self, value: TimeValue | None) -> str:
        if value is None:
            return ""
        if self.config.time_format is TimeFormat.H12:
            return to_12h_display(
                value,
                self.config.locale,
                with_seconds=self.config.seconds or None,
                cache=self.locale_cache,
            )
        return format_time(value, with_seconds=self.config.seconds or value.seconds != 0)

    def _time_text(self, value: TimeValue) -> str:
        return value.isoformat(True if self.config.seconds else None)


# ---------------------------------------------------------------------------
# Single values
# ---------------------------------------------------------------------------


class DateCodec(ValueCodec[DateValue]):
    kind = PickerKind.DATE
    mode = MODE_SINGLE
    messages = {
        InvalidReason.PARSE: "Invalid date",
        InvalidReason.RANGE: "Date is outside the allowed range",
    }

    def parse_text(self, raw: str) -> DateValue | None:
        return parse_date_freeform(raw, self.config.locale)

    def deserialize(self, raw: str | None) -> DateValue | None:
        return normalize_date_iso(raw)

    def serialize(self, value: DateValue | None) -> str | None:
        return value or None

    def display(self, value: DateValue | None) -> str:
        return self._date_display(value)

    def resolve(self, value: DateValue | None) -> Resolution[DateValue]:
        if value is None:
            return Resolution(None)
        return Resolution(clamp_date(value, self.config.min, self.config.max))

    def detail(self, value: DateValue | None, source: Source) -> EventDetail:
        return EventDetail(
            mode=self.mode,
            value=value,
            display_value=self.display(value),
            source=source,
        )


class TimeCodec(ValueCodec[TimeValue]):
    kind = PickerKind.TIME
    mode = MODE_TIME
    messages = {InvalidReason.PARSE: "Invalid time"}

    def parse_text(self, raw: str) -> TimeValue | None:
        return parse_time(raw, allow_seconds=self.config.seconds)

    def deserialize(self, raw: str | None) -> TimeValue | None:
        return parse_time(raw, allow_seconds=True)

    def serialize(self, value: TimeValue | None) -> str | None:
        if value is None:
            return None
        return self._time_text(value)

    def display(self, value: TimeValue | None) -> str:
        return self._time_display(value)

    def resolve(self, value: TimeValue | None) -> Resolution[TimeValue]:
        if value is None:
            return Resolution(None)
        if not self.config.seconds:
            value = TimeValue(value.hours, value.minutes)
        return Resolution(
            clamp_time(
                value,
                parse_constraint_time(self.config.min),
                parse_constraint_time(self.config.max),
            )
        )

    def detail(self, value: TimeValue | None, source: Source) -> EventDetail:
        return EventDetail(
            mode=self.mode,
            value=self.serialize(value),
            display_value=self.display(value),
            source=source,
        )


class DateTimeCodec(ValueCodec[DateTimeValue]):
    kind = PickerKind.DATETIME
    mode = MODE_DATETIME
    messages = {InvalidReason.PARSE: "Invalid date-time"}

    def parse_text(self, raw: str) -> DateTimeValue | None:
        return parse_datetime_freeform(raw, self.config.locale)

    def deserialize(self, raw: str | None) -> DateTimeValue | None:
        return split_datetime(raw)

    def serialize(self, value: DateTimeValue | None) -> str | None:
        if value is None:
            return None
        return f"{value.date}T{self._time_text(value.time)}"

    def display(self, value: DateTimeValue | None) -> str:
        if value is None:
            return ""
        return f"{self._date_display(value.date)} {self._time_display(value.time)}"

    def resolve(self, value: DateTimeValue | None) -> Resolution[DateTimeValue]:
        if value is None:
            return Resolution(None)
        return Resolution(clamp_datetime(value, self.config.min, self.config.max))

    def detail(self, value: DateTimeValue | None, source: Source) -> EventDetail:
        return EventDetail(
            mode=self.mode,
            value=self.serialize(value),
            display_value=self.display(value),
            source=source,
            date=value.date if value else None,
            time=self._time_text(value.time) if value else None,
        )


# ---------------------------------------------------------------------------
# Ranges
# ---------------------------------------------------------------------------


class _RangeCodec(ValueCodec[RangeValue[V]]):
    """JSON ``{"start", "end"}`` attribute with absent keys omitted."""

    messages = {
        InvalidReason.PARSE: "Invalid range",
        InvalidReason.RANGE: "Invalid range",
        InvalidReason.ORDER: "Invalid range order",
        InvalidReason.PARTIAL: "Range is incomplete",
    }

    @abstractmethod
    def parse_endpoint(self, raw: str) -> V | None: ...

    @abstractmethod
    def read_endpoint(self, raw: object) -> V | None: ...

    @abstractmethod
    def endpoint_text(self, value: V) -> str: ...

    @abstractmethod
    def endpoint_display(self, value: V) -> str: ...

    def is_empty(self, value: RangeValue[V] | None) -> bool:
        return value is None or value.is_empty

    def parse_text(self, raw: str) -> RangeValue[V] | None:
        """Parse single-field text ``start — end`` (or just ``start``)."""
        parts = _SINGLE_FIELD_SPLIT_RE.split(raw.strip(), maxsplit=1)
        start = self.parse_endpoint(parts[0]) if parts[0].strip() else None
        end_raw = parts[1] if len(parts) > 1 else ""
        end = self.parse_endpoint(end_raw) if end_raw.strip() else None
        if start is None or (end_raw.strip() and end is None):
            return None
        return RangeValue(start, end)

    def parse_fields(self, start_raw: str, end_raw: str) -> RangeValue[V] | None:
        """Parse the two-field layout; an empty field is an absent endpoint."""
        start = self.parse_endpoint(start_raw) if start_raw.strip() else None
        end = self.parse_endpoint(end_raw) if end_raw.strip() else None
        if (start_raw.strip() and start is None) or (end_raw.strip() and end is None):
            return None
        return RangeValue(start, end)

    def deserialize(self, raw: str | None) -> RangeValue[V] | None:
        if not raw:
            return RangeValue()
        try:
            data = json.loads(raw)
        except ValueError:
            return RangeValue()
        if not isinstance(data, dict):
            return RangeValue()
        return RangeValue(self.read_endpoint(data.get("start")), self.read_endpoint(data.get("end")))

    def serialize(self, value: RangeValue[V] | None) -> str | None:
        payload = self._payload(value)
        if not payload:
            return None
        return json.dumps(payload, separators=(",", ":"))

    def raw_for(self, value: RangeValue[V] | None) -> str:
        return json.dumps(self._payload(value), separators=(",", ":"))

    def display(self, value: RangeValue[V] | None) -> str:
        if value is None or value.is_empty:
            return ""
        if value.start is not None and value.end is not None:
            return (
                f"{self.endpoint_display(value.start)}{RANGE_SEPARATOR}"
                f"{self.endpoint_display(value.end)}"
            )
        only = value.start if value.start is not None else value.end
        return self.endpoint_display(only)  # type: ignore[arg-type]

    def detail(self, value: RangeValue[V] | None, source: Source) -> EventDetail:
        payload = self._payload(value)
        complete = value is not None and value.is_complete
        return EventDetail(
            mode=self.mode,
            value=payload if complete else None,
            display_value=self.display(value),
            source=source,
            start=payload.get("start"),
            end=payload.get("end"),
        )

    def _payload(self, value: RangeValue[V] | None) -> dict[str, str]:
        payload: dict[str, str] = {}
        if value is None:
            return payload
        if value.start is not None:
            payload["start"] = self.endpoint_text(value.start)
        if value.end is not None:
            payload["end"] = self.endpoint_text(value.end)
        return payload


class DateRangeCodec(_RangeCodec[DateValue]):
    kind = PickerKind.DATE_RANGE
    mode = MODE_RANGE

    def parse_endpoint(self, raw: str) -> DateValue | None:
        return parse_date_freeform(raw, self.config.locale)

    def read_endpoint(self, raw: object) -> DateValue | None:
        return normalize_date_iso(raw) if isinstance(raw, str) else None

    def endpoint_text(self, value: DateValue) -> str:
        return value

    def endpoint_display(self, value: DateValue) -> str:
        return self._date_display(value)

    def resolve(self, value: RangeValue[DateValue] | None) -> Resolution[RangeValue[DateValue]]:
        outcome = normalize_date_range(
            value or RangeValue(),
            self.config.range_policy(),
            self.config.min,
            self.config.max,
        )
        return Resolution(outcome.value, outcome.reason)


class DateTimeRangeCodec(_RangeCodec[DateTimeValue]):
    kind = PickerKind.DATETIME_RANGE
    mode = MODE_DATETIME_RANGE

    def parse_endpoint(self, raw: str) -> DateTimeValue | None:
        return parse_datetime_freeform(raw, self.config.locale)

    def read_endpoint(self, raw: object) -> DateTimeValue | None:
        return split_datetime(raw) if isinstance(raw, str) else None

    def endpoint_text(self, value: DateTimeValue) -> str:
        return f"{value.date}T{self._time_text(value.time)}"

    def endpoint_display(self, value: DateTimeValue) -> str:
        return f"{self._date_display(value.date)} {self._time_display(value.time)}"

    def resolve(
        self, value: RangeValue[DateTimeValue] | None
    ) -> Resolution[RangeValue[DateTimeValue]]:
        outcome = normalize_datetime_range(
            value or RangeValue(),
            self.config.range_policy(),
            self.config.min,
            self.config.max,
        )
        return Resolution(outcome.value, outcome.reason)


CODECS: dict[PickerKind, type[ValueCodec]] = {  # type: ignore[type-arg]
    PickerKind.DATE: DateCodec,
    PickerKind.TIME: TimeCodec,
    PickerKind.DATETIME: DateTimeCodec,
    PickerKind.DATE_RANGE: DateRangeCodec,
    PickerKind.DATETIME_RANGE: DateTimeRangeCodec,
}
