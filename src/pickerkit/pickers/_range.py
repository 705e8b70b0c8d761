"""Behaviour shared by the date-range and date-time-range pickers.

Typed input comes either from two fields (start / end) or from one field
holding ``start — end``. Presets and calendar selections only ever write
pending; Apply, blur, Enter and (with close-on-select) a completed
calendar range commit through the range normalizer.
"""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from typing import TypeVar

from pickerkit.domain.calendar import last_days_range, month_range
from pickerkit.domain.types import InvalidReason, RangeVariant, Source
from pickerkit.domain.values import DateValue, RangeValue
from pickerkit.engine.codecs import _RangeCodec
from pickerkit.pickers.base import BasePicker
from pickerkit.pickers.calendar import SELECTION_RANGE, CalendarSelection, calendar_attributes

T = TypeVar("T")

PRESET_TODAY = "today"
PRESET_THIS_MONTH = "this-month"
_LAST_DAYS_RE = re.compile(r"^last-(\d+)-days$")


def preset_range(name: str, today: DateValue) -> RangeValue[DateValue]:
    """Resolve a preset name (``today``, ``this-month``, ``last-N-days``).

    Raises ValueError for unknown names.
    """
    key = name.strip().lower()
    if key == PRESET_TODAY:
        return RangeValue(today, today)
    if key == PRESET_THIS_MONTH:
        return month_range(today)
    match = _LAST_DAYS_RE.match(key)
    if match:
        return last_days_range(today, int(match.group(1)))
    raise ValueError(f"Unknown range preset: {name!r}")


class RangePickerBase(BasePicker[RangeValue[T]], ABC):
    """Common range orchestration; subclasses map calendar dates to ``T``."""

    codec: _RangeCodec[T]

    _typed_start: str | None = None
    _typed_end: str | None = None

    @property
    def range_variant(self) -> RangeVariant:
        return self.config.range_variant

    @property
    def draft_start(self) -> str:
        if self._typed_start is not None:
            return self._typed_start
        start = self._committed_range().start
        return self.codec.endpoint_display(start) if start is not None else ""

    @property
    def draft_end(self) -> str:
        if self._typed_end is not None:
            return self._typed_end
        end = self._committed_range().end
        return self.codec.endpoint_display(end) if end is not None else ""

    # ------------------------------------------------------------------
    # Typed input
    # ------------------------------------------------------------------

    def type_start(self, text: str) -> None:
        if not self._input_allowed():
            return
        self._typed_start = text
        self._typed_fields_changed()

    def type_end(self, text: str) -> None:
        if not self._input_allowed():
            return
        self._typed_end = text
        self._typed_fields_changed()

    def _parse_typed_fields(self) -> RangeValue[T] | None:
        committed = self._committed_range()
        start_raw = self._typed_start
        if start_raw is None:
            start_raw = self.codec.endpoint_text(committed.start) if committed.start else ""
        end_raw = self._typed_end
        if end_raw is None:
            end_raw = self.codec.endpoint_text(committed.end) if committed.end else ""
        return self.codec.parse_fields(start_raw, end_raw)

    def _typed_fields_changed(self) -> None:
        parsed = self._parse_typed_fields()
        self.machine.error = None
        self.machine.update_pending(
            parsed if parsed is not None else self.machine.pending, Source.TYPING
        )

    def blur(self) -> bool:
        if not self._input_allowed():
            return False
        return self._commit_typed(Source.BLUR)

    def _commit_typed(self, source: Source) -> bool:
        two_fields = self.range_variant is RangeVariant.TWO_FIELDS
        if two_fields and (self._typed_start is not None or self._typed_end is not None):
            return self._commit_fields(source)
        return self.machine.commit_draft(source)

    def _commit_fields(self, source: Source) -> bool:
        parsed = self._parse_typed_fields()
        if parsed is None:
            raw = f"{self.draft_start} {self.draft_end}"
            self.machine.reject(raw.strip(), InvalidReason.PARSE, source)
            return False
        return self.machine.commit(parsed, source)

    def _reset_input(self) -> None:
        self._typed_start = None
        self._typed_end = None

    # ------------------------------------------------------------------
    # Presets and calendar
    # ------------------------------------------------------------------

    def apply_preset(self, name: str) -> bool:
        """Load a preset range into pending (never commits)."""
        if not self._commit_allowed():
            return False
        dates = preset_range(name, self.today_iso())
        self.machine.update_pending(self._normalized(self._from_dates(dates)), Source.PRESET)
        return True

    def _on_calendar(self, selection: CalendarSelection) -> bool:
        if selection.selection != SELECTION_RANGE:
            return False
        value = self._normalized(self._from_dates(RangeValue(selection.start, selection.end)))
        self.machine.update_pending(value, Source.CALENDAR)
        if self.close_on_select and value.is_complete:
            if self.machine.commit_pending(Source.CALENDAR):
                self._close_after_select(Source.CALENDAR)
        return True

    def calendar_attributes(self) -> dict[str, str]:
        dates = self._to_dates(self.machine.pending or RangeValue())
        payload = {key: iso for key, iso in (("start", dates.start), ("end", dates.end)) if iso}
        value = json.dumps(payload, separators=(",", ":")) if payload else None
        return calendar_attributes(SELECTION_RANGE, value, self.config)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @abstractmethod
    def _from_dates(self, dates: RangeValue[DateValue]) -> RangeValue[T]:
        """Lift calendar dates to endpoint values."""

    @abstractmethod
    def _to_dates(self, value: RangeValue[T]) -> RangeValue[DateValue]:
        """Project endpoint values to calendar dates."""

    def _normalized(self, value: RangeValue[T]) -> RangeValue[T]:
        resolution = self.codec.resolve(value)
        if resolution.ok and resolution.value is not None:
            return resolution.value
        return value

    def _committed_range(self) -> RangeValue[T]:
        return self.machine.committed or RangeValue()
