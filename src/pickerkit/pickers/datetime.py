"""Date-time picker: a calendar date and a time resolved independently.

The combined value is clamped against the combined min/max timestamps,
never date and time separately.
"""

from __future__ import annotations

from pickerkit.domain.parsing import normalize_date_iso, parse_time
from pickerkit.domain.types import PickerKind, Source
from pickerkit.domain.values import DateTimeValue, DateValue, TimeValue
from pickerkit.engine.codecs import DateTimeCodec
from pickerkit.pickers.base import BasePicker
from pickerkit.pickers.calendar import SELECTION_SINGLE, CalendarSelection, calendar_attributes
from pickerkit.pickers.time import apply_time_segment

DEFAULT_TIME = TimeValue(9, 0)


class DateTimePicker(BasePicker[DateTimeValue]):
    """``YYYY-MM-DDTHH:mm[:ss]`` picker."""

    kind = PickerKind.DATETIME
    codec_class = DateTimeCodec

    @property
    def pending_date(self) -> DateValue | None:
        current = self.machine.pending or self.machine.committed
        return current.date if current else None

    @property
    def pending_time(self) -> TimeValue | None:
        current = self.machine.pending or self.machine.committed
        return current.time if current else None

    def set_date(self, iso: str, source: Source = Source.CALENDAR) -> bool:
        """Pick the date part; the time is kept (09:00 when there is none)."""
        if not self._commit_allowed():
            return False
        date = normalize_date_iso(iso)
        if date is None:
            return False
        candidate = DateTimeValue(date, self.pending_time or DEFAULT_TIME)
        self.machine.update_pending(self._clamped(candidate), source)
        if self.close_on_select and self.machine.commit_pending(source):
            self._close_after_select(source)
        return True

    def set_time(self, value: TimeValue | str, source: Source = Source.PICKER) -> bool:
        """Pick the time part; without a date yet, today is used."""
        if not self._commit_allowed():
            return False
        time = value if isinstance(value, TimeValue) else parse_time(value, self.config.seconds)
        if time is None:
            return False
        candidate = DateTimeValue(self.pending_date or self.today_iso(), time)
        self.machine.update_pending(self._clamped(candidate), source)
        return True

    def select_time_segment(self, segment: str, raw: int | str) -> bool:
        time = apply_time_segment(self.pending_time or DEFAULT_TIME, segment, raw, self.config)
        if time is None:
            return False
        return self.set_time(time, Source.PICKER)

    def now(self) -> bool:
        """Commit the current date and time."""
        current = DateTimeValue(
            self.today_iso(), self.current_time(with_seconds=self.config.seconds)
        )
        if not self.machine.commit(current, Source.NOW):
            return False
        if self.close_on_select:
            self._close_after_select(Source.NOW)
        return True

    def _on_calendar(self, selection: CalendarSelection) -> bool:
        if selection.selection != SELECTION_SINGLE or selection.value is None:
            return False
        return self.set_date(selection.value, Source.CALENDAR)

    def calendar_attributes(self) -> dict[str, str]:
        return calendar_attributes(SELECTION_SINGLE, self.pending_date, self.config)

    def _clamped(self, value: DateTimeValue) -> DateTimeValue:
        return self.codec.resolve(value).value or value
