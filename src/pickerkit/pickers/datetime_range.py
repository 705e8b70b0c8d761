"""Date-time-range picker: two date-times with independent time selects.

Each endpoint keeps its own time. An endpoint picked in the calendar
without a time yet gets a default: the current time for the start and
one hour later for the end. Ordering, partial and same-day policy apply to
the combined timestamps when committing; with ``auto_normalize`` reversed
endpoints are swapped on Apply, otherwise Apply is rejected with ``order``.
"""

from __future__ import annotations

from pickerkit.domain.parsing import parse_time
from pickerkit.domain.types import PickerKind, Source
from pickerkit.domain.values import DateTimeValue, DateValue, RangeValue, TimeValue
from pickerkit.engine.codecs import DateTimeRangeCodec
from pickerkit.pickers._range import RangePickerBase
from pickerkit.pickers.time import apply_time_segment

START = "start"
END = "end"


class DateTimeRangePicker(RangePickerBase[DateTimeValue]):
    """Public value is ``{"start": DATETIME, "end": DATETIME}`` JSON."""

    kind = PickerKind.DATETIME_RANGE
    codec_class = DateTimeRangeCodec

    _start_time: TimeValue | None = None
    _end_time: TimeValue | None = None

    def default_times(self) -> tuple[TimeValue, TimeValue]:
        """``(now, now + 1h)`` on the minute, wrapping at midnight."""
        start = self.current_time()
        return start, TimeValue.from_minute_of_day(start.minute_of_day + 60)

    def endpoint_time(self, which: str) -> TimeValue:
        """Time currently shown for *which* endpoint."""
        pending = self.machine.pending or RangeValue()
        endpoint = pending.start if which == START else pending.end
        if endpoint is not None:
            return endpoint.time
        stored = self._start_time if which == START else self._end_time
        if stored is not None:
            return stored
        start, end = self.default_times()
        return start if which == START else end

    def set_endpoint_time(
        self, which: str, value: TimeValue | str, source: Source = Source.PICKER
    ) -> bool:
        """Change one endpoint's time; pending keeps its dates."""
        if which not in (START, END) or not self._commit_allowed():
            return False
        time = value if isinstance(value, TimeValue) else parse_time(value, self.config.seconds)
        if time is None:
            return False
        if which == START:
            self._start_time = time
        else:
            self._end_time = time
        pending = self.machine.pending or RangeValue()
        start, end = pending.start, pending.end
        if which == START and start is not None:
            start = DateTimeValue(start.date, time)
        if which == END and end is not None:
            end = DateTimeValue(end.date, time)
        self.machine.update_pending(RangeValue(start, end), source)
        return True

    def select_time_segment(self, which: str, segment: str, raw: int | str) -> bool:
        time = apply_time_segment(self.endpoint_time(which), segment, raw, self.config)
        if time is None:
            return False
        return self.set_endpoint_time(which, time)

    def _from_dates(self, dates: RangeValue[DateValue]) -> RangeValue[DateTimeValue]:
        start = DateTimeValue(dates.start, self.endpoint_time(START)) if dates.start else None
        end = DateTimeValue(dates.end, self.endpoint_time(END)) if dates.end else None
        return RangeValue(start, end)

    def _to_dates(self, value: RangeValue[DateTimeValue]) -> RangeValue[DateValue]:
        return RangeValue(
            value.start.date if value.start else None,
            value.end.date if value.end else None,
        )

    def _reset_input(self) -> None:
        super()._reset_input()
        self._start_time = None
        self._end_time = None
