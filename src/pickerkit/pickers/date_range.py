"""Date-range picker: two ISO dates through the range normalizer."""

from __future__ import annotations

from pickerkit.domain.types import PickerKind
from pickerkit.domain.values import DateValue, RangeValue
from pickerkit.engine.codecs import DateRangeCodec
from pickerkit.pickers._range import RangePickerBase


class DateRangePicker(RangePickerBase[DateValue]):
    """Public value is ``{"start": ISO, "end": ISO}`` JSON."""

    kind = PickerKind.DATE_RANGE
    codec_class = DateRangeCodec

    def _from_dates(self, dates: RangeValue[DateValue]) -> RangeValue[DateValue]:
        return dates

    def _to_dates(self, value: RangeValue[DateValue]) -> RangeValue[DateValue]:
        return value
