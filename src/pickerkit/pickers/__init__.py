"""The five picker orchestrators."""

from pickerkit.domain.types import PickerKind
from pickerkit.pickers.base import BasePicker
from pickerkit.pickers.date import DatePicker
from pickerkit.pickers.date_range import DateRangePicker
from pickerkit.pickers.datetime import DateTimePicker
from pickerkit.pickers.datetime_range import DateTimeRangePicker
from pickerkit.pickers.time import TimePicker

PICKERS: dict[PickerKind, type[BasePicker]] = {  # type: ignore[type-arg]
    PickerKind.DATE: DatePicker,
    PickerKind.TIME: TimePicker,
    PickerKind.DATETIME: DateTimePicker,
    PickerKind.DATE_RANGE: DateRangePicker,
    PickerKind.DATETIME_RANGE: DateTimeRangePicker,
}


def create_picker(kind: PickerKind | str, *args, **kwargs) -> BasePicker:  # type: ignore[no-untyped-def,type-arg]
    """Instantiate the picker class registered for *kind*."""
    return PICKERS[PickerKind(kind)](*args, **kwargs)


__all__ = [
    "PICKERS",
    "BasePicker",
    "DatePicker",
    "DateRangePicker",
    "DateTimePicker",
    "DateTimeRangePicker",
    "TimePicker",
    "create_picker",
]
