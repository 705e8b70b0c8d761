"""Single-date picker: typed text, calendar selection and a Today action."""

from __future__ import annotations

from pickerkit.domain.types import PickerKind, Source
from pickerkit.domain.values import DateValue
from pickerkit.engine.codecs import DateCodec
from pickerkit.pickers.base import BasePicker
from pickerkit.pickers.calendar import SELECTION_SINGLE, CalendarSelection, calendar_attributes


class DatePicker(BasePicker[DateValue]):
    """``YYYY-MM-DD`` picker. Close-on-select defaults to true."""

    kind = PickerKind.DATE
    codec_class = DateCodec

    def today(self) -> bool:
        """Commit today's date (clamped into bounds)."""
        if not self.machine.commit(self.today_iso(), Source.TODAY):
            return False
        if self.close_on_select:
            self._close_after_select(Source.TODAY)
        return True

    def select_date(self, iso: DateValue, source: Source = Source.CALENDAR) -> bool:
        """Pick a date; commits straight away when close-on-select applies."""
        if not self._commit_allowed():
            return False
        self.machine.update_pending(iso, source)
        if not self.close_on_select:
            return True
        if not self.machine.commit_pending(source):
            return False
        self._close_after_select(source)
        return True

    def _on_calendar(self, selection: CalendarSelection) -> bool:
        if selection.selection != SELECTION_SINGLE or selection.value is None:
            return False
        return self.select_date(selection.value)

    def calendar_attributes(self) -> dict[str, str]:
        return calendar_attributes(SELECTION_SINGLE, self.machine.pending, self.config)
