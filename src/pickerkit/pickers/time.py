"""Time picker: typed text, segment selects, keyboard stepping, slider and drag.

Every surface writes pending only (clamped into ``[min, max]``); commits
happen on Enter, blur, Apply, Now and Clear.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pickerkit.domain.calendar import snap_to_step, step_options, step_time
from pickerkit.domain.types import PickerKind, Source, TimeFormat
from pickerkit.domain.values import MINUTES_PER_DAY, TimeValue
from pickerkit.engine.codecs import TimeCodec
from pickerkit.pickers.base import BasePicker

if TYPE_CHECKING:
    from pickerkit.config.models import PickerConfig

HOURS = "hours"
MINUTES = "minutes"
SECONDS = "seconds"
MERIDIEM = "meridiem"
SEGMENTS = (HOURS, MINUTES, SECONDS, MERIDIEM)

SHIFT_MULTIPLIER = 5


def apply_time_segment(
    base: TimeValue,
    segment: str,
    raw: int | str,
    config: PickerConfig,
) -> TimeValue | None:
    """Return *base* with one segment replaced, or None for an invalid choice.

    Minutes and seconds snap to the closest option on the step grid. In
    12-hour mode ``hours`` is 1-12 and keeps the current meridiem.
    """
    twelve_hour = config.time_format is TimeFormat.H12
    if segment == MERIDIEM:
        meridiem = str(raw).strip().lower()
        if meridiem not in ("am", "pm"):
            return None
        hours = base.hours % 12 + (12 if meridiem == "pm" else 0)
        return TimeValue(hours, base.minutes, base.seconds)

    try:
        number = int(raw)
    except ValueError:
        return None

    if segment == HOURS:
        if twelve_hour:
            if not 1 <= number <= 12:
                return None
            number = number % 12 + (12 if base.meridiem == "pm" else 0)
        elif not 0 <= number <= 23:
            return None
        return TimeValue(number, base.minutes, base.seconds)
    if segment == MINUTES:
        return TimeValue(base.hours, snap_to_step(number, config.step), base.seconds)
    if segment == SECONDS:
        seconds = snap_to_step(number, config.step_seconds) if config.seconds else 0
        return TimeValue(base.hours, base.minutes, seconds)
    return None


class TimePicker(BasePicker[TimeValue]):
    """``HH:mm[:ss]`` picker with a step-quantized minute grid."""

    kind = PickerKind.TIME
    codec_class = TimeCodec

    _drag_origin: TimeValue | None = None

    # ------------------------------------------------------------------
    # Grid
    # ------------------------------------------------------------------

    @property
    def step(self) -> int:
        return self.config.step

    def hour_options(self) -> list[int]:
        if self.config.time_format is TimeFormat.H12:
            return list(range(1, 13))
        return list(range(24))

    def minute_options(self) -> list[int]:
        return step_options(self.config.step)

    def second_options(self) -> list[int]:
        if not self.config.seconds:
            return []
        return step_options(self.config.step_seconds)

    def segments(self) -> dict[str, int | str]:
        """Current pending value split into the segment selects."""
        value = self._base()
        hours: int = value.hours
        result: dict[str, int | str] = {MINUTES: value.minutes}
        if self.config.time_format is TimeFormat.H12:
            hours = value.hours % 12 or 12
            result[MERIDIEM] = value.meridiem
        result[HOURS] = hours
        if self.config.seconds:
            result[SECONDS] = value.seconds
        return result

    # ------------------------------------------------------------------
    # Surfaces
    # ------------------------------------------------------------------

    def select_segment(self, segment: str, raw: int | str) -> bool:
        if not self._commit_allowed():
            return False
        next_value = apply_time_segment(self._base(), segment, raw, self.config)
        if next_value is None:
            return False
        self.machine.update_pending(self._clamped(next_value), Source.PICKER)
        if self.close_on_select and self.machine.commit_pending(Source.PICKER):
            self._close_after_select(Source.PICKER)
        return True

    def step_by(self, delta: int) -> None:
        """Move pending by *delta* step units, wrapping around midnight."""
        if not self._commit_allowed():
            return
        next_value = step_time(self._base(), self.config.step, delta)
        self.machine.update_pending(self._clamped(next_value), Source.KEYBOARD_STEP)

    def slide_to(self, minute_of_day: int) -> None:
        """Slider surface: snap a minute-of-day position to the step grid."""
        if not self._commit_allowed():
            return
        snapped = snap_to_step(minute_of_day % MINUTES_PER_DAY, self.config.step, MINUTES_PER_DAY)
        next_value = TimeValue.from_minute_of_day(snapped, self._base().seconds)
        self.machine.update_pending(self._clamped(next_value), Source.SLIDER)

    def begin_drag(self) -> None:
        if self._commit_allowed():
            self._drag_origin = self._base()

    def drag_by(self, steps: int) -> bool:
        """Move pending *steps* grid units away from where the drag started."""
        if self._drag_origin is None:
            return False
        next_value = step_time(self._drag_origin, self.config.step, steps)
        self.machine.update_pending(self._clamped(next_value), Source.DRAG)
        return True

    def end_drag(self) -> bool:
        was_dragging = self._drag_origin is not None
        self._drag_origin = None
        return was_dragging

    @property
    def dragging(self) -> bool:
        return self._drag_origin is not None

    def now(self) -> bool:
        """Commit the current clock time."""
        current = self.current_time(with_seconds=self.config.seconds)
        if not self.machine.commit(current, Source.NOW):
            return False
        if self.close_on_select:
            self._close_after_select(Source.NOW)
        return True

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _handle_key(self, key: str, *, shift: bool) -> bool:
        if key not in ("ArrowUp", "ArrowDown"):
            return False
        units = SHIFT_MULTIPLIER if shift else 1
        self.step_by(units if key == "ArrowUp" else -units)
        return True

    def _on_close(self) -> None:
        self._drag_origin = None

    def _base(self) -> TimeValue:
        return self.machine.pending or self.machine.committed or TimeValue(0, 0)

    def _clamped(self, value: TimeValue) -> TimeValue:
        resolution = self.codec.resolve(value)
        return resolution.value or value
