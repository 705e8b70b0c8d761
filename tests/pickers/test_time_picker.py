"""Tests for the time picker surfaces."""

from collections.abc import Callable
from datetime import datetime
from typing import Any

import pytest

from pickerkit.config.models import PickerConfig
from pickerkit.domain.types import InvalidReason, Source, TimeFormat
from pickerkit.domain.values import TimeValue
from pickerkit.pickers.time import HOURS, MERIDIEM, MINUTES, SECONDS, TimePicker, apply_time_segment

MakePicker = Callable[..., Any]


class TestKeyboardStepping:
    def test_shift_arrow_steps_five_units(self, make_picker: MakePicker, recorder: Any) -> None:
        picker = make_picker("time", "09:58")
        assert picker.press_key("ArrowUp", shift=True) is True
        assert picker.pending == TimeValue(10, 23)
        assert picker.value == "09:58"
        assert recorder.last("input").source is Source.KEYBOARD_STEP

    def test_wraps_at_midnight(self, make_picker: MakePicker) -> None:
        picker = make_picker("time", "23:58")
        picker.press_key("ArrowUp")
        assert picker.pending == TimeValue(0, 3)
        picker.press_key("ArrowDown")
        picker.press_key("ArrowDown")
        assert picker.pending == TimeValue(23, 53)

    def test_step_then_enter_commits(self, make_picker: MakePicker, recorder: Any) -> None:
        picker = make_picker("time", "09:00", step=15)
        picker.press_key("ArrowUp")
        picker.press_key("Enter")
        assert picker.value == "09:15"
        assert recorder.last("change").source is Source.ENTER

    def test_clamped_to_min(self, make_picker: MakePicker) -> None:
        picker = make_picker("time", "08:00", min="08:00")
        picker.press_key("ArrowDown")
        assert picker.pending == TimeValue(8, 0)

    def test_arrow_never_opens(self, make_picker: MakePicker) -> None:
        picker = make_picker("time", "08:00")
        picker.press_key("ArrowDown")
        assert not picker.is_open


class TestTypedInput:
    def test_twelve_hour_text(self, make_picker: MakePicker) -> None:
        picker = make_picker("time")
        picker.type_text("9:30 pm")
        picker.blur()
        assert picker.value == "21:30"

    def test_seconds_rejected_when_disabled(self, make_picker: MakePicker, recorder: Any) -> None:
        picker = make_picker("time")
        picker.type_text("10:00:30")
        picker.blur()
        assert recorder.last("invalid").reason is InvalidReason.PARSE
        assert picker.error == "Invalid time"

    def test_seconds_enabled(self, make_picker: MakePicker) -> None:
        picker = make_picker("time", seconds=True)
        picker.type_text("10:00:30")
        picker.blur()
        assert picker.value == "10:00:30"

    def test_twelve_hour_display(self, make_picker: MakePicker) -> None:
        picker = make_picker("time", "21:05", time_format=TimeFormat.H12)
        assert picker.display_value == "9:05 PM"
        assert picker.value == "21:05"


class TestSegments:
    def test_minutes_snap_to_step(self, make_picker: MakePicker, recorder: Any) -> None:
        picker = make_picker("time", "09:58")
        assert picker.select_segment(MINUTES, 7) is True
        assert picker.pending == TimeValue(9, 5)
        assert recorder.last("input").source is Source.PICKER
        assert picker.value == "09:58"

    def test_close_on_select_commits(self, make_picker: MakePicker) -> None:
        picker = make_picker("time", "09:00", close_on_select=True)
        picker.select_segment(HOURS, 14)
        assert picker.value == "14:00"

    def test_twelve_hour_segments(self, make_picker: MakePicker) -> None:
        picker = make_picker("time", "21:05", time_format=TimeFormat.H12)
        assert picker.segments() == {MINUTES: 5, MERIDIEM: "pm", HOURS: 9}
        picker.select_segment(MERIDIEM, "am")
        assert picker.pending == TimeValue(9, 5)
        picker.select_segment(HOURS, 12)
        assert picker.pending == TimeValue(0, 5)

    def test_invalid_segment_values(self, make_picker: MakePicker) -> None:
        picker = make_picker("time", "09:00", time_format=TimeFormat.H12)
        assert picker.select_segment(HOURS, 13) is False
        assert picker.select_segment(MERIDIEM, "noon") is False
        assert picker.select_segment("millis", 5) is False
        assert picker.select_segment(MINUTES, "x") is False

    def test_options(self, make_picker: MakePicker) -> None:
        picker = make_picker("time", step=15, seconds=True, step_seconds=20)
        assert picker.minute_options() == [0, 15, 30, 45]
        assert picker.second_options() == [0, 20, 40]
        assert picker.hour_options() == list(range(24))
        assert make_picker("time").second_options() == []

    @pytest.mark.parametrize(
        ("segment", "raw", "expected"),
        [(SECONDS, 31, TimeValue(9, 0, 30)), (HOURS, "7", TimeValue(7, 0, 0))],
    )
    def test_apply_time_segment(self, segment: str, raw: Any, expected: TimeValue) -> None:
        config = PickerConfig(seconds=True, step_seconds=15)
        assert apply_time_segment(TimeValue(9, 0), segment, raw, config) == expected


class TestSliderAndDrag:
    def test_slider_snaps(self, make_picker: MakePicker, recorder: Any) -> None:
        picker = make_picker("time", "09:00", step=15)
        picker.slide_to(605)
        assert picker.pending == TimeValue(10, 0)
        assert recorder.last("input").source is Source.SLIDER

    def test_drag_is_relative_to_origin(self, make_picker: MakePicker, recorder: Any) -> None:
        picker = make_picker("time", "09:58")
        picker.begin_drag()
        picker.drag_by(2)
        picker.drag_by(3)
        assert picker.pending == TimeValue(10, 13)
        assert recorder.last("input").source is Source.DRAG
        assert picker.end_drag() is True
        assert picker.value == "09:58"

    def test_close_cancels_drag_without_commit(self, make_picker: MakePicker, recorder: Any) -> None:
        picker = make_picker("time", "09:00")
        picker.open()
        picker.begin_drag()
        picker.drag_by(1)
        picker.close()
        assert not picker.dragging
        assert picker.drag_by(1) is False
        assert recorder.of("change") == []

    def test_disabled_ignores_surfaces(self, make_picker: MakePicker, recorder: Any) -> None:
        picker = make_picker("time", "09:00", disabled=True)
        picker.step_by(1)
        picker.slide_to(600)
        picker.begin_drag()
        assert not picker.dragging
        assert recorder.events == []


class TestNow:
    def test_now_commits_clock_time(self, make_picker: MakePicker, recorder: Any) -> None:
        picker = make_picker("time")
        assert picker.now() is True
        assert picker.value == "14:37"
        assert recorder.last("change").source is Source.NOW

    def test_now_with_seconds(self, make_picker: MakePicker) -> None:
        picker = make_picker("time", seconds=True)
        picker.now()
        assert picker.value == "14:37:12"

    def test_injected_clock(self) -> None:
        picker = TimePicker(clock=lambda: datetime(2026, 1, 1, 6, 5))
        picker.now()
        assert picker.value == "06:05"
