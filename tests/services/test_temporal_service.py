"""Tests for TemporalService operations."""

import pytest

from pickerkit.config.models import OverlayConfig, PickerConfig
from pickerkit.config.settings import PickerSettings
from pickerkit.domain.values import Rect, Viewport
from pickerkit.services.temporal import TemporalService


@pytest.fixture
def service() -> TemporalService:
    return TemporalService(PickerSettings(picker=PickerConfig(), overlay=OverlayConfig()))


class TestParse:
    def test_date_default_locale(self, service: TemporalService) -> None:
        result = service.parse_date("03/05/2026")
        assert result.ok
        assert result.op == "parse_date"
        assert result.data == {"input": "03/05/2026", "locale": "en-US", "value": "2026-03-05"}

    def test_date_locale_override(self, service: TemporalService) -> None:
        result = service.parse_date("03/05/2026", locale="de-DE")
        assert result.data["value"] == "2026-05-03"

    def test_date_failure(self, service: TemporalService) -> None:
        result = service.parse_date("garbage")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "parse"
        assert result.error.detail == {"raw": "garbage", "locale": "en-US"}

    def test_time_twelve_hour(self, service: TemporalService) -> None:
        assert service.parse_time("9:30 pm").data["value"] == "21:30"

    def test_time_with_seconds(self, service: TemporalService) -> None:
        assert service.parse_time("14:30:15").data["value"] == "14:30:15"

    def test_time_seconds_refused(self, service: TemporalService) -> None:
        result = service.parse_time("14:30:15", seconds=False)
        assert not result.ok
        assert result.error.code == "parse"

    def test_datetime(self, service: TemporalService) -> None:
        result = service.parse_datetime("03/05/2026 2:30 pm")
        assert result.data["value"] == "2026-03-05T14:30"
        assert result.data["date"] == "2026-03-05"
        assert result.data["time"] == "14:30"


class TestFormat:
    def test_locale_date(self, service: TemporalService) -> None:
        result = service.format_date("2026-03-05")
        assert result.data["display"] == "Mar 5, 2026"
        assert result.data["format"] == "locale"

    def test_custom_pattern(self, service: TemporalService) -> None:
        result = service.format_date("2026-03-05", fmt="custom", pattern="DD MMMM YYYY")
        assert result.data["display"] == "05 March 2026"

    def test_not_iso(self, service: TemporalService) -> None:
        result = service.format_date("03/05/2026")
        assert result.error.code == "invalid_date"

    def test_twelve_hour_time(self, service: TemporalService) -> None:
        assert service.format_time("21:05", twelve_hour=True).data["display"] == "9:05 PM"

    def test_twenty_four_hour_time(self, service: TemporalService) -> None:
        assert service.format_time("21:05:30").data["display"] == "21:05:30"


class TestRange:
    def test_swap(self, service: TemporalService) -> None:
        result = service.normalize_range("2026-02-20", "2026-02-18")
        assert result.data == {"start": "2026-02-18", "end": "2026-02-20"}

    def test_order_rejected(self, service: TemporalService) -> None:
        result = service.normalize_range("2026-02-20", "2026-02-18", auto_normalize=False)
        assert result.error.code == "order"

    def test_partial_rejected(self, service: TemporalService) -> None:
        result = service.normalize_range("2026-01-01", None, allow_partial=False)
        assert result.error.code == "partial"

    def test_clamped(self, service: TemporalService) -> None:
        result = service.normalize_range("2026-01-01", "2026-03-01", max_date="2026-02-15")
        assert result.data == {"start": "2026-01-01", "end": "2026-02-15"}

    def test_unparseable_endpoint(self, service: TemporalService) -> None:
        assert service.normalize_range("2026-01-01", "soon").error.code == "parse"


class TestOverlayAndStep:
    def test_place(self, service: TemporalService) -> None:
        result = service.place_overlay(
            Rect(100, 700, 200, 40), Rect(0, 0, 320, 300), Viewport(1200, 800)
        )
        assert result.data == {"top": 392.0, "left": 100.0, "placement": "top"}

    @pytest.mark.parametrize(
        ("width", "mode", "expected"),
        [(375, "popover", "sheet"), (1024, "popover", "popover"), (375, "inline", "popover")],
    )
    def test_presentation(
        self, service: TemporalService, width: float, mode: str, expected: str
    ) -> None:
        assert service.presentation(width, mode=mode).data["presentation"] == expected

    def test_presentation_bad_mode(self, service: TemporalService) -> None:
        assert service.presentation(375, mode="modal").error.code == "invalid_mode"

    def test_step_shift(self, service: TemporalService) -> None:
        result = service.step("09:58", shift=True)
        assert result.data == {"input": "09:58", "step": 5, "units": 5, "value": "10:23"}

    def test_step_wraps(self, service: TemporalService) -> None:
        assert service.step("00:02", delta=-1).data["value"] == "23:57"

    def test_step_from_settings(self) -> None:
        service = TemporalService(PickerSettings(picker=PickerConfig(step=15)))
        assert service.step("10:00").data["value"] == "10:15"
