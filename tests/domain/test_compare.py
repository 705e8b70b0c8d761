"""Tests for comparators and clamping."""

from pickerkit.domain.compare import (
    clamp_date,
    clamp_datetime,
    clamp_time,
    compare_datetime,
    compare_iso,
    compare_time,
)
from pickerkit.domain.values import DateTimeValue, TimeValue


class TestComparators:
    def test_compare_iso(self) -> None:
        assert compare_iso("2026-01-02", "2026-01-10") < 0
        assert compare_iso("2026-01-10", "2026-01-10") == 0
        assert compare_iso("2027-01-01", "2026-12-31") > 0

    def test_compare_time_numeric(self) -> None:
        # "9:05" sorts after "10:00" as text but is earlier on the clock
        assert compare_time("9:05", "10:00") < 0
        assert compare_time(TimeValue(10, 0), "10:00:00") == 0

    def test_compare_datetime_date_first(self) -> None:
        assert compare_datetime("2026-03-01T23:00", "2026-03-02T01:00") < 0
        assert compare_datetime("2026-03-01T09:00", "2026-03-01T08:59") > 0


class TestStringFallback:
    """Unparseable operands fall back to plain string comparison."""

    def test_time_fallback(self) -> None:
        assert compare_time("abc", "10:00") > 0
        assert compare_time("10:00", "abc") < 0

    def test_iso_fallback_disagrees_with_calendar(self) -> None:
        assert compare_iso("2026-1-5", "2026-01-05") > 0

    def test_datetime_fallback(self) -> None:
        assert compare_datetime("x", "x") == 0
        assert compare_datetime("2026-03-01Tbad", "2026-03-01T09:00") > 0


class TestClamp:
    def test_clamp_date(self) -> None:
        assert clamp_date("2026-01-01", "2026-02-01", None) == "2026-02-01"
        assert clamp_date("2026-05-01", None, "2026-03-31") == "2026-03-31"
        assert clamp_date("2026-02-15", "2026-02-01", "2026-03-31") == "2026-02-15"

    def test_clamp_date_uses_datetime_bound_date(self) -> None:
        assert clamp_date("2026-01-01", "2026-02-01T12:00", None) == "2026-02-01"

    def test_clamp_date_ignores_bad_bounds(self) -> None:
        assert clamp_date("2026-01-01", "soon", "later") == "2026-01-01"

    def test_clamp_time(self) -> None:
        assert clamp_time(TimeValue(7, 0), "08:00", "18:00") == TimeValue(8, 0)
        assert clamp_time(TimeValue(19, 0), "08:00", "18:00") == TimeValue(18, 0)
        assert clamp_time(TimeValue(12, 0), None, None) == TimeValue(12, 0)

    def test_clamp_datetime_combined_timestamp(self) -> None:
        early = DateTimeValue("2026-03-01", TimeValue(8, 0))
        later_day = DateTimeValue("2026-03-02", TimeValue(8, 0))
        bound = "2026-03-01T09:30"
        assert clamp_datetime(early, bound, None) == DateTimeValue("2026-03-01", TimeValue(9, 30))
        assert clamp_datetime(later_day, bound, None) == later_day

    def test_clamp_datetime_date_only_max(self) -> None:
        value = DateTimeValue("2026-03-01", TimeValue(8, 0))
        assert clamp_datetime(value, None, "2026-03-01") == DateTimeValue("2026-03-01", TimeValue(0, 0))
