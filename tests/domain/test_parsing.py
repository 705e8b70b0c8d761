"""Tests for free-form date/time parsing."""

import pytest

from pickerkit.domain.parsing import (
    combine_datetime,
    expand_year,
    is_truthy_attr,
    normalize_locale,
    normalize_separators,
    parse_constraint_date,
    parse_constraint_datetime,
    parse_date_freeform,
    parse_datetime_freeform,
    parse_time,
    split_datetime,
)
from pickerkit.domain.values import DateTimeValue, TimeValue


class TestParseDate:
    def test_iso_passthrough(self) -> None:
        assert parse_date_freeform("2026-03-05", "de-DE") == "2026-03-05"

    def test_us_month_first(self) -> None:
        assert parse_date_freeform("03/05/2026", "en-US") == "2026-03-05"

    def test_other_locales_day_first(self) -> None:
        assert parse_date_freeform("03/05/2026", "en-GB") == "2026-05-03"
        assert parse_date_freeform("03.05.26", "de-DE") == "2026-05-03"

    def test_separators_are_equivalent(self) -> None:
        assert parse_date_freeform("5-3-2026", "en-US") == "2026-05-03"
        assert parse_date_freeform("5.3.2026", "en-US") == "2026-05-03"

    def test_underscore_locale_counts_as_us(self) -> None:
        assert parse_date_freeform("1/2/2026", "en_US") == "2026-01-02"

    @pytest.mark.parametrize(
        ("two_digit", "expected"),
        [("69", "2069-01-02"), ("70", "1970-01-02"), ("00", "2000-01-02")],
    )
    def test_two_digit_year_pivot(self, two_digit: str, expected: str) -> None:
        assert parse_date_freeform(f"1/2/{two_digit}", "en-US") == expected

    @pytest.mark.parametrize(
        "raw",
        ["", "   ", "31/04/2026", "2026-02-30", "1/2", "a/b/c", "1/2/3/4", None],
    )
    def test_rejects(self, raw: str | None) -> None:
        assert parse_date_freeform(raw, "fr-FR") is None

    def test_year_below_1000_rejected(self) -> None:
        assert parse_date_freeform("1/2/999", "en-US") is None


class TestParseTime:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("14:30", TimeValue(14, 30)),
            ("9", TimeValue(9, 0)),
            ("9.15", TimeValue(9, 15)),
            ("9h30", TimeValue(9, 30)),
            ("9:30 pm", TimeValue(21, 30)),
            ("9:30PM", TimeValue(21, 30)),
            ("12am", TimeValue(0, 0)),
            ("12:15 pm", TimeValue(12, 15)),
            ("08:05:09", TimeValue(8, 5, 9)),
        ],
    )
    def test_accepts(self, raw: str, expected: TimeValue) -> None:
        assert parse_time(raw) == expected

    @pytest.mark.parametrize("raw", ["", "24:00", "10:60", "13pm", "0am", "noon", None])
    def test_rejects(self, raw: str | None) -> None:
        assert parse_time(raw) is None

    def test_seconds_rejected_when_disallowed(self) -> None:
        assert parse_time("08:05:09", allow_seconds=False) is None
        assert parse_time("08:05", allow_seconds=False) == TimeValue(8, 5)


class TestParseDateTime:
    def test_strict_iso(self) -> None:
        assert split_datetime("2026-03-01T14:30") == DateTimeValue("2026-03-01", TimeValue(14, 30))
        assert split_datetime("2026-03-01 14:30:05") == DateTimeValue(
            "2026-03-01", TimeValue(14, 30, 5)
        )

    def test_strict_rejects_freeform(self) -> None:
        assert split_datetime("03/01/2026 14:30") is None

    def test_freeform(self) -> None:
        assert parse_datetime_freeform("03/01/2026 2:30 pm", "en-US") == DateTimeValue(
            "2026-03-01", TimeValue(14, 30)
        )

    def test_freeform_day_first(self) -> None:
        assert parse_datetime_freeform("03.01.2026 14:30", "de-DE") == DateTimeValue(
            "2026-01-03", TimeValue(14, 30)
        )

    def test_missing_time_rejected(self) -> None:
        assert parse_datetime_freeform("2026-03-01", "en-US") is None

    def test_combine(self) -> None:
        assert combine_datetime("2026-03-01", "09:00") == DateTimeValue("2026-03-01", TimeValue(9, 0))
        assert combine_datetime("2026-03-01", None) is None
        assert combine_datetime("bad", "09:00") is None


class TestConstraints:
    def test_date_bound_from_datetime(self) -> None:
        assert parse_constraint_date("2026-03-01T09:30") == "2026-03-01"

    def test_datetime_bound_from_date(self) -> None:
        assert parse_constraint_datetime("2026-03-01") == DateTimeValue("2026-03-01", TimeValue(0, 0))

    def test_blank_bound_is_absent(self) -> None:
        assert parse_constraint_date("") is None
        assert parse_constraint_datetime(None) is None


class TestHelpers:
    def test_normalize_separators(self) -> None:
        assert normalize_separators(" 03.05-2026 ") == "03/05/2026"

    def test_expand_year(self) -> None:
        assert expand_year(26) == 2026
        assert expand_year(99) == 1999
        assert expand_year(2026) == 2026

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(None, False), ("", True), ("true", True), ("FALSE", False), ("0", False), ("off", False), ("no", False), ("yes", True)],
    )
    def test_truthy_attr(self, raw: str | None, expected: bool) -> None:
        assert is_truthy_attr(raw) is expected

    def test_truthy_attr_fallback(self) -> None:
        assert is_truthy_attr(None, fallback=True) is True

    def test_normalize_locale(self) -> None:
        assert normalize_locale("  fr-FR ") == "fr-FR"
        assert normalize_locale("   ") == "en-US"
