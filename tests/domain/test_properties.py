"""Cross-cutting properties of formatting, parsing and clamping."""

import pytest

from pickerkit.domain.compare import clamp_date, clamp_datetime, clamp_time
from pickerkit.domain.parsing import parse_date_freeform, split_datetime
from pickerkit.domain.values import TimeValue
from pickerkit.infrastructure.formatting import LocaleCache, format_date

DATES = ["2026-03-05", "2024-02-29", "1999-12-31", "2026-01-01", "2030-07-04"]

BOUNDS = [
    (None, None),
    ("2026-01-01", None),
    (None, "2026-01-31"),
    ("2026-01-10", "2026-01-20"),
    ("2026-01-10T08:00", "2026-01-20T18:00"),
    ("garbage", "2026-01-20"),
]


class TestRoundTrip:
    @pytest.mark.parametrize("iso", DATES)
    @pytest.mark.parametrize("locale", ["en-US", "en-GB", "de-DE"])
    def test_iso_format_parse(self, iso: str, locale: str, locale_cache: LocaleCache) -> None:
        shown = format_date(iso, locale, "iso", cache=locale_cache)
        assert format_date(parse_date_freeform(shown, locale), locale, "iso") == iso

    @pytest.mark.parametrize("iso", DATES[:4])
    @pytest.mark.parametrize(
        ("locale", "pattern"),
        [("en-US", "MM/DD/YYYY"), ("en-GB", "DD/MM/YYYY"), ("de-DE", "DD.MM.YYYY")],
    )
    def test_numeric_locale_display_parses_back(
        self, iso: str, locale: str, pattern: str, locale_cache: LocaleCache
    ) -> None:
        shown = format_date(iso, locale, "custom", pattern, cache=locale_cache)
        assert parse_date_freeform(shown, locale) == iso


class TestClampIdempotence:
    @pytest.mark.parametrize(("lower", "upper"), BOUNDS)
    @pytest.mark.parametrize("iso", ["2025-12-31", "2026-01-15", "2026-02-01"])
    def test_date(self, iso: str, lower: str | None, upper: str | None) -> None:
        once = clamp_date(iso, lower, upper)
        assert clamp_date(once, lower, upper) == once

    @pytest.mark.parametrize(
        ("lower", "upper"), [("08:00", "18:00"), ("08:00", None), (None, "07:30:15")]
    )
    @pytest.mark.parametrize("value", [TimeValue(6, 0), TimeValue(12, 0), TimeValue(23, 59, 59)])
    def test_time(self, value: TimeValue, lower: str | None, upper: str | None) -> None:
        once = clamp_time(value, lower, upper)
        assert clamp_time(once, lower, upper) == once

    @pytest.mark.parametrize(("lower", "upper"), BOUNDS[1:5])
    @pytest.mark.parametrize("raw", ["2026-01-10T07:00", "2026-01-15T12:00", "2026-01-20T19:00"])
    def test_datetime(self, raw: str, lower: str | None, upper: str | None) -> None:
        value = split_datetime(raw)
        assert value is not None
        once = clamp_datetime(value, lower, upper)
        assert clamp_datetime(once, lower, upper) == once
