"""Locale-aware display formatting backed by Babel CLDR data.

:class:`LocaleCache` holds every formatter and month-name table built by
this module. Formatters are keyed by ``"{locale}::{options JSON}"`` and
month-name tables by locale; both are built lazily and never evicted, so
the cache grows with the number of distinct locales/options in use and
lives as long as the application. Pass an explicit cache to isolate tests.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from datetime import date, time
from typing import Any

from babel import Locale, UnknownLocaleError
from babel.dates import format_date as babel_format_date
from babel.dates import format_time as babel_format_time
from babel.dates import get_month_names

from pickerkit.domain.calendar import to_date
from pickerkit.domain.parsing import parse_time
from pickerkit.domain.types import DateDisplayFormat
from pickerkit.domain.values import TimeValue

logger = logging.getLogger(__name__)

FALLBACK_LOCALE = "en-US"
DEFAULT_DATE_OPTIONS: dict[str, Any] = {"format": "medium"}

_CUSTOM_TOKEN_RE = re.compile(r"YYYY|MMMM|MMM|MM|DD")


@dataclass(frozen=True)
class MonthNames:
    """Twelve short and twelve long month names for one locale."""

    short: tuple[str, ...]
    long: tuple[str, ...]


class DateFormatter:
    """A Babel date pattern bound to a resolved locale."""

    def __init__(self, locale: Locale, pattern: str) -> None:
        self.locale = locale
        self.pattern = pattern

    def format(self, value: date) -> str:
        return babel_format_date(value, format=self.pattern, locale=self.locale)


class TimeFormatter:
    """A Babel time pattern bound to a resolved locale."""

    def __init__(self, locale: Locale, pattern: str) -> None:
        self.locale = locale
        self.pattern = pattern

    def format(self, value: time) -> str:
        return babel_format_time(value, format=self.pattern, locale=self.locale)


class LocaleCache:
    """Process-lifetime cache of locales, formatters, and month names."""

    def __init__(self) -> None:
        self._locales: dict[str, Locale] = {}
        self._formatters: dict[str, DateFormatter | TimeFormatter] = {}
        self._months: dict[str, MonthNames] = {}

    def __len__(self) -> int:
        return len(self._formatters) + len(self._months)

    @staticmethod
    def key(locale: str, options: dict[str, Any] | None) -> str:
        """Cache key for a formatter: ``locale::optionsJSON``."""
        return f"{locale}::{json.dumps(options or {}, sort_keys=True)}"

    def resolve(self, tag: str) -> Locale:
        """Resolve a BCP 47 tag to a Babel locale, falling back to en-US."""
        cached = self._locales.get(tag)
        if cached is not None:
            return cached
        try:
            resolved = Locale.parse(tag.strip().replace("_", "-"), sep="-")
        except (UnknownLocaleError, ValueError, TypeError):
            logger.debug("Unknown locale %r, falling back to %s", tag, FALLBACK_LOCALE)
            resolved = Locale.parse(FALLBACK_LOCALE, sep="-")
        self._locales[tag] = resolved
        return resolved

    def date_formatter(self, locale: str, options: dict[str, Any] | None = None) -> DateFormatter:
        merged = {**DEFAULT_DATE_OPTIONS, **(options or {})}
        key = self.key(locale, merged)
        formatter = self._formatters.get(key)
        if not isinstance(formatter, DateFormatter):
            formatter = DateFormatter(self.resolve(locale), str(merged["format"]))
            self._formatters[key] = formatter
        return formatter

    def time_formatter(self, locale: str, pattern: str) -> TimeFormatter:
        key = self.key(locale, {"time": pattern})
        formatter = self._formatters.get(key)
        if not isinstance(formatter, TimeFormatter):
            formatter = TimeFormatter(self.resolve(locale), pattern)
            self._formatters[key] = formatter
        return formatter

    def month_names(self, locale: str) -> MonthNames:
        names = self._months.get(locale)
        if names is None:
            resolved = self.resolve(locale)
            short = get_month_names("abbreviated", locale=resolved)
            wide = get_month_names("wide", locale=resolved)
            names = MonthNames(
                short=tuple(short[m] for m in range(1, 13)),
                long=tuple(wide[m] for m in range(1, 13)),
            )
            self._months[locale] = names
        return names

    def clear(self) -> None:
        self._locales.clear()
        self._formatters.clear()
        self._months.clear()


_default_cache = LocaleCache()


def default_locale_cache() -> LocaleCache:
    """The application-wide cache used when none is injected."""
    return _default_cache


def format_date(
    iso: str | None,
    locale: str,
    mode: DateDisplayFormat | str = DateDisplayFormat.LOCALE,
    custom_pattern: str | None = None,
    *,
    cache: LocaleCache | None = None,
) -> str:
    """Format an ISO date for display.

    ``iso`` returns the value verbatim. ``custom`` substitutes the tokens
    ``YYYY``, ``MMMM``, ``MMM``, ``MM`` and ``DD`` in *custom_pattern*.
    ``locale`` (and ``custom`` without a pattern) uses the locale's medium
    date format. Unparseable input is returned unchanged.
    """
    if not iso:
        return ""
    mode = DateDisplayFormat(mode)
    if mode is DateDisplayFormat.ISO:
        return iso
    value = to_date(iso)
    if value is None:
        return iso
    store = cache or _default_cache
    if mode is DateDisplayFormat.CUSTOM and custom_pattern:
        months = store.month_names(locale)
        tokens = {
            "YYYY": str(value.year),
            "MMMM": months.long[value.month - 1],
            "MMM": months.short[value.month - 1],
            "MM": f"{value.month:02d}",
            "DD": f"{value.day:02d}",
        }
        return _CUSTOM_TOKEN_RE.sub(lambda m: tokens[m.group(0)], custom_pattern)
    return store.date_formatter(locale).format(value)


def format_time(value: TimeValue | None, with_seconds: bool = False) -> str:
    """Canonical 24-hour text (``HH:mm`` or ``HH:mm:ss``); empty for None."""
    if value is None:
        return ""
    return value.isoformat(with_seconds)


def to_12h_display(
    value: str | TimeValue,
    locale: str,
    *,
    with_seconds: bool | None = None,
    cache: LocaleCache | None = None,
) -> str:
    """Render a 24-hour time on the 12-hour clock using locale day periods.

    Strings that do not parse are returned unchanged. Seconds are shown when
    *with_seconds* is True, or when it is None and the input carried them.
    """
    parsed = value if isinstance(value, TimeValue) else parse_time(value, allow_seconds=True)
    if parsed is None:
        return str(value)
    if with_seconds is None:
        if isinstance(value, TimeValue):
            with_seconds = value.seconds != 0
        else:
            with_seconds = value.count(":") >= 2
    pattern = "h:mm:ss a" if with_seconds else "h:mm a"
    store = cache or _default_cache
    return store.time_formatter(locale, pattern).format(
        time(parsed.hours, parsed.minutes, parsed.seconds)
    )
