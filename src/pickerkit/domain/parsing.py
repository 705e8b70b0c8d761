"""Free-form date/time parsing under a locale.

Parsing never raises: every function returns ``None`` for input it cannot
interpret. Callers decide whether that becomes an ``invalid`` event.
"""

from __future__ import annotations

import re

from pickerkit.domain.calendar import format_iso, parse_iso_parts
from pickerkit.domain.values import DateTimeValue, DateValue, TimeValue

_SEPARATOR_RE = re.compile(r"[.\-]")
_WHITESPACE_RE = re.compile(r"\s+")
_INT_RE = re.compile(r"^-?\d+$")
_TIME_RE = re.compile(
    r"^(\d{1,2})(?::|\.|h)?(\d{1,2})?(?::|\.|m)?(\d{1,2})?\s*(am|pm)?$"
)
_ISO_DATETIME_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})[T ](\d{1,2}:\d{2}(?::\d{2})?)$")
_FREEFORM_DATETIME_RE = re.compile(
    r"^(?P<date>.+?)(?:T|\s+)"
    r"(?P<time>\d{1,2}(?:[:.h]\d{1,2})?(?:[:.m]\d{1,2})?\s*(?:am|pm)?)$",
    re.IGNORECASE,
)

TWO_DIGIT_YEAR_PIVOT = 70

_FALSY_ATTRS = frozenset({"false", "0", "off", "no"})


def normalize_separators(raw: str) -> str:
    """Map ``.`` and ``-`` to ``/`` and collapse whitespace."""
    return _WHITESPACE_RE.sub(" ", _SEPARATOR_RE.sub("/", raw)).strip()


def normalize_date_iso(raw: str | None) -> DateValue | None:
    """Return the canonical form of a strict ISO date, or None."""
    parts = parse_iso_parts(raw)
    if parts is None:
        return None
    return format_iso(*parts)


def _parse_int(raw: str) -> int | None:
    if not _INT_RE.match(raw):
        return None
    return int(raw)


def uses_month_first(locale: str) -> bool:
    """Whether *locale* writes numeric dates as month/day/year."""
    return locale.strip().lower().replace("_", "-").startswith("en-us")


def expand_year(year: int) -> int:
    """Expand a two-digit year: ``<70 -> 20xx``, otherwise ``19xx``."""
    if year >= 100:
        return year
    return year + (1900 if year >= TWO_DIGIT_YEAR_PIVOT else 2000)


def parse_date_freeform(raw: str | None, locale: str) -> DateValue | None:
    """Parse user-typed date text.

    ISO input is accepted directly. Otherwise the text must split into
    three numeric parts; ``en-US``-family locales read them as
    month/day/year, all other locales as day/month/year.

    Examples:
        >>> parse_date_freeform("03/05/2026", "en-US")
        '2026-03-05'
        >>> parse_date_freeform("03.05.26", "de-DE")
        '2026-05-03'
    """
    if raw is None:
        return None
    iso = normalize_date_iso(raw.strip())
    if iso is not None:
        return iso

    normalized = normalize_separators(raw)
    if not normalized:
        return None

    parts = [part.strip() for part in normalized.split("/") if part.strip()]
    if len(parts) != 3:
        return None
    numbers = [_parse_int(part) for part in parts]
    if any(number is None for number in numbers):
        return None
    first, second, third = (n for n in numbers if n is not None)

    year = expand_year(third)
    if uses_month_first(locale):
        month, day = first, second
    else:
        month, day = second, first
    if year < 1000 or not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    return normalize_date_iso(format_iso(year, month, day))


def parse_time(raw: str | None, allow_seconds: bool = True) -> TimeValue | None:
    """Parse user-typed time text into a 24-hour :class:`TimeValue`.

    Accepts ``:``, ``.``, and ``h``/``m`` markers between components and an
    optional ``am``/``pm`` suffix. With a meridiem the hour must be 1-12.
    A seconds component is rejected when *allow_seconds* is False.
    """
    if raw is None:
        return None
    value = raw.strip().lower()
    if not value:
        return None
    match = _TIME_RE.match(value)
    if match is None:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2) or "0")
    seconds_raw = match.group(3)
    seconds = int(seconds_raw or "0")
    if minutes > 59 or seconds > 59:
        return None
    if not allow_seconds and seconds_raw is not None:
        return None

    meridiem = match.group(4)
    if meridiem:
        if not 1 <= hours <= 12:
            return None
        if meridiem == "pm" and hours < 12:
            hours += 12
        if meridiem == "am" and hours == 12:
            hours = 0

    if hours > 23:
        return None
    return TimeValue(hours, minutes, seconds)


def split_datetime(raw: str | None) -> DateTimeValue | None:
    """Parse a strict ``YYYY-MM-DD[T ]HH:mm[:ss]`` string."""
    if not raw:
        return None
    match = _ISO_DATETIME_RE.match(raw.strip())
    if match is None:
        return None
    date_iso = normalize_date_iso(match.group(1))
    time = parse_time(match.group(2), allow_seconds=True)
    if date_iso is None or time is None:
        return None
    return DateTimeValue(date_iso, time)


def combine_datetime(date_iso: str | None, time: str | TimeValue | None) -> DateTimeValue | None:
    """Join a date and a time (string or value) into one value, or None."""
    if not date_iso or time is None:
        return None
    normalized = normalize_date_iso(date_iso)
    parsed = time if isinstance(time, TimeValue) else parse_time(time, allow_seconds=True)
    if normalized is None or parsed is None:
        return None
    return DateTimeValue(normalized, parsed)


def parse_datetime_freeform(raw: str | None, locale: str) -> DateTimeValue | None:
    """Parse typed date-time text: ISO, or free-form date + space + time."""
    if raw is None:
        return None
    strict = split_datetime(raw)
    if strict is not None:
        return strict
    match = _FREEFORM_DATETIME_RE.match(raw.strip())
    if match is None:
        return None
    date_iso = parse_date_freeform(match.group("date"), locale)
    time = parse_time(match.group("time"), allow_seconds=True)
    if date_iso is None or time is None:
        return None
    return DateTimeValue(date_iso, time)


def parse_constraint_date(raw: str | None) -> DateValue | None:
    """Read a min/max bound as a date; datetime bounds contribute their date."""
    if not raw:
        return None
    iso = normalize_date_iso(raw)
    if iso is not None:
        return iso
    split = split_datetime(raw)
    return split.date if split else None


def parse_constraint_time(raw: str | None) -> TimeValue | None:
    """Read a min/max bound for a time picker."""
    if not raw:
        return None
    return parse_time(raw, allow_seconds=True)


def parse_constraint_datetime(raw: str | None) -> DateTimeValue | None:
    """Read a min/max bound as a timestamp; date-only bounds mean ``T00:00``."""
    if not raw:
        return None
    split = split_datetime(raw)
    if split is not None:
        return split
    iso = normalize_date_iso(raw)
    if iso is None:
        return None
    return DateTimeValue(iso, TimeValue(0, 0))


def is_truthy_attr(raw: str | None, fallback: bool = False) -> bool:
    """Interpret a boolean string attribute.

    Absent means *fallback*; present-but-empty means true; ``false``, ``0``,
    ``off`` and ``no`` (any case) mean false.
    """
    if raw is None:
        return fallback
    normalized = raw.strip().lower()
    if not normalized:
        return True
    return normalized not in _FALSY_ATTRS


def normalize_locale(raw: str | None, fallback: str = "en-US") -> str:
    """Trimmed locale tag, or *fallback* when empty."""
    value = (raw or "").strip()
    return value or fallback
