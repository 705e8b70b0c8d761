"""Calendar arithmetic on canonical ISO dates and clock times.

All helpers accept and return canonical strings or value types; invalid
input is passed through unchanged rather than raising, matching how the
pickers treat unparseable attribute values.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta

from pickerkit.domain.values import (
    MINUTES_PER_DAY,
    DateValue,
    RangeValue,
    TimeValue,
    pad2,
)

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

MIN_YEAR = 1000
MAX_PRESET_DAYS = 366


def days_in_month(year: int, month: int) -> int:
    """Number of days in *month* of *year* (Gregorian)."""
    return calendar.monthrange(year, month)[1]


def parse_iso_parts(raw: str | None) -> tuple[int, int, int] | None:
    """Split a strict ``YYYY-MM-DD`` string into validated ``(y, m, d)``."""
    match = _ISO_DATE_RE.match((raw or "").strip())
    if match is None:
        return None
    year, month, day = (int(group) for group in match.groups())
    if year < MIN_YEAR or not 1 <= month <= 12:
        return None
    if not 1 <= day <= days_in_month(year, month):
        return None
    return year, month, day


def format_iso(year: int, month: int, day: int) -> DateValue:
    return f"{year}-{pad2(month)}-{pad2(day)}"


def to_date(iso: DateValue) -> date | None:
    parts = parse_iso_parts(iso)
    if parts is None:
        return None
    return date(*parts)


def add_days_iso(iso: DateValue, days: int) -> DateValue:
    """Shift *iso* by *days*; unparseable input is returned unchanged."""
    current = to_date(iso)
    if current is None:
        return iso
    shifted = current + timedelta(days=days)
    return format_iso(shifted.year, shifted.month, shifted.day)


def add_months_iso(iso: DateValue, months: int) -> DateValue:
    """Shift *iso* by whole months, clamping the day to the target month."""
    parts = parse_iso_parts(iso)
    if parts is None:
        return iso
    year, month, day = parts
    index = year * 12 + (month - 1) + months
    next_year, next_month = divmod(index, 12)
    next_month += 1
    return format_iso(next_year, next_month, min(day, days_in_month(next_year, next_month)))


def month_range(today: DateValue) -> RangeValue[DateValue]:
    """First through last day of the month containing *today*."""
    parts = parse_iso_parts(today)
    if parts is None:
        return RangeValue(today, today)
    year, month, _ = parts
    return RangeValue(
        format_iso(year, month, 1),
        format_iso(year, month, days_in_month(year, month)),
    )


def last_days_range(today: DateValue, days: int) -> RangeValue[DateValue]:
    """The *days* most recent days ending on (and including) *today*."""
    safe_days = max(1, min(MAX_PRESET_DAYS, days))
    return RangeValue(add_days_iso(today, -(safe_days - 1)), today)


def today_iso(now: datetime) -> DateValue:
    """Local calendar date of *now*."""
    return format_iso(now.year, now.month, now.day)


def step_time(value: TimeValue, step_minutes: int, delta: int) -> TimeValue:
    """Move *value* by ``step_minutes * delta`` minutes, wrapping at midnight.

    Seconds are preserved. Arithmetic is modulo 1440 minutes so stepping
    past 23:59 lands early the next morning and vice versa.

    Examples:
        >>> step_time(TimeValue(9, 58), 5, 5).isoformat()
        '10:23'
        >>> step_time(TimeValue(23, 58), 5, 1).isoformat()
        '00:03'
    """
    total = (value.minute_of_day + step_minutes * delta) % MINUTES_PER_DAY
    return TimeValue.from_minute_of_day(total, value.seconds)


def step_options(step: int, limit: int = 60) -> list[int]:
    """Grid of selectable segment values: ``0, step, 2*step, ... < limit``."""
    return list(range(0, limit, max(1, step)))


def snap_to_step(value: int, step: int, limit: int = 60) -> int:
    """Closest grid option to *value* (ties go to the lower option)."""
    options = step_options(step, limit)
    return min(options, key=lambda option: (abs(option - value), option))
