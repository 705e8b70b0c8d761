"""Comparators and min/max clamping for dates, times, and date-times.

Comparators return a negative number, zero, or a positive number.
``compare_time`` and ``compare_datetime`` parse their operands; if either
side fails to parse they fall back to plain string comparison. The
fallback is kept for compatibility with existing stored values even though
it can disagree with the canonical ordering.

Clamping never rejects and never raises: a bound that fails to parse is
treated as absent.
"""

from __future__ import annotations

from pickerkit.domain.calendar import parse_iso_parts
from pickerkit.domain.parsing import (
    parse_constraint_date,
    parse_constraint_datetime,
    parse_time,
    split_datetime,
)
from pickerkit.domain.values import DateTimeValue, DateValue, TimeValue


def _cmp(a: object, b: object) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


def compare_iso(a: DateValue, b: DateValue) -> int:
    """Compare two ISO dates; unparseable operands compare as raw strings."""
    ap = parse_iso_parts(a)
    bp = parse_iso_parts(b)
    if ap is None or bp is None:
        return _cmp(a, b)
    return _cmp(ap, bp)


def _as_time(value: str | TimeValue) -> TimeValue | None:
    if isinstance(value, TimeValue):
        return value
    return parse_time(value, allow_seconds=True)


def compare_time(a: str | TimeValue, b: str | TimeValue) -> int:
    """Compare two clock times by seconds past midnight."""
    at = _as_time(a)
    bt = _as_time(b)
    if at is None or bt is None:
        return _cmp(str(a), str(b))
    return at.total_seconds - bt.total_seconds


def _as_datetime(value: str | DateTimeValue) -> DateTimeValue | None:
    if isinstance(value, DateTimeValue):
        return value
    return split_datetime(value)


def compare_datetime(a: str | DateTimeValue, b: str | DateTimeValue) -> int:
    """Compare two date-times: date first, then time."""
    ap = _as_datetime(a)
    bp = _as_datetime(b)
    if ap is None or bp is None:
        return _cmp(str(a), str(b))
    date_diff = compare_iso(ap.date, bp.date)
    if date_diff != 0:
        return date_diff
    return compare_time(ap.time, bp.time)


def clamp_date(value: DateValue, min_raw: str | None, max_raw: str | None) -> DateValue:
    """Clamp an ISO date into ``[min, max]``.

    Bounds may be dates or date-times (the date part is used).
    """
    if parse_iso_parts(value) is None:
        return value
    result = value
    lower = parse_constraint_date(min_raw)
    upper = parse_constraint_date(max_raw)
    if lower is not None and compare_iso(result, lower) < 0:
        result = lower
    if upper is not None and compare_iso(result, upper) > 0:
        result = upper
    return result


def clamp_time(
    value: TimeValue,
    min_raw: str | TimeValue | None,
    max_raw: str | TimeValue | None,
) -> TimeValue:
    """Clamp a time into ``[min, max]``."""
    result = value
    lower = _as_time(min_raw) if min_raw else None
    upper = _as_time(max_raw) if max_raw else None
    if lower is not None and compare_time(result, lower) < 0:
        result = lower
    if upper is not None and compare_time(result, upper) > 0:
        result = upper
    return result


def _as_bound(raw: str | DateTimeValue | None) -> DateTimeValue | None:
    if raw is None or isinstance(raw, DateTimeValue):
        return raw
    return parse_constraint_datetime(raw)


def clamp_datetime(
    value: DateTimeValue,
    min_raw: str | DateTimeValue | None,
    max_raw: str | DateTimeValue | None,
) -> DateTimeValue:
    """Clamp a date-time against combined min/max timestamps.

    The date and time are not clamped independently: ``2026-03-01T08:00``
    with ``min="2026-03-01T09:30"`` becomes ``2026-03-01T09:30``, while
    ``2026-03-02T08:00`` is left alone.
    """
    result = value
    lower = _as_bound(min_raw)
    upper = _as_bound(max_raw)
    if lower is not None and compare_datetime(result, lower) < 0:
        result = lower
    if upper is not None and compare_datetime(result, upper) > 0:
        result = upper
    return result
