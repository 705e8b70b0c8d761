"""Range normalization: clamp, order, partial and same-day policy.

Steps, in order:

1. Clamp each endpoint independently against ``[min, max]``.
2. Both endpoints present and ``start > end``: swap when ``auto_normalize``,
   otherwise reject with reason ``order``.
3. Exactly one endpoint present and partial ranges are not allowed:
   reject with reason ``partial``.
4. Both endpoints on the same day and same-day ranges are not allowed:
   reject with reason ``range``.

An empty range (no endpoints) is always accepted; it is how ``clear``
commits.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from pickerkit.domain.compare import (
    clamp_date,
    clamp_datetime,
    compare_datetime,
    compare_iso,
)
from pickerkit.domain.types import InvalidReason
from pickerkit.domain.values import DateTimeValue, DateValue, RangeValue

T = TypeVar("T")


@dataclass(frozen=True)
class RangePolicy:
    """Per-picker range policy flags."""

    auto_normalize: bool = True
    allow_partial: bool = True
    allow_same_day: bool = True


@dataclass(frozen=True)
class RangeOutcome(Generic[T]):
    """Result of normalization: a range, or a rejection reason."""

    value: RangeValue[T] | None
    reason: InvalidReason | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None


def normalize_range(
    value: RangeValue[T],
    policy: RangePolicy,
    *,
    clamp: Callable[[T], T],
    compare: Callable[[T, T], int],
    same_day: Callable[[T, T], bool],
) -> RangeOutcome[T]:
    """Apply the clamp/order/partial/same-day pipeline to *value*."""
    start = clamp(value.start) if value.start is not None else None
    end = clamp(value.end) if value.end is not None else None

    if start is not None and end is not None and compare(start, end) > 0:
        if not policy.auto_normalize:
            return RangeOutcome(None, InvalidReason.ORDER)
        start, end = end, start

    result: RangeValue[T] = RangeValue(start, end)
    if result.is_partial and not policy.allow_partial:
        return RangeOutcome(None, InvalidReason.PARTIAL)
    if (
        start is not None
        and end is not None
        and not policy.allow_same_day
        and same_day(start, end)
    ):
        return RangeOutcome(None, InvalidReason.RANGE)
    return RangeOutcome(result)


def normalize_date_range(
    value: RangeValue[DateValue],
    policy: RangePolicy,
    min_raw: str | None = None,
    max_raw: str | None = None,
) -> RangeOutcome[DateValue]:
    """Normalize a range of ISO dates.

    Examples:
        >>> normalize_date_range(RangeValue("2026-02-20", "2026-02-18"), RangePolicy()).value
        RangeValue(start='2026-02-18', end='2026-02-20')
    """
    return normalize_range(
        value,
        policy,
        clamp=lambda iso: clamp_date(iso, min_raw, max_raw),
        compare=compare_iso,
        same_day=lambda a, b: compare_iso(a, b) == 0,
    )


def normalize_datetime_range(
    value: RangeValue[DateTimeValue],
    policy: RangePolicy,
    min_raw: str | None = None,
    max_raw: str | None = None,
) -> RangeOutcome[DateTimeValue]:
    """Normalize a range of date-times on their combined timestamps.

    Same-day policy compares the calendar dates of the two endpoints.
    """
    return normalize_range(
        value,
        policy,
        clamp=lambda dt: clamp_datetime(dt, min_raw, max_raw),
        compare=compare_datetime,
        same_day=lambda a, b: compare_iso(a.date, b.date) == 0,
    )
