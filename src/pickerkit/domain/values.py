"""Immutable temporal value types.

- ``DateValue``: canonical ISO ``YYYY-MM-DD`` string (year >= 1000).
- :class:`TimeValue`: 24-hour clock time, canonical ``HH:mm`` or ``HH:mm:ss``.
- :class:`DateTimeValue`: date + time, canonical ``DATE"T"TIME``.
- :class:`RangeValue`: two optional endpoints of either type.

Geometry types used by the overlay placement engine live here too so the
placement math stays a pure domain computation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel

from pickerkit.domain.types import Placement

DateValue = str

MINUTES_PER_DAY = 24 * 60

T = TypeVar("T")


def pad2(value: int) -> str:
    """Zero-pad a non-negative integer to two digits."""
    return f"{value:02d}"


@dataclass(frozen=True, order=True)
class TimeValue:
    """A wall-clock time on the 24-hour clock."""

    hours: int
    minutes: int
    seconds: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.hours <= 23:
            raise ValueError(f"hours out of range: {self.hours}")
        if not 0 <= self.minutes <= 59:
            raise ValueError(f"minutes out of range: {self.minutes}")
        if not 0 <= self.seconds <= 59:
            raise ValueError(f"seconds out of range: {self.seconds}")

    @property
    def minute_of_day(self) -> int:
        return self.hours * 60 + self.minutes

    @property
    def total_seconds(self) -> int:
        return self.minute_of_day * 60 + self.seconds

    @property
    def meridiem(self) -> str:
        return "pm" if self.hours >= 12 else "am"

    @classmethod
    def from_minute_of_day(cls, minutes: int, seconds: int = 0) -> TimeValue:
        """Build a time from minutes past midnight, wrapping modulo one day."""
        wrapped = minutes % MINUTES_PER_DAY
        return cls(wrapped // 60, wrapped % 60, seconds)

    def isoformat(self, with_seconds: bool | None = None) -> str:
        """Canonical string. ``None`` includes seconds only when non-zero."""
        if with_seconds is None:
            with_seconds = self.seconds != 0
        base = f"{pad2(self.hours)}:{pad2(self.minutes)}"
        if not with_seconds:
            return base
        return f"{base}:{pad2(self.seconds)}"

    def __str__(self) -> str:
        return self.isoformat()


@dataclass(frozen=True, order=True)
class DateTimeValue:
    """A calendar date combined with a wall-clock time."""

    date: DateValue
    time: TimeValue

    def isoformat(self, with_seconds: bool | None = None) -> str:
        return f"{self.date}T{self.time.isoformat(with_seconds)}"

    def __str__(self) -> str:
        return self.isoformat()


@dataclass(frozen=True)
class RangeValue(Generic[T]):
    """Two optional endpoints. Ordering is enforced by the range normalizer."""

    start: T | None = None
    end: T | None = None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def is_partial(self) -> bool:
        return not self.is_empty and not self.is_complete

    def swapped(self) -> RangeValue[T]:
        return RangeValue(self.end, self.start)


# ---------------------------------------------------------------------------
# Overlay geometry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Rect:
    """Viewport-relative bounding box, as returned by a layout measurement."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass(frozen=True)
class Viewport:
    """Visible window size and current document scroll offsets."""

    width: float
    height: float
    scroll_x: float = 0.0
    scroll_y: float = 0.0


class OverlayPosition(BaseModel):
    """Document-relative panel coordinates plus the side it was placed on."""

    model_config = {"frozen": True}

    top: float
    left: float
    placement: Placement
