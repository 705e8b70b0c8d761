"""Calendar collaborator contract.

The calendar grid is an external component. Pickers configure it through
string attributes (``selection``, ``value``, ``min``, ``max``, ``locale``,
``week-start``, ``size``, ``variant``, ``readonly``, ``disabled``) and read
back its ``select`` (single) and ``change`` (range) events.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pickerkit.domain.parsing import normalize_date_iso, parse_constraint_date

if TYPE_CHECKING:
    from pickerkit.config.models import PickerConfig

SELECTION_SINGLE = "single"
SELECTION_RANGE = "range"


@dataclass(frozen=True)
class CalendarSelection:
    """A date (single) or pair of dates (range) picked in the calendar."""

    selection: str
    value: str | None = None
    start: str | None = None
    end: str | None = None


def read_calendar_event(event: str, detail: Mapping[str, Any] | None) -> CalendarSelection | None:
    """Decode a calendar event; anything unrecognized yields None."""
    if not detail:
        return None
    if event == "select":
        raw = detail.get("value")
        value = normalize_date_iso(raw) if isinstance(raw, str) else None
        if value is None:
            return None
        return CalendarSelection(SELECTION_SINGLE, value=value)
    if event == "change" and detail.get("mode") == SELECTION_RANGE:
        start = detail.get("start")
        end = detail.get("end")
        return CalendarSelection(
            SELECTION_RANGE,
            start=normalize_date_iso(start) if isinstance(start, str) else None,
            end=normalize_date_iso(end) if isinstance(end, str) else None,
        )
    return None


def calendar_attributes(
    selection: str,
    value: str | None,
    config: PickerConfig,
    *,
    disabled: bool | None = None,
) -> dict[str, str]:
    """Attribute map for the calendar; absent options are left out."""
    attrs: dict[str, str] = {"selection": selection, "locale": config.locale}
    if value:
        attrs["value"] = value
    lower = parse_constraint_date(config.min)
    upper = parse_constraint_date(config.max)
    if lower:
        attrs["min"] = lower
    if upper:
        attrs["max"] = upper
    for name, option in (
        ("week-start", config.week_start),
        ("size", config.size),
        ("variant", config.variant),
    ):
        if option:
            attrs[name] = option
    if config.readonly:
        attrs["readonly"] = ""
    if config.disabled if disabled is None else disabled:
        attrs["disabled"] = ""
    return attrs
