"""TemporalService — parsing, formatting, range, overlay and stepping operations.

Every method is a thin, side-effect-free wrapper over the domain and
overlay layers that reports its outcome as a :class:`ServiceResult`.
Defaults (locale, overlay spacing, step) come from :class:`PickerSettings`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pickerkit.domain.calendar import step_time
from pickerkit.domain.parsing import (
    normalize_date_iso,
    parse_date_freeform,
    parse_datetime_freeform,
    parse_time,
)
from pickerkit.domain.ranges import RangePolicy, normalize_date_range
from pickerkit.domain.types import DateDisplayFormat, PickerMode
from pickerkit.domain.values import RangeValue, Rect, Viewport
from pickerkit.infrastructure.formatting import format_date, format_time, to_12h_display
from pickerkit.overlay.placement import compute_popover_position, presentation_for
from pickerkit.pickers.time import SHIFT_MULTIPLIER
from pickerkit.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from pickerkit.config.settings import PickerSettings
    from pickerkit.infrastructure.formatting import LocaleCache

logger = logging.getLogger(__name__)


def _fail(op: str, code: str, message: str, **detail: Any) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=detail),
    )


class TemporalService:
    """Engine operations for the developer CLI."""

    def __init__(self, settings: PickerSettings, *, locale_cache: LocaleCache | None = None) -> None:
        self._settings = settings
        self._cache = locale_cache

    @property
    def default_locale(self) -> str:
        return self._settings.picker.locale

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse_date(self, raw: str, *, locale: str | None = None) -> ServiceResult:
        op = "parse_date"
        loc = locale or self.default_locale
        value = parse_date_freeform(raw, loc)
        if value is None:
            return _fail(op, "parse", f"Could not parse date: {raw!r}", raw=raw, locale=loc)
        return ServiceResult(ok=True, op=op, data={"input": raw, "locale": loc, "value": value})

    def parse_time(self, raw: str, *, seconds: bool = True) -> ServiceResult:
        op = "parse_time"
        value = parse_time(raw, allow_seconds=seconds)
        if value is None:
            return _fail(op, "parse", f"Could not parse time: {raw!r}", raw=raw)
        return ServiceResult(
            ok=True,
            op=op,
            data={"input": raw, "value": value.isoformat()},
        )

    def parse_datetime(self, raw: str, *, locale: str | None = None) -> ServiceResult:
        op = "parse_datetime"
        loc = locale or self.default_locale
        value = parse_datetime_freeform(raw, loc)
        if value is None:
            return _fail(op, "parse", f"Could not parse date-time: {raw!r}", raw=raw, locale=loc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "input": raw,
                "locale": loc,
                "value": value.isoformat(),
                "date": value.date,
                "time": value.time.isoformat(),
            },
        )

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def format_date(
        self,
        iso: str,
        *,
        fmt: str = DateDisplayFormat.LOCALE,
        pattern: str | None = None,
        locale: str | None = None,
    ) -> ServiceResult:
        op = "format_date"
        loc = locale or self.default_locale
        if normalize_date_iso(iso) is None:
            return _fail(op, "invalid_date", f"Not an ISO date: {iso!r}", raw=iso)
        text = format_date(iso, loc, fmt, pattern, cache=self._cache)
        return ServiceResult(
            ok=True,
            op=op,
            data={"value": iso, "format": str(fmt), "locale": loc, "display": text},
        )

    def format_time(
        self, raw: str, *, twelve_hour: bool = False, locale: str | None = None
    ) -> ServiceResult:
        op = "format_time"
        loc = locale or self.default_locale
        value = parse_time(raw, allow_seconds=True)
        if value is None:
            return _fail(op, "parse", f"Could not parse time: {raw!r}", raw=raw)
        if twelve_hour:
            text = to_12h_display(value, loc, cache=self._cache)
        else:
            text = format_time(value, with_seconds=value.seconds != 0)
        return ServiceResult(
            ok=True,
            op=op,
            data={"value": value.isoformat(), "locale": loc, "display": text},
        )

    # ------------------------------------------------------------------
    # Ranges
    # ------------------------------------------------------------------

    def normalize_range(
        self,
        start: str | None,
        end: str | None,
        *,
        min_date: str | None = None,
        max_date: str | None = None,
        auto_normalize: bool = True,
        allow_partial: bool = True,
        allow_same_day: bool = True,
    ) -> ServiceResult:
        op = "normalize_range"
        loc = self.default_locale
        endpoints: list[str | None] = []
        for raw in (start, end):
            if not raw:
                endpoints.append(None)
                continue
            parsed = parse_date_freeform(raw, loc)
            if parsed is None:
                return _fail(op, "parse", f"Could not parse date: {raw!r}", raw=raw)
            endpoints.append(parsed)

        policy = RangePolicy(
            auto_normalize=auto_normalize,
            allow_partial=allow_partial,
            allow_same_day=allow_same_day,
        )
        outcome = normalize_date_range(RangeValue(endpoints[0], endpoints[1]), policy, min_date, max_date)
        if not outcome.ok or outcome.value is None:
            reason = str(outcome.reason)
            return _fail(op, reason, f"Range rejected: {reason}", start=start, end=end)
        return ServiceResult(
            ok=True,
            op=op,
            data={"start": outcome.value.start, "end": outcome.value.end},
        )

    # ------------------------------------------------------------------
    # Overlay
    # ------------------------------------------------------------------

    def place_overlay(self, anchor: Rect, panel: Rect, viewport: Viewport) -> ServiceResult:
        overlay = self._settings.overlay
        position = compute_popover_position(
            anchor, panel, viewport, padding=overlay.padding, gap=overlay.gap
        )
        return ServiceResult(ok=True, op="place_overlay", data=position.model_dump(mode="json"))

    def presentation(self, width: float, *, mode: str = PickerMode.POPOVER) -> ServiceResult:
        op = "presentation"
        try:
            picker_mode = PickerMode(mode)
        except ValueError:
            return _fail(op, "invalid_mode", f"Unknown mode: {mode!r}", mode=mode)
        result = presentation_for(picker_mode, width, self._settings.overlay.sheet_breakpoint)
        return ServiceResult(
            ok=True,
            op=op,
            data={"width": width, "mode": str(picker_mode), "presentation": str(result)},
        )

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def step(
        self,
        raw: str,
        *,
        step: int | None = None,
        delta: int = 1,
        shift: bool = False,
    ) -> ServiceResult:
        op = "step"
        value = parse_time(raw, allow_seconds=True)
        if value is None:
            return _fail(op, "parse", f"Could not parse time: {raw!r}", raw=raw)
        minutes = step or self._settings.picker.step
        units = delta * (SHIFT_MULTIPLIER if shift else 1)
        result = step_time(value, minutes, units)
        logger.debug("Stepped %s by %d x %d minutes", value, units, minutes)
        return ServiceResult(
            ok=True,
            op=op,
            data={"input": value.isoformat(), "step": minutes, "units": units, "value": result.isoformat()},
        )
