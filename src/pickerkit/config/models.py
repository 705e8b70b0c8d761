"""Typed picker configuration with code-baked defaults.

String attributes (kebab-case, HTML-style) are converted exactly once by
:meth:`PickerConfig.from_attributes`; the rest of the engine only ever sees
typed fields. Boolean attributes follow the usual markup rule: absent means
the default, present-but-empty means true, and ``false``/``0``/``off``/``no``
mean false.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, field_validator

from pickerkit.domain.parsing import is_truthy_attr, normalize_locale
from pickerkit.domain.ranges import RangePolicy
from pickerkit.domain.types import (
    DateDisplayFormat,
    PickerKind,
    PickerMode,
    RangeVariant,
    TimeFormat,
)

MIN_STEP = 1
MAX_STEP = 60

# kebab-case attribute -> field name
_BOOL_ATTRS = {
    "clearable": "clearable",
    "allow-partial": "allow_partial",
    "allow-same-day": "allow_same_day",
    "auto-normalize": "auto_normalize",
    "seconds": "seconds",
    "allow-input": "allow_input",
    "readonly": "readonly",
    "disabled": "disabled",
}
_INT_ATTRS = {"step": "step", "step-seconds": "step_seconds"}
_TEXT_ATTRS = {
    "min": "min",
    "max": "max",
    "display-format": "display_format",
    "week-start": "week_start",
    "size": "size",
    "variant": "variant",
    "label": "label",
    "error": "error",
}
_ENUM_ATTRS: dict[str, tuple[str, type[StrEnum]]] = {
    "mode": ("mode", PickerMode),
    "time-format": ("time_format", TimeFormat),
    "range-variant": ("range_variant", RangeVariant),
}

CLOSE_ON_SELECT_DEFAULTS: dict[PickerKind, bool] = {
    PickerKind.DATE: True,
    PickerKind.TIME: False,
    PickerKind.DATETIME: False,
    PickerKind.DATE_RANGE: False,
    PickerKind.DATETIME_RANGE: False,
}


class PickerConfig(BaseModel):
    """Per-instance picker options, validated once at construction."""

    model_config = {"frozen": True}

    mode: PickerMode = PickerMode.POPOVER
    close_on_select: bool | None = None
    clearable: bool = True
    allow_partial: bool = True
    allow_same_day: bool = True
    auto_normalize: bool = True
    step: int = 5
    step_seconds: int = 1
    seconds: bool = False
    time_format: TimeFormat = TimeFormat.H24
    date_format: DateDisplayFormat = DateDisplayFormat.LOCALE
    display_format: str | None = None
    min: str | None = None
    max: str | None = None
    locale: str = "en-US"
    allow_input: bool = True
    readonly: bool = False
    disabled: bool = False
    week_start: str | None = None
    size: str | None = None
    variant: str | None = None
    label: str | None = None
    error: str | None = None
    range_variant: RangeVariant = RangeVariant.TWO_FIELDS

    @field_validator("step", "step_seconds")
    @classmethod
    def _clamp_step(cls, value: int) -> int:
        return min(MAX_STEP, max(MIN_STEP, value))

    @field_validator("locale", mode="before")
    @classmethod
    def _normalize_locale(cls, value: Any) -> str:
        return normalize_locale(value if isinstance(value, str) else None)

    @field_validator("min", "max", mode="before")
    @classmethod
    def _blank_bound(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    # ------------------------------------------------------------------
    # Derived policy
    # ------------------------------------------------------------------

    def resolve_close_on_select(self, kind: PickerKind) -> bool:
        if self.close_on_select is not None:
            return self.close_on_select
        return CLOSE_ON_SELECT_DEFAULTS[kind]

    def range_policy(self) -> RangePolicy:
        return RangePolicy(
            auto_normalize=self.auto_normalize,
            allow_partial=self.allow_partial,
            allow_same_day=self.allow_same_day,
        )

    # ------------------------------------------------------------------
    # Attribute conversion
    # ------------------------------------------------------------------

    @classmethod
    def from_attributes(
        cls,
        attrs: Mapping[str, str | None],
        kind: PickerKind | str = PickerKind.DATE,
    ) -> PickerConfig:
        """Build a config from a string attribute map.

        Unknown attribute names are ignored; unknown enum strings and
        non-numeric steps fall back to the field defaults.
        """
        kind = PickerKind(kind)
        values: dict[str, Any] = {}
        for name, raw in attrs.items():
            values.update(_convert_attribute(name, raw, kind))
        return cls(**values)

    def with_attribute(self, name: str, raw: str | None, kind: PickerKind | str) -> PickerConfig:
        """Copy with one attribute re-applied; ``None`` restores the default."""
        update = _convert_attribute(name, raw, PickerKind(kind))
        if not update:
            return self
        return type(self).model_validate({**self.model_dump(), **update})


class OverlayConfig(BaseModel):
    """[overlay] section: placement spacing and the sheet breakpoint."""

    model_config = {"frozen": True}

    padding: float = 8
    gap: float = 8
    sheet_breakpoint: float = 640


def _field_default(field: str) -> Any:
    return PickerConfig.model_fields[field].default


def _enum_or_default(enum_cls: type[StrEnum], raw: str | None, field: str) -> Any:
    if raw is None:
        return _field_default(field)
    try:
        return enum_cls(raw.strip().lower())
    except ValueError:
        return _field_default(field)


def _int_or_default(raw: str | None, field: str) -> int:
    try:
        return int(float((raw or "").strip()))
    except (ValueError, OverflowError):
        return int(_field_default(field))


def _convert_attribute(name: str, raw: str | None, kind: PickerKind) -> dict[str, Any]:
    """Map one kebab-case attribute to ``{field: typed value}``."""
    if name == "close-on-select":
        return {"close_on_select": None if raw is None else is_truthy_attr(raw)}
    if name in _BOOL_ATTRS:
        field = _BOOL_ATTRS[name]
        return {field: is_truthy_attr(raw, _field_default(field))}
    if name in _INT_ATTRS:
        field = _INT_ATTRS[name]
        return {field: _int_or_default(raw, field)}
    if name in _TEXT_ATTRS:
        field = _TEXT_ATTRS[name]
        return {field: raw if raw is not None else _field_default(field)}
    if name == "locale":
        return {"locale": normalize_locale(raw)}
    if name in _ENUM_ATTRS:
        field, enum_cls = _ENUM_ATTRS[name]
        return {field: _enum_or_default(enum_cls, raw, field)}
    if name == "format":
        if kind is PickerKind.TIME:
            return {"time_format": _enum_or_default(TimeFormat, raw, "time_format")}
        return {"date_format": _enum_or_default(DateDisplayFormat, raw, "date_format")}
    return {}
