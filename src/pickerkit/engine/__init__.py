"""Picker engine — value codecs and the shared pending/committed state machine."""

from pickerkit.engine.codecs import (
    CODECS,
    DateCodec,
    DateRangeCodec,
    DateTimeCodec,
    DateTimeRangeCodec,
    Resolution,
    TimeCodec,
    ValueCodec,
)
from pickerkit.engine.details import EventDetail, InvalidDetail, OverlayDetail
from pickerkit.engine.machine import ValueStateMachine

__all__ = [
    "CODECS",
    "DateCodec",
    "DateRangeCodec",
    "DateTimeCodec",
    "DateTimeRangeCodec",
    "EventDetail",
    "InvalidDetail",
    "OverlayDetail",
    "Resolution",
    "TimeCodec",
    "ValueCodec",
    "ValueStateMachine",
]
