"""Shared pytest fixtures and test helpers for pickerkit tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

import pytest
from click.testing import CliRunner

from pickerkit.config.models import PickerConfig
from pickerkit.domain.types import PickerKind
from pickerkit.domain.values import Rect
from pickerkit.infrastructure.formatting import LocaleCache
from pickerkit.infrastructure.host import HeadlessDocument
from pickerkit.infrastructure.scroll_lock import ScrollLockManager
from pickerkit.pickers import PICKERS, BasePicker
from pickerkit.plugins.hookspecs import hookimpl

# 2026-03-05 is a Thursday
FIXED_NOW = datetime(2026, 3, 5, 14, 37, 12)


class RecordingPlugin:
    """Plugin that records every picker event as ``(event, detail)``."""

    def __init__(self) -> None:
        self.events: list[tuple[str, Any]] = []

    @hookimpl
    def picker_input(self, picker_id: str, kind: str, detail: Any) -> None:
        self.events.append(("input", detail))

    @hookimpl
    def picker_change(self, picker_id: str, kind: str, detail: Any) -> None:
        self.events.append(("change", detail))

    @hookimpl
    def picker_invalid(self, picker_id: str, kind: str, detail: Any) -> None:
        self.events.append(("invalid", detail))

    @hookimpl
    def picker_open(self, picker_id: str, kind: str, detail: Any) -> None:
        self.events.append(("open", detail))

    @hookimpl
    def picker_close(self, picker_id: str, kind: str, detail: Any) -> None:
        self.events.append(("close", detail))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def of(self, name: str) -> list[Any]:
        return [detail for event, detail in self.events if event == name]

    def last(self, name: str) -> Any:
        matching = self.of(name)
        assert matching, f"no {name!r} event recorded"
        return matching[-1]

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def host() -> HeadlessDocument:
    """Headless document with anchor/panel/toggle rects for ``p1``."""
    doc = HeadlessDocument(width=1200, height=800, scrollbar=15)
    doc.set_rect("p1:anchor", Rect(100, 100, 200, 40))
    doc.set_rect("p1:panel", Rect(0, 0, 320, 300))
    doc.set_rect("p1:toggle", Rect(270, 100, 30, 40))
    return doc


@pytest.fixture
def clock() -> Callable[[], datetime]:
    """Frozen clock at :data:`FIXED_NOW`."""
    return lambda: FIXED_NOW


@pytest.fixture
def locale_cache() -> LocaleCache:
    """Fresh formatter cache, isolated from the process-wide one."""
    return LocaleCache()


@pytest.fixture
def scroll_lock() -> ScrollLockManager:
    """Fresh scroll-lock counter."""
    return ScrollLockManager()


@pytest.fixture
def recorder() -> RecordingPlugin:
    return RecordingPlugin()


@pytest.fixture
def make_picker(
    host: HeadlessDocument,
    clock: Callable[[], datetime],
    locale_cache: LocaleCache,
    scroll_lock: ScrollLockManager,
    recorder: RecordingPlugin,
) -> Callable[..., BasePicker]:
    """Factory: ``make_picker(kind, value=None, **config)`` subscribed to ``recorder``.

    The picker id is ``p1`` so the ``host`` fixture's rects apply.
    """

    def _make(kind: PickerKind | str, value: str | None = None, **config: Any) -> BasePicker:
        picker = PICKERS[PickerKind(kind)](
            PickerConfig(**config),
            value=value,
            host=host,
            clock=clock,
            locale_cache=locale_cache,
            scroll_lock=scroll_lock,
            picker_id="p1",
        )
        picker.subscribe(recorder)
        return picker

    return _make
