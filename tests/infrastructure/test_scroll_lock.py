"""Tests for the reference-counted body scroll lock."""

from pickerkit.infrastructure.host import HeadlessDocument
from pickerkit.infrastructure.scroll_lock import ScrollLockManager


class TestScrollLock:
    def test_first_acquire_saves_and_locks(self) -> None:
        doc = HeadlessDocument(scrollbar=15)
        doc.body.overflow = "auto"
        doc.body.padding_right = "4px"
        manager = ScrollLockManager()
        release = manager.acquire(doc)
        assert doc.body.overflow == "hidden"
        assert doc.body.padding_right == "15px"
        release()
        assert doc.body.overflow == "auto"
        assert doc.body.padding_right == "4px"

    def test_no_padding_without_scrollbar(self) -> None:
        doc = HeadlessDocument(scrollbar=0)
        manager = ScrollLockManager()
        manager.acquire(doc)
        assert doc.body.padding_right == ""

    def test_restored_only_when_last_releases(self) -> None:
        doc = HeadlessDocument()
        manager = ScrollLockManager()
        first = manager.acquire(doc)
        second = manager.acquire(doc)
        assert manager.count == 2
        first()
        assert doc.body.overflow == "hidden"
        second()
        assert doc.body.overflow == ""
        assert not manager.locked

    def test_release_is_idempotent(self) -> None:
        doc = HeadlessDocument()
        manager = ScrollLockManager()
        first = manager.acquire(doc)
        second = manager.acquire(doc)
        first()
        first()
        assert manager.count == 1
        assert doc.body.overflow == "hidden"
        second()
        assert manager.count == 0
