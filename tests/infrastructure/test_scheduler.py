"""Tests for animation-frame throttling."""

from pickerkit.infrastructure.host import HeadlessDocument
from pickerkit.infrastructure.scheduler import FrameThrottle


class TestFrameThrottle:
    def test_coalesces_bursts(self) -> None:
        doc = HeadlessDocument()
        calls: list[int] = []
        throttle = FrameThrottle(doc, lambda: calls.append(1))
        for _ in range(10):
            throttle.run()
        assert doc.pending_frames == 1
        doc.flush_frames()
        assert calls == [1]
        assert not throttle.pending

    def test_runs_again_next_frame(self) -> None:
        doc = HeadlessDocument()
        calls: list[int] = []
        throttle = FrameThrottle(doc, lambda: calls.append(1))
        throttle.run()
        doc.flush_frames()
        throttle.run()
        doc.flush_frames()
        assert calls == [1, 1]

    def test_cancel_drops_pending_frame(self) -> None:
        doc = HeadlessDocument()
        calls: list[int] = []
        throttle = FrameThrottle(doc, lambda: calls.append(1))
        throttle.run()
        throttle.cancel()
        assert doc.flush_frames() == 0
        assert calls == []
