"""Tests for frame hosts."""

import pytest

from sonicfield.sampling.hosts import DEFAULT_FRAME_INTERVAL, ImmediateFrameHost, ManualFrameHost


class TestImmediateFrameHost:
    def test_runs_callback_synchronously(self):
        host = ImmediateFrameHost()
        calls = []
        host.request_frame(lambda: calls.append(1))
        assert calls == [1]
        assert host.frames_run == 1

    def test_reentrant_requests_are_queued_not_nested(self):
        host = ImmediateFrameHost()
        order = []
        depth = {"current": 0, "max": 0}

        def frame(n):
            depth["current"] += 1
            depth["max"] = max(depth["max"], depth["current"])
            order.append(n)
            if n < 1000:
                host.request_frame(lambda: frame(n + 1))
            depth["current"] -= 1

        host.request_frame(lambda: frame(0))
        assert order == list(range(1001))
        assert depth["max"] == 1

    def test_injected_clock(self, fake_clock):
        host = ImmediateFrameHost(clock=fake_clock)
        assert host.now() == pytest.approx(0.001)
        assert host.now() == pytest.approx(0.002)


class TestManualFrameHost:
    def test_callbacks_wait_for_tick(self):
        host = ManualFrameHost()
        calls = []
        host.request_frame(lambda: calls.append("a"))
        assert calls == []
        assert host.pending == 1

        assert host.tick() == 1
        assert calls == ["a"]
        assert host.pending == 0

    def test_requests_during_tick_run_next_frame(self):
        host = ManualFrameHost()
        calls = []

        def first():
            calls.append("first")
            host.request_frame(lambda: calls.append("second"))

        host.request_frame(first)
        host.tick()
        assert calls == ["first"]
        host.tick()
        assert calls == ["first", "second"]

    def test_simulated_time_advances_per_tick(self):
        host = ManualFrameHost()
        assert host.now() == 0.0
        host.tick()
        host.tick()
        assert host.now() == pytest.approx(2 * DEFAULT_FRAME_INTERVAL)

    def test_run_until_idle(self):
        host = ManualFrameHost()
        remaining = [3]

        def frame():
            remaining[0] -= 1
            if remaining[0] > 0:
                host.request_frame(frame)

        host.request_frame(frame)
        assert host.run_until_idle() == 3
        assert host.pending == 0

    def test_run_until_idle_limit(self):
        host = ManualFrameHost()

        def forever():
            host.request_frame(forever)

        host.request_frame(forever)
        with pytest.raises(RuntimeError, match="still busy"):
            host.run_until_idle(max_frames=10)
