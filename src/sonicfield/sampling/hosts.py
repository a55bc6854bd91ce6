"""Frame hosts: the "call me again on the next frame" capability.

The field sampler never talks to a UI toolkit directly. It is handed a host
object with two methods:

    request_frame(callback)   run ``callback`` on the next paintable frame
    now()                     current time in seconds (monotonic)

Any event loop can provide this. Two hosts ship with the package:

- ImmediateFrameHost: runs callbacks synchronously, for headless use and the
  CLI. Re-entrant requests are queued and drained in order, so a long job
  never recurses.
- ManualFrameHost: queues callbacks until ``tick()``; time is simulated
  unless a clock is injected. Used by tests and by hosts that pump their
  own loop.

Example:
    >>> host = ManualFrameHost()
    >>> calls = []
    >>> host.request_frame(lambda: calls.append(host.now()))
    >>> host.tick()
    1
    >>> len(calls)
    1
"""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable
from typing import Protocol

FrameCallback = Callable[[], None]
Clock = Callable[[], float]

# Display refresh assumed by simulated hosts (seconds)
DEFAULT_FRAME_INTERVAL = 1.0 / 60.0


class FrameHost(Protocol):
    """Host capability the sampler depends on."""

    def request_frame(self, callback: FrameCallback) -> None: ...

    def now(self) -> float: ...


class ImmediateFrameHost:
    """Synchronous host: every requested frame runs right away.

    Frames are not paced, so waiting on the clock inside a frame would spin.
    The sampler checks ``synchronous`` and starts debounced jobs at once.

    Args:
        clock: Time source in seconds (default: time.perf_counter)
    """

    synchronous = True

    def __init__(self, clock: Clock | None = None):
        self._clock = clock or time.perf_counter
        self._queue: deque[FrameCallback] = deque()
        self._draining = False
        self.frames_run = 0

    def now(self) -> float:
        return self._clock()

    def request_frame(self, callback: FrameCallback) -> None:
        self._queue.append(callback)
        if self._draining:
            return

        self._draining = True
        try:
            while self._queue:
                pending = self._queue.popleft()
                self.frames_run += 1
                pending()
        finally:
            self._draining = False


class ManualFrameHost:
    """Host whose frames only run when ``tick()`` is called.

    Args:
        clock: Time source in seconds. If omitted, time is simulated and
            advances by ``frame_interval`` at the start of every tick.
        frame_interval: Simulated time per frame in seconds
    """

    synchronous = False

    def __init__(self, clock: Clock | None = None, frame_interval: float = DEFAULT_FRAME_INTERVAL):
        self._clock = clock
        self.frame_interval = frame_interval
        self.time = 0.0
        self._pending: list[FrameCallback] = []
        self.frames_run = 0

    def now(self) -> float:
        if self._clock is not None:
            return self._clock()
        return self.time

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending.append(callback)

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for the next frame."""
        return len(self._pending)

    def tick(self) -> int:
        """Run one frame.

        Callbacks requested while the frame runs are deferred to the next
        tick, like a real animation-frame queue.

        Returns:
            Number of callbacks executed
        """
        self.time += self.frame_interval
        batch, self._pending = self._pending, []
        for callback in batch:
            callback()
        self.frames_run += 1
        return len(batch)

    def run_until_idle(self, max_frames: int = 100_000) -> int:
        """Tick until nothing is pending.

        Args:
            max_frames: Safety limit on the number of ticks

        Returns:
            Number of frames ticked

        Raises:
            RuntimeError: If work is still pending after ``max_frames``
        """
        frames = 0
        while self._pending:
            if frames >= max_frames:
                raise RuntimeError(f"Frame host still busy after {max_frames} frames")
            self.tick()
            frames += 1
        return frames
