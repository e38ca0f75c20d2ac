"""
scheduler.py — Deferred Callbacks
==================================
The controller only ever needs two operations from its host:

    handle = scheduler.schedule_after(delay_ms, callback)
    scheduler.cancel(handle)

Three hosts are provided:

  • VirtualScheduler  – simulated clock, advanced explicitly.  Tests use it
                        to step time forward and check what fired.
  • PolledScheduler   – the same queue driven by time.monotonic(); the web
                        app calls pump() on every request (the old Stepper
                        tick() loop, generalised).
  • AsyncioScheduler  – loop.call_later() for event-loop hosts.

None of them run callbacks on another thread; everything fires from
whoever drives the clock / loop.
"""

import asyncio
import heapq
import itertools
import time
from typing import Callable, List, Optional, Tuple


class TimerHandle:
    """Opaque ticket returned by schedule_after()."""

    __slots__ = ("due", "callback", "cancelled", "_native")

    def __init__(self, due: float, callback: Callable[[], None]):
        self.due       = due
        self.callback  = callback
        self.cancelled = False
        self._native: Optional[asyncio.TimerHandle] = None

    def cancel(self) -> None:
        self.cancelled = True
        if self._native is not None:
            self._native.cancel()

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "pending"
        return f"TimerHandle(due={self.due:.1f}, {state})"


class Scheduler:
    """Interface every host implements."""

    def schedule_after(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        raise NotImplementedError

    def cancel(self, handle: Optional[TimerHandle]) -> None:
        if handle is not None:
            handle.cancel()


# ---------------------------------------------------------------------------
# Virtual clock
# ---------------------------------------------------------------------------
class VirtualScheduler(Scheduler):
    """
    Attributes:
        now : Current simulated time in milliseconds.
    """

    def __init__(self, start_ms: float = 0.0):
        self.now: float = start_ms
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._seq = itertools.count()
        self._firing = False      # True while advance_to() runs callbacks

    def schedule_after(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(self.now + max(0.0, delay_ms), callback)
        heapq.heappush(self._queue, (handle.due, next(self._seq), handle))
        return handle

    def advance(self, ms: float) -> int:
        """
        Move the clock forward by `ms`, firing every callback that falls
        due on the way (including ones scheduled by those callbacks).
        Returns the number of callbacks fired.
        """
        return self.advance_to(self.now + ms)

    def advance_to(self, target_ms: float) -> int:
        fired = 0
        self._firing = True
        try:
            while self._queue and self._queue[0][0] <= target_ms:
                due, _, handle = heapq.heappop(self._queue)
                if handle.cancelled:
                    continue
                self.now = max(self.now, due)
                handle.callback()
                fired += 1
        finally:
            self._firing = False
        self.now = max(self.now, target_ms)
        return fired

    def run_all(self, limit: int = 1_000_000) -> int:
        """Fire callbacks until nothing is pending (or `limit` is hit)."""
        fired = 0
        while fired < limit:
            live = [entry for entry in self._queue if not entry[2].cancelled]
            if not live:
                break
            fired += self.advance_to(min(entry[0] for entry in live))
        return fired

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if not h.cancelled)


class PolledScheduler(VirtualScheduler):
    """
    VirtualScheduler whose clock follows time.monotonic().

    Callbacks scheduled from inside pump() stay on the simulated timeline
    (relative to the due time of the callback that scheduled them), so a
    late pump catches up on every pull that fell due in the meantime.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        super().__init__(start_ms=self._clock() * 1000.0)

    def schedule_after(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        if not self._firing:
            self.now = max(self.now, self._clock() * 1000.0)
        return super().schedule_after(delay_ms, callback)

    def pump(self) -> int:
        """Fire everything due by the wall clock.  Returns callbacks fired."""
        return self.advance_to(self._clock() * 1000.0)


# ---------------------------------------------------------------------------
# asyncio host
# ---------------------------------------------------------------------------
class AsyncioScheduler(Scheduler):
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def schedule_after(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self.loop
        handle = TimerHandle(loop.time() * 1000.0 + delay_ms, callback)
        handle._native = loop.call_later(max(0.0, delay_ms) / 1000.0, callback)
        return handle
