"""Cancellable delayed callbacks.

The store only needs ``call_later(delay_s, callback)`` returning something
with ``cancel()``. ``ManualScheduler`` is pumped by the host (a frame loop or
a test); ``AsyncioScheduler`` hands the callback to the running event loop.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from typing import Callable, List, Optional, Protocol, Tuple


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay_s: float, callback: Callable[[], None]) -> Handle: ...


class ManualHandle:
    def __init__(self, when: float, callback: Callable[[], None]) -> None:
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    def __init__(self) -> None:
        self.now: float = 0.0
        self._seq = itertools.count()
        self._queue: List[Tuple[float, int, ManualHandle]] = []

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> ManualHandle:
        h = ManualHandle(self.now + max(0.0, delay_s), callback)
        heapq.heappush(self._queue, (h.when, next(self._seq), h))
        return h

    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if not h.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running callbacks that came due. Returns how many ran."""
        target = self.now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            when, _, h = heapq.heappop(self._queue)
            if h.cancelled:
                continue
            self.now = when
            h.callback()
            ran += 1
        self.now = target
        return ran


class AsyncioScheduler:
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_s, callback)
