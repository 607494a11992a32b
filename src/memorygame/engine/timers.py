from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable


@dataclass
class TimerHandle:
    due: float
    seq: int
    callback: Callable[[], None] = field(repr=False)
    cancelled: bool = False
    fired: bool = False

    @property
    def active(self) -> bool:
        return not self.cancelled and not self.fired

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    """Cooperative timed continuations driven by an explicit clock.

    Nothing runs on its own: the owner calls `advance(dt)` (once per frame in
    the client, directly in tests) and every continuation that has come due
    fires, in (due time, scheduling order). A continuation scheduled while
    `advance` is running never fires in that same call, so `call_later(0.0,
    ...)` means "on the next tick".
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[tuple[float, int, TimerHandle]] = []
        self._seq = itertools.count()

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if h.active)

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        handle = TimerHandle(due=self.now + delay, seq=next(self._seq), callback=callback)
        heapq.heappush(self._queue, (handle.due, handle.seq, handle))
        return handle

    def advance(self, dt: float) -> int:
        if dt < 0:
            raise ValueError(f"dt must be >= 0, got {dt}")
        self.now += dt
        cutoff = next(self._seq)
        fired = 0
        while self._queue:
            due, seq, handle = self._queue[0]
            if due > self.now or seq > cutoff:
                break
            heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            handle.fired = True
            handle.callback()
            fired += 1
        return fired

    def cancel_all(self) -> None:
        for _, _, handle in self._queue:
            handle.cancel()
        self._queue.clear()
