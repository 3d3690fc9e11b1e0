# clock.py
# Logical millisecond clock with one-shot and periodic callbacks.
# Tests and headless runs use it in place of OS timers.

import heapq
import itertools
import time


def monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class TimerHandle:
    def __init__(self, due, callback, interval=None):
        self.due = due
        self.callback = callback
        self.interval = interval
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class VirtualClock:
    """Time only moves when ``advance`` is called.

    Callbacks due at the same instant fire in scheduling order, one at a
    time, each running to completion before the next.
    """

    def __init__(self, start=0):
        self._now = start
        self._queue = []
        self._seq = itertools.count()

    def __call__(self):
        return self._now

    def now(self):
        return self._now

    def call_later(self, delay_ms, callback):
        handle = TimerHandle(self._now + delay_ms, callback)
        heapq.heappush(self._queue, (handle.due, next(self._seq), handle))
        return handle

    def call_every(self, interval_ms, callback):
        if interval_ms <= 0:
            raise ValueError("interval must be positive")
        handle = TimerHandle(self._now + interval_ms, callback, interval=interval_ms)
        heapq.heappush(self._queue, (handle.due, next(self._seq), handle))
        return handle

    def advance(self, ms):
        target = self._now + ms
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = due
            handle.callback()
            if handle.interval is not None and not handle.cancelled:
                handle.due = due + handle.interval
                heapq.heappush(self._queue, (handle.due, next(self._seq), handle))
        self._now = target

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if not h.cancelled)
