"""Deferred-callback scheduling for the modification batchers.

Any object with ``call_later(delay, callback)`` returning a handle with
``cancel()`` works; a running :mod:`asyncio` event loop is the usual one.
"""

from __future__ import annotations

import heapq
import itertools
from typing import Any, Callable, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


class _ManualHandle:
    __slots__ = ("when", "callback", "args", "cancelled")

    def __init__(self, when: float, callback: Callable[..., Any], args: tuple) -> None:
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic clock: callbacks run only when time is advanced.

    Used for offline inspection and tests, where no event loop is running.
    """

    __slots__ = ("_now", "_heap", "_counter")

    def __init__(self) -> None:
        self._now = 0.0
        self._heap: list[tuple[float, int, _ManualHandle]] = []
        self._counter = itertools.count()

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._heap if not h.cancelled)

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> _ManualHandle:
        handle = _ManualHandle(self._now + delay, callback, args)
        heapq.heappush(self._heap, (handle.when, next(self._counter), handle))
        return handle

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running every due callback in order. Returns the count run."""
        target = self._now + seconds
        ran = 0
        while self._heap and self._heap[0][0] <= target:
            when, _, handle = heapq.heappop(self._heap)
            if handle.cancelled:
                continue
            self._now = when
            handle.callback(*handle.args)
            ran += 1
        self._now = target
        return ran
