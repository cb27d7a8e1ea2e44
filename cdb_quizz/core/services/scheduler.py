"""Cancellable timers for the session state machine.

The core never talks to a clock directly. It asks a :class:`Scheduler` for
one-shot or repeating callbacks and keeps the returned :class:`TimerHandle`
in a :class:`TimerGroup` owned by whoever created it. Tearing down the owner
cancels the group, so a stale timer can never fire into a newer session.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import heapq
import itertools
from typing import Callable, Protocol

TimerCallback = Callable[[], None]


class TimerHandle(Protocol):
    @property
    def active(self) -> bool: ...

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Source of timers. Implemented by :class:`ManualScheduler` and the Qt shell."""

    def call_later(self, delay_ms: int, callback: TimerCallback) -> TimerHandle: ...

    def call_every(self, interval_ms: int, callback: TimerCallback) -> TimerHandle: ...


class TimerGroup:
    """Set of timers torn down together when their owning state exits."""

    def __init__(self, scheduler: Scheduler) -> None:
        self._scheduler = scheduler
        self._handles: list[TimerHandle] = []

    def call_later(self, delay_ms: int, callback: TimerCallback) -> TimerHandle:
        return self.add(self._scheduler.call_later(delay_ms, callback))

    def call_every(self, interval_ms: int, callback: TimerCallback) -> TimerHandle:
        return self.add(self._scheduler.call_every(interval_ms, callback))

    def add(self, handle: TimerHandle) -> TimerHandle:
        self._handles = [existing for existing in self._handles if existing.active]
        self._handles.append(handle)
        return handle

    def cancel_all(self) -> None:
        handles, self._handles = self._handles, []
        for handle in handles:
            handle.cancel()

    def __len__(self) -> int:
        return sum(1 for handle in self._handles if handle.active)


@dataclass(slots=True)
class _ManualTimer:
    callback: TimerCallback
    interval_ms: int | None
    active: bool = True

    def cancel(self) -> None:
        self.active = False


@dataclass(slots=True)
class ManualScheduler:
    """Deterministic scheduler driven by :meth:`advance`.

    Used headless and in tests. Callbacks due at the same instant fire in the
    order they were scheduled; a repeating timer is rescheduled before its
    callback runs so the callback may cancel it.
    """

    now_ms: int = 0
    _queue: list[tuple[int, int, _ManualTimer]] = field(default_factory=list)
    _counter: itertools.count = field(default_factory=itertools.count)

    def call_later(self, delay_ms: int, callback: TimerCallback) -> _ManualTimer:
        timer = _ManualTimer(callback=callback, interval_ms=None)
        self._push(self.now_ms + max(0, delay_ms), timer)
        return timer

    def call_every(self, interval_ms: int, callback: TimerCallback) -> _ManualTimer:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        timer = _ManualTimer(callback=callback, interval_ms=interval_ms)
        self._push(self.now_ms + interval_ms, timer)
        return timer

    def advance(self, delta_ms: int) -> None:
        """Move the clock forward, firing every callback that falls due."""
        target = self.now_ms + delta_ms
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            if not timer.active:
                continue
            self.now_ms = due
            if timer.interval_ms is None:
                timer.active = False
            else:
                self._push(due + timer.interval_ms, timer)
            timer.callback()
        self.now_ms = target

    def pending(self) -> int:
        return sum(1 for _, _, timer in self._queue if timer.active)

    def _push(self, due: int, timer: _ManualTimer) -> None:
        heapq.heappush(self._queue, (due, next(self._counter), timer))
