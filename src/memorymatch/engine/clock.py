from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Protocol

Callback = Callable[[], None]


@dataclass
class TimerHandle:
    due_ms: int
    callback: Callback
    interval_ms: int | None = None
    seq: int = 0
    cancelled: bool = field(default=False)

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callback) -> TimerHandle: ...

    def call_every(self, interval_ms: int, callback: Callback) -> TimerHandle: ...


class ManualScheduler:
    """Cooperative virtual clock.

    Nothing fires until ``advance`` is called. The pygame client feeds it the
    frame clock's elapsed milliseconds; tests advance it directly, which keeps
    every delayed transition deterministic.
    """

    def __init__(self) -> None:
        self.now_ms = 0
        self._timers: list[TimerHandle] = []
        self._seq = 0

    def _add(self, due_ms: int, callback: Callback, interval_ms: int | None) -> TimerHandle:
        self._seq += 1
        handle = TimerHandle(due_ms=due_ms, callback=callback, interval_ms=interval_ms, seq=self._seq)
        self._timers.append(handle)
        return handle

    def call_later(self, delay_ms: int, callback: Callback) -> TimerHandle:
        if delay_ms <= 0:
            raise ValueError("delay_ms must be positive.")
        return self._add(self.now_ms + delay_ms, callback, None)

    def call_every(self, interval_ms: int, callback: Callback) -> TimerHandle:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive.")
        return self._add(self.now_ms + interval_ms, callback, interval_ms)

    def pending(self) -> int:
        return sum(1 for t in self._timers if not t.cancelled)

    def advance(self, ms: int) -> int:
        """Move the clock forward by ``ms`` and run everything that falls due.

        Timers fire one at a time in (due time, creation order). A callback may
        schedule or cancel other timers; those changes are honoured within the
        same advance. Returns the number of callbacks run.
        """
        if ms < 0:
            raise ValueError("Cannot move the clock backwards.")
        target = self.now_ms + ms
        fired = 0
        while True:
            due = [t for t in self._timers if not t.cancelled and t.due_ms <= target]
            if not due:
                break
            handle = min(due, key=lambda t: (t.due_ms, t.seq))
            self.now_ms = handle.due_ms
            if handle.interval_ms is None:
                self._timers.remove(handle)
            else:
                handle.due_ms += handle.interval_ms
            handle.callback()
            fired += 1
        self.now_ms = target
        self._timers = [t for t in self._timers if not t.cancelled]
        return fired
