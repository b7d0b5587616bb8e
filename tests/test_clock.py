from __future__ import annotations

import pytest

from memorymatch.engine.clock import ManualScheduler


def test_call_later_fires_once_when_due() -> None:
    sched = ManualScheduler()
    fired: list[int] = []
    sched.call_later(1000, lambda: fired.append(sched.now_ms))

    assert sched.advance(999) == 0
    assert fired == []
    assert sched.advance(1) == 1
    assert fired == [1000]
    assert sched.advance(5000) == 0
    assert sched.pending() == 0


def test_call_every_repeats() -> None:
    sched = ManualScheduler()
    fired: list[int] = []
    sched.call_every(1000, lambda: fired.append(sched.now_ms))

    assert sched.advance(3500) == 3
    assert fired == [1000, 2000, 3000]
    assert sched.now_ms == 3500
    sched.advance(500)
    assert fired[-1] == 4000


def test_same_due_time_runs_in_creation_order() -> None:
    sched = ManualScheduler()
    order: list[str] = []
    sched.call_later(500, lambda: order.append("first"))
    sched.call_every(500, lambda: order.append("tick"))
    sched.call_later(500, lambda: order.append("second"))

    sched.advance(500)
    assert order == ["first", "tick", "second"]


def test_cancelled_timers_never_fire() -> None:
    sched = ManualScheduler()
    fired: list[str] = []
    once = sched.call_later(100, lambda: fired.append("once"))
    every = sched.call_every(100, lambda: fired.append("every"))
    once.cancel()
    once.cancel()

    sched.advance(250)
    assert fired == ["every", "every"]

    every.cancel()
    sched.advance(1000)
    assert fired == ["every", "every"]
    assert sched.pending() == 0


def test_callback_can_schedule_within_same_advance() -> None:
    sched = ManualScheduler()
    fired: list[int] = []

    def chain() -> None:
        fired.append(sched.now_ms)
        if len(fired) < 3:
            sched.call_later(100, chain)

    sched.call_later(100, chain)
    assert sched.advance(1000) == 3
    assert fired == [100, 200, 300]


def test_callback_can_cancel_a_later_timer() -> None:
    sched = ManualScheduler()
    fired: list[str] = []
    later = sched.call_later(200, lambda: fired.append("later"))
    sched.call_later(100, later.cancel)

    sched.advance(300)
    assert fired == []


def test_invalid_intervals_rejected() -> None:
    sched = ManualScheduler()
    with pytest.raises(ValueError):
        sched.call_later(0, lambda: None)
    with pytest.raises(ValueError):
        sched.call_every(-5, lambda: None)
    with pytest.raises(ValueError):
        sched.advance(-1)
