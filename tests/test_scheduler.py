from __future__ import annotations

import pytest

from memorygame.engine.timers import Scheduler


def test_fires_in_due_order() -> None:
    sched = Scheduler()
    fired: list[str] = []
    sched.call_later(0.5, lambda: fired.append("b"))
    sched.call_later(0.2, lambda: fired.append("a"))
    sched.call_later(0.5, lambda: fired.append("c"))

    assert sched.advance(0.1) == 0
    assert sched.advance(0.5) == 3
    assert fired == ["a", "b", "c"]
    assert sched.pending == 0


def test_zero_delay_waits_for_next_advance() -> None:
    sched = Scheduler()
    fired: list[str] = []

    def first() -> None:
        fired.append("first")
        sched.call_later(0.0, lambda: fired.append("second"))

    sched.call_later(0.0, first)
    sched.advance(0.0)
    assert fired == ["first"]
    assert sched.pending == 1
    sched.advance(0.0)
    assert fired == ["first", "second"]


def test_cancelled_handle_never_fires() -> None:
    sched = Scheduler()
    fired: list[int] = []
    h = sched.call_later(1.0, lambda: fired.append(1))
    sched.call_later(1.0, lambda: fired.append(2))
    h.cancel()
    assert not h.active
    assert sched.pending == 1

    sched.advance(2.0)
    assert fired == [2]


def test_cancel_all() -> None:
    sched = Scheduler()
    fired: list[int] = []
    handles = [sched.call_later(float(i), lambda i=i: fired.append(i)) for i in range(3)]
    sched.cancel_all()
    sched.advance(10.0)
    assert fired == []
    assert all(h.cancelled for h in handles)


def test_rejects_negative_time() -> None:
    sched = Scheduler()
    with pytest.raises(ValueError):
        sched.call_later(-1.0, lambda: None)
    with pytest.raises(ValueError):
        sched.advance(-0.1)
