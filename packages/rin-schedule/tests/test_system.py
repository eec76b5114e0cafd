"""Tests for make_scheduler_system running inside an App."""
from __future__ import annotations

from rin import App, ManualClock
from rin_schedule import Scheduler, make_scheduler_system


def test_system_processes_each_tick() -> None:
    now = ManualClock()
    app = App(tps=10, now=now)
    s = Scheduler(now)
    app.add_loop(make_scheduler_system(s))

    calls: list[int] = []
    s.defer(calls.append, 1)
    s.call_later(0.2, calls.append, 2)

    app.step()
    assert calls == [1]
    now.advance(0.1)
    app.step()
    assert calls == [1]
    now.advance(0.1)
    app.step()
    assert calls == [1, 2]


def test_work_deferred_by_a_loop_runs_next_tick() -> None:
    now = ManualClock()
    app = App(now=now)
    s = Scheduler(now)
    calls: list[int] = []

    def producer(ctx) -> None:
        if ctx.tick_number == 1:
            s.defer(calls.append, ctx.tick_number)

    app.add_loop(producer)
    app.add_loop(make_scheduler_system(s))
    app.step()
    assert calls == [1]
