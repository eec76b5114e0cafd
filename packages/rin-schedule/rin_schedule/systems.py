"""Loop factory for the scheduler."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from rin_schedule.scheduler import Scheduler

if TYPE_CHECKING:
    from rin import TickContext


def make_scheduler_system(scheduler: Scheduler) -> Callable[[TickContext], None]:
    def scheduler_system(ctx: TickContext) -> None:
        scheduler.process()

    return scheduler_system
