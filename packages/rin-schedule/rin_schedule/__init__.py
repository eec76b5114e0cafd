"""rin-schedule - Deferred calls and timers for instrument applications."""
from __future__ import annotations

from rin_schedule.scheduler import Scheduler
from rin_schedule.systems import make_scheduler_system
from rin_schedule.types import Job

__all__ = ["Job", "Scheduler", "make_scheduler_system"]
