"""Scheduler - deferred calls and monotonic timers."""
from __future__ import annotations

import heapq
import logging
import time
from typing import Any, Callable

from rin_schedule.types import Job

logger = logging.getLogger(__name__)


class Scheduler:
    """Runs work after the current tick or once a delay has elapsed.

    Nothing here blocks: ``process()`` is called once per tick from the
    application loop and runs whatever is due.  Work scheduled while
    ``process()`` is running waits for the next call, so a callback that
    re-schedules itself cannot starve the loop.
    """

    def __init__(self, now: Callable[[], float] = time.monotonic) -> None:
        self._now = now
        self._deferred: list[tuple[int, Callable[..., Any], tuple[Any, ...]]] = []
        self._timers: list[Job] = []
        self._cancelled: set[int] = set()
        self._due: list[Job] = []
        self._next_handle = 1

    def _handle(self) -> int:
        handle = self._next_handle
        self._next_handle += 1
        return handle

    # --- Scheduling ---

    def defer(self, fn: Callable[..., Any], *args: Any) -> int:
        """Run ``fn(*args)`` on the next ``process()``."""
        handle = self._handle()
        self._deferred.append((handle, fn, args))
        return handle

    def call_later(self, delay: float, fn: Callable[..., Any], *args: Any) -> int:
        """Run ``fn(*args)`` once, ``delay`` seconds from now."""
        if delay < 0:
            raise ValueError("delay must not be negative")
        handle = self._handle()
        heapq.heappush(self._timers, Job(self._now() + delay, handle, fn, args))
        return handle

    def call_every(
        self,
        interval: float,
        fn: Callable[..., Any],
        *args: Any,
        delay: float | None = None,
    ) -> int:
        """Run ``fn(*args)`` every ``interval`` seconds.

        The first call happens after ``delay`` seconds, or after one
        interval when no delay is given.
        """
        if interval <= 0:
            raise ValueError("interval must be positive")
        if delay is None:
            delay = interval
        elif delay < 0:
            raise ValueError("delay must not be negative")
        handle = self._handle()
        heapq.heappush(
            self._timers, Job(self._now() + delay, handle, fn, args, interval)
        )
        return handle

    def cancel(self, handle: int) -> bool:
        """Cancel pending work. Returns False if nothing was pending."""
        for i, (h, _, _) in enumerate(self._deferred):
            if h == handle:
                del self._deferred[i]
                return True
        if handle in self._cancelled:
            return False
        if any(job.handle == handle for job in self._timers + self._due):
            self._cancelled.add(handle)
            return True
        return False

    # --- Queries ---

    def pending(self) -> int:
        """Number of deferred calls and live timers."""
        live = sum(1 for job in self._timers if job.handle not in self._cancelled)
        return len(self._deferred) + live

    # --- Processing ---

    def process(self) -> int:
        """Run deferred calls, then due timers. Returns the number of calls made."""
        snapshot = self._deferred
        self._deferred = []
        calls = 0
        try:
            while calls < len(snapshot):
                _, fn, args = snapshot[calls]
                calls += 1
                fn(*args)
        finally:
            # calls left unrun by an exception go first on the next pass
            self._deferred[:0] = snapshot[calls:]

        now = self._now()
        due = self._due = []
        while self._timers and self._timers[0].due <= now:
            job = heapq.heappop(self._timers)
            if job.handle in self._cancelled:
                self._cancelled.discard(job.handle)
                continue
            due.append(job)

        for job in due:
            if job.interval is not None:
                job.due += job.interval
                if job.due <= now:
                    # Fell behind by more than one interval; skip the backlog.
                    logger.debug("timer %d skipped missed intervals", job.handle)
                    job.due = now + job.interval
                heapq.heappush(self._timers, job)
        i = 0
        try:
            while i < len(due):
                job = due[i]
                i += 1
                if job.handle in self._cancelled:
                    if job.interval is None:
                        self._cancelled.discard(job.handle)
                    continue
                job.fn(*job.args)
                calls += 1
        finally:
            self._due = []
            # periodic jobs are already back on the heap
            for job in due[i:]:
                if job.interval is None:
                    heapq.heappush(self._timers, job)
        return calls

    def clear(self) -> None:
        """Drop all pending work."""
        self._deferred.clear()
        self._timers.clear()
        self._due = []
        self._cancelled.clear()
