"""Clocks for the fixed-rate application loop."""

import time
from typing import Callable

from rin.types import Now, TickContext


class Clock:
    """Counts ticks of a loop running at ``tps`` ticks per second.

    ``now`` is sampled once per :meth:`context`, so every loop callable in
    a tick sees the same time.
    """

    def __init__(self, tps: int, now: Now = time.monotonic) -> None:
        if tps <= 0:
            raise ValueError(f"tps must be positive, got {tps}")
        self._tps = tps
        self._dt = 1.0 / tps
        self._now = now
        self._tick_number = 0

    @property
    def tps(self) -> int:
        return self._tps

    @property
    def dt(self) -> float:
        return self._dt

    @property
    def tick_number(self) -> int:
        return self._tick_number

    def advance(self) -> int:
        """Start the next tick and return its number."""
        self._tick_number += 1
        return self._tick_number

    def context(self, stop_fn: Callable[[], None]) -> TickContext:
        return TickContext(self._tick_number, self._dt, self._now(), stop_fn)

    def reset(self, tick_number: int = 0) -> None:
        self._tick_number = tick_number


class ManualClock:
    """Monotonic clock that only moves when told to.

    Callable, so it can stand in anywhere ``time.monotonic`` is accepted.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._t = float(start)

    def __call__(self) -> float:
        return self._t

    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError("a monotonic clock cannot go backwards")
        self._t += seconds
        return self._t

    def set(self, t: float) -> None:
        if t < self._t:
            raise ValueError("a monotonic clock cannot go backwards")
        self._t = float(t)
