"""Shared type aliases and the tick context for the application driver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

Now = Callable[[], float]


@dataclass(frozen=True, slots=True)
class TickContext:
    tick_number: int
    dt: float
    now: float
    request_stop: Callable[[], None]


Loop = Callable[[TickContext], None]
