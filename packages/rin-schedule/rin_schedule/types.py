"""Scheduled job record."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable


@dataclass(order=True)
class Job:
    """A one-shot (``interval is None``) or periodic call. Ordered by due time."""

    due: float
    handle: int
    fn: Callable[..., Any] = field(compare=False)
    args: tuple[Any, ...] = field(default=(), compare=False)
    interval: float | None = field(default=None, compare=False)
