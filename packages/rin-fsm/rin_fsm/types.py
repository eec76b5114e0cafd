"""Core data types for the finite state machine."""
from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

ALL = "all"  # reserved source name: every state defined so far

FlagQuery = Callable[..., bool]
Flags = tuple[Hashable, ...]


class FSMError(ValueError):
    """Base class for state machine errors."""


class DefinitionError(FSMError):
    """Raised while building a machine: bad names, unknown states, bad guards.

    These are programming errors and are meant to stop the application at
    start-up.
    """


class Phase(Enum):
    """Which callback the machine is currently inside."""

    IDLE = "idle"
    LEAVING = "leave"
    ACTIVATING = "activate"
    ENTERING = "enter"


def noop(*args: Any) -> None:
    return None


@dataclass(frozen=True, eq=False)
class Transition:
    """A guarded edge. ``dest`` and ``event`` are handles, not names.

    All guards that are present must hold for the transition to fire.
    """

    name: str
    dest: int
    cond: Callable[[], bool] | None = None  # None: always true
    cond_name: str | None = None  # label used by graph export
    time: float | None = None  # minimum seconds in the source state
    event: int | None = None
    status: Flags = ()
    io: Flags = ()
    setpoint: Flags = ()
    activate: Callable[[str | None], Any] = noop

    def flag_requirements(self) -> tuple[tuple[str, Flags], ...]:
        return (("status", self.status), ("io", self.io), ("setpoint", self.setpoint))


@dataclass(eq=False)
class State:
    """A state. Identity is the handle; ``ref`` is its canonical name."""

    name: str
    ref: str
    handle: int
    short: str
    enter: Callable[[str | None], Any] = noop
    leave: Callable[[str], Any] = noop
    run: Callable[[], Any] = noop
    transitions: list[Transition] = field(default_factory=list)
    activated_at: float | None = None  # monotonic time it last became current
