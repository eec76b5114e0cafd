"""Loop factory for state machine evaluation."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from rin_fsm.machine import StateMachine

if TYPE_CHECKING:
    from rin import TickContext


def make_fsm_system(machine: StateMachine) -> Callable[[TickContext], None]:
    """Return a loop callable that runs ``machine`` once per tick."""

    def fsm_system(ctx: TickContext) -> None:
        machine.run()

    return fsm_system
