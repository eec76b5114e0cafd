"""Device - the instrument-side collaborators a state machine is wired to."""
from __future__ import annotations

import logging
import time
from typing import Any, Callable

from rin_fsm import MachineConfig, StateMachine
from rin_schedule import Scheduler

from rin_device.display import FIELDS, Display
from rin_device.flags import FlagBank

logger = logging.getLogger(__name__)


class Device:
    """In-memory instrument: flag banks, a display and a scheduler.

    ``state_machine`` builds machines whose ``status``, ``io`` and
    ``setpoint`` guards read this device's flag banks, whose ``show_state``
    writes to its display and whose dwell times use its clock.
    """

    def __init__(
        self,
        now: Callable[[], float] = time.monotonic,
        fields: tuple[str, ...] = FIELDS,
    ) -> None:
        self.now = now
        self.status = FlagBank("status")
        self.io = FlagBank("io")
        self.setpoint = FlagBank("setpoint")
        self.display = Display(fields)
        self.scheduler = Scheduler(now)
        self._machines: list[StateMachine] = []

    @property
    def machines(self) -> tuple[StateMachine, ...]:
        return tuple(self._machines)

    def state_machine(self, name: str = "FSM", **options: Any) -> StateMachine:
        """Create a machine wired to this device.

        ``options`` are :class:`~rin_fsm.MachineConfig` fields, e.g.
        ``show_state=True`` or ``trace=True``.
        """
        machine = StateMachine(
            name,
            MachineConfig(**options),
            now=self.now,
            status=self.status.all_set,
            io=self.io.all_set,
            setpoint=self.setpoint.all_set,
            display=self.display.write,
        )
        self._machines.append(machine)
        logger.debug("created state machine %s", name)
        return machine

    def step(self) -> None:
        """Run every machine once, then the work they deferred."""
        for machine in self._machines:
            machine.run()
        self.scheduler.process()
