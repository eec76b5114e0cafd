"""State machine configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MachineConfig:
    """Immutable options fixed when a machine is created.

    Attributes:
        show_state: Write the current state's short label to the display on
            every state change.
        trace: Log every transition and state change at INFO.
        display_field: Display field that ``show_state`` writes to.
    """

    show_state: bool = False
    trace: bool = False
    display_field: str = "topRight"
