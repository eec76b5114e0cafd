"""rin - Application runtime for K400 instrument programs."""

from rin.app import App
from rin.clock import Clock, ManualClock
from rin.log import configure_logging
from rin.naming import canonical
from rin.types import Loop, Now, TickContext

__all__ = [
    "App",
    "Clock",
    "ManualClock",
    "TickContext",
    "Loop",
    "Now",
    "canonical",
    "configure_logging",
]
