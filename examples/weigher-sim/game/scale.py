"""Simulated load cell driving the device status flags."""
from __future__ import annotations

from rin_device import FlagBank


class Scale:
    """A load that settles towards its target at a fixed rate.

    Sets ``motion``/``notmotion`` while the reading moves and
    ``zero``/``notzero`` around the zero band on ``status``.
    """

    def __init__(
        self,
        status: FlagBank,
        rate: float = 40.0,
        zero_band: float = 0.5,
        capacity: float = 200.0,
    ) -> None:
        self.status = status
        self.rate = rate  # kg per second
        self.zero_band = zero_band
        self.capacity = capacity
        self.weight = 0.0
        self.target = 0.0
        self._update_flags(moving=False)

    def load(self, kg: float) -> None:
        self.target = max(0.0, min(self.capacity, self.target + kg))

    def unload(self) -> None:
        self.target = 0.0

    def update(self, dt: float) -> None:
        step = self.rate * dt
        delta = self.target - self.weight
        moving = abs(delta) > 1e-9
        if abs(delta) <= step:
            self.weight = self.target
        else:
            self.weight += step if delta > 0 else -step
        self._update_flags(moving)

    def _update_flags(self, moving: bool) -> None:
        zero = abs(self.weight) < self.zero_band
        self.status.assign("motion", moving)
        self.status.assign("notmotion", not moving)
        self.status.assign("zero", zero)
        self.status.assign("notzero", not zero)
