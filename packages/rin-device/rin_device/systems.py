"""Loop factory for a device."""
from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from rin_device.device import Device

if TYPE_CHECKING:
    from rin import TickContext


def make_device_system(device: Device) -> Callable[[TickContext], None]:
    """Return a loop callable that steps every machine on ``device``."""

    def device_system(ctx: TickContext) -> None:
        device.step()

    return device_system
