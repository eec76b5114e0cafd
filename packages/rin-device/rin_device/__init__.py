"""rin-device - In-memory instrument collaborators for state machines."""
from __future__ import annotations

from rin_device.device import Device
from rin_device.display import FIELDS, Display
from rin_device.flags import FlagBank
from rin_device.systems import make_device_system

__all__ = ["Device", "Display", "FIELDS", "FlagBank", "make_device_system"]
