"""Device backends for package enumeration and actions.

This module exports the device interface, its errors, and the adb backend.
"""

from debloatctl.device.adb import AdbDevice
from debloatctl.device.base import (
    CommandFailedError,
    DeviceError,
    DeviceInventory,
    DeviceUnavailableError,
)

__all__ = [
    "AdbDevice",
    "CommandFailedError",
    "DeviceError",
    "DeviceInventory",
    "DeviceUnavailableError",
]
