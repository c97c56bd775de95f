"""Device attribute resolution for instrumentation clients."""

from .capability_probe import CapabilityProbe
from .config_manager import ConfigManager
from .device_info import DeviceInfo
from .models import (
    Address,
    AdvertisingIdentity,
    DeviceSnapshot,
    LocationFix,
    ProbeResult,
    ProbeStatus,
    Vendor,
)
from .shell_context import ShellDeviceContext

__all__ = [
    "Address",
    "AdvertisingIdentity",
    "CapabilityProbe",
    "ConfigManager",
    "DeviceInfo",
    "DeviceSnapshot",
    "LocationFix",
    "ProbeResult",
    "ProbeStatus",
    "ShellDeviceContext",
    "Vendor",
]
