"""Data models for device attributes."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from devinfo.constants import DISTINGUISHED_VENDOR, OS_NAME


@dataclass(frozen=True)
class LocationFix:
    """A last known location reported by one location source."""

    latitude: float
    longitude: float
    provider: str                      # Source name (e.g., "gps", "network")
    timestamp: int                     # Epoch milliseconds


@dataclass(frozen=True)
class Address:
    """A reverse-geocoded address."""

    country_code: str | None
    country_name: str | None = None
    locality: str | None = None


@dataclass(frozen=True)
class AdvertisingIdentity:
    """Advertising identifier paired with the user's opt-out signal."""

    advertising_id: str | None = None
    limit_ad_tracking: bool = False


class Vendor(Enum):
    """Vendor classification derived from the hardware manufacturer."""

    AMAZON = "amazon"
    GENERIC = "generic"

    @classmethod
    def from_manufacturer(cls, manufacturer: str | None) -> "Vendor":
        """Classify by exact, case-sensitive manufacturer match."""
        if manufacturer == DISTINGUISHED_VENDOR:
            return cls.AMAZON
        return cls.GENERIC


class ProbeStatus(Enum):
    """Outcome of probing an optional service."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    INVOCATION_FAILED = "invocation_failed"


@dataclass
class ProbeResult:
    """Result of locating or invoking an optional service."""

    status: ProbeStatus
    value: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is ProbeStatus.SUCCESS

    @classmethod
    def success(cls, value: Any) -> "ProbeResult":
        return cls(ProbeStatus.SUCCESS, value=value)

    @classmethod
    def not_found(cls, error: str) -> "ProbeResult":
        return cls(ProbeStatus.NOT_FOUND, error=error)

    @classmethod
    def invocation_failed(cls, error: str) -> "ProbeResult":
        return cls(ProbeStatus.INVOCATION_FAILED, error=error)


@dataclass(frozen=True)
class DeviceSnapshot:
    """Immutable set of device attributes, resolved once per DeviceInfo."""

    os_version: str | None
    brand: str | None
    manufacturer: str | None
    model: str | None
    language: str
    version_name: str | None = None
    carrier: str | None = None
    country: str | None = None
    advertising_id: str | None = None
    limit_ad_tracking: bool = False
    gps_enabled: bool = False          # Optional play services available
    app_set_id: str | None = None
    os_name: str = OS_NAME

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization (camelCase for server)."""
        return {
            "osName": self.os_name,
            "osVersion": self.os_version,
            "deviceBrand": self.brand,
            "deviceManufacturer": self.manufacturer,
            "deviceModel": self.model,
            "versionName": self.version_name,
            "carrier": self.carrier,
            "country": self.country,
            "language": self.language,
            "adid": self.advertising_id,
            "limitAdTracking": self.limit_ad_tracking,
            "gpsEnabled": self.gps_enabled,
            "appSetId": self.app_set_id,
        }
