"""Protocol definitions for the device context and its system services.

Defines the interfaces DeviceInfo consumes so that each host (a device shell,
a test double) can supply its own implementation.
"""

from typing import Protocol, runtime_checkable

from .models import Address, LocationFix


@runtime_checkable
class IBuildInfo(Protocol):
    """Interface for hardware and OS build properties."""

    @property
    def os_version(self) -> str | None:
        """Get OS release version."""
        ...

    @property
    def brand(self) -> str | None:
        """Get hardware brand."""
        ...

    @property
    def manufacturer(self) -> str | None:
        """Get hardware manufacturer."""
        ...

    @property
    def model(self) -> str | None:
        """Get hardware model."""
        ...


@runtime_checkable
class ITelephony(Protocol):
    """Interface for telephony information."""

    def phone_type(self) -> int:
        """Get the radio phone type (see PHONE_TYPE_* constants)."""
        ...

    def network_country_iso(self) -> str | None:
        """Get ISO country code of the current network operator."""
        ...

    def network_operator_name(self) -> str | None:
        """Get the carrier name."""
        ...


@runtime_checkable
class ILocationRegistry(Protocol):
    """Interface for the registry of location sources."""

    def list_enabled_sources(self) -> list[str] | None:
        """List names of enabled location sources."""
        ...

    def last_known_fix(self, source: str) -> LocationFix | None:
        """Get the last known fix of a source."""
        ...


@runtime_checkable
class IGeocoder(Protocol):
    """Interface for reverse geocoding."""

    def is_present(self) -> bool:
        """Check whether the geocoder backend is usable."""
        ...

    def get_from_location(
        self,
        latitude: float,
        longitude: float,
        max_results: int
    ) -> list[Address | None] | None:
        """Reverse geocode a coordinate pair."""
        ...


@runtime_checkable
class ILocaleProvider(Protocol):
    """Interface for the active system locale."""

    def active_locale(self) -> tuple[str, str]:
        """Get (language, country) of the active locale."""
        ...


@runtime_checkable
class ISecureSettings(Protocol):
    """Interface for the secure key-value settings store."""

    def get_string(self, key: str) -> str | None:
        """Get a string setting, or None if unset."""
        ...

    def get_int(self, key: str, default: int) -> int:
        """Get an integer setting, or default if unset."""
        ...


@runtime_checkable
class IPackageInfo(Protocol):
    """Interface for the instrumented application's package metadata."""

    def version_name(self) -> str | None:
        """Get the application version name."""
        ...


@runtime_checkable
class IDeviceContext(Protocol):
    """Interface for the execution context DeviceInfo is constructed with."""

    @property
    def build(self) -> IBuildInfo:
        ...

    @property
    def telephony(self) -> ITelephony | None:
        ...

    @property
    def location_registry(self) -> ILocationRegistry | None:
        ...

    @property
    def locale_provider(self) -> ILocaleProvider:
        ...

    @property
    def secure_settings(self) -> ISecureSettings:
        ...

    @property
    def package_info(self) -> IPackageInfo:
        ...

    def has_location_permission(self) -> bool:
        """Check whether location access is granted."""
        ...

    def get_geocoder(self) -> IGeocoder | None:
        """Get a geocoder, or None if this host has none."""
        ...
