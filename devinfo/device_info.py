"""Device information: a lazily computed, cached attribute snapshot."""

import logging
import threading
import uuid
from enum import Enum

from .advertising import AdvertisingIdentityResolver
from .capability_probe import CapabilityProbe
from .constants import (
    DEFAULT_ADVERTISING_ID_SERVICE,
    DEFAULT_APP_SET_ID_SERVICE,
    DEFAULT_AVAILABILITY_SERVICE,
    OS_NAME,
    SERVICE_AVAILABLE_SUCCESS,
)
from .country import CountryResolver
from .errors import log_failure
from .location import LocationAggregator
from .models import DeviceSnapshot, LocationFix, Vendor
from .protocols import IDeviceContext

logger = logging.getLogger(__name__)


class _State(Enum):
    UNINITIALIZED = "uninitialized"
    COMPUTING = "computing"
    READY = "ready"


class DeviceInfo:
    """Provides information about the current device.

    The snapshot is computed on the first call to ``prefetch()`` or any getter
    and served from memory afterwards. Computation may block on location,
    geocoding, telephony and optional service calls, so the first access
    should not happen on a latency-sensitive thread.

    Concurrent first callers are serialized: exactly one thread computes the
    snapshot and the others wait for it.
    """

    def __init__(
        self,
        context: IDeviceContext,
        location_listening: bool = True,
        probe: CapabilityProbe | None = None,
        advertising_id_service: str = DEFAULT_ADVERTISING_ID_SERVICE,
        app_set_id_service: str = DEFAULT_APP_SET_ID_SERVICE,
        availability_service: str = DEFAULT_AVAILABILITY_SERVICE,
    ):
        self.context = context
        self._probe = probe or CapabilityProbe()
        self._locations = LocationAggregator(context, location_listening)
        self._country = CountryResolver(context, self._locations)
        self._advertising = AdvertisingIdentityResolver(
            context, self._probe, advertising_id_service
        )
        self._app_set_id_service = app_set_id_service
        self._availability_service = availability_service

        self._lock = threading.Lock()
        self._state = _State.UNINITIALIZED
        self._snapshot: DeviceSnapshot | None = None

    # =====================
    # Cache
    # =====================

    def prefetch(self) -> None:
        """Compute the snapshot now if it does not exist yet."""
        self._get_snapshot()

    def snapshot(self) -> DeviceSnapshot:
        """Get the cached snapshot."""
        return self._get_snapshot()

    def _get_snapshot(self) -> DeviceSnapshot:
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot

        with self._lock:
            if self._state is _State.READY:
                return self._snapshot
            self._state = _State.COMPUTING
            try:
                self._snapshot = self._compute()
            except Exception:
                self._state = _State.UNINITIALIZED
                raise
            self._state = _State.READY
            logger.debug(f"Device snapshot ready: {self._snapshot}")
            return self._snapshot

    def _compute(self) -> DeviceSnapshot:
        build = self.context.build
        os_version = build.os_version
        brand = build.brand
        manufacturer = build.manufacturer
        model = build.model
        vendor = Vendor.from_manufacturer(manufacturer)

        version_name = self._resolve_version_name()
        carrier = self._resolve_carrier()
        language, _ = self.context.locale_provider.active_locale()
        country = self._country.resolve_country()
        identity = self._advertising.resolve_advertising_identity(vendor)
        gps_enabled = self._check_services_available()
        app_set_id = self._resolve_app_set_id()

        return DeviceSnapshot(
            os_name=OS_NAME,
            os_version=os_version,
            brand=brand,
            manufacturer=manufacturer,
            model=model,
            version_name=version_name,
            carrier=carrier,
            language=language,
            country=country,
            advertising_id=identity.advertising_id,
            limit_ad_tracking=identity.limit_ad_tracking,
            gps_enabled=gps_enabled,
            app_set_id=app_set_id,
        )

    # =====================
    # Raw resolution
    # =====================

    def _resolve_version_name(self) -> str | None:
        try:
            return self.context.package_info.version_name()
        except Exception as e:
            log_failure(logger, "Reading app version", e)
            return None

    def _resolve_carrier(self) -> str | None:
        telephony = self.context.telephony
        if telephony is None:
            return None
        try:
            return telephony.network_operator_name()
        except Exception as e:
            log_failure(logger, "Reading network operator name", e)
            return None

    def _check_services_available(self) -> bool:
        result = self._probe.invoke_optional(
            self._availability_service,
            ["is_google_play_services_available"],
            self.context,
            purpose="service availability",
        )
        # bool is an int subclass; False must not pass as the success code
        return (
            result.ok
            and type(result.value) is int
            and result.value == SERVICE_AVAILABLE_SUCCESS
        )

    def _resolve_app_set_id(self) -> str | None:
        result = self._probe.invoke_optional(
            self._app_set_id_service,
            ["get_client", "get_app_set_id_info", "get_id"],
            self.context,
            purpose="app set id",
        )
        return result.value if result.ok else None

    # =====================
    # Getters
    # =====================

    def get_version_name(self) -> str | None:
        return self._get_snapshot().version_name

    def get_os_name(self) -> str:
        return self._get_snapshot().os_name

    def get_os_version(self) -> str | None:
        return self._get_snapshot().os_version

    def get_brand(self) -> str | None:
        return self._get_snapshot().brand

    def get_manufacturer(self) -> str | None:
        return self._get_snapshot().manufacturer

    def get_model(self) -> str | None:
        return self._get_snapshot().model

    def get_carrier(self) -> str | None:
        return self._get_snapshot().carrier

    def get_country(self) -> str | None:
        return self._get_snapshot().country

    def get_language(self) -> str:
        return self._get_snapshot().language

    def get_advertising_id(self) -> str | None:
        return self._get_snapshot().advertising_id

    def is_limit_ad_tracking_enabled(self) -> bool:
        return self._get_snapshot().limit_ad_tracking

    def get_app_set_id(self) -> str | None:
        return self._get_snapshot().app_set_id

    def is_google_play_services_enabled(self) -> bool:
        return self._get_snapshot().gps_enabled

    # =====================
    # Location
    # =====================

    def get_most_recent_location(self) -> LocationFix | None:
        """Get the freshest location fix. Never cached."""
        return self._locations.most_recent_location()

    def is_location_listening(self) -> bool:
        return self._locations.listening

    def set_location_listening(self, location_listening: bool) -> None:
        self._locations.listening = location_listening

    @staticmethod
    def generate_uuid() -> str:
        """Generate a random UUID string."""
        return str(uuid.uuid4())
