"""Advertising identifier resolution."""

import logging
from typing import Any

from .capability_probe import CapabilityProbe
from .constants import (
    DEFAULT_ADVERTISING_ID_SERVICE,
    SETTING_ADVERTISING_ID,
    SETTING_LIMIT_AD_TRACKING,
)
from .errors import log_failure
from .models import AdvertisingIdentity, Vendor
from .protocols import IDeviceContext

logger = logging.getLogger(__name__)


def _read_advertising_info(info: Any) -> AdvertisingIdentity:
    limit = info.is_limit_ad_tracking_enabled()
    return AdvertisingIdentity(
        advertising_id=info.get_id(),
        limit_ad_tracking=bool(limit) if limit is not None else False,
    )


class AdvertisingIdentityResolver:
    """Resolves the advertising identifier and limit-tracking flag.

    Amazon devices keep both values in the secure settings store; every other
    vendor is served by the optional advertising-id service, reached through
    the capability probe.
    """

    def __init__(
        self,
        context: IDeviceContext,
        probe: CapabilityProbe,
        service_name: str = DEFAULT_ADVERTISING_ID_SERVICE
    ):
        self._context = context
        self._probe = probe
        self._service_name = service_name

    def resolve_advertising_identity(self, vendor: Vendor) -> AdvertisingIdentity:
        """Resolve the identity for the given vendor classification."""
        if vendor is Vendor.AMAZON:
            return self._from_secure_settings()
        return self._from_service()

    def _from_secure_settings(self) -> AdvertisingIdentity:
        settings = self._context.secure_settings
        try:
            limit = settings.get_int(SETTING_LIMIT_AD_TRACKING, 0) == 1
            advertising_id = settings.get_string(SETTING_ADVERTISING_ID)
        except Exception as e:
            log_failure(logger, "Reading advertising id from secure settings", e)
            return AdvertisingIdentity()
        return AdvertisingIdentity(advertising_id=advertising_id, limit_ad_tracking=limit)

    def _from_service(self) -> AdvertisingIdentity:
        result = self._probe.invoke_optional(
            self._service_name,
            ["get_advertising_id_info"],
            self._context,
            purpose="advertising id",
            extract=_read_advertising_info,
        )
        if not result.ok:
            return AdvertisingIdentity()
        return result.value
