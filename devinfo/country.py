"""Country resolution: reverse geocode, then network, then locale."""

import logging

from .constants import PHONE_TYPE_CDMA
from .errors import log_failure
from .location import LocationAggregator
from .protocols import IDeviceContext

logger = logging.getLogger(__name__)


class CountryResolver:
    """Resolves the device country through an ordered fallback chain.

    Performs blocking I/O (location, geocoding, telephony); do not call it
    from a latency-sensitive context.
    """

    def __init__(self, context: IDeviceContext, locations: LocationAggregator):
        self._context = context
        self._locations = locations

    def resolve_country(self) -> str | None:
        """Resolve the country code; the first non-empty step wins.

        The locale step always answers, possibly with an empty string.
        """
        country = self.country_from_location()
        if country:
            return country

        country = self.country_from_network()
        if country:
            return country

        return self.country_from_locale()

    def country_from_location(self) -> str | None:
        """Reverse geocode the most recent location fix."""
        if not self._locations.listening:
            return None

        try:
            recent = self._locations.most_recent_location()
            if recent is None:
                return None

            geocoder = self._context.get_geocoder()
            if geocoder is None or not geocoder.is_present():
                logger.debug("No geocoder present, skipping reverse geocode")
                return None

            addresses = geocoder.get_from_location(recent.latitude, recent.longitude, 1)
            for address in addresses or []:
                if address is not None:
                    return address.country_code
        except Exception as e:
            log_failure(logger, "Reverse geocoding location", e)

        return None

    def country_from_network(self) -> str | None:
        """Read the network operator's ISO country, except on CDMA."""
        telephony = self._context.telephony
        if telephony is None:
            return None

        try:
            # ISO codes are unreliable on CDMA networks
            if telephony.phone_type() == PHONE_TYPE_CDMA:
                return None
            country = telephony.network_country_iso()
            if country is not None:
                return country.upper()
        except Exception as e:
            log_failure(logger, "Reading network country", e)

        return None

    def country_from_locale(self) -> str:
        """Country component of the active locale (may be empty)."""
        _, country = self._context.locale_provider.active_locale()
        return country
