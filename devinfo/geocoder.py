"""Reverse geocoding over HTTP (Nominatim-compatible endpoints)."""

import asyncio
import logging
from typing import Any

import aiohttp

from .constants import DEFAULT_GEOCODER_LANGUAGE, GEOCODER_USER_AGENT
from .errors import MalformedInput, ServiceUnavailable
from .models import Address

logger = logging.getLogger(__name__)


class NominatimGeocoder:
    """Geocoder backed by a Nominatim ``/reverse`` endpoint.

    Calls are blocking: each request runs on a private event loop, so this
    must not be called from a thread that already runs one.
    """

    def __init__(
        self,
        base_url: str,
        language: str = DEFAULT_GEOCODER_LANGUAGE,
        user_agent: str = GEOCODER_USER_AGENT
    ):
        self._base_url = base_url.rstrip("/") if base_url else ""
        self._language = language
        self._user_agent = user_agent

    @property
    def base_url(self) -> str:
        return self._base_url

    def is_present(self) -> bool:
        """Check whether an endpoint is configured."""
        return bool(self._base_url)

    def get_from_location(
        self,
        latitude: float,
        longitude: float,
        max_results: int = 1
    ) -> list[Address]:
        """Reverse geocode a coordinate pair.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees
            max_results: Maximum number of addresses to return

        Returns:
            Up to ``max_results`` addresses (Nominatim yields at most one)

        Raises:
            MalformedInput: If the coordinates are out of range
            ServiceUnavailable: If the endpoint can't be reached or errors
        """
        if not -90.0 <= latitude <= 90.0:
            raise MalformedInput(f"latitude out of range: {latitude}")
        if not -180.0 <= longitude <= 180.0:
            raise MalformedInput(f"longitude out of range: {longitude}")
        if not self.is_present():
            raise ServiceUnavailable("No geocoder endpoint configured")

        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            raise ServiceUnavailable("Blocking geocode called from a running event loop")

        try:
            payload = asyncio.run(self._reverse(latitude, longitude))
        except aiohttp.ClientResponseError as e:
            raise ServiceUnavailable(f"Geocoder returned {e.status}") from e
        except aiohttp.ClientError as e:
            raise ServiceUnavailable(f"HTTP error reverse geocoding: {e}") from e

        address = self._parse_address(payload)
        if address is None:
            return []
        return [address][:max_results]

    async def _reverse(self, latitude: float, longitude: float) -> dict[str, Any]:
        params = {
            "lat": str(latitude),
            "lon": str(longitude),
            "format": "jsonv2",
            "zoom": "3",
            "accept-language": self._language,
        }
        headers = {"User-Agent": self._user_agent}
        async with aiohttp.ClientSession(headers=headers) as session:
            async with session.get(self._base_url, params=params) as response:
                response.raise_for_status()
                return await response.json(content_type=None)

    @staticmethod
    def _parse_address(payload: Any) -> Address | None:
        if not isinstance(payload, dict):
            return None
        address = payload.get("address")
        if not isinstance(address, dict):
            logger.debug(f"Geocoder returned no address: {payload.get('error')}")
            return None
        country_code = address.get("country_code")
        return Address(
            country_code=country_code.upper() if country_code else None,
            country_name=address.get("country"),
            locality=address.get("city") or address.get("town") or address.get("village"),
        )
