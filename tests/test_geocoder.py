"""Tests for devinfo.geocoder module."""

import asyncio
import re

import aiohttp
import pytest
from aioresponses import aioresponses

from devinfo.errors import MalformedInput, ServiceUnavailable
from devinfo.geocoder import NominatimGeocoder
from devinfo.models import Address

BASE_URL = "https://geo.test/reverse"
REVERSE_PATTERN = re.compile(r"^https://geo\.test/reverse\?.*$")


class TestNominatimGeocoderInit:
    """Test cases for NominatimGeocoder initialization."""

    def test_present_with_url(self):
        geocoder = NominatimGeocoder(BASE_URL + "/")

        assert geocoder.is_present() is True
        assert geocoder.base_url == BASE_URL

    def test_absent_without_url(self):
        assert NominatimGeocoder("").is_present() is False


class TestGetFromLocation:
    """Test cases for get_from_location()."""

    def test_country_code_upper_cased(self):
        """Test the JSON country code maps to an upper-case Address."""
        geocoder = NominatimGeocoder(BASE_URL)

        with aioresponses() as m:
            m.get(
                REVERSE_PATTERN,
                status=200,
                payload={"address": {"country_code": "fr", "country": "France", "city": "Paris"}},
            )

            addresses = geocoder.get_from_location(48.8566, 2.3522, 1)

        assert addresses == [Address(country_code="FR", country_name="France", locality="Paris")]

    def test_request_parameters(self):
        """Test coordinates and language are sent as query parameters."""
        geocoder = NominatimGeocoder(BASE_URL, language="en")

        with aioresponses() as m:
            m.get(REVERSE_PATTERN, status=200, payload={"address": {"country_code": "us"}})

            geocoder.get_from_location(40.5, -74.25, 1)

            (method, url), = m.requests.keys()

        assert method == "GET"
        assert url.query["lat"] == "40.5"
        assert url.query["lon"] == "-74.25"
        assert url.query["format"] == "jsonv2"
        assert url.query["accept-language"] == "en"

    def test_no_address(self):
        """Test a response without an address gives an empty list."""
        geocoder = NominatimGeocoder(BASE_URL)

        with aioresponses() as m:
            m.get(REVERSE_PATTERN, status=200, payload={"error": "Unable to geocode"})

            assert geocoder.get_from_location(0.0, -160.0, 1) == []

    def test_max_results_zero(self):
        geocoder = NominatimGeocoder(BASE_URL)

        with aioresponses() as m:
            m.get(REVERSE_PATTERN, status=200, payload={"address": {"country_code": "us"}})

            assert geocoder.get_from_location(40.0, -74.0, 0) == []

    def test_http_error(self):
        """Test HTTP errors raise ServiceUnavailable."""
        geocoder = NominatimGeocoder(BASE_URL)

        with aioresponses() as m:
            m.get(REVERSE_PATTERN, status=503, body="Service unavailable")

            with pytest.raises(ServiceUnavailable, match="503"):
                geocoder.get_from_location(40.0, -74.0, 1)

    def test_connection_error(self):
        """Test connection failures raise ServiceUnavailable."""
        geocoder = NominatimGeocoder(BASE_URL)

        with aioresponses() as m:
            m.get(REVERSE_PATTERN, exception=aiohttp.ClientConnectionError("refused"))

            with pytest.raises(ServiceUnavailable):
                geocoder.get_from_location(40.0, -74.0, 1)

    @pytest.mark.parametrize("latitude, longitude", [
        (91.0, 0.0),
        (-90.5, 0.0),
        (0.0, 180.1),
        (0.0, -181.0),
    ])
    def test_malformed_coordinates(self, latitude, longitude):
        """Test out-of-range coordinates raise MalformedInput before any request."""
        geocoder = NominatimGeocoder(BASE_URL)

        with aioresponses() as m:
            with pytest.raises(MalformedInput):
                geocoder.get_from_location(latitude, longitude, 1)

            assert m.requests == {}

    def test_not_configured(self):
        with pytest.raises(ServiceUnavailable):
            NominatimGeocoder("").get_from_location(0.0, 0.0, 1)

    def test_running_loop_rejected(self):
        """Test the blocking call refuses to run inside an event loop."""
        geocoder = NominatimGeocoder(BASE_URL)

        async def call_from_loop():
            return geocoder.get_from_location(10.0, 10.0, 1)

        with pytest.raises(ServiceUnavailable, match="running event loop"):
            asyncio.run(call_from_loop())
