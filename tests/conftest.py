"""Shared pytest fixtures for devinfo tests."""

import importlib
import sys
from pathlib import Path

import pytest

from devinfo.constants import PHONE_TYPE_GSM
from devinfo.models import Address, LocationFix

MOCK_SERVICES_DIR = Path(__file__).parent / "fixtures" / "mock_services"


class FakeBuild:
    def __init__(self, os_version="14", brand="google", manufacturer="Google", model="Pixel 8"):
        self.os_version = os_version
        self.brand = brand
        self.manufacturer = manufacturer
        self.model = model


class FakeTelephony:
    def __init__(self, phone_type=PHONE_TYPE_GSM, iso="us", operator="T-Mobile"):
        self._phone_type = phone_type
        self.iso = iso
        self.operator = operator
        self.iso_reads = 0

    def phone_type(self):
        return self._phone_type

    def network_country_iso(self):
        self.iso_reads += 1
        return self.iso

    def network_operator_name(self):
        return self.operator


class FakeLocationRegistry:
    def __init__(self, fixes=None):
        self.fixes = dict(fixes or {})
        self.failing: set[str] = set()
        self.list_error: Exception | None = None
        self.touched = 0

    def list_enabled_sources(self):
        self.touched += 1
        if self.list_error:
            raise self.list_error
        return list(self.fixes)

    def last_known_fix(self, source):
        self.touched += 1
        if source in self.failing:
            raise RuntimeError(f"{source} failed")
        return self.fixes[source]


class FakeGeocoder:
    def __init__(self, addresses=None, present=True, error=None):
        self.addresses = addresses if addresses is not None else [Address(country_code="FR")]
        self.present = present
        self.error = error
        self.calls = []

    def is_present(self):
        return self.present

    def get_from_location(self, latitude, longitude, max_results):
        self.calls.append((latitude, longitude, max_results))
        if self.error:
            raise self.error
        return self.addresses


class FakeLocale:
    def __init__(self, language="en", country="GB"):
        self.language = language
        self.country = country

    def active_locale(self):
        return self.language, self.country


class FakeSecureSettings:
    def __init__(self, values=None):
        self.values = dict(values or {})
        self.reads = []

    def get_string(self, key):
        self.reads.append(key)
        value = self.values.get(key)
        return None if value is None else str(value)

    def get_int(self, key, default):
        self.reads.append(key)
        value = self.values.get(key)
        return default if value is None else int(value)


class FakePackageInfo:
    def __init__(self, version="2.5.0"):
        self.version = version

    def version_name(self):
        return self.version


class FakeDeviceContext:
    """In-memory IDeviceContext with every collaborator replaceable."""

    def __init__(self):
        self.build = FakeBuild()
        self.telephony = FakeTelephony()
        self.location_registry = FakeLocationRegistry()
        self.locale_provider = FakeLocale()
        self.secure_settings = FakeSecureSettings()
        self.package_info = FakePackageInfo()
        self.geocoder = None
        self.location_permission = True

    def has_location_permission(self):
        return self.location_permission

    def get_geocoder(self):
        return self.geocoder


@pytest.fixture
def device_context():
    """Provide a fake device context with no location fixes and no geocoder."""
    return FakeDeviceContext()


@pytest.fixture
def make_fix():
    """Build LocationFix objects with sensible coordinates."""
    def _make_fix(timestamp, provider="gps", latitude=48.8566, longitude=2.3522):
        return LocationFix(
            latitude=latitude,
            longitude=longitude,
            provider=provider,
            timestamp=timestamp,
        )
    return _make_fix


@pytest.fixture
def geocoder_factory():
    """Build fake geocoders."""
    return FakeGeocoder


@pytest.fixture
def mock_services(monkeypatch):
    """Put the mock optional services on sys.path and reset their state."""
    monkeypatch.syspath_prepend(str(MOCK_SERVICES_DIR))
    for name in ("mock_ads_identifier", "mock_app_set", "mock_play_services_util"):
        module = importlib.import_module(name)
        module.reset()
    yield MOCK_SERVICES_DIR
    sys.modules.pop("mock_broken_service", None)
