"""Device context backed by the Android shell tools.

Reads system properties with ``getprop``, secure settings with ``settings``
and location / package state with ``dumpsys``. Intended for Python running
on an Android-family device (Termux, Fire OS shells, device farms).
"""

import locale
import logging
import re
import shutil
import subprocess
from importlib import metadata
from typing import Callable

from .constants import (
    PERMISSION_COARSE_LOCATION,
    PERMISSION_FINE_LOCATION,
    PHONE_TYPE_NONE,
    PROP_BRAND,
    PROP_LOCALE,
    PROP_MANUFACTURER,
    PROP_MODEL,
    PROP_NETWORK_ISO,
    PROP_OPERATOR_NAME,
    PROP_OS_VERSION,
    PROP_PHONE_TYPE,
    PROP_PRODUCT_LOCALE,
    SETTING_LOCATION_PROVIDERS,
)
from .errors import MalformedInput, PermissionDenied, ServiceUnavailable
from .models import LocationFix
from .protocols import IGeocoder

logger = logging.getLogger(__name__)

CommandRunner = Callable[[list[str]], str]

_LOCATION_RE = re.compile(
    r"Location\[(?P<provider>\S+) (?P<lat>-?\d+(?:\.\d+)?),(?P<lon>-?\d+(?:\.\d+)?)(?P<rest>[^\]]*)\]"
)
_TIME_RE = re.compile(r"\btime=(\d+)")
_ELAPSED_RE = re.compile(r"\bet=\+?((?:\d+(?:d|h|ms|m|s))+)")
_ELAPSED_PART_RE = re.compile(r"(\d+)(d|h|ms|m|s)")
_ELAPSED_UNITS_MS = {"d": 86_400_000, "h": 3_600_000, "m": 60_000, "s": 1000, "ms": 1}


def run_command(args: list[str]) -> str:
    """Run a shell tool and return its stripped stdout.

    Raises:
        ServiceUnavailable: If the tool is missing or exits non-zero
    """
    executable = shutil.which(args[0])
    if executable is None:
        raise ServiceUnavailable(f"{args[0]} not found")

    try:
        result = subprocess.run(
            [executable, *args[1:]],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        raise ServiceUnavailable(f"Failed to run {args[0]}: {e}") from e

    if result.returncode != 0:
        raise ServiceUnavailable(
            f"{args[0]} exited with {result.returncode}: {result.stderr.strip()}"
        )
    return result.stdout.strip()


def dumpsys(runner: CommandRunner, *args: str) -> str:
    """Run ``dumpsys``, turning the system server's refusal into PermissionDenied."""
    dump = runner(["dumpsys", *args])
    if dump.startswith("Permission Denial"):
        raise PermissionDenied(dump.splitlines()[0])
    return dump


def _first_entry(value: str) -> str | None:
    """First entry of a comma-separated multi-SIM property, or None if empty."""
    entry = value.split(",")[0].strip()
    return entry or None


def parse_locale_tag(tag: str | None) -> tuple[str, str]:
    """Split "en-US" / "en_US.UTF-8" into ("en", "US")."""
    if not tag:
        return "", ""
    tag = tag.split(".")[0].split("@")[0]
    parts = re.split(r"[-_]", tag)
    language = parts[0].lower()
    country = ""
    for part in parts[1:]:
        # Skip script subtags such as "Hans" in "zh-Hans-CN"
        if (len(part) == 2 and part.isalpha()) or (len(part) == 3 and part.isdigit()):
            country = part.upper()
            break
    return language, country


def parse_elapsed(value: str) -> int:
    """Convert a dumpsys duration such as "+1d2h3m4s567ms" to milliseconds."""
    return sum(
        int(amount) * _ELAPSED_UNITS_MS[unit]
        for amount, unit in _ELAPSED_PART_RE.findall(value)
    )


def parse_location(dump: str, provider: str) -> LocationFix | None:
    """Find the first fix reported for ``provider`` in ``dumpsys location`` output."""
    for match in _LOCATION_RE.finditer(dump):
        if match.group("provider") != provider:
            continue

        rest = match.group("rest")
        time_match = _TIME_RE.search(rest)
        if time_match:
            timestamp = int(time_match.group(1))
        else:
            elapsed_match = _ELAPSED_RE.search(rest)
            if elapsed_match is None:
                raise MalformedInput(f"No timestamp in location for {provider}")
            timestamp = parse_elapsed(elapsed_match.group(1))

        return LocationFix(
            latitude=float(match.group("lat")),
            longitude=float(match.group("lon")),
            provider=provider,
            timestamp=timestamp,
        )
    return None


class ShellBuildInfo:
    """Build properties from ``getprop``.

    Properties that can't be read resolve to None so identity fields never
    fail.
    """

    def __init__(self, runner: CommandRunner = run_command):
        self._runner = runner

    def _prop(self, name: str) -> str | None:
        try:
            return self._runner(["getprop", name]) or None
        except Exception as e:
            logger.debug(f"getprop {name} unavailable: {e}")
            return None

    @property
    def os_version(self) -> str | None:
        return self._prop(PROP_OS_VERSION)

    @property
    def brand(self) -> str | None:
        return self._prop(PROP_BRAND)

    @property
    def manufacturer(self) -> str | None:
        return self._prop(PROP_MANUFACTURER)

    @property
    def model(self) -> str | None:
        return self._prop(PROP_MODEL)


class ShellTelephony:
    """Telephony state from the radio system properties."""

    def __init__(self, runner: CommandRunner = run_command):
        self._runner = runner

    def phone_type(self) -> int:
        value = _first_entry(self._runner(["getprop", PROP_PHONE_TYPE]))
        if value is None:
            return PHONE_TYPE_NONE
        try:
            return int(value)
        except ValueError as e:
            raise MalformedInput(f"Unexpected phone type: {value!r}") from e

    def network_country_iso(self) -> str | None:
        return _first_entry(self._runner(["getprop", PROP_NETWORK_ISO]))

    def network_operator_name(self) -> str | None:
        return _first_entry(self._runner(["getprop", PROP_OPERATOR_NAME]))


class ShellSecureSettings:
    """Secure settings store read through ``settings get secure``."""

    def __init__(self, runner: CommandRunner = run_command):
        self._runner = runner

    def get_string(self, key: str) -> str | None:
        value = self._runner(["settings", "get", "secure", key])
        if not value or value == "null":
            return None
        return value

    def get_int(self, key: str, default: int) -> int:
        value = self.get_string(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default


class ShellLocationRegistry:
    """Location sources from secure settings, fixes from ``dumpsys location``."""

    def __init__(self, settings: ShellSecureSettings, runner: CommandRunner = run_command):
        self._settings = settings
        self._runner = runner

    def list_enabled_sources(self) -> list[str]:
        value = self._settings.get_string(SETTING_LOCATION_PROVIDERS)
        if not value:
            return []
        return [name.strip() for name in value.split(",") if name.strip()]

    def last_known_fix(self, source: str) -> LocationFix | None:
        return parse_location(dumpsys(self._runner, "location"), source)


class ShellLocaleProvider:
    """Active locale from system properties, falling back to Python's locale."""

    def __init__(self, runner: CommandRunner = run_command):
        self._runner = runner

    def active_locale(self) -> tuple[str, str]:
        for prop in (PROP_LOCALE, PROP_PRODUCT_LOCALE):
            try:
                tag = self._runner(["getprop", prop])
            except Exception as e:
                logger.debug(f"getprop {prop} unavailable: {e}")
                break
            if tag:
                return parse_locale_tag(tag)

        language_tag, _ = locale.getlocale()
        return parse_locale_tag(language_tag)


class MetadataPackageInfo:
    """Version of the instrumented Python distribution."""

    def __init__(self, distribution: str):
        self.distribution = distribution

    def version_name(self) -> str | None:
        if not self.distribution:
            return None
        try:
            return metadata.version(self.distribution)
        except metadata.PackageNotFoundError:
            logger.warning(f"Distribution {self.distribution} not installed, no version name")
            return None


class ShellDeviceContext:
    """Execution context for DeviceInfo built on the Android shell tools."""

    def __init__(
        self,
        app_package: str = "",
        app_distribution: str = "",
        geocoder: IGeocoder | None = None,
        runner: CommandRunner = run_command
    ):
        """Initialize the context.

        Args:
            app_package: Android package whose location permission is checked
            app_distribution: Python distribution whose version is reported
            geocoder: Reverse geocoder, or None to disable geocoding
            runner: Command runner (replaceable for tests)
        """
        self.app_package = app_package
        self._runner = runner
        self._geocoder = geocoder
        self._build = ShellBuildInfo(runner)
        self._telephony = ShellTelephony(runner)
        self._settings = ShellSecureSettings(runner)
        self._locations = ShellLocationRegistry(self._settings, runner)
        self._locale = ShellLocaleProvider(runner)
        self._package_info = MetadataPackageInfo(app_distribution)

    @property
    def build(self) -> ShellBuildInfo:
        return self._build

    @property
    def telephony(self) -> ShellTelephony:
        return self._telephony

    @property
    def location_registry(self) -> ShellLocationRegistry:
        return self._locations

    @property
    def locale_provider(self) -> ShellLocaleProvider:
        return self._locale

    @property
    def secure_settings(self) -> ShellSecureSettings:
        return self._settings

    @property
    def package_info(self) -> MetadataPackageInfo:
        return self._package_info

    def get_geocoder(self) -> IGeocoder | None:
        return self._geocoder

    def has_location_permission(self) -> bool:
        """Check the package's runtime location grant via ``dumpsys package``."""
        if not self.app_package:
            logger.info("Location permission unknown: no app package configured")
            return False

        try:
            dump = dumpsys(self._runner, "package", self.app_package)
        except PermissionDenied as e:
            logger.info(f"Location permission unknown: {e}")
            return False
        except Exception as e:
            logger.warning(f"Failed to check location permission: {e}")
            return False

        for permission in (PERMISSION_FINE_LOCATION, PERMISSION_COARSE_LOCATION):
            if f"{permission}: granted=true" in dump:
                return True
        return False
