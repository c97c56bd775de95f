"""Configuration manager for device attribute resolution."""

import json
from pathlib import Path
from typing import Any

from devinfo.constants import (
    DEFAULT_ADVERTISING_ID_SERVICE,
    DEFAULT_APP_SET_ID_SERVICE,
    DEFAULT_AVAILABILITY_SERVICE,
    DEFAULT_GEOCODER_LANGUAGE,
    DEFAULT_GEOCODER_URL,
    DEFAULT_LOCATION_LISTENING,
    DEFAULT_LOG_LEVEL,
)


class ConfigManager:
    """Manages devinfo configuration."""

    def __init__(self, config_path: Path):
        self.config_path = config_path
        self._config: dict[str, Any] = {}
        self._defaults: dict[str, Any] = {
            "log_level": DEFAULT_LOG_LEVEL,
            "location_listening": DEFAULT_LOCATION_LISTENING,
            "app_package": "",
            "app_distribution": "",
            "geocoder_url": DEFAULT_GEOCODER_URL,
            "geocoder_language": DEFAULT_GEOCODER_LANGUAGE,
            "advertising_id_service": DEFAULT_ADVERTISING_ID_SERVICE,
            "app_set_id_service": DEFAULT_APP_SET_ID_SERVICE,
            "availability_service": DEFAULT_AVAILABILITY_SERVICE,
        }

    def load(self) -> dict[str, Any]:
        """Load configuration from file."""
        if self.config_path.exists():
            with open(self.config_path, "r", encoding="utf-8") as f:
                self._config = json.load(f)
        else:
            self._config = self._defaults.copy()
            self.save()

        return self._config

    def save(self) -> None:
        """Save configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        if default is None:
            default = self._defaults.get(key)
        return self._config.get(key, default)

    @property
    def log_level(self) -> str:
        """Get log level name."""
        return self.get("log_level")

    @property
    def location_listening(self) -> bool:
        """Get initial location-listening flag."""
        return bool(self.get("location_listening"))

    @property
    def app_package(self) -> str:
        """Get Android package checked for location permission."""
        return self.get("app_package", "")

    @property
    def app_distribution(self) -> str:
        """Get Python distribution whose version is reported."""
        return self.get("app_distribution", "")

    @property
    def geocoder_url(self) -> str:
        """Get reverse geocoding endpoint (empty disables geocoding)."""
        return self.get("geocoder_url", "")

    @property
    def geocoder_language(self) -> str:
        """Get language requested from the geocoder."""
        return self.get("geocoder_language")

    @property
    def advertising_id_service(self) -> str:
        """Get advertising-id service module name."""
        return self.get("advertising_id_service")

    @property
    def app_set_id_service(self) -> str:
        """Get app-set-id service module name."""
        return self.get("app_set_id_service")

    @property
    def availability_service(self) -> str:
        """Get optional-service availability check module name."""
        return self.get("availability_service")
