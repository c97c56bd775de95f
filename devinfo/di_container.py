"""Wiring of the device attribute components from the JSON config."""

import logging
from pathlib import Path
from typing import Any, Callable

from .capability_probe import CapabilityProbe
from .config_manager import ConfigManager
from .device_info import DeviceInfo
from .geocoder import NominatimGeocoder
from .shell_context import ShellDeviceContext

logger = logging.getLogger(__name__)


class DIContainer:
    """Named components: registered instances plus lazily built ones.

    A factory runs on the first ``get()`` for its name; the component it
    returns is kept and handed out on every later lookup.
    """

    def __init__(self):
        self._singletons: dict[str, Any] = {}
        self._factories: dict[str, Callable[[], Any]] = {}

    def register_singleton(self, name: str, instance: Any) -> None:
        self._singletons[name] = instance
        logger.debug(f"Registered singleton: {name}")

    def register_factory(self, name: str, factory: Callable[[], Any]) -> None:
        """Register a zero-argument callable that builds ``name`` on demand."""
        self._factories[name] = factory
        logger.debug(f"Registered factory: {name}")

    def get(self, name: str) -> Any:
        """Look up a component, building it from its factory on first use.

        Raises:
            KeyError: If nothing is registered under ``name``
        """
        try:
            return self._singletons[name]
        except KeyError:
            pass

        factory = self._factories.get(name)
        if factory is None:
            raise KeyError(f"Component '{name}' not found in container")

        instance = factory()
        self._singletons[name] = instance
        return instance

    def has(self, name: str) -> bool:
        return name in self._singletons or name in self._factories


class ContainerBuilder:
    """Builder for configuring the DI container."""

    @staticmethod
    def build_container(config_path: Path) -> DIContainer:
        """Build and configure the DI container.

        Args:
            config_path: Path of the JSON config file

        Returns:
            Configured DI container
        """
        container = DIContainer()
        container.register_singleton("config_path", config_path)
        container.register_singleton("capability_probe", CapabilityProbe())

        def create_config_manager() -> ConfigManager:
            config_manager = ConfigManager(config_path)
            config_manager.load()

            # Set log level from config
            logging.getLogger().setLevel(
                getattr(logging, str(config_manager.log_level).upper(), logging.INFO)
            )

            return config_manager

        container.register_factory("config_manager", create_config_manager)

        def create_geocoder() -> NominatimGeocoder | None:
            config_manager = container.get("config_manager")
            if not config_manager.geocoder_url:
                logger.info("Geocoding disabled in config")
                return None
            return NominatimGeocoder(
                config_manager.geocoder_url,
                language=config_manager.geocoder_language,
            )

        container.register_factory("geocoder", create_geocoder)

        def create_device_context() -> ShellDeviceContext:
            config_manager = container.get("config_manager")
            return ShellDeviceContext(
                app_package=config_manager.app_package,
                app_distribution=config_manager.app_distribution,
                geocoder=container.get("geocoder"),
            )

        container.register_factory("device_context", create_device_context)

        def create_device_info() -> DeviceInfo:
            config_manager = container.get("config_manager")
            return DeviceInfo(
                container.get("device_context"),
                location_listening=config_manager.location_listening,
                probe=container.get("capability_probe"),
                advertising_id_service=config_manager.advertising_id_service,
                app_set_id_service=config_manager.app_set_id_service,
                availability_service=config_manager.availability_service,
            )

        container.register_factory("device_info", create_device_info)

        logger.info("DI container configured")
        return container
