"""Error taxonomy for device attribute resolution.

None of these escape the public ``DeviceInfo`` surface: each is caught by the
resolver that met it and turned into an absent attribute.
"""

import logging


class DeviceInfoError(Exception):
    """Base class for attribute resolution errors."""

    log_level = logging.WARNING


class PermissionDenied(DeviceInfoError):
    """The host refused access to a protected source (e.g. location)."""

    log_level = logging.INFO


class CapabilityAbsent(DeviceInfoError):
    """An optional service is not present on this host."""

    log_level = logging.WARNING


class CapabilityInvocationFailed(DeviceInfoError):
    """An optional service is present but the call into it failed."""

    log_level = logging.ERROR


class MalformedInput(DeviceInfoError, ValueError):
    """Input rejected by a collaborator, e.g. out-of-range coordinates."""

    log_level = logging.WARNING


class ServiceUnavailable(DeviceInfoError):
    """A system service could not be reached."""

    log_level = logging.ERROR


def log_failure(logger: logging.Logger, step: str, error: Exception) -> None:
    """Log a swallowed resolution failure at the level its category calls for."""
    level = getattr(error, "log_level", logging.ERROR)
    logger.log(level, f"{step} failed ({type(error).__name__}): {error}")
