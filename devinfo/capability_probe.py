"""Runtime probing of optional service modules."""

import importlib
import logging
from typing import Any, Callable, Sequence

from .errors import CapabilityAbsent, CapabilityInvocationFailed, log_failure
from .models import ProbeResult

logger = logging.getLogger(__name__)


def _is_missing(error: ModuleNotFoundError, service_name: str) -> bool:
    """True if the error is about the service module itself or a parent package."""
    missing = error.name or ""
    return missing == service_name or service_name.startswith(f"{missing}.")


class CapabilityProbe:
    """Locates and invokes optional services without a hard dependency on them.

    A service is a Python module addressed by its dotted name. Absence of the
    module is a normal outcome, reported as ``NOT_FOUND``; a present module
    whose call fails is reported as ``INVOCATION_FAILED``.
    """

    def find(self, service_name: str, purpose: str = "") -> ProbeResult:
        """Locate a service module.

        Args:
            service_name: Dotted module name of the service
            purpose: What the caller needs the service for (used in logs)

        Returns:
            SUCCESS carrying the module as its value, or NOT_FOUND /
            INVOCATION_FAILED
        """
        label = f" for {purpose}" if purpose else ""
        step = f"Locating service{label}"
        try:
            module = importlib.import_module(service_name)
        except ModuleNotFoundError as e:
            if not _is_missing(e, service_name):
                # The service exists but one of its own imports is broken
                error = CapabilityInvocationFailed(f"{service_name} failed to import: {e}")
                log_failure(logger, step, error)
                return ProbeResult.invocation_failed(str(e))
            log_failure(logger, step, CapabilityAbsent(f"{service_name} not found{label}"))
            return ProbeResult.not_found(str(e))
        except Exception as e:
            error = CapabilityInvocationFailed(f"{service_name} failed to import: {e}")
            log_failure(logger, step, error)
            return ProbeResult.invocation_failed(str(e))

        return ProbeResult.success(module)

    def invoke_optional(
        self,
        service_name: str,
        method_chain: Sequence[str],
        *args: Any,
        purpose: str = "",
        extract: Callable[[Any], Any] | None = None
    ) -> ProbeResult:
        """Invoke a method chain on an optional service.

        The first method is called with ``args``; each following name is
        looked up on the previous result and called without arguments, or
        read if it is not callable.

        Args:
            service_name: Dotted module name of the service
            method_chain: Attribute names to walk, starting at the module
            *args: Arguments for the first call
            purpose: What the caller needs the service for (used in logs)
            extract: Optional function applied to the final value

        Returns:
            ProbeResult with the final value on success
        """
        found = self.find(service_name, purpose)
        if not found.ok:
            return found

        label = f" for {purpose}" if purpose else ""
        target: Any = found.value
        try:
            for index, name in enumerate(method_chain):
                target = self._step(target, name, args if index == 0 else ())
        except AttributeError as e:
            logger.error(
                f"Encountered an error connecting to {service_name}{label}: {e}"
            )
            return ProbeResult.invocation_failed(str(e))
        except Exception as e:
            logger.warning(f"{service_name} not available{label}: {e}")
            return ProbeResult.invocation_failed(str(e))

        if extract is None:
            return ProbeResult.success(target)

        try:
            return ProbeResult.success(extract(target))
        except Exception as e:
            logger.error(
                f"Encountered an error reading {service_name} result{label}: {e}"
            )
            return ProbeResult.invocation_failed(str(e))

    @staticmethod
    def _step(target: Any, name: str, args: tuple) -> Any:
        attr = getattr(target, name)
        if callable(attr):
            return attr(*args)
        return attr
