"""Most-recent location selection across location sources."""

import logging

from .errors import log_failure
from .models import LocationFix
from .protocols import IDeviceContext

logger = logging.getLogger(__name__)


class LocationAggregator:
    """Selects the freshest fix among all enabled location sources.

    Results are never cached; every call reads the sources again.
    """

    def __init__(self, context: IDeviceContext, listening: bool = True):
        self._context = context
        self.listening = listening

    def most_recent_location(self) -> LocationFix | None:
        """Get the fix with the greatest timestamp.

        Returns None without touching any source when listening is disabled
        or location permission is not granted.
        """
        if not self.listening:
            return None

        try:
            if not self._context.has_location_permission():
                return None
        except Exception as e:
            log_failure(logger, "Checking location permission", e)
            return None

        registry = self._context.location_registry
        # Don't fail if the host has no location services
        if registry is None:
            return None

        try:
            sources = registry.list_enabled_sources() or []
        except Exception as e:
            log_failure(logger, "Listing location sources", e)
            sources = []

        best: LocationFix | None = None
        for source in sources:
            try:
                fix = registry.last_known_fix(source)
            except Exception as e:
                logger.warning(f"Failed to get most recent location from {source}: {e}")
                continue
            # Fixes without a valid time can't be ordered
            if fix is None or fix.timestamp < 0:
                continue
            if best is None or fix.timestamp > best.timestamp:
                best = fix

        return best
