"""
Lazily populated CRS registry.

The registry maps a WKID to a materialized CRS handle. Geographic systems
come from fixed definitions; Gauss-Kruger zone projections are synthesized
from the zone number the first time they are asked for. Published handles
are never rebuilt or evicted.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

from ogutils.core.crs import zones
from ogutils.core.crs.provider import CrsDefinition, CrsProvider, PyprojCrsProvider
from ogutils.core.errors import TransformConstructionError, UnsupportedCrsError
from ogutils.models.crs import (
    CGCS2000_GEOGRAPHIC,
    WGS84_GEOGRAPHIC,
    GeographicDefinition,
    ProjectedDefinition,
    ZoneWidth,
)

logger = logging.getLogger(__name__)

GEOGRAPHIC_DEFINITIONS: Dict[int, GeographicDefinition] = {
    CGCS2000_GEOGRAPHIC.wkid: CGCS2000_GEOGRAPHIC,
    WGS84_GEOGRAPHIC.wkid: WGS84_GEOGRAPHIC,
}


def synthesize_zone_definition(wkid: int) -> ProjectedDefinition:
    """
    Build the Gauss-Kruger projection definition for a zone WKID.

    Args:
        wkid: Projected zone WKID

    Returns:
        Transverse Mercator definition on the CGCS2000 datum

    Raises:
        UnsupportedCrsError: If the WKID is not a zone WKID
    """
    zone = zones.zone_from_wkid(wkid)
    zone_width = zones.zone_width_from_wkid(wkid)
    prefix = "3-degree " if zone_width is ZoneWidth.THREE_DEGREE else ""

    return ProjectedDefinition(
        wkid=wkid,
        name=f"CGCS2000 / {prefix}Gauss-Kruger zone {zone}",
        geographic=CGCS2000_GEOGRAPHIC,
        central_meridian=zones.central_meridian(zone, zone_width),
        false_easting=zones.false_easting(zone),
        false_northing=0.0,
        latitude_of_origin=0.0,
        scale_factor=1.0,
        zone=zone,
        zone_width=zone_width,
    )


class CrsRegistry:
    """
    Thread-safe, process-lifetime cache of CRS handles keyed by WKID.

    Construction happens outside the lock; publication happens inside it.
    If two callers race to build the same WKID, the first handle published
    wins and the other is discarded, so each WKID maps to a single handle.
    """

    def __init__(self, provider: Optional[CrsProvider] = None):
        """
        Initialize registry.

        Args:
            provider: Projection engine; defaults to pyproj
        """
        self.provider = provider or PyprojCrsProvider()
        self._cache: Dict[int, Any] = {}
        self._lock = threading.Lock()

    def definition_for(self, wkid: int) -> CrsDefinition:
        """
        Get the textual definition for a WKID without materializing it.

        Raises:
            UnsupportedCrsError: If the WKID is not supported
        """
        if wkid in GEOGRAPHIC_DEFINITIONS:
            return GEOGRAPHIC_DEFINITIONS[wkid]
        return synthesize_zone_definition(wkid)

    def get(self, wkid: int) -> Any:
        """
        Resolve a WKID to its CRS handle, building it on first use.

        Args:
            wkid: Spatial reference identifier

        Returns:
            CRS handle

        Raises:
            UnsupportedCrsError: If the WKID is unknown or the engine cannot
                materialize its definition
        """
        handle = self._cache.get(wkid)
        if handle is not None:
            return handle

        definition = self.definition_for(wkid)

        try:
            built = self.provider.create_crs(definition)
        except TransformConstructionError as e:
            raise UnsupportedCrsError(
                f"CRS for WKID {wkid} could not be materialized: {e.message}",
                wkid=wkid,
            ) from e

        with self._lock:
            published = self._cache.setdefault(wkid, built)

        if published is built:
            logger.debug(f"Registered CRS {definition}")
        return published

    def supported_wkids(self) -> List[int]:
        """List every WKID this registry can build."""
        return (
            sorted(GEOGRAPHIC_DEFINITIONS)
            + zones.zone_wkids(ZoneWidth.SIX_DEGREE)
            + zones.zone_wkids(ZoneWidth.THREE_DEGREE)
        )

    def is_supported(self, wkid: int) -> bool:
        try:
            self.definition_for(wkid)
        except UnsupportedCrsError:
            return False
        return True

    def cached_wkids(self) -> List[int]:
        """List the WKIDs built so far."""
        with self._lock:
            return sorted(self._cache)

    def clear(self) -> None:
        """Drop every cached handle."""
        with self._lock:
            self._cache.clear()

    def __contains__(self, wkid: object) -> bool:
        return wkid in self._cache

    def __len__(self) -> int:
        return len(self._cache)


_default_registry: Optional[CrsRegistry] = None
_default_registry_lock = threading.Lock()


def get_default_registry() -> CrsRegistry:
    """Get the shared registry, creating it on first access."""
    global _default_registry
    if _default_registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                _default_registry = CrsRegistry()
    return _default_registry


def reset_default_registry() -> None:
    """Discard the shared registry so the next access starts empty."""
    global _default_registry
    with _default_registry_lock:
        _default_registry = None
