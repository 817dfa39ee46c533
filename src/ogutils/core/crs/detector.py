"""
Zone and WKID detection from coordinates.

Geometries stored without a WKID can usually be placed from the values of
their coordinates alone: longitudes are below 180, while Gauss-Kruger
eastings carry the zone number in their leading digits.
"""

import logging

from shapely.geometry.base import BaseGeometry

from ogutils.core.crs import zones
from ogutils.core.errors import UnsupportedCrsError
from ogutils.core.geometry.wkt import parse_wkt
from ogutils.models.crs import ZoneWidth

logger = logging.getLogger(__name__)

# X values below this are read as longitudes
MAX_LONGITUDE = 180.0


def _centroid_x(geometry: BaseGeometry) -> float:
    if geometry.is_empty:
        raise UnsupportedCrsError("Cannot detect zone of an empty geometry")
    return geometry.centroid.x


def detect_zone_from_geometry(geometry: BaseGeometry) -> int:
    """
    Detect the 3-degree zone a geometry lies in.

    Args:
        geometry: Geometry in lon/lat or zone-prefixed Gauss-Kruger coordinates

    Returns:
        Zone number

    Raises:
        UnsupportedCrsError: If the geometry is empty or its coordinates are
            neither longitudes nor zone-prefixed eastings
    """
    x = _centroid_x(geometry)

    if x < MAX_LONGITUDE:
        return zones.zone_from_longitude(x, ZoneWidth.THREE_DEGREE)

    return zones.zone_from_easting(x)


def detect_wkid_from_geometry(geometry: BaseGeometry) -> int:
    """
    Detect the WKID of a geometry's coordinates.

    Returns:
        4490 for lon/lat coordinates, otherwise the 3-degree zone WKID
        read from the easting prefix

    Raises:
        UnsupportedCrsError: If no supported WKID matches
    """
    x = _centroid_x(geometry)

    if x < MAX_LONGITUDE:
        return zones.CGCS2000_WKID

    zone = zones.zone_from_easting(x)
    wkid = zones.wkid_from_zone(zone, ZoneWidth.THREE_DEGREE)
    logger.debug(f"Detected WKID {wkid} from easting {x:.1f}")
    return wkid


def suggest_projected_wkid(geometry: BaseGeometry) -> int:
    """
    Suggest the 3-degree zone WKID to project a geometry into.

    Args:
        geometry: Geometry in lon/lat or zone-prefixed Gauss-Kruger coordinates

    Returns:
        Projected zone WKID

    Raises:
        UnsupportedCrsError: If the zone is outside the supported range
    """
    zone = detect_zone_from_geometry(geometry)
    return zones.wkid_from_zone(zone, ZoneWidth.THREE_DEGREE)


def detect_zone_from_wkt(text: str) -> int:
    return detect_zone_from_geometry(parse_wkt(text))


def detect_wkid_from_wkt(text: str) -> int:
    return detect_wkid_from_geometry(parse_wkt(text))
