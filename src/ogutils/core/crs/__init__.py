"""
Coordinate Reference System (CRS) management module.

This module provides:
- Gauss-Kruger zone indexing and WKID classification
- A lazily populated registry of CGCS2000 reference systems
- Coordinate transformation between WKIDs
- Zone and WKID detection from coordinates
"""

from ogutils.core.crs.detector import (
    detect_wkid_from_geometry,
    detect_wkid_from_wkt,
    detect_zone_from_geometry,
    detect_zone_from_wkt,
    suggest_projected_wkid,
)
from ogutils.core.crs.provider import (
    CoordinateTransform,
    CrsProvider,
    PyprojCrsProvider,
)
from ogutils.core.crs.registry import (
    CrsRegistry,
    get_default_registry,
    reset_default_registry,
    synthesize_zone_definition,
)
from ogutils.core.crs.transformer import (
    TransformBuilder,
    transform_coordinates,
    transform_wkt,
)
from ogutils.core.crs.zones import (
    central_meridian,
    false_easting,
    format_zone,
    is_geographic,
    is_projected,
    tolerance,
    wkid_from_zone,
    zone_from_easting,
    zone_from_longitude,
    zone_from_wkid,
    zone_width_from_wkid,
)

__all__ = [
    # Detector
    "detect_wkid_from_geometry",
    "detect_wkid_from_wkt",
    "detect_zone_from_geometry",
    "detect_zone_from_wkt",
    "suggest_projected_wkid",
    # Provider
    "CoordinateTransform",
    "CrsProvider",
    "PyprojCrsProvider",
    # Registry
    "CrsRegistry",
    "get_default_registry",
    "reset_default_registry",
    "synthesize_zone_definition",
    # Transformer
    "TransformBuilder",
    "transform_coordinates",
    "transform_wkt",
    # Zones
    "central_meridian",
    "false_easting",
    "format_zone",
    "is_geographic",
    "is_projected",
    "tolerance",
    "wkid_from_zone",
    "zone_from_easting",
    "zone_from_longitude",
    "zone_from_wkid",
    "zone_width_from_wkid",
]
