"""
Data models for reference systems and layers.
"""

from .crs import (
    CGCS2000_ELLIPSOID,
    CGCS2000_GEOGRAPHIC,
    WGS84_ELLIPSOID,
    WGS84_GEOGRAPHIC,
    EllipsoidDefinition,
    GeographicDefinition,
    ProjectedDefinition,
    ZoneWidth,
)
from .layer import (
    FieldDataType,
    GeometryType,
    OguFeature,
    OguField,
    OguLayer,
    OguLayerMetadata,
)

__all__ = [
    # CRS definitions
    "CGCS2000_ELLIPSOID",
    "CGCS2000_GEOGRAPHIC",
    "WGS84_ELLIPSOID",
    "WGS84_GEOGRAPHIC",
    "EllipsoidDefinition",
    "GeographicDefinition",
    "ProjectedDefinition",
    "ZoneWidth",
    # Layers
    "FieldDataType",
    "GeometryType",
    "OguFeature",
    "OguField",
    "OguLayer",
    "OguLayerMetadata",
]
