"""
Geometry parsing and reprojection.
"""

from ogutils.core.geometry.reprojector import GeometryReprojector, reproject_geometry
from ogutils.core.geometry.wkt import parse_wkt, to_wkt

__all__ = [
    "GeometryReprojector",
    "reproject_geometry",
    "parse_wkt",
    "to_wkt",
]
