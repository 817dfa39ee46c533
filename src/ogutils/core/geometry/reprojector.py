"""
Structure-preserving geometry reprojection.

Walks a shapely geometry of any kind, including nested collections, and
rebuilds it with every coordinate passed through a CoordinateTransform.
The output has the same geometry type, the same number of parts, rings
and points, and the same ring roles as the input.
"""

import logging
from typing import TYPE_CHECKING, Any, List, Sequence, Tuple

import numpy as np
import shapely
from shapely.geometry import (
    GeometryCollection,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from shapely.geometry.base import BaseGeometry

if TYPE_CHECKING:
    from ogutils.core.crs.provider import CoordinateTransform

logger = logging.getLogger(__name__)


class GeometryReprojector:
    """
    Applies one CoordinateTransform to whole geometries.

    Geometry kinds outside shapely's eight concrete types are returned
    unchanged and logged; they are not treated as errors.
    """

    def __init__(self, transform: "CoordinateTransform"):
        self.transform = transform

    def reproject(self, geometry: Any) -> Any:
        """
        Reproject a geometry.

        Args:
            geometry: Shapely geometry

        Returns:
            New geometry of the same type and shape with transformed
            coordinates. Empty geometries are returned as given.
        """
        if isinstance(geometry, BaseGeometry) and geometry.is_empty:
            return geometry

        if isinstance(geometry, Point):
            return Point(self._coords(geometry.coords)[0])

        # LinearRing subclasses LineString, so it must be matched first
        if isinstance(geometry, LinearRing):
            return LinearRing(self._coords(geometry.coords))

        if isinstance(geometry, LineString):
            return LineString(self._coords(geometry.coords))

        if isinstance(geometry, Polygon):
            return self._reproject_polygon(geometry)

        if isinstance(geometry, MultiPoint):
            return shapely.multipoints(self._parts(geometry))

        if isinstance(geometry, MultiLineString):
            return shapely.multilinestrings(self._parts(geometry))

        if isinstance(geometry, MultiPolygon):
            return shapely.multipolygons(self._parts(geometry))

        if isinstance(geometry, GeometryCollection):
            return shapely.geometrycollections(self._parts(geometry))

        logger.warning(
            f"Unsupported geometry kind {type(geometry).__name__}, passing through unchanged"
        )
        return geometry

    def _parts(self, geometry: BaseGeometry) -> np.ndarray:
        # the shapely.multi* constructors keep empty members in place,
        # unlike MultiPoint(...) and MultiPolygon(...)
        parts = np.empty(len(geometry.geoms), dtype=object)
        parts[:] = [self.reproject(part) for part in geometry.geoms]
        return parts

    def _reproject_polygon(self, polygon: Polygon) -> Polygon:
        shell = self._coords(polygon.exterior.coords)
        holes = [self._coords(interior.coords) for interior in polygon.interiors]
        return Polygon(shell, holes)

    def _coords(self, coords: Sequence[Tuple[float, ...]]) -> List[Tuple[float, ...]]:
        return self.transform.transform_coords(coords)


def reproject_geometry(geometry: Any, transform: "CoordinateTransform") -> Any:
    """
    Reproject a geometry with the given transform.

    Args:
        geometry: Shapely geometry
        transform: Coordinate transform

    Returns:
        Reprojected geometry of the same shape
    """
    return GeometryReprojector(transform).reproject(geometry)
