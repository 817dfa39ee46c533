"""
Projection engine seam.

``CrsProvider`` is the capability the registry and the transform builder
depend on: turn a textual CRS definition into an opaque handle, and turn
two handles into a coordinate transform. ``PyprojCrsProvider`` is the
pyproj-backed implementation used by default.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, Tuple, Union

import numpy as np
from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError as ProjCRSError
from pyproj.exceptions import ProjError

from ogutils.core.errors import CRSError, TransformConstructionError
from ogutils.models.crs import GeographicDefinition, ProjectedDefinition

logger = logging.getLogger(__name__)

CrsDefinition = Union[GeographicDefinition, ProjectedDefinition]


class CoordinateTransform:
    """
    Maps coordinates from one CRS to another.

    Only x and y are projected; any z ordinate is passed through unchanged.
    Axis order is always x, y (longitude, latitude for geographic systems).
    """

    def __init__(
        self,
        transformer: Transformer,
        source_wkid: Optional[int] = None,
        target_wkid: Optional[int] = None,
    ):
        self.transformer = transformer
        self.source_wkid = source_wkid
        self.target_wkid = target_wkid

    def transform(self, x: float, y: float, z: Optional[float] = None) -> Tuple[float, ...]:
        """
        Transform a single coordinate.

        Args:
            x: X coordinate (or longitude)
            y: Y coordinate (or latitude)
            z: Z coordinate, returned as given

        Returns:
            Transformed coordinates as tuple (x, y) or (x, y, z)

        Raises:
            CRSError: If the projection library fails
        """
        try:
            xx, yy = self.transformer.transform(x, y, errcheck=True)
        except ProjError as e:
            raise CRSError(
                f"Transformation failed: {e}",
                source_wkid=self.source_wkid,
                target_wkid=self.target_wkid,
            ) from e

        if not (np.isfinite(xx) and np.isfinite(yy)):
            raise CRSError(
                f"Transformation of ({x}, {y}) produced non-finite coordinates",
                source_wkid=self.source_wkid,
                target_wkid=self.target_wkid,
            )

        if z is not None:
            return (float(xx), float(yy), z)
        return (float(xx), float(yy))

    def transform_batch(
        self,
        x_coords: Union[Sequence[float], np.ndarray],
        y_coords: Union[Sequence[float], np.ndarray],
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Transform arrays of x and y coordinates.

        Args:
            x_coords: X coordinates (or longitudes)
            y_coords: Y coordinates (or latitudes)

        Returns:
            Tuple of transformed coordinate arrays (xx, yy)

        Raises:
            CRSError: If the arrays differ in length or the library fails
        """
        x_arr = np.asarray(x_coords, dtype=float)
        y_arr = np.asarray(y_coords, dtype=float)

        if len(x_arr) != len(y_arr):
            raise CRSError("x_coords and y_coords must have same length")

        try:
            xx, yy = self.transformer.transform(x_arr, y_arr, errcheck=True)
        except ProjError as e:
            raise CRSError(
                f"Batch transformation failed: {e}",
                source_wkid=self.source_wkid,
                target_wkid=self.target_wkid,
            ) from e

        xx = np.asarray(xx, dtype=float)
        yy = np.asarray(yy, dtype=float)
        if not (np.isfinite(xx).all() and np.isfinite(yy).all()):
            raise CRSError(
                "Batch transformation produced non-finite coordinates",
                source_wkid=self.source_wkid,
                target_wkid=self.target_wkid,
            )

        return xx, yy

    def transform_coords(self, coords: Sequence[Sequence[float]]) -> List[Tuple[float, ...]]:
        """
        Transform a coordinate sequence, keeping order, count and any z.

        Args:
            coords: Sequence of (x, y) or (x, y, z) tuples

        Returns:
            List of transformed tuples with the same dimensionality
        """
        coords = list(coords)
        if not coords:
            return []

        xs = [coord[0] for coord in coords]
        ys = [coord[1] for coord in coords]
        xx, yy = self.transform_batch(xs, ys)

        return [
            (float(x), float(y), *coord[2:])
            for x, y, coord in zip(xx, yy, coords)
        ]

    def __repr__(self) -> str:
        return f"CoordinateTransform({self.source_wkid} -> {self.target_wkid})"


class CrsProvider(ABC):
    """Abstract projection engine."""

    @abstractmethod
    def create_crs(self, definition: CrsDefinition) -> Any:
        """
        Materialize a CRS definition.

        Args:
            definition: Geographic or projected definition

        Returns:
            Opaque, immutable CRS handle

        Raises:
            TransformConstructionError: If the engine rejects the definition
        """
        pass

    @abstractmethod
    def create_transform(
        self,
        source: Any,
        target: Any,
        source_wkid: Optional[int] = None,
        target_wkid: Optional[int] = None,
    ) -> CoordinateTransform:
        """
        Build a transform between two CRS handles.

        Raises:
            TransformConstructionError: If no transform can be built
        """
        pass


class PyprojCrsProvider(CrsProvider):
    """CRS provider backed by pyproj / PROJ."""

    def create_crs(self, definition: CrsDefinition) -> CRS:
        wkt = definition.to_wkt()
        try:
            crs = CRS.from_wkt(wkt)
        except ProjCRSError as e:
            logger.error(f"PROJ rejected definition for WKID {definition.wkid}: {e}")
            raise TransformConstructionError(
                f"Failed to build CRS for WKID {definition.wkid}: {e}",
                details={"wkt": wkt},
            ) from e

        logger.debug(f"Materialized CRS {definition}")
        return crs

    def create_transform(
        self,
        source: CRS,
        target: CRS,
        source_wkid: Optional[int] = None,
        target_wkid: Optional[int] = None,
    ) -> CoordinateTransform:
        try:
            transformer = Transformer.from_crs(source, target, always_xy=True)
        except (ProjCRSError, ProjError) as e:
            raise TransformConstructionError(
                f"Failed to create transformer: {e}",
                source_wkid=source_wkid,
                target_wkid=target_wkid,
            ) from e

        return CoordinateTransform(transformer, source_wkid=source_wkid, target_wkid=target_wkid)
