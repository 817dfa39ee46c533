"""
Coordinate transformation between WKIDs.

This module resolves source and target WKIDs through the CRS registry and
asks the projection engine for a CoordinateTransform between them.
"""

import logging
import threading
from typing import Dict, Optional, Tuple

from ogutils.core.config import settings
from ogutils.core.crs.provider import CoordinateTransform, CrsProvider
from ogutils.core.crs.registry import CrsRegistry, get_default_registry
from ogutils.core.geometry.reprojector import reproject_geometry
from ogutils.core.geometry.wkt import parse_wkt, to_wkt
from ogutils.utils.logging import log_performance

logger = logging.getLogger(__name__)


class TransformBuilder:
    """
    Builds CoordinateTransforms between two WKIDs.

    Callers are expected to skip ``build`` when source and target are the
    same WKID; ``build`` itself always constructs a transform.
    """

    def __init__(
        self,
        registry: Optional[CrsRegistry] = None,
        provider: Optional[CrsProvider] = None,
        cache_transforms: Optional[bool] = None,
    ):
        """
        Initialize builder.

        Args:
            registry: CRS registry; defaults to the shared registry
            provider: Projection engine; defaults to the registry's provider
            cache_transforms: Reuse transforms per (source, target) pair;
                defaults to ``settings.cache_transforms``
        """
        self.registry = registry or get_default_registry()
        self.provider = provider or self.registry.provider
        self.cache_transforms = (
            settings.cache_transforms if cache_transforms is None else cache_transforms
        )
        self._transforms: Dict[Tuple[int, int], CoordinateTransform] = {}
        self._lock = threading.Lock()

    @log_performance(threshold_ms=50)
    def build(self, source_wkid: int, target_wkid: int) -> CoordinateTransform:
        """
        Build a transform from ``source_wkid`` to ``target_wkid``.

        Args:
            source_wkid: Source WKID
            target_wkid: Target WKID

        Returns:
            CoordinateTransform

        Raises:
            UnsupportedCrsError: If either WKID cannot be resolved
            TransformConstructionError: If the engine cannot build the transform
        """
        key = (source_wkid, target_wkid)
        if self.cache_transforms:
            cached = self._transforms.get(key)
            if cached is not None:
                return cached

        source = self.registry.get(source_wkid)
        target = self.registry.get(target_wkid)

        transform = self.provider.create_transform(
            source,
            target,
            source_wkid=source_wkid,
            target_wkid=target_wkid,
        )
        logger.debug(f"Built transform {source_wkid} -> {target_wkid}")

        if self.cache_transforms:
            with self._lock:
                transform = self._transforms.setdefault(key, transform)

        return transform

    def clear(self) -> None:
        """Drop cached transforms."""
        with self._lock:
            self._transforms.clear()


def transform_coordinates(
    x: float,
    y: float,
    source_wkid: int,
    target_wkid: int,
    z: Optional[float] = None,
    builder: Optional[TransformBuilder] = None,
) -> Tuple[float, ...]:
    """
    Transform a single coordinate between WKIDs (convenience function).

    Args:
        x: X coordinate (or longitude)
        y: Y coordinate (or latitude)
        source_wkid: Source WKID
        target_wkid: Target WKID
        z: Z coordinate, passed through
        builder: TransformBuilder to use

    Returns:
        Transformed coordinates
    """
    if source_wkid == target_wkid:
        return (x, y) if z is None else (x, y, z)

    builder = builder or TransformBuilder()
    return builder.build(source_wkid, target_wkid).transform(x, y, z)


def transform_wkt(
    wkt: str,
    source_wkid: int,
    target_wkid: int,
    builder: Optional[TransformBuilder] = None,
) -> str:
    """
    Transform a WKT geometry string between WKIDs.

    Args:
        wkt: Geometry as WKT
        source_wkid: Source WKID
        target_wkid: Target WKID
        builder: TransformBuilder to use

    Returns:
        Transformed WKT; the input text itself when the WKIDs are equal

    Raises:
        GeometryParseError: If the WKT cannot be parsed
        UnsupportedCrsError: If either WKID cannot be resolved
    """
    geometry = parse_wkt(wkt)
    if source_wkid == target_wkid:
        return wkt

    builder = builder or TransformBuilder()
    transform = builder.build(source_wkid, target_wkid)
    return to_wkt(reproject_geometry(geometry, transform))
