"""
Layer reprojection.

Reprojects every feature of a layer into a target WKID without touching
the input layer: the layer is validated, cloned, and the clone's feature
geometries, WKID, tolerance and metadata are rewritten.
"""

import logging
from datetime import datetime
from typing import Optional

from ogutils.core.config import settings
from ogutils.core.crs import zones
from ogutils.core.crs.transformer import TransformBuilder
from ogutils.core.errors import GeometryParseError
from ogutils.core.geometry.reprojector import GeometryReprojector
from ogutils.core.geometry.wkt import parse_wkt, to_wkt
from ogutils.models.crs import ProjectedDefinition
from ogutils.models.layer import OguFeature, OguLayer, OguLayerMetadata
from ogutils.utils.logging import PerformanceTimer

logger = logging.getLogger(__name__)


class LayerReprojector:
    """
    Reprojects whole layers between WKIDs.

    A feature whose geometry cannot be parsed is either left as it is and
    logged (``skip_invalid_geometries=True``) or aborts the whole run with
    ``GeometryParseError``. The input layer is never modified either way.
    """

    def __init__(
        self,
        builder: Optional[TransformBuilder] = None,
        skip_invalid_geometries: Optional[bool] = None,
    ):
        """
        Initialize reprojector.

        Args:
            builder: Transform builder; created lazily on first use
            skip_invalid_geometries: Skip features whose WKT fails to parse;
                defaults to ``settings.skip_invalid_geometries``
        """
        self._builder = builder
        self.skip_invalid_geometries = (
            settings.skip_invalid_geometries
            if skip_invalid_geometries is None
            else skip_invalid_geometries
        )

    @property
    def builder(self) -> TransformBuilder:
        if self._builder is None:
            self._builder = TransformBuilder()
        return self._builder

    def reproject(self, layer: OguLayer, target_wkid: int) -> OguLayer:
        """
        Reproject a layer into ``target_wkid``.

        Args:
            layer: Layer to reproject
            target_wkid: Target WKID

        Returns:
            A new layer in the target WKID, or ``layer`` itself when it is
            already in that WKID

        Raises:
            ValidationError: If the layer is incomplete
            UnsupportedCrsError: If either WKID cannot be resolved
            TransformConstructionError: If no transform can be built
            CRSError: If a coordinate cannot be projected
            GeometryParseError: If a geometry fails to parse and skipping
                is disabled
        """
        layer.validate_layer()

        source_wkid = layer.wkid
        if source_wkid == target_wkid:
            logger.debug(f"Layer '{layer.name}' already in WKID {target_wkid}")
            return layer

        transform = self.builder.build(source_wkid, target_wkid)

        with PerformanceTimer(f"Reproject layer '{layer.name}' {source_wkid} -> {target_wkid}"):
            result = layer.clone()
            reprojector = GeometryReprojector(transform)

            skipped = 0
            for feature in result.features:
                if not feature.has_geometry:
                    continue
                if not self._reproject_feature(feature, reprojector):
                    skipped += 1

            result.wkid = target_wkid
            result.tolerance = zones.tolerance(target_wkid)
            result.metadata = self._refresh_metadata(result.metadata, target_wkid)

        logger.info(
            f"Reprojected layer '{layer.name}' from {source_wkid} to {target_wkid}: "
            f"{result.feature_count() - skipped} features, {skipped} skipped"
        )
        return result

    def _reproject_feature(self, feature: OguFeature, reprojector: GeometryReprojector) -> bool:
        try:
            geometry = parse_wkt(feature.wkt, fid=feature.fid)
        except GeometryParseError as e:
            if not self.skip_invalid_geometries:
                raise
            logger.warning(f"Skipping feature {feature.fid}: {e.message}")
            return False

        feature.wkt = to_wkt(reprojector.reproject(geometry))
        return True

    def _refresh_metadata(
        self,
        metadata: Optional[OguLayerMetadata],
        target_wkid: int,
    ) -> OguLayerMetadata:
        definition = self.builder.registry.definition_for(target_wkid)
        metadata = metadata or OguLayerMetadata()

        metadata.coordinate_system_name = definition.name
        if isinstance(definition, ProjectedDefinition):
            metadata.zone_division = (
                str(definition.zone_width.value) if definition.zone_width else None
            )
            metadata.projection_type = definition.projection
            metadata.measure_unit = definition.linear_unit_name
        else:
            metadata.zone_division = None
            metadata.projection_type = None
            metadata.measure_unit = definition.angular_unit_name
        metadata.modify_time = datetime.now()

        return metadata


def reproject_layer(
    layer: OguLayer,
    target_wkid: int,
    skip_invalid_geometries: Optional[bool] = None,
) -> OguLayer:
    """
    Reproject a layer into ``target_wkid`` (convenience function).

    Args:
        layer: Layer to reproject
        target_wkid: Target WKID
        skip_invalid_geometries: Override ``settings.skip_invalid_geometries``

    Returns:
        Reprojected layer, or ``layer`` itself when no work is needed
    """
    reprojector = LayerReprojector(skip_invalid_geometries=skip_invalid_geometries)
    return reprojector.reproject(layer, target_wkid)
