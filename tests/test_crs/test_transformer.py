"""
Tests for coordinate transformation between WKIDs.
"""

from unittest.mock import MagicMock

import numpy as np
import pytest

from ogutils.core.crs import zones
from ogutils.core.crs.provider import CoordinateTransform
from ogutils.core.crs.registry import CrsRegistry
from ogutils.core.crs.transformer import (
    TransformBuilder,
    transform_coordinates,
    transform_wkt,
)
from ogutils.core.errors import CRSError, GeometryParseError, UnsupportedCrsError

BEIJING_LON, BEIJING_LAT = 116.4, 39.9


@pytest.fixture
def builder() -> TransformBuilder:
    """Builder over a private registry."""
    return TransformBuilder(registry=CrsRegistry())


class TestTransformBuilder:
    """Tests for TransformBuilder."""

    def test_geographic_to_zone_39(self, builder: TransformBuilder) -> None:
        """Test Beijing projects into zone 39 with a zone-prefixed easting."""
        transform = builder.build(4490, zones.wkid_from_zone(39))
        easting, northing = transform.transform(BEIJING_LON, BEIJING_LAT)

        assert str(int(easting)).startswith("39")
        assert 39_400_000 < easting < 39_500_000
        assert northing > 4_000_000
        assert 4_400_000 < northing < 4_450_000

    def test_zone_to_geographic(self, builder: TransformBuilder) -> None:
        """Test inverse projection back to lon/lat."""
        transform = builder.build(4527, 4490)
        lon, lat = transform.transform(39_500_000.0, 4_420_000.0)

        assert lon == pytest.approx(117.0, abs=1e-9)
        assert 39.0 < lat < 40.5

    def test_round_trip_within_tolerance(self, builder: TransformBuilder) -> None:
        """Test forward then inverse returns the original coordinates."""
        forward = builder.build(4490, 4527)
        backward = builder.build(4527, 4490)

        easting, northing = forward.transform(BEIJING_LON, BEIJING_LAT)
        lon, lat = backward.transform(easting, northing)

        assert abs(lon - BEIJING_LON) < zones.tolerance(4490)
        assert abs(lat - BEIJING_LAT) < zones.tolerance(4490)

    def test_six_and_three_degree_share_meridian(self, builder: TransformBuilder) -> None:
        """Test 6-degree zone 20 and 3-degree zone 39 differ only by false easting."""
        three = builder.build(4490, 4527).transform(BEIJING_LON, BEIJING_LAT)
        six = builder.build(4490, 4498).transform(BEIJING_LON, BEIJING_LAT)

        assert three[0] - six[0] == pytest.approx(19_000_000.0, abs=1e-4)
        assert three[1] == pytest.approx(six[1], abs=1e-4)

    def test_zone_to_zone(self, builder: TransformBuilder) -> None:
        """Test reprojection between neighbouring zones."""
        transform = builder.build(4527, 4528)
        easting, _ = transform.transform(39_448_000.0, 4_420_000.0)

        assert str(int(easting)).startswith("40")

    def test_z_passed_through(self, builder: TransformBuilder) -> None:
        """Test z values are not transformed."""
        result = builder.build(4490, 4527).transform(BEIJING_LON, BEIJING_LAT, 43.5)

        assert len(result) == 3
        assert result[2] == 43.5

    def test_unsupported_wkid(self, builder: TransformBuilder) -> None:
        """Test unresolvable WKIDs fail before any transform is built."""
        with pytest.raises(UnsupportedCrsError):
            builder.build(4490, 9999)

    def test_transforms_cached(self, builder: TransformBuilder) -> None:
        """Test the same pair yields the same transform when caching."""
        first = builder.build(4490, 4527)
        second = builder.build(4490, 4527)

        assert first is second
        assert isinstance(first, CoordinateTransform)
        assert first.source_wkid == 4490
        assert first.target_wkid == 4527

    def test_cache_disabled(self) -> None:
        """Test a fresh transform is built per call without caching."""
        builder = TransformBuilder(registry=CrsRegistry(), cache_transforms=False)

        assert builder.build(4490, 4527) is not builder.build(4490, 4527)

    def test_clear(self, builder: TransformBuilder) -> None:
        """Test clearing the transform cache."""
        first = builder.build(4490, 4527)
        builder.clear()

        assert builder.build(4490, 4527) is not first


class TestCoordinateTransform:
    """Tests for CoordinateTransform batch operations."""

    def test_transform_batch(self, builder: TransformBuilder) -> None:
        """Test batch transformation matches single-point results."""
        transform = builder.build(4490, 4527)
        lons = [116.0, 116.4, 117.0]
        lats = [39.0, 39.9, 40.5]

        xx, yy = transform.transform_batch(lons, lats)

        assert isinstance(xx, np.ndarray)
        assert len(xx) == 3
        for i in range(3):
            x, y = transform.transform(lons[i], lats[i])
            assert xx[i] == pytest.approx(x)
            assert yy[i] == pytest.approx(y)

    def test_central_meridian_at_false_easting(self, builder: TransformBuilder) -> None:
        """Test points on the central meridian land on the false easting."""
        transform = builder.build(4490, 4527)
        xx, _ = transform.transform_batch([117.0, 117.0], [30.0, 45.0])

        assert np.allclose(xx, 39_500_000.0, atol=1e-6)

    def test_transform_batch_length_mismatch(self, builder: TransformBuilder) -> None:
        """Test mismatched arrays are rejected."""
        transform = builder.build(4490, 4527)

        with pytest.raises(CRSError, match="same length"):
            transform.transform_batch([116.0, 117.0], [39.0])

    def test_transform_coords_keeps_dimensions(self, builder: TransformBuilder) -> None:
        """Test coordinate sequences keep order, count and z."""
        transform = builder.build(4490, 4527)
        coords = [(116.0, 39.0, 1.0), (116.5, 39.5, 2.0), (117.0, 40.0, 3.0)]

        result = transform.transform_coords(coords)

        assert len(result) == 3
        assert [c[2] for c in result] == [1.0, 2.0, 3.0]
        assert result[0][0] < result[1][0] < result[2][0]

    def test_transform_coords_empty(self, builder: TransformBuilder) -> None:
        """Test empty sequences transform to empty lists."""
        assert builder.build(4490, 4527).transform_coords([]) == []

    def test_out_of_domain_point_raises(self, builder: TransformBuilder) -> None:
        """Test a latitude beyond 90 degrees fails instead of yielding infinity."""
        transform = builder.build(4490, 4527)

        with pytest.raises(CRSError) as exc_info:
            transform.transform(116.4, 95.0)

        assert exc_info.value.details == {"source_wkid": 4490, "target_wkid": 4527}

    def test_out_of_domain_batch_raises(self, builder: TransformBuilder) -> None:
        """Test one bad coordinate fails the whole batch."""
        transform = builder.build(4490, 4527)

        with pytest.raises(CRSError):
            transform.transform_coords([(116.0, 39.0), (116.4, 95.0)])

    def test_non_finite_result_raises(self) -> None:
        """Test infinite output from the engine is reported as a failure."""
        transformer = MagicMock()
        transformer.transform.return_value = (
            np.array([39_500_000.0, np.inf]),
            np.array([4_420_000.0, np.inf]),
        )
        transform = CoordinateTransform(transformer, source_wkid=4490, target_wkid=4527)

        with pytest.raises(CRSError, match="non-finite"):
            transform.transform_batch([117.0, 116.4], [39.9, 95.0])

        transformer.transform.assert_called_once()
        assert transformer.transform.call_args.kwargs == {"errcheck": True}


class TestConvenienceFunctions:
    """Tests for transform_coordinates and transform_wkt."""

    def test_transform_coordinates(self, builder: TransformBuilder) -> None:
        """Test single coordinate conversion."""
        x, y = transform_coordinates(BEIJING_LON, BEIJING_LAT, 4490, 4527, builder=builder)

        assert str(int(x)).startswith("39")
        assert y > 4_000_000

    def test_transform_coordinates_identity(self) -> None:
        """Test identical WKIDs never touch the builder."""
        mock_builder = MagicMock(spec=TransformBuilder)

        result = transform_coordinates(1.5, 2.5, 4527, 4527, z=3.0, builder=mock_builder)

        assert result == (1.5, 2.5, 3.0)
        mock_builder.build.assert_not_called()

    def test_transform_wkt(self, builder: TransformBuilder) -> None:
        """Test WKT in, WKT out."""
        result = transform_wkt(
            f"POINT ({BEIJING_LON} {BEIJING_LAT})", 4490, 4527, builder=builder
        )

        assert result.startswith("POINT (39")

    def test_transform_wkt_identity(self) -> None:
        """Test identical WKIDs return the text as given."""
        mock_builder = MagicMock(spec=TransformBuilder)
        text = "LINESTRING (116 39, 117 40)"

        assert transform_wkt(text, 4490, 4490, builder=mock_builder) is text
        mock_builder.build.assert_not_called()

    def test_transform_wkt_invalid(self) -> None:
        """Test unparseable WKT is reported even when WKIDs match."""
        with pytest.raises(GeometryParseError):
            transform_wkt("POINT (116", 4490, 4490)
