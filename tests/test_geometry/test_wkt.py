"""
Tests for WKT parsing and serialization.
"""

import pytest
from shapely.geometry import Point, Polygon

from ogutils.core.errors import GeometryParseError
from ogutils.core.geometry.wkt import parse_wkt, to_wkt


class TestParseWkt:
    """Tests for parse_wkt."""

    def test_parse_point(self) -> None:
        """Test parsing a point."""
        geometry = parse_wkt("POINT (116.4 39.9)")

        assert isinstance(geometry, Point)
        assert geometry.x == 116.4

    def test_parse_polygon_with_hole(self) -> None:
        """Test parsing keeps interior rings."""
        geometry = parse_wkt(
            "POLYGON ((0 0, 10 0, 10 10, 0 10, 0 0), (2 2, 4 2, 4 4, 2 4, 2 2))"
        )

        assert isinstance(geometry, Polygon)
        assert len(geometry.interiors) == 1

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_blank_text(self, text) -> None:
        """Test blank text is rejected."""
        with pytest.raises(GeometryParseError, match="Empty geometry text"):
            parse_wkt(text)

    def test_malformed_text(self) -> None:
        """Test malformed WKT raises with the feature id attached."""
        with pytest.raises(GeometryParseError) as exc_info:
            parse_wkt("POLYGON ((0 0, 1 0", fid=7)

        assert exc_info.value.details["fid"] == 7
        assert exc_info.value.error_code == "GEOMETRY_PARSE_ERROR"

    def test_not_wkt(self) -> None:
        """Test arbitrary text is rejected."""
        with pytest.raises(GeometryParseError):
            parse_wkt("not a geometry")


class TestToWkt:
    """Tests for to_wkt."""

    def test_full_precision(self) -> None:
        """Test serialization does not round coordinates."""
        point = Point(39448712.123456789, 4418001.987654321)

        restored = parse_wkt(to_wkt(point))

        assert restored.x == point.x
        assert restored.y == point.y

    def test_trimmed_output(self) -> None:
        """Test integral values are written without trailing zeros."""
        assert to_wkt(Point(1, 2)) == "POINT (1 2)"
