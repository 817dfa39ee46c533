"""
WKT parsing and serialization on top of shapely.
"""

import logging
from typing import Optional

from shapely import wkt as shapely_wkt
from shapely.errors import ShapelyError
from shapely.geometry.base import BaseGeometry

from ogutils.core.errors import GeometryParseError

logger = logging.getLogger(__name__)


def parse_wkt(text: Optional[str], fid: Optional[int] = None) -> BaseGeometry:
    """
    Parse WKT text into a shapely geometry.

    Args:
        text: WKT string
        fid: Feature id, reported in the error when parsing fails

    Returns:
        Shapely geometry

    Raises:
        GeometryParseError: If the text is blank or not valid WKT
    """
    if text is None or not text.strip():
        raise GeometryParseError("Empty geometry text", fid=fid)

    try:
        return shapely_wkt.loads(text)
    except (ShapelyError, ValueError, TypeError) as e:
        raise GeometryParseError(
            f"Failed to parse WKT: {e}",
            fid=fid,
            details={"wkt": text[:200]},
        ) from e


def to_wkt(geometry: BaseGeometry) -> str:
    """
    Serialize a geometry to WKT at full precision.

    Coordinates are written with round-trip precision, so parsing the
    result gives back the same floating point values.
    """
    return shapely_wkt.dumps(geometry, trim=True, rounding_precision=-1)
