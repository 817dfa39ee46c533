"""
Data models for coordinate reference system definitions.

This module defines the textual, library-independent description of the
reference systems ogutils knows about: the CGCS2000 and WGS 84 geographic
systems and the CGCS2000 Gauss-Kruger zone projections synthesized from a
zone number. Each definition renders itself as OGC WKT1 for the projection
engine.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ZoneWidth(int, Enum):
    """Longitude width of a Gauss-Kruger zone, in degrees."""

    THREE_DEGREE = 3
    SIX_DEGREE = 6


def _format_number(value: float) -> str:
    """Render a WKT number without losing precision."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class EllipsoidDefinition:
    """
    Reference ellipsoid.

    Attributes:
        name: Ellipsoid name
        semi_major_axis: Semi-major axis in meters
        inverse_flattening: Inverse flattening (1/f)
    """

    name: str
    semi_major_axis: float
    inverse_flattening: float

    def to_wkt(self) -> str:
        return (
            f'SPHEROID["{self.name}",'
            f"{_format_number(self.semi_major_axis)},"
            f"{_format_number(self.inverse_flattening)}]"
        )


@dataclass(frozen=True)
class GeographicDefinition:
    """
    Geographic (longitude/latitude) coordinate system.

    Attributes:
        wkid: Spatial reference identifier
        name: Human-readable name
        datum_name: Geodetic datum name
        ellipsoid: Reference ellipsoid
        prime_meridian_name: Prime meridian name
        prime_meridian_longitude: Prime meridian offset from Greenwich, degrees
        angular_unit_name: Angular unit name
        angular_unit_factor: Radians per angular unit
    """

    wkid: int
    name: str
    datum_name: str
    ellipsoid: EllipsoidDefinition
    prime_meridian_name: str = "Greenwich"
    prime_meridian_longitude: float = 0.0
    angular_unit_name: str = "degree"
    angular_unit_factor: float = 0.0174532925199433

    @property
    def is_geographic(self) -> bool:
        return True

    def to_wkt(self) -> str:
        """Render as an OGC WKT1 GEOGCS string."""
        return (
            f'GEOGCS["{self.name}",'
            f'DATUM["{self.datum_name}",{self.ellipsoid.to_wkt()}],'
            f'PRIMEM["{self.prime_meridian_name}",'
            f"{_format_number(self.prime_meridian_longitude)}],"
            f'UNIT["{self.angular_unit_name}",'
            f"{_format_number(self.angular_unit_factor)}]]"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "wkid": self.wkid,
            "name": self.name,
            "datum": self.datum_name,
            "ellipsoid": self.ellipsoid.name,
            "semi_major_axis": self.ellipsoid.semi_major_axis,
            "inverse_flattening": self.ellipsoid.inverse_flattening,
            "is_geographic": True,
        }

    def __str__(self) -> str:
        return f"WKID:{self.wkid} ({self.name})"


@dataclass(frozen=True)
class ProjectedDefinition:
    """
    Transverse Mercator projection over a geographic base.

    The false easting carries the zone number in its leading digits
    (zone 39 -> 39500000), so a projected X value doubles as a zone tag.

    Attributes:
        wkid: Spatial reference identifier
        name: Human-readable name
        geographic: Geographic base system
        central_meridian: Central meridian, degrees
        false_easting: False easting, meters
        false_northing: False northing, meters
        latitude_of_origin: Latitude of origin, degrees
        scale_factor: Scale factor at the central meridian
        projection: Projection family name
        linear_unit_name: Linear unit name
        linear_unit_factor: Meters per linear unit
        zone: Zone number the projection was synthesized from
        zone_width: Zone width the projection was synthesized for
    """

    wkid: int
    name: str
    geographic: GeographicDefinition
    central_meridian: float
    false_easting: float
    false_northing: float = 0.0
    latitude_of_origin: float = 0.0
    scale_factor: float = 1.0
    projection: str = "Transverse_Mercator"
    linear_unit_name: str = "metre"
    linear_unit_factor: float = 1.0
    zone: Optional[int] = None
    zone_width: Optional[ZoneWidth] = None

    @property
    def is_geographic(self) -> bool:
        return False

    def to_wkt(self) -> str:
        """Render as an OGC WKT1 PROJCS string."""
        parameters = (
            ("latitude_of_origin", self.latitude_of_origin),
            ("central_meridian", self.central_meridian),
            ("scale_factor", self.scale_factor),
            ("false_easting", self.false_easting),
            ("false_northing", self.false_northing),
        )
        params_wkt = ",".join(
            f'PARAMETER["{name}",{_format_number(value)}]' for name, value in parameters
        )
        return (
            f'PROJCS["{self.name}",'
            f"{self.geographic.to_wkt()},"
            f'PROJECTION["{self.projection}"],'
            f"{params_wkt},"
            f'UNIT["{self.linear_unit_name}",{_format_number(self.linear_unit_factor)}]]'
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "wkid": self.wkid,
            "name": self.name,
            "geographic": self.geographic.to_dict(),
            "projection": self.projection,
            "latitude_of_origin": self.latitude_of_origin,
            "central_meridian": self.central_meridian,
            "scale_factor": self.scale_factor,
            "false_easting": self.false_easting,
            "false_northing": self.false_northing,
            "linear_unit": self.linear_unit_name,
            "zone": self.zone,
            "zone_width": self.zone_width.value if self.zone_width else None,
            "is_geographic": False,
        }

    def __str__(self) -> str:
        return f"WKID:{self.wkid} ({self.name})"


CGCS2000_ELLIPSOID = EllipsoidDefinition(
    name="CGCS2000",
    semi_major_axis=6378137.0,
    inverse_flattening=298.257222101,
)

WGS84_ELLIPSOID = EllipsoidDefinition(
    name="WGS 84",
    semi_major_axis=6378137.0,
    inverse_flattening=298.257223563,
)

CGCS2000_GEOGRAPHIC = GeographicDefinition(
    wkid=4490,
    name="China Geodetic Coordinate System 2000",
    datum_name="China_2000",
    ellipsoid=CGCS2000_ELLIPSOID,
)

WGS84_GEOGRAPHIC = GeographicDefinition(
    wkid=4326,
    name="WGS 84",
    datum_name="WGS_1984",
    ellipsoid=WGS84_ELLIPSOID,
)
