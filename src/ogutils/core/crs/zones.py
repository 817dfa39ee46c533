"""
Gauss-Kruger zone indexing for CGCS2000.

This module maps between WKIDs, zone numbers and longitudes for the
CGCS2000 3-degree and 6-degree Gauss-Kruger zones, classifies WKIDs as
geographic or projected, and supplies the tolerance policy for each.

WKID scheme:
    4490                 CGCS2000 geographic
    4491-4501            6-degree zones 13-23   (wkid = zone + 4478)
    4512-4533            3-degree zones 24-45   (wkid = zone + 4488)
"""

import math
from typing import Dict, List, Tuple, Union

from ogutils.core.config import settings
from ogutils.core.errors import ConfigurationError, UnsupportedCrsError
from ogutils.models.crs import ZoneWidth

CGCS2000_WKID = 4490
WGS84_WKID = 4326
NAD83_WKID = 4269

GEOGRAPHIC_WKIDS = frozenset({CGCS2000_WKID, WGS84_WKID, NAD83_WKID})

# zone_width -> (wkid offset, first zone, last zone)
ZONE_SCHEMES: Dict[ZoneWidth, Tuple[int, int, int]] = {
    ZoneWidth.THREE_DEGREE: (4488, 24, 45),
    ZoneWidth.SIX_DEGREE: (4478, 13, 23),
}

# Below this WKID nothing is assumed to be projected
PROJECTED_WKID_HEURISTIC_THRESHOLD = 2000

ZONE_EASTING_FACTOR = 1_000_000
BASE_FALSE_EASTING = 500_000


def _wkid_range(zone_width: ZoneWidth) -> Tuple[int, int]:
    offset, first_zone, last_zone = ZONE_SCHEMES[zone_width]
    return first_zone + offset, last_zone + offset


def _check_schemes_disjoint() -> None:
    three_first, three_last = _wkid_range(ZoneWidth.THREE_DEGREE)
    six_first, six_last = _wkid_range(ZoneWidth.SIX_DEGREE)
    if three_first <= six_last and six_first <= three_last:
        raise ConfigurationError(
            "3-degree and 6-degree zone WKID ranges overlap",
            config_key="ZONE_SCHEMES",
        )


_check_schemes_disjoint()


def zone_from_longitude(
    longitude: float,
    zone_width: Union[ZoneWidth, int] = ZoneWidth.THREE_DEGREE,
) -> int:
    """
    Calculate the Gauss-Kruger zone number for a longitude.

    3-degree zones are centred on multiples of 3 degrees, so zone n covers
    [3n - 1.5, 3n + 1.5). 6-degree zones start at 0 degrees, so zone n
    covers [6n - 6, 6n).

    No range check is made against the supported zones.

    Args:
        longitude: Longitude in decimal degrees
        zone_width: Zone width, 3 or 6 degrees

    Returns:
        Zone number

    Raises:
        ValueError: If zone_width is neither 3 nor 6
    """
    zone_width = ZoneWidth(zone_width)
    if zone_width is ZoneWidth.THREE_DEGREE:
        return math.floor((longitude + 1.5) / 3)
    return math.floor(longitude / 6) + 1


def zone_from_wkid(wkid: int) -> int:
    """
    Get the zone number encoded by a projected WKID.

    The 3-degree range is tried first, then the 6-degree range.

    Args:
        wkid: Projected WKID

    Returns:
        Zone number

    Raises:
        UnsupportedCrsError: If the WKID is in no zone range, or in more
            than one
    """
    return _match_zone(wkid)[0]


def zone_width_from_wkid(wkid: int) -> ZoneWidth:
    """
    Get the zone width a projected WKID belongs to.

    Raises:
        UnsupportedCrsError: If the WKID is in no zone range
    """
    return _match_zone(wkid)[1]


def _match_zone(wkid: int) -> Tuple[int, ZoneWidth]:
    matches: List[Tuple[int, ZoneWidth]] = []
    for zone_width in (ZoneWidth.THREE_DEGREE, ZoneWidth.SIX_DEGREE):
        offset = ZONE_SCHEMES[zone_width][0]
        first_wkid, last_wkid = _wkid_range(zone_width)
        if first_wkid <= wkid <= last_wkid:
            matches.append((wkid - offset, zone_width))

    if not matches:
        raise UnsupportedCrsError(
            f"Cannot determine zone number from WKID {wkid}", wkid=wkid
        )
    if len(matches) > 1:
        raise UnsupportedCrsError(
            f"WKID {wkid} matches more than one zone scheme", wkid=wkid
        )
    return matches[0]


def wkid_from_zone(
    zone: int,
    zone_width: Union[ZoneWidth, int] = ZoneWidth.THREE_DEGREE,
) -> int:
    """
    Get the projected WKID for a zone number.

    Args:
        zone: Zone number (24-45 for 3-degree, 13-23 for 6-degree)
        zone_width: Zone width, 3 or 6 degrees

    Returns:
        Projected WKID

    Raises:
        UnsupportedCrsError: If the zone is outside the supported range
    """
    zone_width = ZoneWidth(zone_width)
    offset, first_zone, last_zone = ZONE_SCHEMES[zone_width]
    if not first_zone <= zone <= last_zone:
        raise UnsupportedCrsError(
            f"Invalid zone number {zone} for {zone_width.value}-degree zones, "
            f"expected {first_zone}-{last_zone}",
            zone=zone,
        )
    return zone + offset


def zone_wkids(zone_width: Union[ZoneWidth, int] = ZoneWidth.THREE_DEGREE) -> List[int]:
    """List every WKID of a zone scheme, in zone order."""
    first_wkid, last_wkid = _wkid_range(ZoneWidth(zone_width))
    return list(range(first_wkid, last_wkid + 1))


def central_meridian(
    zone: int,
    zone_width: Union[ZoneWidth, int] = ZoneWidth.THREE_DEGREE,
) -> float:
    """
    Calculate the central meridian of a zone.

    3-degree zones are centred on ``zone * 3``. 6-degree zones are centred
    on ``zone * 6 - 3`` rather than ``zone * 6``, so that the meridian falls
    inside the zone ``floor(lon / 6) + 1`` assigns (zone 20 -> 117 degrees).

    Args:
        zone: Zone number
        zone_width: Zone width, 3 or 6 degrees

    Returns:
        Central meridian in decimal degrees
    """
    zone_width = ZoneWidth(zone_width)
    if zone_width is ZoneWidth.THREE_DEGREE:
        return float(zone * 3)
    return float(zone * 6 - 3)


def false_easting(zone: int) -> float:
    """
    False easting with the zone number prefixed (zone 39 -> 39500000).
    """
    return float(zone * ZONE_EASTING_FACTOR + BASE_FALSE_EASTING)


def zone_from_easting(easting: float) -> int:
    """
    Read the zone number from the leading digits of a prefixed easting.

    Args:
        easting: Projected X coordinate with a zone-prefixed false easting

    Returns:
        Zone number

    Raises:
        UnsupportedCrsError: If the easting carries no zone prefix
    """
    if easting < 10 * ZONE_EASTING_FACTOR:
        raise UnsupportedCrsError(
            f"Easting {easting} carries no zone prefix"
        )
    return int(easting // ZONE_EASTING_FACTOR)


def is_geographic(wkid: int) -> bool:
    """Check whether a WKID is one of the known lon/lat systems."""
    return wkid in GEOGRAPHIC_WKIDS


def is_projected(wkid: int) -> bool:
    """
    Classify a WKID as projected.

    Known geographic WKIDs are never projected. Both Gauss-Kruger zone
    ranges and the WGS 84 UTM ranges are projected. Any other WKID falls
    back to a heuristic: WKIDs of 2000 and above are assumed projected.
    The fallback is a guess, not a guarantee.

    Args:
        wkid: Spatial reference identifier

    Returns:
        True if the WKID is (assumed to be) projected
    """
    if is_geographic(wkid):
        return False

    for zone_width in ZONE_SCHEMES:
        first_wkid, last_wkid = _wkid_range(zone_width)
        if first_wkid <= wkid <= last_wkid:
            return True

    # WGS 84 UTM north / south
    if 32601 <= wkid <= 32660 or 32701 <= wkid <= 32760:
        return True

    return wkid >= PROJECTED_WKID_HEURISTIC_THRESHOLD


def tolerance(wkid: int) -> float:
    """
    Recommended coordinate tolerance for a WKID.

    Degree-based systems get a far smaller tolerance than meter-based ones.

    Args:
        wkid: Spatial reference identifier

    Returns:
        Tolerance in the CRS's own units
    """
    if is_projected(wkid):
        return settings.projected_tolerance
    return settings.geographic_tolerance


def format_zone(zone: int, zone_width: Union[ZoneWidth, int] = ZoneWidth.THREE_DEGREE) -> str:
    """
    Format a zone as a short label, e.g. "3-degree zone 39".
    """
    return f"{ZoneWidth(zone_width).value}-degree zone {zone}"
