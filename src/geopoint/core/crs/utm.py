"""
UTM zone selection.

This module figures out which UTM zone suits a point best and builds
the matching projection through the registry.
"""

import math
import re
from typing import TYPE_CHECKING, Optional, Tuple

from geopoint.core.crs.registry import ProjectionLike, ProjectionRegistry, get_default_registry
from geopoint.models.crs import ReferenceSystem

if TYPE_CHECKING:
    from geopoint.core.geometry.point import Point

# Latitude bands from south to north, 8 degrees each; X is stretched to 84N
UTM_BANDS = "CDEFGHJKLMNPQRSTUVWXX"

ZONE_PATTERN = re.compile(r"^(\d\d?)([C-HJ-NP-X])?$", re.IGNORECASE)


def utm_letter(latitude: float) -> str:
    """
    Get the UTM latitude band letter.

    Args:
        latitude: Latitude in decimal degrees

    Returns:
        Letter designator (C-X), or an empty string outside 80S..84N
    """
    if latitude < -80 or latitude > 84:
        return ""
    return UTM_BANDS[int((latitude + 80) / 8)]


def zone_for_longlat(longitude: float, latitude: float) -> Tuple[int, str, int]:
    """
    Compute the UTM zone for a longitude/latitude pair.

    Zones are 6 degrees wide.  Two irregular areas are handled:

    - Norway (56N to 64N): 3E to 12E is zone 32
    - Svalbard (72N to 84N): 0E-9E is 31, 9E-21E is 33, 21E-33E is 35,
      33E-42E is 37

    Args:
        longitude: Longitude in decimal degrees
        latitude: Latitude in decimal degrees

    Returns:
        Tuple of (zone_number, zone_letter, central_meridian)
    """
    zone: Optional[int] = None

    if 56 <= latitude < 64:
        if 3 <= longitude < 12:
            zone = 32
    elif 72 <= latitude < 84:
        if 0 <= longitude < 9:
            zone = 31
        elif 9 <= longitude < 21:
            zone = 33
        elif 21 <= longitude < 33:
            zone = 35
        elif 33 <= longitude < 42:
            zone = 37

    # int() truncates toward zero, so the meridian is sign adjusted
    meridian = int(longitude / 6) * 6 + (-3 if longitude < 0 else 3)
    if zone is None:
        zone = math.floor(meridian / 6) + 31

    return zone, utm_letter(latitude), meridian


def zone_for(point: "Point", registry: Optional[ProjectionRegistry] = None) -> Tuple[int, str, int]:
    """
    Compute the best UTM zone for a point.

    Points in a planar system are first reprojected into a geographic
    system of the same registry.

    Returns:
        Tuple of (zone_number, zone_letter, central_meridian)
    """
    registry = registry or get_default_registry()
    system = registry.resolve(point.nickname)
    if system is not None and not system.is_geographic:
        point = point.to(registry.geographic().nickname, registry=registry)

    longitude, latitude = point.longlat()
    return zone_for_longlat(longitude, latitude)


def best_utm_projection(
    point: "Point",
    base: Optional[ProjectionLike] = None,
    registry: Optional[ProjectionRegistry] = None,
) -> ReferenceSystem:
    """
    Returns the best UTM projection for a point.

    Args:
        point: Point to find the zone for
        base: Datum name, nickname or ReferenceSystem providing the
            datum; defaults to the point's own projection
        registry: Registry to register the UTM projection in

    Example:
        >>> best_utm_projection(Point.from_longlat(2.234, 52.12)).nickname
        'utm-wgs84-31'
    """
    registry = registry or get_default_registry()
    if base is None:
        base = registry.resolve(point.nickname)

    zone, _letter, _meridian = zone_for(point, registry=registry)
    return registry.synthesize_utm(base, zone)


def parse_utm_zone(text: str) -> Optional[Tuple[int, str]]:
    """
    Recognize a UTM zone like ``31``, ``31n`` or ``7X``.

    Returns:
        Tuple of (zone_number, band_letter) or None when the text is no zone;
        the number is not range checked
    """
    match = ZONE_PATTERN.match(text)
    if not match:
        return None
    return int(match.group(1)), (match.group(2) or "").upper()
