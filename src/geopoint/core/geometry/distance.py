"""
Great-circle distances between latitude/longitude pairs.

Distances in length units are delegated to ``pyproj.Geod``: a sphere for
``haversine`` and the WGS84 ellipsoid for ``geodesic``.  The ``degrees``
and ``radians`` units are answered from the central angle directly.
"""

import math
from typing import Dict, Optional, Tuple

from pyproj import Geod

from geopoint.core.config import settings
from geopoint.core.errors import UsageError

# Mean Earth radius (IUGG), used for the spherical model
EARTH_RADIUS_M = 6371008.8

METERS_PER_UNIT: Dict[str, float] = {
    "meter": 1.0,
    "metre": 1.0,
    "m": 1.0,
    "kilometer": 1000.0,
    "kilometre": 1000.0,
    "mile": 1609.344,
    "nautical_mile": 1852.0,
    "yard": 0.9144,
    "foot": 0.3048,
}

UNIT_ALIASES: Dict[str, str] = {
    "km": "kilometer",
    "meters": "meter",
    "kilometers": "kilometer",
    "miles": "mile",
    "feet": "foot",
}

ANGULAR_UNITS = ("degrees", "radians")

LatLong = Tuple[float, float]


def central_angle(here: LatLong, there: LatLong) -> float:
    """Angle between two latitude/longitude pairs seen from the earth center, in radians."""
    lat1, lon1 = map(math.radians, here)
    lat2, lon2 = map(math.radians, there)
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * math.asin(min(1.0, math.sqrt(a)))


class DistanceEngine:
    """
    Computes distances with a fixed great-circle method.

    Args:
        method: ``haversine`` (spherical) or ``geodesic`` (WGS84 ellipsoid)
    """

    METHODS = ("haversine", "geodesic")

    def __init__(self, method: str = "haversine"):
        if method not in self.METHODS:
            raise UsageError(f"unknown distance method {method}")
        self.method = method
        if method == "haversine":
            self.geod = Geod(a=EARTH_RADIUS_M, b=EARTH_RADIUS_M)
        else:
            self.geod = Geod(ellps="WGS84")

    def distance(self, unit: str, here: LatLong, there: LatLong) -> float:
        """
        Distance between two (lat, long) pairs in the same geographic system.

        Args:
            unit: Length unit, ``km`` alias, or ``degrees``/``radians``
            here: First (latitude, longitude)
            there: Second (latitude, longitude)

        Raises:
            UsageError: For unknown units
        """
        unit = UNIT_ALIASES.get(unit, unit)

        if unit in ANGULAR_UNITS:
            angle = central_angle(here, there)
            return math.degrees(angle) if unit == "degrees" else angle

        if unit not in METERS_PER_UNIT:
            raise UsageError(
                f"unknown distance unit {unit}",
                details={"known_units": sorted(METERS_PER_UNIT) + list(ANGULAR_UNITS)},
            )

        (lat1, lon1), (lat2, lon2) = here, there
        _az12, _az21, meters = self.geod.inv(lon1, lat1, lon2, lat2)
        return float(meters) / METERS_PER_UNIT[unit]


_engine: Optional[DistanceEngine] = None


def get_distance_engine() -> DistanceEngine:
    """Shared engine using the configured distance method."""
    global _engine
    if _engine is None or _engine.method != settings.distance_method:
        _engine = DistanceEngine(settings.distance_method)
    return _engine
