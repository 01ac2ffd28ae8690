"""
Geometries in a named projection.

Point, LineString, Surface and Collection are immutable; reprojection
and measurement are shared in the dispatch module.
"""

from geopoint.core.geometry.base import Geometry, GeometryKind
from geopoint.core.geometry.point import Point
from geopoint.core.geometry.line import LineString
from geopoint.core.geometry.surface import Surface
from geopoint.core.geometry.collection import Collection
from geopoint.core.geometry.dispatch import area, bounding_box, perimeter, reproject
from geopoint.core.geometry.distance import DistanceEngine, get_distance_engine

__all__ = [
    "Geometry",
    "GeometryKind",
    "Point",
    "LineString",
    "Surface",
    "Collection",
    "area",
    "bounding_box",
    "perimeter",
    "reproject",
    "DistanceEngine",
    "get_distance_engine",
]
