"""
Planar geometry kernel backed by shapely.

Only raw coordinate sequences pass through here; projections are the
caller's business.
"""

from typing import List, Sequence, Tuple

import shapely
from shapely.geometry import LineString as ShapelyLine
from shapely.geometry import MultiLineString, MultiPoint, MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry

Coordinate = Tuple[float, float]
BBox = Tuple[float, float, float, float]


def ring_bbox(points: Sequence[Coordinate]) -> BBox:
    """Bounding box (xmin, ymin, xmax, ymax) of a sequence of points."""
    xmin, ymin, xmax, ymax = MultiPoint(list(points)).bounds
    return (float(xmin), float(ymin), float(xmax), float(ymax))


def ring_area(points: Sequence[Coordinate]) -> float:
    """Area enclosed by a closed ring of points."""
    if len(points) < 3:
        return 0.0
    return float(Polygon(points).area)


def line_length(points: Sequence[Coordinate]) -> float:
    """Length of the line through the points, in coordinate units."""
    if len(points) < 2:
        return 0.0
    return float(ShapelyLine(points).length)


def _parts(geometry: BaseGeometry) -> List[BaseGeometry]:
    if geometry.is_empty:
        return []
    if isinstance(geometry, (MultiLineString, MultiPolygon)):
        return list(geometry.geoms)
    if hasattr(geometry, "geoms"):
        return [g for g in geometry.geoms if not g.is_empty]
    return [geometry]


def line_clip(points: Sequence[Coordinate], bbox: BBox) -> List[List[Coordinate]]:
    """
    Clip an open line to a box.

    Returns:
        The pieces of the line inside the box, possibly none
    """
    if len(points) < 2:
        return []
    clipped = shapely.clip_by_rect(ShapelyLine(points), *bbox)
    pieces = []
    for part in _parts(clipped):
        if isinstance(part, ShapelyLine):
            pieces.append([(float(x), float(y)) for x, y in part.coords])
    return pieces


def fill_clip(points: Sequence[Coordinate], bbox: BBox) -> List[List[Coordinate]]:
    """
    Clip a filled ring to a box.

    Returns:
        The exterior rings of the clipped polygons, possibly none
    """
    if len(points) < 3:
        return []
    clipped = shapely.clip_by_rect(Polygon(points), *bbox)
    rings = []
    for part in _parts(clipped):
        if isinstance(part, Polygon):
            rings.append([(float(x), float(y)) for x, y in part.exterior.coords])
    return rings
