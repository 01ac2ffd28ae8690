"""
Reprojection and measurement of geometries.

Every geometry kind is handled here, once: ``reproject`` translates a
geometry into another projection, ``bounding_box``, ``area`` and
``perimeter`` measure it.  Dispatch is on ``Geometry.kind``; a kind
without a branch is a programming error and raises ``UsageError``.
"""

import logging
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from geopoint.core.crs.registry import ProjectionLike, ProjectionRegistry, get_default_registry
from geopoint.core.crs.utm import best_utm_projection
from geopoint.core.errors import UsageError
from geopoint.core.geometry import kernel
from geopoint.core.geometry.base import Geometry, GeometryKind
from geopoint.core.geometry.point import Point
from geopoint.models.crs import ReferenceSystem

logger = logging.getLogger(__name__)

Coordinate = Tuple[float, float]
BBox = Tuple[float, float, float, float]

UTM = "utm"


def _target_nickname(target: ProjectionLike) -> str:
    return target.nickname if isinstance(target, ReferenceSystem) else target


def project_coordinates(
    source: str,
    target: ProjectionLike,
    coordinates: Sequence[Coordinate],
    registry: Optional[ProjectionRegistry] = None,
) -> Tuple[str, List[Coordinate]]:
    """
    Translate raw coordinates between projections.

    The returned nickname is usually the requested one, but for ``utm``
    it names the zone selected for the first coordinate.

    Args:
        source: Nickname the coordinates are expressed in
        target: Nickname, ReferenceSystem or ``utm``
        coordinates: (x, y) pairs

    Returns:
        Tuple of (resulting nickname, transformed coordinates)

    Raises:
        UnknownProjection: If a nickname is not registered
        ProjectionError: If the geodetic engine fails
    """
    registry = registry or get_default_registry()
    nickname = _target_nickname(target)

    if nickname == source:
        return source, list(coordinates)

    if nickname == UTM:
        if not coordinates:
            raise UsageError("cannot select a UTM zone without coordinates")
        x, y = coordinates[0]
        first = Point(x, y, source)
        nickname = best_utm_projection(first, base=registry.get(source), registry=registry).nickname
        logger.debug(f"Selected {nickname} for coordinates in {source}")
        if nickname == source:
            return source, list(coordinates)
    elif isinstance(target, ReferenceSystem) and registry.resolve(nickname) is None:
        # A system from elsewhere; register it under its own nickname
        registry.register(nickname, target.definition, target.srid, target.display_name)

    return nickname, registry.transform(source, nickname, coordinates)


def reproject(
    geometry: Geometry,
    target: ProjectionLike,
    registry: Optional[ProjectionRegistry] = None,
) -> Geometry:
    """
    Materialize an equivalent geometry in another projection.

    Returns the geometry itself when it is already in ``target``, without
    consulting the geodetic engine.  Otherwise a new geometry of the same
    kind and shape is returned, tagged with the resulting nickname.

    For surfaces and collections the first ring or component decides the
    nickname (relevant for ``utm``); the others follow it.
    """
    nickname = _target_nickname(target)
    if nickname == geometry.nickname:
        return geometry

    kind = geometry.kind
    source = geometry.nickname

    if kind is GeometryKind.POINT:
        nickname, ((x, y),) = project_coordinates(source, target, [geometry.xy()], registry)
        return replace(geometry, x=x, y=y, nickname=nickname)

    if kind is GeometryKind.LINE:
        nickname, points = project_coordinates(source, target, geometry.points, registry)
        return replace(geometry, points=tuple(points), nickname=nickname)

    if kind is GeometryKind.SURFACE:
        nickname, outer = project_coordinates(source, target, geometry.outer, registry)
        inner = tuple(
            tuple(project_coordinates(source, nickname, ring, registry)[1])
            for ring in geometry.inner
        )
        return replace(geometry, outer=tuple(outer), inner=inner, nickname=nickname)

    if kind is GeometryKind.COLLECTION:
        first, *rest = geometry.components
        first = reproject(first, target, registry)
        nickname = first.nickname
        components = (first, *(reproject(c, nickname, registry) for c in rest))
        return replace(geometry, components=components, nickname=nickname)

    raise UsageError(f"reprojection not implemented for {kind}")


def _is_empty(geometry: Geometry) -> bool:
    if geometry.kind is GeometryKind.LINE:
        return not geometry.points
    if geometry.kind is GeometryKind.COLLECTION:
        return all(_is_empty(c) for c in geometry.components)
    return False


def bounding_box(geometry: Geometry) -> BBox:
    """
    Bounding box (xmin, ymin, xmax, ymax) in the geometry's own projection.

    Collection boxes are the union of the component boxes; components are
    expected to share the collection projection already. Empty lines do not
    contribute.
    """
    kind = geometry.kind

    if kind is GeometryKind.POINT:
        return (geometry.x, geometry.y, geometry.x, geometry.y)

    if kind is GeometryKind.LINE:
        if not geometry.points:
            raise UsageError("bbox requires at least one point", geometry_type=kind.value)
        return kernel.ring_bbox(geometry.points)

    if kind is GeometryKind.SURFACE:
        return kernel.ring_bbox(geometry.outer)

    if kind is GeometryKind.COLLECTION:
        boxes = [bounding_box(c) for c in geometry.components if not _is_empty(c)]
        if not boxes:
            raise UsageError("bbox requires at least one point", geometry_type=kind.value)
        return (
            min(b[0] for b in boxes),
            min(b[1] for b in boxes),
            max(b[2] for b in boxes),
            max(b[3] for b in boxes),
        )

    raise UsageError(f"bbox not implemented for {kind}")


def area(geometry: Geometry) -> float:
    """
    Area of a geometry: zero for points, the enclosed area for rings,
    outer minus enclosures for surfaces, and the sum for collections.

    Raises:
        UsageError: For lines which are not a ring
    """
    kind = geometry.kind

    if kind is GeometryKind.POINT:
        return 0.0

    if kind is GeometryKind.LINE:
        if not geometry.is_ring:
            raise UsageError("area requires a ring of points", geometry_type=kind.value)
        return kernel.ring_area(geometry.points)

    if kind is GeometryKind.SURFACE:
        result = kernel.ring_area(geometry.outer)
        for ring in geometry.inner:
            result -= kernel.ring_area(ring)
        return result

    if kind is GeometryKind.COLLECTION:
        return sum(area(c) for c in geometry.components)

    raise UsageError(f"area not implemented for {kind}")


def perimeter(geometry: Geometry) -> float:
    """
    Length of the outer border: zero for points, the ring length for
    rings, the outer ring for surfaces, and the sum for collections.

    Raises:
        UsageError: For lines which are not a ring
    """
    kind = geometry.kind

    if kind is GeometryKind.POINT:
        return 0.0

    if kind is GeometryKind.LINE:
        if not geometry.is_ring:
            raise UsageError("perimeter requires a ring of points", geometry_type=kind.value)
        return kernel.line_length(geometry.points)

    if kind is GeometryKind.SURFACE:
        return kernel.line_length(geometry.outer)

    if kind is GeometryKind.COLLECTION:
        return sum(perimeter(c) for c in geometry.components)

    raise UsageError(f"perimeter not implemented for {kind}")
