"""
Common behaviour of all geometries.

A geometry is one of four closed variants, identified by ``kind``.  The
projection-dependent work is implemented once in
``geopoint.core.geometry.dispatch`` and reached through the methods here.
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional, Tuple

from geopoint.core.config import settings
from geopoint.core.crs.registry import ProjectionLike, ProjectionRegistry, get_default_registry
from geopoint.models.crs import BoundingBox

if TYPE_CHECKING:
    from geopoint.core.geometry.line import LineString
    from geopoint.core.geometry.point import Point


class GeometryKind(str, Enum):
    """The geometry variants."""

    POINT = "point"
    LINE = "line"
    SURFACE = "surface"
    COLLECTION = "collection"


def default_nickname(registry: Optional[ProjectionRegistry] = None) -> str:
    """Nickname of the default projection of a registry."""
    from geopoint.core.errors import UnknownProjection

    system = (registry or get_default_registry()).default()
    if system is None:
        raise UnknownProjection(None)
    return system.nickname


class Geometry:
    """
    Base class of Point, LineString, Surface and Collection.

    Subclasses are frozen dataclasses with a ``nickname`` field naming
    their projection.
    """

    kind: GeometryKind
    nickname: str

    def to(self, target: ProjectionLike, registry: Optional[ProjectionRegistry] = None):
        """
        The same geometry in another projection.

        When simply ``utm`` is given, the best UTM zone for the first point
        is selected.  Returns ``self`` when nothing needs to change.
        """
        from geopoint.core.geometry import dispatch

        return dispatch.reproject(self, target, registry=registry)

    def bbox(self) -> Tuple[float, float, float, float]:
        """Bounding box as (xmin, ymin, xmax, ymax) in the own projection."""
        from geopoint.core.geometry import dispatch

        return dispatch.bounding_box(self)

    def bounding_box(self) -> BoundingBox:
        return BoundingBox(*self.bbox(), nickname=self.nickname)

    def area(self) -> float:
        """
        Area covered by the geometry.

        Only meaningful in a planar projection; in a geographic one the
        result is in squared degrees and mostly useless.
        """
        from geopoint.core.geometry import dispatch

        return dispatch.area(self)

    def perimeter(self) -> float:
        """Length of the outer border, only meaningful in a planar projection."""
        from geopoint.core.geometry import dispatch

        return dispatch.perimeter(self)

    def bbox_ring(self) -> "LineString":
        """The bounding box as a ring, counter-clockwise and left-bottom first."""
        from geopoint.core.geometry.line import LineString

        return LineString.from_bbox(*self.bbox(), nickname=self.nickname)

    def bbox_center(self) -> "Point":
        """
        The center of the bounding box.

        The center in one projection may be far from the center in another.
        """
        from geopoint.core.geometry.point import Point

        xmin, ymin, xmax, ymax = self.bbox()
        return Point((xmin + xmax) / 2, (ymin + ymax) / 2, self.nickname)

    def distance(
        self,
        other: "Geometry",
        unit: Optional[str] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> float:
        """
        Distance between this geometry and another.

        Only point to point distances are supported.  The default unit is
        kilometer; ``degrees``, ``radians`` and ``km`` are accepted as well.

        Raises:
            UsageError: For geometry combinations which are not supported
        """
        from geopoint.core.errors import UsageError
        from geopoint.core.geometry.distance import get_distance_engine

        unit = unit or settings.distance_unit
        if other.nickname != self.nickname:
            other = other.to(self.nickname, registry=registry)

        if self.kind is not GeometryKind.POINT or other.kind is not GeometryKind.POINT:
            raise UsageError(
                f"distance calculation not implemented between a "
                f"{self.kind.value} and a {other.kind.value}",
                geometry_type=self.kind.value,
            )

        geographic = (registry or get_default_registry()).geographic(settings.distance_nickname)
        here = self.to(geographic.nickname, registry=registry)
        there = other.to(geographic.nickname, registry=registry)
        return get_distance_engine().distance(unit, here.latlong(), there.latlong())

    def to_string(self, target: Optional[ProjectionLike] = None) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.to_string()
