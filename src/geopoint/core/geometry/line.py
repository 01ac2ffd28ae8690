"""
A sequence of connected points.

Lines, rings and filled rings share this class; ``ring`` and ``filled``
tell them apart.  All points of a line are in the line's projection.
"""

from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Sequence, Tuple, Union

from geopoint.core.crs.registry import ProjectionLike, ProjectionRegistry
from geopoint.core.geometry import kernel
from geopoint.core.geometry.base import Geometry, GeometryKind, default_nickname
from geopoint.core.geometry.point import Point, PointLike
from geopoint.models.crs import ReferenceSystem

Coordinate = Tuple[float, float]


def _coordinates(
    points: Sequence[PointLike],
    nickname: str,
    registry: Optional[ProjectionRegistry] = None,
) -> Tuple[Coordinate, ...]:
    coords = []
    for p in points:
        if isinstance(p, Point):
            if p.nickname != nickname:
                p = p.to(nickname, registry=registry)
            coords.append((p.x, p.y))
        else:
            x, y = p
            coords.append((float(x), float(y)))
    return tuple(coords)


@dataclass(frozen=True)
class LineString(Geometry):
    """
    A 2-dimensional sequence of connected points.

    Attributes:
        points: (x, y) coordinates; Point objects are accepted and
            translated into the line's projection
        nickname: Projection label; the registry default when omitted
        ring: Whether the first point is the last point; when None it is
            derived from the coordinates
        filled: The inside of the ring belongs to the shape; implies ring
    """

    kind: ClassVar[GeometryKind] = GeometryKind.LINE

    points: Tuple[Coordinate, ...]
    nickname: Optional[str] = None
    ring: Optional[bool] = None
    filled: bool = False
    registry: Optional[ProjectionRegistry] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        nickname = self.nickname
        if isinstance(nickname, ReferenceSystem):
            nickname = nickname.nickname
        elif nickname is None:
            first = next((p for p in self.points if isinstance(p, Point)), None)
            nickname = first.nickname if first is not None else default_nickname(self.registry)
        object.__setattr__(self, "nickname", nickname)
        object.__setattr__(self, "points", _coordinates(self.points, nickname, self.registry))

        ring = self.ring
        if self.filled:
            ring = True
        elif ring is None:
            ring = len(self.points) > 1 and self.points[0] == self.points[-1]
        object.__setattr__(self, "ring", bool(ring))

    # Constructors

    @classmethod
    def line(cls, points: Sequence[PointLike], nickname: Optional[ProjectionLike] = None, **kwargs) -> "LineString":
        """A line, which will probably not have the same begin and end point."""
        return cls(tuple(points), nickname, ring=False, **kwargs)

    @classmethod
    def ring_of(cls, points: Sequence[PointLike], nickname: Optional[ProjectionLike] = None, **kwargs) -> "LineString":
        """
        A ring: the first point is appended when it does not close already.
        """
        points = list(points)
        if points:
            first = points[0].xy() if isinstance(points[0], Point) else tuple(points[0])
            last = points[-1].xy() if isinstance(points[-1], Point) else tuple(points[-1])
            if first != last:
                points.append(points[0])
        kwargs.setdefault("ring", True)
        return cls(tuple(points), nickname, **kwargs)

    @classmethod
    def filled_ring(cls, points: Sequence[PointLike], nickname: Optional[ProjectionLike] = None, **kwargs) -> "LineString":
        """A ring whose inside is part of the shape."""
        return cls.ring_of(points, nickname, filled=True, **kwargs)

    @classmethod
    def from_bbox(
        cls,
        xmin: float,
        ymin: float,
        xmax: float,
        ymax: float,
        nickname: Optional[ProjectionLike] = None,
    ) -> "LineString":
        """Ring around a box, counter-clockwise and left-bottom first."""
        return cls(
            ((xmin, ymin), (xmax, ymin), (xmax, ymax), (xmin, ymax), (xmin, ymin)),
            nickname,
            ring=True,
        )

    @classmethod
    def bbox_from_string(
        cls,
        text: str,
        nickname: Optional[str] = None,
        registry: Optional[ProjectionRegistry] = None,
    ):
        """See ``geopoint.core.crs.parser.bbox_from_string``."""
        from geopoint.core.crs.parser import bbox_from_string

        return bbox_from_string(text, nickname=nickname, registry=registry)

    @classmethod
    def ring_from_string(
        cls,
        text: str,
        nickname: Optional[str] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> Optional["LineString"]:
        from geopoint.core.crs.parser import ring_from_string

        return ring_from_string(text, nickname=nickname, registry=registry)

    # Attributes

    @property
    def is_ring(self) -> bool:
        return bool(self.ring)

    @property
    def is_filled(self) -> bool:
        return self.filled

    @property
    def nr_points(self) -> int:
        return len(self.points)

    def geopoints(self) -> List[Point]:
        """All points as Point objects carrying the projection."""
        return [Point(x, y, self.nickname) for x, y in self.points]

    def geopoint(self, index: int) -> Point:
        x, y = self.points[index]
        return Point(x, y, self.nickname)

    # Geometry

    def length(self) -> float:
        """
        The length of the line, only useful in a planar projection.
        """
        return kernel.line_length(self.points)

    def equal(
        self,
        other: "LineString",
        tolerance: float = 0.0,
        registry: Optional[ProjectionRegistry] = None,
    ) -> bool:
        """
        Same points in the same order, compared in this line's projection.
        """
        if self.nr_points != other.nr_points:
            return False
        other = other.to(self.nickname, registry=registry)
        for (x1, y1), (x2, y2) in zip(self.points, other.points):
            if abs(x1 - x2) > tolerance or abs(y1 - y2) > tolerance:
                return False
        return True

    def clip(self, *bbox: Union[float, Geometry]) -> List["LineString"]:
        """
        Clip the shape to a box.

        Args:
            bbox: Either a geometry, whose bounding box is used, or the four
                values xmin, ymin, xmax, ymax

        Returns:
            The parts inside the box, as lines or filled rings
        """
        if len(bbox) == 1 and isinstance(bbox[0], Geometry):
            box = bbox[0].bbox()
        else:
            box = tuple(float(v) for v in bbox)

        if self.filled:
            return [
                LineString(tuple(ring), self.nickname, ring=True, filled=True)
                for ring in kernel.fill_clip(self.points, box)
            ]
        return [
            LineString(tuple(piece), self.nickname)
            for piece in kernel.line_clip(self.points, box)
        ]

    # Display

    def to_string(
        self,
        target: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> str:
        """Text like ``ring[wgs84]([1,2], [3,4], [1,2])``."""
        line = self if target is None else self.to(target, registry=registry)
        if line.filled:
            label = "filled"
        elif line.ring:
            label = "ring"
        else:
            label = "line"
        coords = ", ".join(f"[{x:g},{y:g}]" for x, y in line.points)
        return f"{label}[{line.nickname}]({coords})"
