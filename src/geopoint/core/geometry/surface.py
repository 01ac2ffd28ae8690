"""
A surface: one filled outer ring with zero or more holes.
"""

import logging
from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Sequence, Tuple, Union

from geopoint.core.crs.registry import ProjectionLike, ProjectionRegistry
from geopoint.core.errors import UsageError
from geopoint.core.geometry.base import Geometry, GeometryKind, default_nickname
from geopoint.core.geometry.line import LineString
from geopoint.core.geometry.point import PointLike
from geopoint.models.crs import ReferenceSystem

logger = logging.getLogger(__name__)

Coordinate = Tuple[float, float]
Ring = Tuple[Coordinate, ...]
RingLike = Union[LineString, Sequence[PointLike]]


def _ring(ring: RingLike, nickname: str, registry: Optional[ProjectionRegistry]) -> Ring:
    if isinstance(ring, LineString):
        if not ring.filled:
            logger.warning(
                f"LineString used in a surface should be filled: {ring.to_string()}"
            )
        return ring.to(nickname, registry=registry).points
    return LineString(tuple(ring), nickname, registry=registry).points


@dataclass(frozen=True)
class Surface(Geometry):
    """
    A single filled area with possible enclosures, in one projection.

    Attributes:
        outer: Coordinates of the outer ring
        inner: Coordinates of each enclosed ring (lakes)
        nickname: Projection label; taken from the first LineString given,
            then from the registry default
    """

    kind: ClassVar[GeometryKind] = GeometryKind.SURFACE

    outer: Ring
    inner: Tuple[Ring, ...] = ()
    nickname: Optional[str] = None
    registry: Optional[ProjectionRegistry] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        nickname = self.nickname
        if isinstance(nickname, ReferenceSystem):
            nickname = nickname.nickname
        elif nickname is None:
            first = next(
                (r for r in (self.outer, *self.inner) if isinstance(r, LineString)), None
            )
            nickname = first.nickname if first is not None else default_nickname(self.registry)
        object.__setattr__(self, "nickname", nickname)

        if not self.outer:
            raise UsageError("surface requires an outer ring", geometry_type="surface")

        object.__setattr__(self, "outer", _ring(self.outer, nickname, self.registry))
        object.__setattr__(
            self, "inner", tuple(_ring(r, nickname, self.registry) for r in self.inner)
        )

    @classmethod
    def from_lines(
        cls,
        outer: RingLike,
        *inner: RingLike,
        nickname: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> "Surface":
        """
        Build a surface from an outer ring and the inner enclosures.

        Each ring is a LineString (translated into the surface projection)
        or a sequence of (x, y) pairs.

        Example:
            >>> island = Surface.from_lines(outer, lake1, lake2)
        """
        return cls(outer, tuple(inner), nickname, registry=registry)

    def geo_outer(self) -> LineString:
        """The outer polygon as LineString."""
        return LineString(self.outer, self.nickname, ring=True, filled=True)

    def geo_inner(self) -> List[LineString]:
        """The enclosed polygons as LineStrings."""
        return [LineString(r, self.nickname, ring=True, filled=True) for r in self.inner]

    def to_string(
        self,
        target: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> str:
        surface = self if target is None else self.to(target, registry=registry)

        def fmt(ring: Ring) -> str:
            return ", ".join(f"[{x:g},{y:g}]" for x, y in ring)

        text = f"surface[{surface.nickname}]\n  ({fmt(surface.outer)})\n"
        for ring in surface.inner:
            text += f" -({fmt(ring)})\n"
        return text
