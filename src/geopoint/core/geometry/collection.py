"""
A collection of unrelated geometries: points, lines, surfaces and
nested collections, all in one projection.
"""

from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Sequence, Tuple

from geopoint.core.crs.registry import ProjectionLike, ProjectionRegistry
from geopoint.core.errors import UsageError
from geopoint.core.geometry.base import Geometry, GeometryKind
from geopoint.core.geometry.line import LineString
from geopoint.core.geometry.point import Point


@dataclass(frozen=True)
class Collection(Geometry):
    """
    Heterogeneous geometries sharing one projection.

    Components in another projection are translated on construction.
    Without an explicit nickname, the first component's one is used.
    """

    kind: ClassVar[GeometryKind] = GeometryKind.COLLECTION

    components: Tuple[Geometry, ...]
    nickname: Optional[str] = None
    registry: Optional[ProjectionRegistry] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        components = tuple(self.components)
        if not components:
            raise UsageError("collection requires at least one component", geometry_type="collection")

        # The first component fixes the projection: a bare "utm" resolves to
        # one zone, which the other components follow
        first = components[0]
        if self.nickname is not None:
            first = first.to(self.nickname, registry=self.registry)
        nickname = first.nickname

        object.__setattr__(self, "nickname", nickname)
        object.__setattr__(
            self,
            "components",
            (first,) + tuple(c.to(nickname, registry=self.registry) for c in components[1:]),
        )

    @classmethod
    def of(
        cls,
        *components: Geometry,
        nickname: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> "Collection":
        """
        Example:
            >>> islands = Collection.of(island1, island2)
        """
        return cls(components, nickname, registry=registry)

    @property
    def nr_components(self) -> int:
        return len(self.components)

    def component(self, index: int) -> Geometry:
        return self.components[index]

    def points(self) -> List[Point]:
        """The components which are points."""
        return [c for c in self.components if c.kind is GeometryKind.POINT]

    def lines(self) -> List[LineString]:
        return [c for c in self.components if c.kind is GeometryKind.LINE]

    def only_points(self) -> bool:
        return all(c.kind is GeometryKind.POINT for c in self.components)

    def only_lines(self) -> bool:
        return all(c.kind is GeometryKind.LINE for c in self.components)

    def only_rings(self) -> bool:
        """True when all components are lines declared as ring."""
        return all(c.kind is GeometryKind.LINE and c.is_ring for c in self.components)

    def equal(
        self,
        other: "Collection",
        tolerance: float = 0.0,
        registry: Optional[ProjectionRegistry] = None,
    ) -> bool:
        """
        Only exactly equal collections are considered equivalent: even the
        order of the components must be the same.
        """
        if self.nr_components != other.nr_components:
            return False
        other = other.to(self.nickname, registry=registry)
        return all(
            _component_equal(own, his, tolerance, registry)
            for own, his in zip(self.components, other.components)
        )

    def to_string(
        self,
        target: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> str:
        space = self if target is None else self.to(target, registry=registry)
        inner = ")\n  (".join(c.to_string() for c in space.components)
        return f"collection[{space.nickname}]\n  ({inner})\n"


def _component_equal(
    own: Geometry,
    his: Geometry,
    tolerance: float,
    registry: Optional[ProjectionRegistry],
) -> bool:
    if own.kind is not his.kind:
        return False
    if own.kind is GeometryKind.POINT:
        return own.same_as(his, tolerance) if tolerance else own == his
    if own.kind in (GeometryKind.LINE, GeometryKind.COLLECTION):
        return own.equal(his, tolerance, registry=registry)
    if own.kind is GeometryKind.SURFACE:
        rings_own: Sequence = (own.outer, *own.inner)
        rings_his: Sequence = (his.outer, *his.inner)
        if len(rings_own) != len(rings_his):
            return False
        return all(
            LineString(a, own.nickname).equal(LineString(b, his.nickname), tolerance, registry)
            for a, b in zip(rings_own, rings_his)
        )
    raise UsageError(f"cannot compare {own.kind.value} components")
