"""
A point on the globe, in any coordinate system.

Latitude/longitude and x/y are two views on the same stored pair: x is
the longitude and y the latitude in geographic projections.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Tuple, Union

from geopoint.core.crs.dms import degrees_to_dm, degrees_to_dms
from geopoint.core.crs.registry import ProjectionLike, ProjectionRegistry, get_default_registry
from geopoint.core.errors import UsageError
from geopoint.core.geometry.base import Geometry, GeometryKind, default_nickname
from geopoint.models.crs import ReferenceSystem


@dataclass(frozen=True)
class Point(Geometry):
    """
    One location in a named projection.

    Attributes:
        x: Easting, or longitude in geographic projections
        y: Northing, or latitude in geographic projections
        nickname: Projection label; the registry default when omitted
        registry: Registry providing that default, the process-wide
            one when omitted
    """

    kind: ClassVar[GeometryKind] = GeometryKind.POINT

    x: float
    y: float
    nickname: Optional[str] = field(default=None)
    registry: Optional[ProjectionRegistry] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        nickname = self.nickname
        if isinstance(nickname, ReferenceSystem):
            nickname = nickname.nickname
        elif nickname is None:
            nickname = default_nickname(self.registry)
        object.__setattr__(self, "nickname", nickname)
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    # Constructors

    @classmethod
    def from_latlong(
        cls,
        lat: float,
        long: float,
        nickname: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> "Point":
        return cls(long, lat, nickname, registry=registry)

    @classmethod
    def from_longlat(
        cls,
        long: float,
        lat: float,
        nickname: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> "Point":
        return cls(long, lat, nickname, registry=registry)

    @classmethod
    def from_xy(
        cls,
        x: float,
        y: float,
        nickname: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> "Point":
        return cls(x, y, nickname, registry=registry)

    @classmethod
    def from_yx(
        cls,
        y: float,
        x: float,
        nickname: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> "Point":
        return cls(x, y, nickname, registry=registry)

    @classmethod
    def from_string(
        cls,
        text: Optional[str],
        nickname: Optional[str] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> Optional["Point"]:
        """
        Parse a point from loosely formatted text.

        See ``geopoint.core.crs.parser.point_from_string`` for the formats.
        """
        from geopoint.core.crs.parser import point_from_string

        return point_from_string(text, nickname=nickname, registry=registry)

    # Accessors

    @property
    def latitude(self) -> float:
        return self.y

    lat = latitude

    @property
    def longitude(self) -> float:
        return self.x

    long = longitude

    def _in(self, target: Optional[ProjectionLike], registry: Optional[ProjectionRegistry]) -> "Point":
        return self if target is None else self.to(target, registry=registry)

    def latlong(
        self,
        target: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> Tuple[float, float]:
        """(latitude, longitude), optionally translated into ``target`` first."""
        point = self._in(target, registry)
        return (point.y, point.x)

    def longlat(
        self,
        target: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> Tuple[float, float]:
        point = self._in(target, registry)
        return (point.x, point.y)

    def xy(
        self,
        target: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> Tuple[float, float]:
        point = self._in(target, registry)
        return (point.x, point.y)

    def yx(
        self,
        target: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> Tuple[float, float]:
        point = self._in(target, registry)
        return (point.y, point.x)

    def _is_geographic(self, registry: Optional[ProjectionRegistry] = None) -> bool:
        system = (registry or self.registry or get_default_registry()).resolve(self.nickname)
        return system is not None and system.is_geographic

    def normalize(self, registry: Optional[ProjectionRegistry] = None) -> "Point":
        """
        The point with longitude in -180..180 and latitude in -90..90.

        Points in non-geographic projections are returned unchanged.
        """
        if not self._is_geographic(registry):
            return self

        x, y = self.x, self.y
        while x < -180:
            x += 360
        while x > 180:
            x -= 360
        while y < -90:
            y += 180
        while y > 90:
            y -= 180
        if (x, y) == (self.x, self.y):
            return self
        return Point(x, y, self.nickname)

    def move_west(self) -> None:
        """
        Move a point from the eastern into the western calculations.

        This mutates the point in place, the only geometry operation which
        does: a positive longitude gets 360 subtracted, resulting in a value
        below -180.  Used to keep the corners of a construct crossing the
        -180 meridian (like a satellite image) numerically contiguous.

        Example:
            >>> point = Point.from_latlong(24, 179)
            >>> point.move_west()
            >>> point.long
            -181.0
        """
        if self.x > 0:
            object.__setattr__(self, "x", self.x - 360)

    # Geometry

    def same_as(self, other: "Point", tolerance: float) -> bool:
        """
        Compare coordinates with a tolerance, in the units of the projections.

        Raises:
            UsageError: When ``other`` is not a point
        """
        if not isinstance(other, Point):
            raise UsageError("can only compare a point to another Point")

        x1, y1 = self.xy()
        x2, y2 = other.xy()
        return abs(x1 - x2) < tolerance and abs(y1 - y2) < tolerance

    def in_bbox(self, other: Geometry, registry: Optional[ProjectionRegistry] = None) -> bool:
        """
        True when the point lies inside the bounding box of ``other``, borders included.

        The point is translated into the projection of ``other``, because
        that bounding box must stay square.
        """
        x, y = self.to(other.nickname, registry=registry).xy()
        xmin, ymin, xmax, ymax = other.bbox()
        return xmin <= x <= xmax and ymin <= y <= ymax

    # Display

    def coords_usual_order(self, registry: Optional[ProjectionRegistry] = None) -> Tuple[float, float]:
        """Coordinates in the order usual for the projection: latlong or xy."""
        return self.latlong() if self._is_geographic(registry) else self.xy()

    def coords(self, registry: Optional[ProjectionRegistry] = None) -> str:
        a, b = self.coords_usual_order(registry)
        return f"{a:.4f} {b:.4f}"

    def to_string(
        self,
        target: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> str:
        """
        Text like ``point[wgs84](52.3213 5.5300)``.

        Args:
            target: Projection to show the point in, the own one by default
        """
        point = self._in(target, registry)
        return f"point[{point.nickname}]({point.coords(registry)})"

    def dms(
        self,
        target: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> str:
        """
        The point as DMS pair, latitude first, like ``52d07'24"N, 5d31'48"E``.

        Only useful for geographic projections.  The text may contain
        quote characters; see ``dms_html``.
        """
        lat, long = self.dms_pair(target, registry)
        return f"{lat}, {long}"

    def dms_pair(
        self,
        target: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> Tuple[str, str]:
        long, lat = self.longlat(target, registry)
        return degrees_to_dms(lat, "N", "S"), degrees_to_dms(long, "E", "W")

    def dm(
        self,
        target: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> str:
        """Like ``dms``, without seconds."""
        lat, long = self.dm_pair(target, registry)
        return f"{lat}, {long}"

    def dm_pair(
        self,
        target: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> Tuple[str, str]:
        long, lat = self.longlat(target, registry)
        return degrees_to_dm(lat, "N", "S"), degrees_to_dm(long, "E", "W")

    def dms_html(
        self,
        target: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> str:
        """Like ``dms``, with double quotes escaped for HTML."""
        return self.dms(target, registry).replace('"', "&quot;")

    def dm_html(
        self,
        target: Optional[ProjectionLike] = None,
        registry: Optional[ProjectionRegistry] = None,
    ) -> str:
        return self.dm(target, registry).replace('"', "&quot;")


PointLike = Union[Point, Tuple[float, float]]
