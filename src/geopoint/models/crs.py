"""
Data models for coordinate reference systems.

This module defines the reference system value stored in the projection
registry and the bounding box returned by geometry operations.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple


class CoordinateOrder(str, Enum):
    """Usual coordinate order for a reference system."""

    LAT_LON = "lat_lon"  # Geographic systems are written latitude first
    XY = "xy"  # Projected systems are written easting first


@dataclass(frozen=True)
class ReferenceSystem:
    """
    A named coordinate reference system.

    Instances are created by ``ProjectionRegistry.register``; the nickname
    is unique within one registry.

    Attributes:
        nickname: Short unique label, for instance ``wgs84`` or ``utm-wgs84-31``
        definition: Engine parameters (PROJ string, EPSG code, WKT or mapping)
        srid: Spatial Reference System ID, a positive integer when known
        display_name: Human readable name, overrides the engine description
        crs: Parsed ``pyproj.CRS`` handle
    """

    nickname: str
    definition: Any = field(compare=False)
    srid: Optional[int] = None
    display_name: Optional[str] = None
    crs: Any = field(default=None, compare=False, repr=False)

    @property
    def name(self) -> str:
        """The full, official name of the projection."""
        if self.display_name:
            return self.display_name
        if self.crs is not None and self.crs.name and self.crs.name != "unknown":
            return self.crs.name
        return self.nickname

    @property
    def is_geographic(self) -> bool:
        """True for angular latitude/longitude systems."""
        return bool(self.crs is not None and self.crs.is_geographic)

    @property
    def coordinate_order(self) -> CoordinateOrder:
        """Usual order of coordinates when displayed."""
        return CoordinateOrder.LAT_LON if self.is_geographic else CoordinateOrder.XY

    def __str__(self) -> str:
        return self.nickname


@dataclass(frozen=True)
class BoundingBox:
    """
    Axis-aligned bounding box tagged with a projection nickname.

    Attributes:
        min_x: Minimum X coordinate (or longitude)
        min_y: Minimum Y coordinate (or latitude)
        max_x: Maximum X coordinate (or longitude)
        max_y: Maximum Y coordinate (or latitude)
        nickname: Projection the coordinates are expressed in
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float
    nickname: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate bounding box."""
        if self.min_x > self.max_x:
            raise ValueError(f"min_x ({self.min_x}) must be <= max_x ({self.max_x})")
        if self.min_y > self.max_y:
            raise ValueError(f"min_y ({self.min_y}) must be <= max_y ({self.max_y})")

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Tuple[float, float]:
        """Center point of the bounding box."""
        return (
            (self.min_x + self.max_x) / 2,
            (self.min_y + self.max_y) / 2,
        )

    def contains(self, x: float, y: float) -> bool:
        """
        Check if a coordinate is within the box, borders included.

        Args:
            x: X coordinate (or longitude)
            y: Y coordinate (or latitude)
        """
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def intersects(self, other: "BoundingBox") -> bool:
        """
        Check if this bounding box intersects another in the same projection.
        """
        return not (
            self.max_x < other.min_x
            or self.min_x > other.max_x
            or self.max_y < other.min_y
            or self.min_y > other.max_y
        )

    def union(self, other: "BoundingBox") -> "BoundingBox":
        """Smallest box covering both boxes; assumes a shared projection."""
        return BoundingBox(
            min_x=min(self.min_x, other.min_x),
            min_y=min(self.min_y, other.min_y),
            max_x=max(self.max_x, other.max_x),
            max_y=max(self.max_y, other.max_y),
            nickname=self.nickname,
        )

    def to_tuple(self) -> Tuple[float, float, float, float]:
        """Convert to tuple (min_x, min_y, max_x, max_y)."""
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    def __iter__(self):
        return iter(self.to_tuple())

    def __str__(self) -> str:
        return (
            f"BBox({self.min_x:.6f}, {self.min_y:.6f}, {self.max_x:.6f}, {self.max_y:.6f})"
            f" [{self.nickname}]"
        )


def bounding_box_contains(bbox: Tuple[float, float, float, float], x: float, y: float) -> bool:
    """
    Check whether a coordinate lies inside a raw ``(xmin, ymin, xmax, ymax)`` tuple.
    """
    xmin, ymin, xmax, ymax = bbox
    return xmin <= x <= xmax and ymin <= y <= ymax
