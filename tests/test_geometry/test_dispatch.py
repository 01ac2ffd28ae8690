"""
Tests for reprojection and measurement dispatch.
"""

import pytest

from geopoint.core.crs.engine import GeodeticEngine
from geopoint.core.crs.registry import ProjectionRegistry
from geopoint.core.errors import UnknownProjection, UsageError
from geopoint.core.geometry import dispatch
from geopoint.core.geometry.base import Geometry
from geopoint.core.geometry.collection import Collection
from geopoint.core.geometry.line import LineString
from geopoint.core.geometry.point import Point
from geopoint.core.geometry.surface import Surface
from geopoint.models.crs import bounding_box_contains

WGS84 = "+proj=latlong +datum=WGS84 +ellps=WGS84"


class CountingEngine(GeodeticEngine):
    """Engine which counts transformations."""

    def __init__(self) -> None:
        self.calls = 0

    def transform(self, source, target, coordinates):
        self.calls += 1
        return super().transform(source, target, coordinates)


@pytest.fixture
def engine() -> CountingEngine:
    return CountingEngine()


@pytest.fixture
def registry(engine: CountingEngine) -> ProjectionRegistry:
    registry = ProjectionRegistry(engine)
    registry.register("wgs84", WGS84, srid=4326)
    registry.register("rd", "EPSG:28992", srid=28992)
    return registry


def _geometries():
    return [
        Point(5.0, 52.0, "wgs84"),
        LineString.line([(5.0, 52.0), (5.5, 52.5), (6.0, 52.1)], "wgs84"),
        Surface(((5.0, 52.0), (6.0, 52.0), (6.0, 53.0), (5.0, 52.0)), nickname="wgs84"),
        Collection.of(Point(5.0, 52.0, "wgs84"), LineString.line([(4.0, 51.0), (4.5, 51.5)], "wgs84")),
    ]


class TestReproject:
    """Tests for reprojecting geometries."""

    @pytest.mark.parametrize("index", range(4))
    def test_identity_skips_engine(
        self, registry: ProjectionRegistry, engine: CountingEngine, index: int
    ) -> None:
        """Test reprojecting into the own projection does nothing."""
        geometry = _geometries()[index]

        assert dispatch.reproject(geometry, "wgs84", registry) is geometry
        assert dispatch.reproject(geometry, registry.get("wgs84"), registry) is geometry
        assert engine.calls == 0

    @pytest.mark.parametrize("index", range(4))
    def test_same_kind_and_shape(self, registry: ProjectionRegistry, index: int) -> None:
        """Test the result is the same variant in the target projection."""
        geometry = _geometries()[index]
        result = dispatch.reproject(geometry, "rd", registry)

        assert result.kind is geometry.kind
        assert result.nickname == "rd"
        assert type(result) is type(geometry)

    def test_point_round_trip(self, registry: ProjectionRegistry) -> None:
        """Test a point survives there and back."""
        point = Point(5.0, 52.0, "wgs84")
        back = dispatch.reproject(dispatch.reproject(point, "rd", registry), "wgs84", registry)

        assert back.xy() == pytest.approx((5.0, 52.0), abs=1e-6)

    def test_line_flags_kept(self, registry: ProjectionRegistry) -> None:
        """Test ring and filled flags survive."""
        ring = LineString.filled_ring([(5.0, 52.0), (6.0, 52.0), (6.0, 53.0)], "wgs84")
        result = dispatch.reproject(ring, "rd", registry)

        assert result.is_filled
        assert result.is_ring
        assert result.nr_points == ring.nr_points

    def test_unknown_target(self, registry: ProjectionRegistry) -> None:
        """Test unregistered targets are reported."""
        with pytest.raises(UnknownProjection):
            dispatch.reproject(Point(5.0, 52.0, "wgs84"), "abc", registry)

    def test_foreign_reference_system(self, registry: ProjectionRegistry) -> None:
        """Test a ReferenceSystem from elsewhere is registered on use."""
        target = ProjectionRegistry().register("merc", "EPSG:3857")
        result = dispatch.reproject(Point(0.0, 0.0, "wgs84"), target, registry)

        assert result.nickname == "merc"
        assert result.xy() == pytest.approx((0.0, 0.0), abs=1e-6)
        assert "merc" in registry

    def test_utm_zone_from_first_point(self, registry: ProjectionRegistry) -> None:
        """Test the UTM zone follows the first coordinate."""
        nickname, coords = dispatch.project_coordinates(
            "wgs84", "utm", [(9.0, 52.0), (3.0, 52.0)], registry
        )

        assert nickname == "utm-wgs84-32"
        assert coords[0][0] == pytest.approx(500000.0, abs=0.01)

    def test_utm_without_coordinates(self, registry: ProjectionRegistry) -> None:
        """Test a zone cannot be selected for nothing."""
        with pytest.raises(UsageError):
            dispatch.project_coordinates("wgs84", "utm", [], registry)

    def test_unhandled_kind(self, registry: ProjectionRegistry) -> None:
        """Test geometries outside the known kinds are refused."""

        class Odd(Geometry):
            kind = "odd"
            nickname = "wgs84"

        with pytest.raises(UsageError):
            dispatch.reproject(Odd(), "rd", registry)
        with pytest.raises(UsageError):
            dispatch.bounding_box(Odd())
        with pytest.raises(UsageError):
            dispatch.area(Odd())
        with pytest.raises(UsageError):
            dispatch.perimeter(Odd())


class TestBoundingBox:
    """Tests for bounding boxes."""

    def test_point(self) -> None:
        """Test a point has a degenerate box."""
        assert dispatch.bounding_box(Point(1.0, 2.0, "rd")) == (1.0, 2.0, 1.0, 2.0)

    @pytest.mark.parametrize("index", range(4))
    def test_contains_vertices(self, index: int) -> None:
        """Test every vertex lies inside the box of its shape."""
        geometry = _geometries()[index]
        box = dispatch.bounding_box(geometry)

        if isinstance(geometry, Point):
            vertices = [geometry.xy()]
        elif isinstance(geometry, LineString):
            vertices = list(geometry.points)
        elif isinstance(geometry, Surface):
            vertices = list(geometry.outer)
        else:
            vertices = [
                xy
                for c in geometry.components
                for xy in ([c.xy()] if isinstance(c, Point) else c.points)
            ]

        for x, y in vertices:
            assert bounding_box_contains(box, x, y)

    def test_empty_line(self) -> None:
        """Test an empty line has no box."""
        with pytest.raises(UsageError, match="at least one point"):
            dispatch.bounding_box(LineString((), "rd"))


class TestArea:
    """Tests for areas and perimeters."""

    def test_point(self) -> None:
        """Test points have nothing to measure."""
        point = Point(1.0, 2.0, "rd")
        assert dispatch.area(point) == 0.0
        assert dispatch.perimeter(point) == 0.0

    def test_surface_with_hole(self) -> None:
        """Test the unit square with a half by half hole."""
        outer = ((0, 0), (1, 0), (1, 1), (0, 1), (0, 0))
        hole = ((0.25, 0.25), (0.75, 0.25), (0.75, 0.75), (0.25, 0.75), (0.25, 0.25))

        assert dispatch.area(Surface(outer, (hole,), "rd")) == pytest.approx(0.75)

    def test_open_line(self) -> None:
        """Test open lines are refused."""
        line = LineString.line([(0, 0), (1, 1)], "rd")

        with pytest.raises(UsageError, match="area requires a ring"):
            dispatch.area(line)
        with pytest.raises(UsageError, match="perimeter requires a ring"):
            dispatch.perimeter(line)
