"""
Tests for lines and rings.
"""

import pytest

from geopoint.core.crs.registry import ProjectionRegistry
from geopoint.core.errors import UsageError
from geopoint.core.geometry.line import LineString
from geopoint.core.geometry.point import Point

SQUARE = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0), (0.0, 0.0))


@pytest.fixture
def registry() -> ProjectionRegistry:
    registry = ProjectionRegistry()
    registry.register("wgs84", "+proj=latlong +datum=WGS84 +ellps=WGS84", srid=4326)
    return registry


class TestConstruction:
    """Tests for creating lines."""

    def test_line(self) -> None:
        """Test an open line."""
        line = LineString.line([(0, 0), (1, 1), (2, 0)], "rd")

        assert not line.is_ring
        assert not line.is_filled
        assert line.nr_points == 3
        assert line.points == ((0.0, 0.0), (1.0, 1.0), (2.0, 0.0))

    def test_ring_derived(self) -> None:
        """Test a closed sequence is a ring unless stated otherwise."""
        assert LineString(SQUARE, "rd").is_ring
        assert not LineString(SQUARE, "rd", ring=False).is_ring

    def test_ring_of_closes(self) -> None:
        """Test the first point is appended when needed."""
        ring = LineString.ring_of([(0, 0), (1, 0), (1, 1)], "rd")

        assert ring.is_ring
        assert ring.nr_points == 4
        assert ring.points[0] == ring.points[-1]

    def test_ring_of_already_closed(self) -> None:
        """Test a closed ring is not extended."""
        assert LineString.ring_of(SQUARE, "rd").nr_points == 5

    def test_filled_implies_ring(self) -> None:
        """Test filled rings are rings."""
        ring = LineString.filled_ring([(0, 0), (1, 0), (1, 1)], "rd")
        assert ring.is_filled
        assert ring.is_ring

        assert LineString(SQUARE, "rd", ring=False, filled=True).is_ring

    def test_nickname_from_points(self) -> None:
        """Test the nickname of the first Point is used."""
        line = LineString((Point(1, 2, "rd"), (3, 4)))

        assert line.nickname == "rd"
        assert line.points == ((1.0, 2.0), (3.0, 4.0))

    def test_points_translated(self, registry: ProjectionRegistry) -> None:
        """Test points in another projection are translated."""
        utm = Point.from_latlong(52.0, 3.0, "wgs84").to("utm", registry=registry)
        line = LineString((utm, (4.0, 52.0)), "wgs84", registry=registry)

        assert line.points[0] == pytest.approx((3.0, 52.0), abs=1e-8)

    def test_from_bbox(self) -> None:
        """Test the box ring starts left-bottom and runs counter-clockwise."""
        ring = LineString.from_bbox(0, 0, 1, 1, "rd")

        assert ring.points == SQUARE
        assert ring.is_ring

    def test_geopoints(self) -> None:
        """Test points come back as Point objects."""
        line = LineString.line([(0, 0), (1, 1)], "rd")

        assert line.geopoints() == [Point(0, 0, "rd"), Point(1, 1, "rd")]
        assert line.geopoint(-1) == Point(1, 1, "rd")


class TestMeasure:
    """Tests for measuring lines."""

    def test_length(self) -> None:
        """Test the length in coordinate units."""
        assert LineString.line([(0, 0), (3, 4)], "rd").length() == 5.0

    def test_ring_area_and_perimeter(self) -> None:
        """Test a unit square."""
        ring = LineString(SQUARE, "rd")

        assert ring.area() == 1.0
        assert ring.perimeter() == 4.0

    def test_open_line_area(self) -> None:
        """Test open lines have no area."""
        line = LineString.line([(0, 0), (1, 1)], "rd")

        with pytest.raises(UsageError, match="area requires a ring"):
            line.area()
        with pytest.raises(UsageError, match="perimeter requires a ring"):
            line.perimeter()

    def test_bbox(self) -> None:
        """Test the bounding box covers every vertex."""
        line = LineString.line([(3, -1), (0, 4), (2, 2)], "rd")

        assert line.bbox() == (0.0, -1.0, 3.0, 4.0)
        assert line.bounding_box().nickname == "rd"

    def test_bbox_ring_and_center(self) -> None:
        """Test the bounding box as ring and its center."""
        line = LineString.line([(0, 0), (2, 4)], "rd")

        assert line.bbox_ring().points == ((0.0, 0.0), (2.0, 0.0), (2.0, 4.0), (0.0, 4.0), (0.0, 0.0))
        assert line.bbox_center() == Point(1.0, 2.0, "rd")


class TestClip:
    """Tests for clipping to a box."""

    def test_clip_line(self) -> None:
        """Test the part of a line inside the box is kept."""
        line = LineString.line([(-1, 0.5), (2, 0.5)], "rd")
        pieces = line.clip(0, 0, 1, 1)

        assert len(pieces) == 1
        assert sorted(pieces[0].points) == [(0.0, 0.5), (1.0, 0.5)]
        assert not pieces[0].is_filled

    def test_clip_outside(self) -> None:
        """Test nothing remains of a line outside the box."""
        line = LineString.line([(5, 5), (6, 6)], "rd")
        assert line.clip(0, 0, 1, 1) == []

    def test_clip_filled(self) -> None:
        """Test filled rings are clipped as areas."""
        ring = LineString.filled_ring([(0, 0), (2, 0), (2, 2), (0, 2)], "rd")
        pieces = ring.clip(LineString.from_bbox(1, 1, 3, 3, "rd"))

        assert len(pieces) == 1
        assert pieces[0].is_filled
        assert pieces[0].area() == pytest.approx(1.0)


class TestCompare:
    """Tests for comparing lines."""

    def test_equal(self) -> None:
        """Test equality with tolerance."""
        line = LineString.line([(0, 0), (1, 1)], "rd")

        assert line.equal(LineString.line([(0, 0), (1, 1)], "rd"))
        assert line.equal(LineString.line([(0, 0.01), (1, 1)], "rd"), tolerance=0.1)
        assert not line.equal(LineString.line([(0, 0.5), (1, 1)], "rd"), tolerance=0.1)
        assert not line.equal(LineString.line([(0, 0), (1, 1), (2, 2)], "rd"))


class TestProjection:
    """Tests for reprojecting lines."""

    def test_identity(self, registry: ProjectionRegistry) -> None:
        """Test the same projection returns the line itself."""
        line = LineString(SQUARE, "wgs84")
        assert line.to("wgs84", registry=registry) is line

    def test_to_utm_keeps_shape(self, registry: ProjectionRegistry) -> None:
        """Test flags and point count survive reprojection."""
        ring = LineString.filled_ring([(3, 52), (4, 52), (4, 53)], "wgs84")
        utm = ring.to("utm", registry=registry)

        assert utm.nickname == "utm-wgs84-31"
        assert utm.is_filled
        assert utm.nr_points == 4
        assert utm.points[0] == pytest.approx((500000.0, utm.points[0][1]))


class TestDisplay:
    """Tests for text representations."""

    def test_to_string(self) -> None:
        """Test the label follows the kind of line."""
        assert LineString.line([(0, 0), (1, 1.5)], "rd").to_string() == "line[rd]([0,0], [1,1.5])"
        assert str(LineString(SQUARE, "rd")).startswith("ring[rd]([0,0]")
        assert str(LineString.filled_ring(SQUARE, "rd")).startswith("filled[rd]")
