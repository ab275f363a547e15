"""Unit tests for boundary projection."""

import pytest

from territorial.core.geometry import distance, on_segment, orientation
from territorial.core.projection import closest_point_on_polygon_edge, closest_point_on_segment
from territorial.domain import Orientation, Point, Segment, edges

SQUARE = [Point(0, 0), Point(0, 4), Point(4, 4), Point(4, 0)]


def _on_boundary(point: Point, polygon: list[Point]) -> bool:
    return any(
        orientation(seg.p1, point, seg.p2) == Orientation.COLLINEAR
        and on_segment(seg.p1, point, seg.p2)
        for seg in edges(polygon)
    )


class TestClosestPointOnSegment:
    """Tests for closest_point_on_segment()."""

    def test_projects_onto_interior(self):
        seg = Segment(Point(0, 0), Point(2, 0))
        assert closest_point_on_segment(Point(1, 1), seg) == Point(1, 0)

    def test_clamps_to_start(self):
        seg = Segment(Point(0, 0), Point(2, 0))
        assert closest_point_on_segment(Point(-3, 1), seg) == Point(0, 0)

    def test_clamps_to_end(self):
        seg = Segment(Point(0, 0), Point(2, 0))
        assert closest_point_on_segment(Point(5, -1), seg) == Point(2, 0)

    def test_zero_length_segment(self):
        seg = Segment(Point(1, 1), Point(1, 1))
        assert closest_point_on_segment(Point(3, 3), seg) == Point(1, 1)

    def test_diagonal(self):
        seg = Segment(Point(0, 0), Point(2, 2))
        result = closest_point_on_segment(Point(2, 0), seg)
        assert result.x == pytest.approx(1.0)
        assert result.y == pytest.approx(1.0)


class TestClosestPointOnPolygonEdge:
    """Tests for closest_point_on_polygon_edge()."""

    def test_outside_point(self):
        assert closest_point_on_polygon_edge(Point(6, 2), SQUARE) == Point(4, 2)

    def test_inside_point(self):
        assert closest_point_on_polygon_edge(Point(1, 2), SQUARE) == Point(0, 2)

    def test_considers_closing_edge(self):
        """The edge from the last vertex back to the first is included."""
        assert closest_point_on_polygon_edge(Point(2, -1), SQUARE) == Point(2, 0)

    def test_nearest_vertex_of_corner(self):
        assert closest_point_on_polygon_edge(Point(5, 5), SQUARE) == Point(4, 4)

    def test_degenerate_polygons_return_point(self):
        point = Point(3, 3)
        assert closest_point_on_polygon_edge(point, []) == point
        assert closest_point_on_polygon_edge(point, [Point(0, 0)]) == point

    def test_two_vertex_polygon(self):
        polygon = [Point(0, 0), Point(2, 0)]
        assert closest_point_on_polygon_edge(Point(1, 3), polygon) == Point(1, 0)

    def test_result_is_on_boundary_and_nearest(self):
        """Every projection lies on an edge and is at least as close as any vertex."""
        polygon = [Point(0, 0), Point(5, 1), Point(6, 5), Point(2, 3), Point(-1, 4)]
        for x in range(-3, 9):
            for y in range(-3, 8):
                point = Point(x + 0.25, y + 0.5)
                result = closest_point_on_polygon_edge(point, polygon)
                assert _on_boundary(result, polygon)
                nearest = distance(point, result)
                for seg in edges(polygon):
                    assert nearest <= distance(point, closest_point_on_segment(point, seg)) + 1e-12
                for vertex in polygon:
                    assert nearest <= distance(point, vertex) + 1e-12
