"""Boundary projection onto segments and polygon edges."""

import math

from territorial.core.geometry import distance
from territorial.domain import Point, Segment, edges


def closest_point_on_segment(point: Point, segment: Segment) -> Point:
    """Find the closest point on a line segment to a given point.

    Projects the point onto the infinite line, then clamps to the segment
    endpoints. A zero-length segment projects everything onto its start.

    Args:
        point: The point to project
        segment: Segment to project onto

    Returns:
        Closest point on the segment

    Examples:
        >>> seg = Segment(Point(0.0, 0.0), Point(2.0, 0.0))
        >>> closest_point_on_segment(Point(1.0, 1.0), seg)
        Point(x=1.0, y=0.0)
    """
    p1, p2 = segment.p1, segment.p2
    dx = p2.x - p1.x
    dy = p2.y - p1.y

    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return p1

    # t = dot(point - p1, p2 - p1) / ||p2 - p1||^2
    t = ((point.x - p1.x) * dx + (point.y - p1.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))

    return Point(p1.x + t * dx, p1.y + t * dy)


def closest_point_on_polygon_edge(point: Point, polygon: list[Point]) -> Point:
    """Find the closest point on a polygon's boundary to a given point.

    Checks every edge, including the closing edge, and keeps the first
    projection at minimum distance.

    Args:
        point: The point to project
        polygon: Ordered polygon vertices

    Returns:
        Closest boundary point, or the input point unchanged when the
        polygon has fewer than 2 vertices
    """
    if len(polygon) < 2:
        return point

    closest = polygon[0]
    min_distance = math.inf

    for seg in edges(polygon):
        candidate = closest_point_on_segment(point, seg)
        d = distance(point, candidate)
        if d < min_distance:
            min_distance = d
            closest = candidate

    return closest
