"""Geometric predicates for territory polygons.

This module provides the core mathematical utilities for:
- Orientation of three points (cross product sign)
- Segment intersection including collinear special cases
- Point-in-polygon testing (ray casting algorithm)
- Euclidean distance and vertex centroid

Coordinates are planar degrees (x = lng, y = lat). All functions are pure
and total: malformed arity returns a safe default instead of raising.
"""

import math

from territorial.domain import Orientation, Point, Segment

# Cross products smaller than this are treated as collinear
COLLINEAR_EPSILON = 1e-10


def orientation(p: Point, q: Point, r: Point) -> Orientation:
    """Determine the turn direction of the ordered triple (p, q, r).

    Args:
        p: First point
        q: Second point
        r: Third point

    Returns:
        COLLINEAR when the cross product magnitude is below COLLINEAR_EPSILON,
        CLOCKWISE for a positive value, COUNTER_CLOCKWISE otherwise

    Examples:
        >>> orientation(Point(0, 0), Point(1, 1), Point(2, 2))
        <Orientation.COLLINEAR: 1>
        >>> orientation(Point(0, 0), Point(0, 1), Point(1, 1))
        <Orientation.CLOCKWISE: 2>
    """
    value = (q.y - p.y) * (r.x - q.x) - (q.x - p.x) * (r.y - q.y)
    if abs(value) < COLLINEAR_EPSILON:
        return Orientation.COLLINEAR
    return Orientation.CLOCKWISE if value > 0 else Orientation.COUNTER_CLOCKWISE


def on_segment(p: Point, q: Point, r: Point) -> bool:
    """Check whether q lies within the bounding box of segment pr.

    Only meaningful when p, q and r are already known to be collinear.
    Bounds are inclusive.
    """
    return (
        min(p.x, r.x) <= q.x <= max(p.x, r.x)
        and min(p.y, r.y) <= q.y <= max(p.y, r.y)
    )


def segments_intersect(seg1: Segment, seg2: Segment) -> bool:
    """Test whether two segments share at least one point.

    In the general case the segments intersect when each one's endpoints lie
    on opposite sides of the other. When an endpoint is collinear with the
    other segment, it intersects only if it falls within that segment.

    Args:
        seg1: First segment
        seg2: Second segment

    Returns:
        True if the segments cross or touch, False otherwise
    """
    p1, q1 = seg1.p1, seg1.p2
    p2, q2 = seg2.p1, seg2.p2

    o1 = orientation(p1, q1, p2)
    o2 = orientation(p1, q1, q2)
    o3 = orientation(p2, q2, p1)
    o4 = orientation(p2, q2, q1)

    if o1 != o2 and o3 != o4:
        return True

    if o1 == Orientation.COLLINEAR and on_segment(p1, p2, q1):
        return True
    if o2 == Orientation.COLLINEAR and on_segment(p1, q2, q1):
        return True
    if o3 == Orientation.COLLINEAR and on_segment(p2, p1, q2):
        return True
    if o4 == Orientation.COLLINEAR and on_segment(p2, q1, q2):
        return True

    return False


def point_in_polygon(point: Point, polygon: list[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point toward +x and counts crossings with
    polygon edges (even-odd rule). The result for points lying exactly on an
    edge depends on floating-point rounding and is not defined.

    Args:
        point: The point to test
        polygon: List of points forming the polygon boundary

    Returns:
        True if point is inside polygon, False otherwise (always False for
        fewer than 3 vertices)

    Examples:
        >>> triangle = [Point(0, 0), Point(0, 1), Point(1, 0)]
        >>> point_in_polygon(Point(0.25, 0.25), triangle)
        True
        >>> point_in_polygon(Point(2, 2), triangle)
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points, in coordinate units."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def centroid(polygon: list[Point]) -> Point:
    """Mean of the polygon's vertices.

    This is the vertex average, not the area centroid. An empty polygon
    yields the origin.
    """
    n = len(polygon)
    if n == 0:
        return Point(0.0, 0.0)
    return Point(
        sum(p.x for p in polygon) / n,
        sum(p.y for p in polygon) / n,
    )
