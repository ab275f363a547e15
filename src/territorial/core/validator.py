"""Polygon validation for territory boundaries.

A territory boundary must have at least three vertices and must be simple:
no two non-adjacent edges may touch or cross. The check is a pairwise scan
over edges.
"""

from territorial.core.geometry import segments_intersect
from territorial.domain import LatLng, Point, edges, to_points


def find_self_intersection(polygon: list[Point]) -> tuple[int, int] | None:
    """Find the first pair of non-adjacent edges that intersect.

    Edge i runs from vertex i to vertex i + 1 (wrapping). Edge i is tested
    against every edge j >= i + 2, except the pair (0, n - 1), which shares
    the first vertex through the closing edge.

    Args:
        polygon: Ordered polygon vertices (at least 3)

    Returns:
        (i, j) edge indices of the first crossing found, or None
    """
    segs = edges(polygon)
    n = len(segs)

    for i in range(n):
        for j in range(i + 2, n):
            if i == 0 and j == n - 1:
                continue
            if segments_intersect(segs[i], segs[j]):
                return (i, j)

    return None


def is_polygon_valid(polygon: list[Point]) -> bool:
    """Check that a polygon has 3+ vertices and no self-intersection.

    Args:
        polygon: Ordered polygon vertices

    Returns:
        True if the polygon is simple, False otherwise

    Examples:
        >>> square = [Point(0, 0), Point(0, 1), Point(1, 1), Point(1, 0)]
        >>> is_polygon_valid(square)
        True
        >>> bowtie = [Point(0, 0), Point(1, 1), Point(1, 0), Point(0, 1)]
        >>> is_polygon_valid(bowtie)
        False
    """
    if len(polygon) < 3:
        return False
    return find_self_intersection(polygon) is None


def is_valid_coordinate(lat: float, lng: float) -> bool:
    """Check that a coordinate lies within geographic ranges."""
    return -90 <= lat <= 90 and -180 <= lng <= 180


def is_area_polygon_valid(polygon: list[LatLng]) -> bool:
    """Validate a (lat, lng) polygon.

    Coordinate ranges are not checked here; see is_valid_coordinate.
    """
    return is_polygon_valid(to_points(polygon))
