"""Vertex snapping against neighbouring territories.

Each vertex of a candidate polygon is adjusted independently in two phases:

1. Snap-to-edge: a vertex closer than the snap threshold to the boundary of
   another territory is moved onto that boundary (the nearest one wins).
2. Push-outside: a vertex that lies inside another territory is moved to its
   boundary projection plus a small offset pointing away from that
   territory's vertex centroid.

Snapping never repairs topology. A snapped polygon can self-intersect even if
the drawing did not, so it has to be validated again before commit.
"""

import math

from territorial.core.geometry import COLLINEAR_EPSILON, centroid, distance, point_in_polygon
from territorial.core.projection import closest_point_on_polygon_edge
from territorial.domain import LatLng, Point, to_latlngs, to_points

# Thresholds are in degrees, the same unit as raw coordinates
SNAP_THRESHOLD = 0.0005
SNAP_OFFSET = 0.00005


class SnapEngine:
    """Moves polygon vertices onto or just outside neighbouring boundaries.

    The engine is stateless apart from its two distances and can be shared
    between sessions.

    Example:
        engine = SnapEngine()
        snapped = engine.snap(drawn_polygon, [t.polygon for t in others])
    """

    def __init__(
        self,
        threshold: float = SNAP_THRESHOLD,
        offset: float = SNAP_OFFSET,
    ) -> None:
        """Initialize the engine.

        Args:
            threshold: Maximum distance for snap-to-edge (exclusive)
            offset: Distance a pushed vertex is placed outside the boundary
        """
        self.threshold = threshold
        self.offset = offset

    def snap_to_edge(self, point: Point, others: list[list[Point]]) -> Point:
        """Move a point onto the nearest boundary within the threshold.

        Args:
            point: Vertex to adjust
            others: Polygons of the other territories

        Returns:
            Boundary projection with the smallest distance below the
            threshold, or the point unchanged
        """
        best: Point | None = None
        min_distance = math.inf

        for polygon in others:
            closest = closest_point_on_polygon_edge(point, polygon)
            d = distance(point, closest)
            if d < self.threshold and d < min_distance:
                min_distance = d
                best = closest

        return best if best is not None else point

    def push_outside(self, point: Point, others: list[list[Point]]) -> Point:
        """Relocate a point lying inside another polygon to just outside it.

        Only the first containing polygon is considered. The outward
        direction runs from that polygon's vertex centroid through the
        boundary projection. If the two coincide, the raw projection is used.

        Args:
            point: Vertex to adjust
            others: Polygons of the other territories

        Returns:
            Adjusted point, or the point unchanged if it is inside none
        """
        for polygon in others:
            if not point_in_polygon(point, polygon):
                continue

            projection = closest_point_on_polygon_edge(point, polygon)
            center = centroid(polygon)

            dx = projection.x - center.x
            dy = projection.y - center.y
            length = math.hypot(dx, dy)
            if length == 0:
                return projection

            return Point(
                projection.x + dx / length * self.offset,
                projection.y + dy / length * self.offset,
            )

        return point

    def snap_vertex(self, point: Point, others: list[list[Point]]) -> Point:
        """Apply snap-to-edge and then push-outside to a single vertex."""
        return self.push_outside(self.snap_to_edge(point, others), others)

    def snap_polygon(self, polygon: list[Point], others: list[list[Point]]) -> list[Point]:
        """Snap every vertex of a polygon independently.

        Polygons with fewer than 3 vertices are returned unchanged.
        """
        if len(polygon) < 3:
            return list(polygon)
        return [self.snap_vertex(p, others) for p in polygon]

    def snap(self, polygon: list[LatLng], existing: list[list[LatLng]]) -> list[LatLng]:
        """Snap a (lat, lng) polygon against other (lat, lng) polygons.

        Args:
            polygon: Candidate polygon
            existing: Polygons of the other territories

        Returns:
            New polygon with adjusted vertices; inputs are not modified
        """
        others = [to_points(list(p)) for p in existing]
        return to_latlngs(self.snap_polygon(to_points(list(polygon)), others))


def max_displacement(before: list[LatLng], after: list[LatLng]) -> float:
    """Largest distance any vertex moved between two versions of a polygon.

    Polygons with a different vertex count are treated as infinitely apart.
    """
    if len(before) != len(after):
        return math.inf
    moves = [distance(a, b) for a, b in zip(to_points(before), to_points(after))]
    return max(moves, default=0.0)


def changed_materially(before: list[LatLng], after: list[LatLng]) -> bool:
    """Check whether snapping moved any vertex by more than the collinearity epsilon."""
    return max_displacement(before, after) > COLLINEAR_EPSILON


def moved_vertices(before: list[LatLng], after: list[LatLng]) -> int:
    """Count vertices that moved by more than the collinearity epsilon."""
    return sum(
        1
        for a, b in zip(to_points(before), to_points(after))
        if distance(a, b) > COLLINEAR_EPSILON
    )
