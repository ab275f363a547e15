"""Overlap detection between territory polygons.

Two polygons overlap when a vertex of one lies inside the other, or when any
pair of their edges intersects. For simple polygons these conditions are
exhaustive, so no clipping is needed. Touching edges count as overlap.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from territorial.core.geometry import point_in_polygon, segments_intersect
from territorial.domain import LatLng, Point, Territory, edges, to_points


@dataclass(frozen=True)
class OverlapResult:
    """Outcome of checking a polygon against existing territories.

    Attributes:
        overlaps: True if some territory overlaps the polygon
        conflicting_id: Identifier of the first overlapping territory
        conflicting_name: Name of the first overlapping territory
    """

    overlaps: bool
    conflicting_id: int | None = None
    conflicting_name: str | None = None

    @classmethod
    def clear(cls) -> "OverlapResult":
        """Result for a polygon with no conflicts."""
        return cls(overlaps=False)


def polygons_overlap(a: list[Point], b: list[Point]) -> bool:
    """Test whether two polygons share interior area or boundary.

    Args:
        a: First polygon
        b: Second polygon

    Returns:
        True if the polygons overlap; False if either has fewer than
        3 vertices
    """
    if len(a) < 3 or len(b) < 3:
        return False

    if any(point_in_polygon(p, b) for p in a):
        return True
    if any(point_in_polygon(p, a) for p in b):
        return True

    b_edges = edges(b)
    for seg_a in edges(a):
        for seg_b in b_edges:
            if segments_intersect(seg_a, seg_b):
                return True

    return False


def area_polygons_overlap(a: list[LatLng], b: list[LatLng]) -> bool:
    """Overlap test for polygons given in (lat, lng) order."""
    return polygons_overlap(to_points(a), to_points(b))


def find_conflict(
    polygon: list[LatLng],
    territories: Iterable[Territory],
    exclude_id: int | None = None,
) -> OverlapResult:
    """Find the first territory that overlaps a candidate polygon.

    Territories are checked in iteration order. The territory being edited
    (exclude_id) and territories without usable geometry are skipped.

    Args:
        polygon: Candidate polygon in (lat, lng) order
        territories: Snapshot of existing territories
        exclude_id: Identifier of the territory being edited, if any

    Returns:
        OverlapResult naming the first conflict, or a clear result
    """
    if len(polygon) < 3:
        return OverlapResult.clear()

    candidate = to_points(polygon)
    for territory in territories:
        if exclude_id is not None and territory.id == exclude_id:
            continue
        if not territory.has_geometry():
            continue
        if polygons_overlap(candidate, territory.points):
            return OverlapResult(
                overlaps=True,
                conflicting_id=territory.id,
                conflicting_name=territory.name,
            )

    return OverlapResult.clear()
