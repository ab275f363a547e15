"""Boundary operations for UI and persistence adapters.

Everything here takes and returns polygons in (lat, lng) order. The swap to
kernel coordinates (x = lng, y = lat) happens inside.
"""

from collections.abc import Iterable

from territorial.core.overlap import OverlapResult, find_conflict
from territorial.core.snapping import SnapEngine
from territorial.core.validator import is_area_polygon_valid
from territorial.domain import LatLng, Territory


def validate(polygon: list[LatLng]) -> bool:
    """Check that a polygon has 3+ vertices and no crossing edges."""
    return is_area_polygon_valid(polygon)


def overlaps(
    polygon: list[LatLng],
    territories: Iterable[Territory],
    exclude_id: int | None = None,
) -> OverlapResult:
    """Find the first territory overlapping the polygon."""
    return find_conflict(polygon, territories, exclude_id)


def snap(
    polygon: list[LatLng],
    existing_polygons: list[list[LatLng]],
    engine: SnapEngine | None = None,
) -> list[LatLng]:
    """Snap a polygon's vertices to the given polygons; inputs are untouched."""
    return (engine or SnapEngine()).snap(polygon, existing_polygons)


def polygon_center(polygon: list[LatLng]) -> LatLng:
    """Vertex average of a polygon, used to centre a map view."""
    if not polygon:
        return LatLng(0.0, 0.0)
    n = len(polygon)
    return LatLng(
        lat=sum(c.lat for c in polygon) / n,
        lng=sum(c.lng for c in polygon) / n,
    )
