"""Core algorithms for territorial.

This module contains the geometry core:

- Geometry predicates (orientation, segment intersection, point-in-polygon)
- Polygon validation (self-intersection)
- Boundary projection
- Overlap detection against existing territories
- Vertex snapping
- The editing session state machine

All geometry functions are pure and total. Only the session's commit
step talks to a store.

Key functions:
- orientation: Turn direction of three points
- segments_intersect: Test whether two segments share a point
- point_in_polygon: Ray casting containment test
- is_polygon_valid: Check a polygon is simple
- closest_point_on_polygon_edge: Project a point onto a boundary
- polygons_overlap: Test two polygons for overlap

Key classes:
- SnapEngine: Per-vertex snap-to-edge and push-outside
- EditSession: Immutable session value with pure transitions
- TerritoryEditor: Stateful facade driving a session against a store
"""

from territorial.core.editor import TerritoryEditor
from territorial.core.geometry import (
    centroid,
    distance,
    on_segment,
    orientation,
    point_in_polygon,
    segments_intersect,
)
from territorial.core.overlap import (
    OverlapResult,
    area_polygons_overlap,
    find_conflict,
    polygons_overlap,
)
from territorial.core.projection import closest_point_on_polygon_edge, closest_point_on_segment
from territorial.core.session import EditSession, InvalidReason, SessionState
from territorial.core.snapping import SNAP_OFFSET, SNAP_THRESHOLD, SnapEngine
from territorial.core.validator import (
    find_self_intersection,
    is_area_polygon_valid,
    is_polygon_valid,
    is_valid_coordinate,
)

__all__ = [
    "SNAP_OFFSET",
    "SNAP_THRESHOLD",
    # Session classes
    "EditSession",
    "InvalidReason",
    # Overlap classes
    "OverlapResult",
    "SessionState",
    # Snap classes
    "SnapEngine",
    "TerritoryEditor",
    # Geometry functions
    "area_polygons_overlap",
    "centroid",
    "closest_point_on_polygon_edge",
    "closest_point_on_segment",
    "distance",
    "find_conflict",
    "find_self_intersection",
    "is_area_polygon_valid",
    "is_polygon_valid",
    "is_valid_coordinate",
    "on_segment",
    "orientation",
    "point_in_polygon",
    "polygons_overlap",
    "segments_intersect",
]
