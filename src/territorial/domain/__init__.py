"""Domain models for territorial.

This module contains the geometric value types and the territory snapshot
used by the geometry core. All models are:

- Immutable (frozen dataclasses)
- Independent of any map-rendering or HTTP library

Key classes:
- Point: Kernel coordinate (x = lng, y = lat)
- LatLng: Geographic coordinate exchanged with adapters
- Segment: Directed edge
- Orientation: Turn direction of three points
- Territory: Named polygon owned by the store
"""

from territorial.domain.geometry import (
    LatLng,
    Orientation,
    Point,
    Segment,
    edges,
    to_latlng,
    to_latlngs,
    to_point,
    to_points,
)
from territorial.domain.territory import Territory, territory_name, territory_names

__all__: list[str] = [
    # Enums
    "Orientation",
    # Core types
    "LatLng",
    "Point",
    "Segment",
    "Territory",
    # Conversions
    "edges",
    "to_latlng",
    "to_latlngs",
    "to_point",
    "to_points",
    # Lookups
    "territory_name",
    "territory_names",
]
