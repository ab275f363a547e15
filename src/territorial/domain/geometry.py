"""Core geometric types for territory polygons.

This module defines the fundamental geometric types used throughout territorial:
- Point: A planar point in kernel coordinates (x = longitude, y = latitude)
- LatLng: A geographic coordinate as exchanged with map adapters and stores
- Segment: A directed edge between two points
- Orientation: Enum for the turn direction of three points

The kernel always works on Points. Map adapters and stores speak LatLng.
The conversion between the two swaps the axes and is the only place where
that swap happens.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class Orientation(Enum):
    """Turn direction of an ordered point triple."""

    COLLINEAR = auto()
    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass(frozen=True, slots=True)
class Point:
    """A point in the kernel's planar coordinate system.

    Attributes:
        x: Longitude in degrees
        y: Latitude in degrees
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class LatLng:
    """A geographic coordinate in (lat, lng) order.

    Attributes:
        lat: Latitude in degrees
        lng: Longitude in degrees
    """

    lat: float
    lng: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to a (lat, lng) pair, the order map libraries expect."""
        return (self.lat, self.lng)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with lat and lng fields
        """
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LatLng":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with lat and lng fields

        Returns:
            LatLng instance
        """
        return cls(lat=float(data["lat"]), lng=float(data["lng"]))


@dataclass(frozen=True, slots=True)
class Segment:
    """A directed edge from p1 to p2."""

    p1: Point
    p2: Point


def to_point(coord: LatLng) -> Point:
    """Convert a geographic coordinate to kernel coordinates (x = lng, y = lat)."""
    return Point(x=coord.lng, y=coord.lat)


def to_latlng(point: Point) -> LatLng:
    """Convert a kernel point back to a geographic coordinate."""
    return LatLng(lat=point.y, lng=point.x)


def to_points(coords: list[LatLng]) -> list[Point]:
    """Convert a (lat, lng) polygon to kernel points, preserving vertex order."""
    return [to_point(c) for c in coords]


def to_latlngs(points: list[Point]) -> list[LatLng]:
    """Convert kernel points back to a (lat, lng) polygon."""
    return [to_latlng(p) for p in points]


def edges(polygon: list[Point]) -> list[Segment]:
    """List polygon edges including the closing edge from last to first vertex.

    Args:
        polygon: Ordered polygon vertices

    Returns:
        One segment per vertex; empty for fewer than 2 vertices
    """
    n = len(polygon)
    if n < 2:
        return []
    return [Segment(polygon[i], polygon[(i + 1) % n]) for i in range(n)]
