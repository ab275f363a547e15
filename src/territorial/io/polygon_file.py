"""Reading and writing standalone polygon files.

A polygon file is a JSON array of vertices. Each vertex is either an object
{"lat": ..., "lng": ...} or a [lat, lng] pair, the order map libraries use.
Snapped polygons are always written back as objects.
"""

import json
import math
from pathlib import Path
from typing import Any

from territorial.domain import LatLng
from territorial.exceptions import InvalidPolygonError


def parse_vertex(raw: Any) -> LatLng:
    """Parse a single vertex.

    Args:
        raw: {"lat", "lng"} mapping or [lat, lng] pair

    Returns:
        LatLng instance

    Raises:
        InvalidPolygonError: If the vertex is malformed or not finite
    """
    try:
        if isinstance(raw, dict):
            coord = LatLng.from_dict(raw)
        elif isinstance(raw, (list, tuple)) and len(raw) == 2:
            coord = LatLng(lat=float(raw[0]), lng=float(raw[1]))
        else:
            raise InvalidPolygonError(f"unrecognised vertex {raw!r}")
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidPolygonError(f"unrecognised vertex {raw!r}") from e

    if not (math.isfinite(coord.lat) and math.isfinite(coord.lng)):
        raise InvalidPolygonError(f"non-finite vertex {raw!r}")
    return coord


def parse_polygon(data: Any) -> list[LatLng]:
    """Parse a decoded JSON array into a polygon."""
    if not isinstance(data, list):
        raise InvalidPolygonError("expected a JSON array of vertices")
    return [parse_vertex(v) for v in data]


def read_polygon(path: Path) -> list[LatLng]:
    """Load a polygon file.

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidPolygonError: If the content is not a vertex list
    """
    if not path.exists():
        raise FileNotFoundError(f"Polygon file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as e:
        raise InvalidPolygonError(f"not valid JSON ({e})") from e
    return parse_polygon(data)


def write_polygon(path: Path, polygon: list[LatLng]) -> None:
    """Write a polygon as a JSON array of {"lat", "lng"} objects."""
    path.write_text(json.dumps([c.to_dict() for c in polygon], indent=2), encoding="utf-8")
