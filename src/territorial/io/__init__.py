"""Input/output for territorial.

This module provides the territory store interface used by editing sessions
and helpers for polygon files.

Key classes:
- TerritoryStore: Protocol implemented by persistence collaborators
- InMemoryTerritoryStore: Dictionary-backed store
- JsonTerritoryStore: JSON-file-backed store
"""

from territorial.io.polygon_file import parse_polygon, parse_vertex, read_polygon, write_polygon
from territorial.io.store import InMemoryTerritoryStore, JsonTerritoryStore, TerritoryStore

__all__ = [
    "InMemoryTerritoryStore",
    "JsonTerritoryStore",
    "TerritoryStore",
    "parse_polygon",
    "parse_vertex",
    "read_polygon",
    "write_polygon",
]
