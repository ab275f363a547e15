"""Territorial - Geometry engine for drawing and editing map territories.

Territorial validates operator-drawn polygons, keeps them free of
self-intersection, snaps their vertices to the boundaries of existing
territories and rejects any polygon that would overlap another territory
before it is committed.

Example:
    $ territorial commit zone.json --store territories.json --name "Zona Norte"
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
