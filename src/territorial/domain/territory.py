"""Territory model shared with the persistence layer.

A territory is a named coverage zone whose boundary is stored as a list of
(lat, lng) vertices. The geometry core only ever reads territories; they are
treated as immutable snapshots for the length of an editing session.
"""

from dataclasses import dataclass, field, replace
from typing import Any

from territorial.domain.geometry import LatLng, Point, to_points


@dataclass(frozen=True)
class Territory:
    """A named, persisted polygon.

    Attributes:
        id: Store-assigned identifier (None until first saved)
        name: Display name shown to operators
        polygon: Boundary vertices in (lat, lng) order
        active: Whether the territory is in use
        owner_id: Identifier of the user the territory is assigned to
    """

    id: int | None
    name: str
    polygon: tuple[LatLng, ...] = field(default_factory=tuple)
    active: bool = True
    owner_id: int | None = None

    @property
    def points(self) -> list[Point]:
        """Boundary in kernel coordinates."""
        return to_points(list(self.polygon))

    def has_geometry(self) -> bool:
        """Check whether the territory has a usable polygon (3+ vertices)."""
        return len(self.polygon) >= 3

    def with_id(self, territory_id: int) -> "Territory":
        """Return a copy carrying the given identifier."""
        return replace(self, id=territory_id)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the store's dictionary format.

        Returns:
            Dictionary with id, name, area, state and user_id fields
        """
        return {
            "id": self.id,
            "name": self.name,
            "area": [c.to_dict() for c in self.polygon],
            "state": self.active,
            "user_id": self.owner_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Territory":
        """Deserialize from the store's dictionary format.

        Args:
            data: Dictionary representation of a territory

        Returns:
            Territory instance
        """
        area = data.get("area") or []
        return cls(
            id=data.get("id"),
            name=data["name"],
            polygon=tuple(LatLng.from_dict(c) for c in area),
            active=data.get("state", True),
            owner_id=data.get("user_id"),
        )


def territory_names(territories: list[Territory]) -> dict[int, str]:
    """Map territory identifiers to names, skipping unsaved territories."""
    return {t.id: t.name for t in territories if t.id is not None}


def territory_name(names: dict[int, str], territory_id: int | None) -> str:
    """Display name for a territory reference.

    Args:
        names: Lookup built by territory_names()
        territory_id: Referenced identifier, possibly None

    Returns:
        The territory's name, "No territory" for None, or a placeholder
        for identifiers missing from the lookup
    """
    if territory_id is None:
        return "No territory"
    return names.get(territory_id, f"Territory #{territory_id}")
