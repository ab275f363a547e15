"""Territory stores.

The geometry core reads existing territories from, and commits finished
territories to, an object implementing TerritoryStore. Two implementations
are provided: an in-memory store for embedding and tests, and a JSON file
store used by the command line.
"""

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol, runtime_checkable

from territorial.domain import Territory
from territorial.exceptions import StoreLoadError, StoreSaveError, TerritoryNotFoundError


@runtime_checkable
class TerritoryStore(Protocol):
    """Persistence collaborator used by editing sessions."""

    def list_territories(self) -> list[Territory]:
        """Return every stored territory."""
        ...

    def get(self, territory_id: int) -> Territory:
        """Return one territory or raise TerritoryNotFoundError."""
        ...

    def get_existing_polygons(self, exclude_id: int | None = None) -> list[Territory]:
        """Return territories with usable geometry, minus the excluded one."""
        ...

    def save(self, territory: Territory) -> Territory:
        """Insert or replace a territory and return the stored copy."""
        ...


class InMemoryTerritoryStore:
    """Territory store backed by a dictionary.

    Identifiers are assigned sequentially, starting after the largest
    identifier already present.
    """

    def __init__(self, territories: Iterable[Territory] = ()) -> None:
        self._territories: dict[int, Territory] = {}
        for territory in territories:
            self._insert(territory)

    def list_territories(self) -> list[Territory]:
        return list(self._territories.values())

    def get(self, territory_id: int) -> Territory:
        try:
            return self._territories[territory_id]
        except KeyError:
            raise TerritoryNotFoundError(territory_id) from None

    def get_existing_polygons(self, exclude_id: int | None = None) -> list[Territory]:
        return [
            t
            for t in self._territories.values()
            if t.id != exclude_id and t.has_geometry()
        ]

    def save(self, territory: Territory) -> Territory:
        return self._insert(territory)

    def _insert(self, territory: Territory) -> Territory:
        if territory.id is None:
            territory = territory.with_id(self._next_id())
        self._territories[territory.id] = territory
        return territory

    def _next_id(self) -> int:
        return max(self._territories, default=0) + 1


class JsonTerritoryStore(InMemoryTerritoryStore):
    """Territory store persisted to a JSON file.

    The file holds {"territories": [...]} using Territory.to_dict(). It is
    read once on construction and rewritten on every save.

    Example:
        store = JsonTerritoryStore(Path("territories.json"))
        for territory in store.list_territories():
            print(territory.name)
    """

    def __init__(self, path: Path) -> None:
        """Load the store.

        Args:
            path: JSON file path; a missing file starts an empty store

        Raises:
            StoreLoadError: If the file exists but cannot be parsed
        """
        self._path = path
        super().__init__(self._load())

    @property
    def path(self) -> Path:
        """Location of the backing file."""
        return self._path

    def _load(self) -> list[Territory]:
        if not self._path.exists():
            return []

        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            return [Territory.from_dict(item) for item in data.get("territories", [])]
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            raise StoreLoadError(str(self._path), str(e)) from e

    def save(self, territory: Territory) -> Territory:
        """Insert or replace a territory and rewrite the file.

        Raises:
            StoreSaveError: If the file cannot be written; the in-memory
                store is left as it was before the call
        """
        previous = self._territories.get(territory.id) if territory.id is not None else None
        stored = super().save(territory)
        try:
            self._write()
        except StoreSaveError:
            if previous is None:
                del self._territories[stored.id]
            else:
                self._territories[stored.id] = previous
            raise
        return stored

    def _write(self) -> None:
        payload = {"territories": [t.to_dict() for t in self.list_territories()]}
        try:
            self._path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            raise StoreSaveError(str(self._path), str(e)) from e
