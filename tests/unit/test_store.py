"""Unit tests for territory stores and polygon files."""

import json
from pathlib import Path

import pytest

from territorial.domain import LatLng, Territory
from territorial.exceptions import (
    InvalidPolygonError,
    StoreLoadError,
    StoreSaveError,
    TerritoryNotFoundError,
)
from territorial.io import (
    InMemoryTerritoryStore,
    JsonTerritoryStore,
    TerritoryStore,
    parse_polygon,
    parse_vertex,
    read_polygon,
    write_polygon,
)

TRIANGLE = (LatLng(0, 0), LatLng(0.01, 0), LatLng(0.01, 0.01))


class TestInMemoryTerritoryStore:
    """Tests for InMemoryTerritoryStore."""

    @pytest.fixture
    def store(self) -> InMemoryTerritoryStore:
        return InMemoryTerritoryStore(
            [
                Territory(id=1, name="Norte", polygon=TRIANGLE),
                Territory(id=4, name="Vacía"),
            ]
        )

    def test_satisfies_protocol(self, store):
        assert isinstance(store, TerritoryStore)

    def test_get(self, store):
        assert store.get(1).name == "Norte"

    def test_get_missing(self, store):
        with pytest.raises(TerritoryNotFoundError) as exc_info:
            store.get(99)
        assert exc_info.value.territory_id == 99

    def test_existing_polygons_skip_empty_and_excluded(self, store):
        assert [t.id for t in store.get_existing_polygons()] == [1]
        assert store.get_existing_polygons(exclude_id=1) == []

    def test_save_assigns_next_id(self, store):
        stored = store.save(Territory(id=None, name="Sur", polygon=TRIANGLE))
        assert stored.id == 5
        assert store.get(5) == stored

    def test_save_replaces(self, store):
        store.save(Territory(id=1, name="Norte 2", polygon=TRIANGLE))
        assert store.get(1).name == "Norte 2"
        assert len(store.list_territories()) == 2

    def test_empty_store_starts_at_one(self):
        assert InMemoryTerritoryStore().save(Territory(id=None, name="A")).id == 1


class TestJsonTerritoryStore:
    """Tests for JsonTerritoryStore."""

    def test_missing_file_is_empty(self, tmp_path: Path):
        store = JsonTerritoryStore(tmp_path / "territories.json")
        assert store.list_territories() == []
        assert not store.path.exists()

    def test_save_and_reload(self, tmp_path: Path):
        path = tmp_path / "territories.json"
        store = JsonTerritoryStore(path)
        stored = store.save(Territory(id=None, name="Norte", polygon=TRIANGLE, owner_id=2))

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["territories"][0]["name"] == "Norte"
        assert data["territories"][0]["area"][1] == {"lat": 0.01, "lng": 0}

        reloaded = JsonTerritoryStore(path)
        assert reloaded.get(stored.id) == stored

    def test_load_does_not_rewrite(self, tmp_path: Path):
        path = tmp_path / "territories.json"
        path.write_text('{"territories": [{"id": 3, "name": "Sur"}]}', encoding="utf-8")
        store = JsonTerritoryStore(path)
        assert store.get(3).name == "Sur"
        assert path.read_text(encoding="utf-8") == '{"territories": [{"id": 3, "name": "Sur"}]}'

    def test_corrupt_file(self, tmp_path: Path):
        path = tmp_path / "territories.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(StoreLoadError) as exc_info:
            JsonTerritoryStore(path)
        assert exc_info.value.path == str(path)

    def test_wrong_shape(self, tmp_path: Path):
        path = tmp_path / "territories.json"
        path.write_text('{"territories": [{"id": 1}]}', encoding="utf-8")
        with pytest.raises(StoreLoadError):
            JsonTerritoryStore(path)

    def test_unwritable_location(self, tmp_path: Path):
        store = JsonTerritoryStore(tmp_path / "missing" / "territories.json")
        with pytest.raises(StoreSaveError):
            store.save(Territory(id=None, name="Norte", polygon=TRIANGLE))

    def test_failed_insert_is_rolled_back(self, tmp_path: Path):
        path = tmp_path / "missing" / "territories.json"
        store = JsonTerritoryStore(path)
        with pytest.raises(StoreSaveError):
            store.save(Territory(id=None, name="Zona", polygon=TRIANGLE))
        assert store.list_territories() == []

        path.parent.mkdir()
        stored = store.save(Territory(id=None, name="Zona", polygon=TRIANGLE))
        assert stored.id == 1
        assert JsonTerritoryStore(path).list_territories() == [stored]

    def test_failed_replace_restores_previous(self, tmp_path: Path):
        path = tmp_path / "territories.json"
        store = JsonTerritoryStore(path)
        original = store.save(Territory(id=None, name="Norte", polygon=TRIANGLE))
        path.unlink()
        path.mkdir()
        with pytest.raises(StoreSaveError):
            store.save(Territory(id=original.id, name="Norte 2", polygon=TRIANGLE))
        assert store.get(original.id) == original


class TestPolygonFile:
    """Tests for polygon file parsing."""

    def test_parse_object_vertex(self):
        assert parse_vertex({"lat": -17.39, "lng": -66.15}) == LatLng(-17.39, -66.15)

    def test_parse_pair_vertex(self):
        assert parse_vertex([-17.39, -66.15]) == LatLng(-17.39, -66.15)

    @pytest.mark.parametrize(
        "raw",
        [
            {"lat": 1},
            [1, 2, 3],
            "1,2",
            ["a", 2],
            None,
        ],
    )
    def test_malformed_vertex(self, raw):
        with pytest.raises(InvalidPolygonError):
            parse_vertex(raw)

    def test_non_finite_vertex(self):
        with pytest.raises(InvalidPolygonError):
            parse_vertex([float("nan"), 0])
        with pytest.raises(InvalidPolygonError):
            parse_vertex({"lat": 0, "lng": float("inf")})

    def test_parse_polygon_requires_list(self):
        with pytest.raises(InvalidPolygonError):
            parse_polygon({"lat": 0, "lng": 0})

    def test_read_write(self, tmp_path: Path):
        path = tmp_path / "polygon.json"
        write_polygon(path, list(TRIANGLE))
        assert read_polygon(path) == list(TRIANGLE)

    def test_read_mixed_formats(self, tmp_path: Path):
        path = tmp_path / "polygon.json"
        path.write_text('[[0, 0], {"lat": 1, "lng": 0}, [1, 1]]', encoding="utf-8")
        assert read_polygon(path) == [LatLng(0, 0), LatLng(1, 0), LatLng(1, 1)]

    def test_read_missing(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            read_polygon(tmp_path / "nope.json")

    def test_read_invalid_json(self, tmp_path: Path):
        path = tmp_path / "polygon.json"
        path.write_text("[[0, 0],", encoding="utf-8")
        with pytest.raises(InvalidPolygonError):
            read_polygon(path)
