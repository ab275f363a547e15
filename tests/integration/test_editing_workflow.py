"""Integration tests for multi-territory editing against a JSON store.

These tests drive TerritoryEditor the way a map adapter would and check
that what ends up on disk never overlaps.
"""

from itertools import combinations
from pathlib import Path

import pytest

from territorial.config import GeometryConfig, TerritorialSettings
from territorial.core import SessionState, TerritoryEditor, polygons_overlap
from territorial.domain import LatLng
from territorial.exceptions import CommitBlockedError, StoreSaveError
from territorial.io import JsonTerritoryStore

NORTE = [LatLng(0, 0), LatLng(0.01, 0), LatLng(0.01, 0.01), LatLng(0, 0.01)]
# Drawn slightly short of Norte's western edge
OESTE = [
    LatLng(0.002, -0.0003),
    LatLng(0.008, -0.0003),
    LatLng(0.008, -0.01),
    LatLng(0.002, -0.01),
]
# Drawn slightly short of Norte's eastern edge
ESTE = [
    LatLng(0.002, 0.0103),
    LatLng(0.008, 0.0103),
    LatLng(0.008, 0.02),
    LatLng(0.002, 0.02),
]


def draw_and_close(editor: TerritoryEditor, name: str, polygon: list[LatLng]):
    editor.start(name=name)
    for coord in polygon:
        editor.add_vertex(coord)
    return editor.close()


@pytest.fixture
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "territories.json"


@pytest.fixture
def seeded(store_path: Path) -> JsonTerritoryStore:
    """Store holding Norte and a snapped Oeste."""
    store = JsonTerritoryStore(store_path)
    editor = TerritoryEditor(store)
    assert draw_and_close(editor, "Norte", NORTE).state == SessionState.READY
    editor.commit()
    assert draw_and_close(editor, "Oeste", OESTE).state == SessionState.READY
    editor.commit()
    return store


class TestEditingWorkflow:
    """End-to-end editing scenarios."""

    def test_neighbours_are_stored_disjoint(self, seeded, store_path):
        reloaded = JsonTerritoryStore(store_path)
        territories = reloaded.list_territories()
        assert [t.name for t in territories] == ["Norte", "Oeste"]
        for a, b in combinations(territories, 2):
            assert not polygons_overlap(a.points, b.points)

    def test_snapped_vertices_hug_neighbour(self, seeded):
        oeste = seeded.get(2)
        assert all(-0.0001 < c.lng < 0 for c in oeste.polygon[:2])
        assert list(oeste.polygon[2:]) == OESTE[2:]

    def test_vertex_snapped_onto_shared_edge_conflicts(self, seeded):
        """Snapping onto a neighbour's edge without pushing out still touches it."""
        editor = TerritoryEditor(seeded)
        session = draw_and_close(editor, "Este", ESTE)
        assert session.snapped_vertices == 2
        assert session.polygon[0].lng == 0.01
        assert session.state == SessionState.CONFLICTING
        assert session.conflicting_name == "Norte"

    def test_conflict_can_be_resolved_by_editing(self, seeded, store_path):
        settings = TerritorialSettings(geometry=GeometryConfig(snap_enabled=False))
        editor = TerritoryEditor(seeded, settings)

        session = editor.start(territory_id=1)
        assert session.state == SessionState.READY

        session = editor.move_vertex(0, LatLng(0.005, -0.005))
        assert session.state == SessionState.CONFLICTING
        assert session.conflicting_name == "Oeste"

        session = editor.move_vertex(0, LatLng(0, 0))
        session = editor.move_vertex(2, LatLng(0.012, 0.012))
        assert session.state == SessionState.READY

        editor.commit()
        norte = JsonTerritoryStore(store_path).get(1)
        assert norte.polygon[2] == LatLng(0.012, 0.012)
        assert norte.name == "Norte"

    def test_concurrent_commit_blocks_stale_session(self, seeded):
        first = TerritoryEditor(seeded)
        second = TerritoryEditor(seeded)
        far = [LatLng(0.05, 0.05), LatLng(0.06, 0.05), LatLng(0.06, 0.06), LatLng(0.05, 0.06)]
        overlapping = [LatLng(0.055, 0.055), LatLng(0.07, 0.055), LatLng(0.07, 0.07), LatLng(0.055, 0.07)]

        assert draw_and_close(first, "Lejana", far).state == SessionState.READY
        assert draw_and_close(second, "Vecina", overlapping).state == SessionState.READY
        second.commit()

        with pytest.raises(CommitBlockedError):
            first.commit()
        assert first.session.state == SessionState.CONFLICTING
        assert first.session.conflicting_name == "Vecina"
        assert len(seeded.list_territories()) == 3

    def test_commit_can_be_retried_after_write_failure(self, tmp_path):
        path = tmp_path / "missing" / "territories.json"
        store = JsonTerritoryStore(path)
        editor = TerritoryEditor(store)
        assert draw_and_close(editor, "Zona", NORTE).state == SessionState.READY

        with pytest.raises(StoreSaveError):
            editor.commit()
        assert store.list_territories() == []
        assert editor.session.state == SessionState.READY

        path.parent.mkdir()
        stored = editor.commit()
        assert stored.id == 1
        assert JsonTerritoryStore(path).get(1).name == "Zona"

    def test_cancel_discards_drawing(self, seeded, store_path):
        editor = TerritoryEditor(seeded)
        draw_and_close(editor, "Lejana", [LatLng(0.05, 0.05), LatLng(0.06, 0.05), LatLng(0.06, 0.06)])
        editor.cancel()
        assert len(JsonTerritoryStore(store_path).list_territories()) == 2
