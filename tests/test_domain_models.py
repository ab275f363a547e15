"""Tests for domain models to verify they work correctly."""

import pytest

from territorial.domain import (
    LatLng,
    Point,
    Segment,
    Territory,
    edges,
    territory_name,
    territory_names,
    to_latlng,
    to_latlngs,
    to_point,
    to_points,
)


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        p = Point(1.5, -2.0)
        assert p.x == 1.5
        assert p.y == -2.0

    def test_point_to_tuple(self) -> None:
        assert Point(1.0, 2.0).to_tuple() == (1.0, 2.0)

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(1.0, 2.0)
        with pytest.raises(AttributeError):
            p.x = 3.0  # type: ignore

    def test_point_hashable(self) -> None:
        assert len({Point(0, 0), Point(0, 0), Point(1, 0)}) == 2


class TestLatLng:
    """Tests for LatLng and the axis conversion contract."""

    def test_to_point_swaps_axes(self) -> None:
        """Latitude becomes y and longitude becomes x."""
        p = to_point(LatLng(lat=-17.39, lng=-66.15))
        assert p == Point(x=-66.15, y=-17.39)

    def test_to_latlng_swaps_back(self) -> None:
        coord = to_latlng(Point(x=-66.15, y=-17.39))
        assert coord.lat == -17.39
        assert coord.lng == -66.15

    def test_polygon_conversion_preserves_order(self) -> None:
        polygon = [LatLng(1, 10), LatLng(2, 20), LatLng(3, 30)]
        points = to_points(polygon)
        assert points == [Point(10, 1), Point(20, 2), Point(30, 3)]
        assert to_latlngs(points) == polygon

    def test_to_tuple_is_lat_lng(self) -> None:
        assert LatLng(lat=1.0, lng=2.0).to_tuple() == (1.0, 2.0)

    def test_serialization(self) -> None:
        coord = LatLng(lat=-17.3935, lng=-66.157)
        data = coord.to_dict()
        assert data == {"lat": -17.3935, "lng": -66.157}
        assert LatLng.from_dict(data) == coord

    def test_from_dict_coerces_numbers(self) -> None:
        coord = LatLng.from_dict({"lat": 1, "lng": "2.5"})
        assert coord == LatLng(1.0, 2.5)


class TestEdges:
    """Tests for polygon edge enumeration."""

    def test_includes_closing_edge(self) -> None:
        polygon = [Point(0, 0), Point(0, 1), Point(1, 0)]
        segs = edges(polygon)
        assert len(segs) == 3
        assert segs[-1] == Segment(Point(1, 0), Point(0, 0))

    def test_fewer_than_two_vertices(self) -> None:
        assert edges([]) == []
        assert edges([Point(0, 0)]) == []


class TestTerritory:
    """Tests for Territory class."""

    @pytest.fixture
    def territory(self) -> Territory:
        return Territory(
            id=7,
            name="Zona Norte",
            polygon=(LatLng(0, 0), LatLng(0, 1), LatLng(1, 1)),
            active=True,
            owner_id=3,
        )

    def test_points_are_kernel_coordinates(self, territory: Territory) -> None:
        assert territory.points == [Point(0, 0), Point(1, 0), Point(1, 1)]

    def test_has_geometry(self, territory: Territory) -> None:
        assert territory.has_geometry()
        assert not Territory(id=1, name="Vacía").has_geometry()
        assert not Territory(id=1, name="Línea", polygon=(LatLng(0, 0), LatLng(1, 1))).has_geometry()

    def test_with_id(self) -> None:
        territory = Territory(id=None, name="Nueva")
        assert territory.with_id(4).id == 4
        assert territory.id is None

    def test_serialization(self, territory: Territory) -> None:
        data = territory.to_dict()
        assert data["area"][0] == {"lat": 0, "lng": 0}
        assert data["state"] is True
        assert data["user_id"] == 3
        assert Territory.from_dict(data) == territory

    def test_from_dict_defaults(self) -> None:
        territory = Territory.from_dict({"name": "Centro"})
        assert territory.id is None
        assert territory.polygon == ()
        assert territory.active is True
        assert territory.owner_id is None


class TestTerritoryNames:
    """Tests for territory name lookups."""

    def test_lookup(self) -> None:
        names = territory_names(
            [Territory(id=1, name="Norte"), Territory(id=2, name="Sur"), Territory(id=None, name="x")]
        )
        assert names == {1: "Norte", 2: "Sur"}
        assert territory_name(names, 2) == "Sur"

    def test_missing_reference(self) -> None:
        assert territory_name({}, None) == "No territory"

    def test_unknown_id(self) -> None:
        assert territory_name({1: "Norte"}, 9) == "Territory #9"
