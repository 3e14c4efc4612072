import pytest

from nani_connect.geo import Coordinates, haversine_km, located_sellers, nearby_sellers

CHENNAI = Coordinates(13.0827, 80.2707)


def test_same_point_is_zero():
    assert haversine_km(13.0827, 80.2707, 13.0827, 80.2707) == 0


def test_distance_is_symmetric():
    there = haversine_km(13.0827, 80.2707, 12.9716, 77.5946)
    back = haversine_km(12.9716, 77.5946, 13.0827, 80.2707)
    assert there == pytest.approx(back)


def test_chennai_to_bangalore():
    assert haversine_km(13.0827, 80.2707, 12.9716, 77.5946) == pytest.approx(290, abs=10)


def test_seller_across_town_is_nearby():
    sellers = [{"id": "s1", "latitude": 13.0900, "longitude": 80.2800}]
    found = nearby_sellers(CHENNAI, sellers, 2.0)
    assert [s["id"] for s in found] == ["s1"]
    assert found[0]["distance_km"] == pytest.approx(1.29, abs=0.05)


def test_seller_in_another_city_is_excluded():
    sellers = [{"id": "blr", "latitude": 12.9716, "longitude": 77.5946}]
    assert nearby_sellers(CHENNAI, sellers, 2.0) == []


def test_nearby_needs_both_coordinates_and_sorts_nearest_first():
    sellers = [
        {"id": "far", "latitude": 13.0950, "longitude": 80.2800},
        {"id": "near", "latitude": 13.0830, "longitude": 80.2710},
        {"id": "no-lon", "latitude": 13.0827, "longitude": None},
        {"id": "nothing", "latitude": None, "longitude": None},
    ]
    found = nearby_sellers(CHENNAI, sellers, 2.0)
    assert [s["id"] for s in found] == ["near", "far"]


def test_radius_boundary_is_inclusive():
    seller = {"id": "edge", "latitude": 13.0900, "longitude": 80.2800}
    distance = haversine_km(CHENNAI.latitude, CHENNAI.longitude, 13.0900, 80.2800)
    assert nearby_sellers(CHENNAI, [seller], distance) != []


def test_fallback_lists_every_located_seller():
    sellers = [
        {"id": "blr", "latitude": 12.9716, "longitude": 77.5946},
        {"id": "hidden", "latitude": None, "longitude": None},
    ]
    assert [s["id"] for s in located_sellers(sellers)] == ["blr"]
