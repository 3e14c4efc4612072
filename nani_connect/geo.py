from math import atan2, cos, radians, sin, sqrt
from typing import Iterable, NamedTuple, Optional

EARTH_RADIUS_KM = 6371.0
NEARBY_RADIUS_KM = 2.0


class Coordinates(NamedTuple):
    latitude: float
    longitude: float


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres between two points given in degrees."""
    d_lat = radians(lat2 - lat1)
    d_lon = radians(lon2 - lon1)
    a = sin(d_lat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(d_lon / 2) ** 2
    return 2 * EARTH_RADIUS_KM * atan2(sqrt(a), sqrt(1 - a))


def coordinates_of(profile: dict) -> Optional[Coordinates]:
    """Stored coordinates of a profile row, or None unless both are set."""
    lat = profile.get("latitude")
    lon = profile.get("longitude")
    if lat is None or lon is None:
        return None
    return Coordinates(float(lat), float(lon))


def located_sellers(sellers: Iterable[dict]) -> list[dict]:
    """Sellers that shared a location, without any distance filtering."""
    return [seller for seller in sellers if coordinates_of(seller) is not None]


def nearby_sellers(origin: Coordinates, sellers: Iterable[dict], radius_km: float = NEARBY_RADIUS_KM) -> list[dict]:
    """
    Sellers within `radius_km` of `origin`, nearest first.
    Each returned row is a copy annotated with `distance_km`.
    """
    found = []
    for seller in sellers:
        coords = coordinates_of(seller)
        if coords is None:
            continue
        distance = haversine_km(origin.latitude, origin.longitude, coords.latitude, coords.longitude)
        if distance <= radius_km:
            found.append({**seller, "distance_km": distance})
    found.sort(key=lambda s: s["distance_km"])
    return found
