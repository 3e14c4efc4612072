from fastapi import APIRouter, Depends, Query

from ..config import get_settings
from ..dependencies import get_current_user, get_nearby_finder
from ..geo import Coordinates
from ..schemas.seller import LocationOptions, NearbySellers
from ..services.proximity import NearbySellerFinder
from ..utils.notifications import Notifier, get_notifier

router = APIRouter(prefix="/sellers", tags=["sellers"])


def origin_from(lat: float | None, lon: float | None) -> Coordinates | None:
    if lat is None or lon is None:
        return None
    return Coordinates(lat, lon)


@router.get("/nearby", response_model=NearbySellers)
def list_nearby_sellers(
    lat: float | None = Query(None, ge=-90, le=90, description="Buyer latitude"),
    lon: float | None = Query(None, ge=-180, le=180, description="Buyer longitude"),
    location_error: str | None = Query(None, description="Why the client could not get a location"),
    finder: NearbySellerFinder = Depends(get_nearby_finder),
    notifier: Notifier = Depends(get_notifier),
    user=Depends(get_current_user),
):
    """
    Sellers within the configured radius of the buyer.
    Without a location every seller that shared coordinates is listed, unfiltered.
    """
    sellers, filtered = finder.find(origin_from(lat, lon), location_error)
    return NearbySellers(
        sellers=sellers,
        filtered=filtered,
        radius_km=finder.radius_km,
        notifications=notifier.drain(),
    )


@router.get("/location-options", response_model=LocationOptions)
def location_options():
    """How clients should request the device location: one shot, high accuracy, no cached fix."""
    return LocationOptions(timeout_ms=get_settings().LOCATION_TIMEOUT_MS)
