from fastapi import APIRouter, Depends, Query

from ..config import get_settings
from ..dashboards import BuyerDashboard, SellerDashboard
from ..dependencies import get_current_user, get_nearby_finder, get_product_repository, get_seller_dashboard
from ..repositories.products import ProductRepository
from ..schemas.dashboard import BuyerDashboardOut, SellerDashboardOut
from ..search import RelayedRecognizer
from ..services.proximity import NearbySellerFinder
from ..utils.notifications import Notifier, get_notifier
from .sellers import origin_from

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/buyer", response_model=BuyerDashboardOut)
def buyer_dashboard(
    q: str | None = Query(None, description="Typed filter text"),
    lat: float | None = Query(None, ge=-90, le=90),
    lon: float | None = Query(None, ge=-180, le=180),
    location_error: str | None = Query(None),
    voice_supported: bool = Query(True, description="Whether the client has speech recognition"),
    voice_transcript: str | None = Query(None, description="What the client's recognizer heard"),
    voice_error: str | None = Query(None, description="Error code the client's recognizer reported"),
    products: ProductRepository = Depends(get_product_repository),
    finder: NearbySellerFinder = Depends(get_nearby_finder),
    notifier: Notifier = Depends(get_notifier),
    user=Depends(get_current_user),
):
    """
    Buyer landing data. Any signed-in user may view it; sellers are routed elsewhere by /auth/route.

    A relayed voice transcript replaces `q` as the filter text; a relayed
    voice error is reported and leaves `q` in place.
    """
    settings = get_settings()
    recognizer = RelayedRecognizer(voice_transcript, voice_error) if voice_supported else None
    dashboard = BuyerDashboard(products, finder, notifier, recognizer, settings.VOICE_SEARCH_LANGUAGE)
    dashboard.load()
    dashboard.set_filter(q or "")
    if voice_transcript is not None or voice_error:
        dashboard.voice.start()
    sellers, filtered = dashboard.nearby_sellers(origin_from(lat, lon), location_error)

    return BuyerDashboardOut(
        products=dashboard.visible_products(),
        filter_text=dashboard.filter_text,
        nearby_sellers=sellers,
        sellers_filtered=filtered,
        radius_km=finder.radius_km,
        voice_language=dashboard.voice.language,
        voice_supported=dashboard.voice.supported,
        voice_state=dashboard.voice.state,
        notifications=notifier.drain(),
    )


@router.get("/seller", response_model=SellerDashboardOut)
def seller_dashboard(
    dashboard: SellerDashboard = Depends(get_seller_dashboard),
    notifier: Notifier = Depends(get_notifier),
):
    return SellerDashboardOut(products=dashboard.load(), notifications=notifier.drain())
