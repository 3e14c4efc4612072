from fastapi import Depends, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from supabase import Client

from .config import get_settings
from .dashboards import BuyerDashboard, SellerDashboard
from .repositories.products import ProductRepository
from .repositories.profiles import ProfileRepository
from .roles import Role, role_of
from .services.catalog import ProductCatalog
from .services.images import ImageStorage
from .services.proximity import NearbySellerFinder
from .supabase_client import get_supabase_client
from .utils.notifications import Notifier, get_notifier

security = HTTPBearer(auto_error=False)


def _load_user(token: str, supabase: Client):
    """
    Resolves an access token to a user dict, or None if the token is not valid.
    """
    try:
        user_response = supabase.auth.get_user(token)
    except Exception:
        return None

    if not user_response or not user_response.user:
        return None

    supa_user = user_response.user
    metadata = supa_user.user_metadata or {}

    # Coordinates come from the profile row when there is one, sign-up metadata otherwise
    profile = ProfileRepository(supabase, Notifier()).get_profile(supa_user.id) or {}

    return {
        "id": supa_user.id,
        "email": supa_user.email,
        "role": role_of(supa_user),
        "latitude": profile.get("latitude", metadata.get("latitude")),
        "longitude": profile.get("longitude", metadata.get("longitude")),
        "user_metadata": metadata,
    }


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Security(security),
    supabase: Client = Depends(get_supabase_client),
):
    """
    Validates the incoming Supabase access token and returns the user object.
    """
    if credentials is None:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    user = _load_user(credentials.credentials, supabase)
    if user is None:
        raise HTTPException(status_code=401, detail="Session expired. Please sign in again.")
    return user


def get_current_user_optional(
    credentials: HTTPAuthorizationCredentials | None = Security(security),
    supabase: Client = Depends(get_supabase_client),
):
    """
    Returns the user object if authenticated, otherwise returns None.
    Does NOT raise 401.
    """
    if credentials is None:
        return None
    return _load_user(credentials.credentials, supabase)


def require_seller(user=Depends(get_current_user)):
    """Requires a seller account"""
    if user.get("role") is not Role.SELLER:
        raise HTTPException(status_code=403, detail="Seller account required")
    return user


def get_product_repository(
    supabase: Client = Depends(get_supabase_client),
    notifier: Notifier = Depends(get_notifier),
) -> ProductRepository:
    return ProductRepository(supabase, notifier)


def get_profile_repository(
    supabase: Client = Depends(get_supabase_client),
    notifier: Notifier = Depends(get_notifier),
) -> ProfileRepository:
    return ProfileRepository(supabase, notifier)


def get_image_storage(
    supabase: Client = Depends(get_supabase_client),
    notifier: Notifier = Depends(get_notifier),
) -> ImageStorage:
    return ImageStorage(supabase, get_settings().SUPABASE_STORAGE_BUCKET, notifier)


def get_catalog(
    products: ProductRepository = Depends(get_product_repository),
    images: ImageStorage = Depends(get_image_storage),
    notifier: Notifier = Depends(get_notifier),
) -> ProductCatalog:
    return ProductCatalog(products, images, notifier)


def get_nearby_finder(
    profiles: ProfileRepository = Depends(get_profile_repository),
    notifier: Notifier = Depends(get_notifier),
) -> NearbySellerFinder:
    return NearbySellerFinder(profiles, notifier, get_settings().NEARBY_RADIUS_KM)


def get_buyer_dashboard(
    products: ProductRepository = Depends(get_product_repository),
    finder: NearbySellerFinder = Depends(get_nearby_finder),
    notifier: Notifier = Depends(get_notifier),
) -> BuyerDashboard:
    """Buyer dashboard without voice input; see the dashboard router for the relayed one."""
    return BuyerDashboard(products, finder, notifier, language=get_settings().VOICE_SEARCH_LANGUAGE)


def get_seller_dashboard(
    user=Depends(require_seller),
    catalog: ProductCatalog = Depends(get_catalog),
) -> SellerDashboard:
    return SellerDashboard(catalog, user["id"])


def get_owned_product(
    product_id: str,
    dashboard: SellerDashboard = Depends(get_seller_dashboard),
    products: ProductRepository = Depends(get_product_repository),
) -> dict:
    """
    Loads a product and checks it belongs to the calling seller.
    Ownership is enforced here, not left to the database's access rules.
    """
    product = products.get_by_id(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    if not dashboard.owns(product):
        raise HTTPException(status_code=403, detail="You can only change your own products")
    return product
