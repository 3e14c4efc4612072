import logging
from enum import Enum
from typing import Any, Mapping, NamedTuple, Optional

logger = logging.getLogger(__name__)


class Role(str, Enum):
    BUYER = "buyer"
    SELLER = "seller"


class RouteState(str, Enum):
    LOADING = "loading"
    UNAUTHENTICATED = "unauthenticated"
    BUYER = "buyer"
    SELLER = "seller"


LOGIN_PATH = "/login"
BUYER_DASHBOARD_PATH = "/buyer-dashboard"
SELLER_DASHBOARD_PATH = "/seller-dashboard"


class RouteDecision(NamedTuple):
    state: RouteState
    path: Optional[str]


def parse_role(metadata: Optional[Mapping[str, Any]]) -> Role:
    """
    Reads the role out of a user's metadata map.

    Missing roles default to buyer. Unknown values also default to buyer,
    but are logged so bad sign-up data does not go unnoticed.
    """
    raw = (metadata or {}).get("role")
    if raw is None:
        return Role.BUYER
    if isinstance(raw, Role):
        return raw
    # Exact match only: "Seller" or "seller " is not a seller
    if isinstance(raw, str):
        try:
            return Role(raw)
        except ValueError:
            pass
    logger.warning("Unknown role %r in user metadata, defaulting to buyer", raw)
    return Role.BUYER


def _metadata_of(user: Any) -> Optional[Mapping[str, Any]]:
    if user is None:
        return None
    if isinstance(user, Mapping):
        return user.get("user_metadata")
    return getattr(user, "user_metadata", None)


def role_of(user: Any) -> Role:
    """Role of a Supabase user object or of a user dict carrying `user_metadata`."""
    return parse_role(_metadata_of(user))


def resolve_route(loading: bool, user: Any) -> RouteDecision:
    """
    Decides where a visitor lands.

    loading -> placeholder (no path), no user -> login,
    seller -> seller dashboard, anything else -> buyer dashboard.
    """
    if loading:
        return RouteDecision(RouteState.LOADING, None)
    if user is None:
        return RouteDecision(RouteState.UNAUTHENTICATED, LOGIN_PATH)
    if role_of(user) is Role.SELLER:
        return RouteDecision(RouteState.SELLER, SELLER_DASHBOARD_PATH)
    return RouteDecision(RouteState.BUYER, BUYER_DASHBOARD_PATH)
