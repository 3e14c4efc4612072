from typing import Optional

from ..geo import NEARBY_RADIUS_KM, Coordinates, located_sellers, nearby_sellers
from ..repositories.profiles import ProfileRepository
from ..utils.notifications import Notifier


class NearbySellerFinder:
    """
    Finds sellers around a buyer.

    With a location, only sellers within the radius are returned, nearest
    first. Without one (denied, unsupported, timed out) every seller that
    stored coordinates is returned unfiltered.
    """

    def __init__(self, profiles: ProfileRepository, notifier: Notifier, radius_km: float = NEARBY_RADIUS_KM):
        self._profiles = profiles
        self._notifier = notifier
        self.radius_km = radius_km

    def _sellers_with_email(self) -> list[dict]:
        sellers = self._profiles.list_sellers()
        emails = self._profiles.emails_for([s["id"] for s in sellers])
        return [{**s, "email": emails.get(s["id"])} for s in sellers]

    def find(self, origin: Optional[Coordinates], location_error: Optional[str] = None) -> tuple[list[dict], bool]:
        """Returns (sellers, filtered) where `filtered` says whether the radius was applied."""
        if origin is None:
            if location_error:
                self._notifier.error(f"Could not get your location: {location_error}. Showing all sellers.")
            return located_sellers(self._sellers_with_email()), False

        found = nearby_sellers(origin, self._sellers_with_email(), self.radius_km)
        if not found:
            self._notifier.info(f"No sellers found within {self.radius_km:g} km.")
        return found, True
