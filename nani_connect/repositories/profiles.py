import logging
from typing import Optional

from supabase import Client

from ..roles import Role
from ..utils.notifications import Notifier

logger = logging.getLogger(__name__)


class ProfileRepository:
    def __init__(self, supabase: Client, notifier: Notifier):
        self._supabase = supabase
        self._notifier = notifier

    def list_sellers(self) -> list[dict]:
        """All profiles with role=seller, located or not."""
        try:
            response = (
                self._supabase.table("profiles")
                .select("id, role, latitude, longitude")
                .eq("role", Role.SELLER.value)
                .execute()
            )
        except Exception as exc:
            self._notifier.error(f"Failed to load sellers: {exc}")
            return []
        return response.data or []

    def emails_for(self, user_ids: list[str]) -> dict[str, str]:
        """
        Best-effort id -> email lookup in the public `users` table.
        Returns an empty map on any failure; callers treat email as optional.
        """
        if not user_ids:
            return {}
        try:
            response = self._supabase.table("users").select("id, email").in_("id", user_ids).execute()
        except Exception as exc:
            logger.info("Seller email lookup skipped: %s", exc)
            return {}
        return {row["id"]: row.get("email") for row in response.data or [] if row.get("email")}

    def get_profile(self, user_id: str) -> Optional[dict]:
        try:
            response = self._supabase.table("profiles").select("*").eq("id", user_id).limit(1).execute()
        except Exception as exc:
            logger.info("Profile lookup failed for %s: %s", user_id, exc)
            return None
        return response.data[0] if response.data else None

    def upsert_profile(
        self,
        user_id: str,
        role: Role,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> Optional[dict]:
        row = {
            "id": user_id,
            "role": Role(role).value,
            "latitude": latitude if longitude is not None else None,
            "longitude": longitude if latitude is not None else None,
        }
        try:
            response = self._supabase.table("profiles").upsert(row).execute()
        except Exception as exc:
            self._notifier.error(f"Failed to save profile: {exc}")
            return None
        return response.data[0] if response.data else row
