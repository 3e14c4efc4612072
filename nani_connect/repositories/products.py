from typing import Optional

from supabase import Client

from ..utils.notifications import Notifier

TABLE = "products"


class ProductRepository:
    """
    Single round-trip access to the `products` table.

    Failures are reported through the notifier and yield an empty result
    (`[]`, `None` or `False`); they are not raised. Lists come back in table order; writes are last-writer-wins.
    """

    def __init__(self, supabase: Client, notifier: Notifier):
        self._supabase = supabase
        self._notifier = notifier

    def list_all(self) -> list[dict]:
        try:
            response = self._supabase.table(TABLE).select("*").execute()
        except Exception as exc:
            self._notifier.error(f"Failed to load products: {exc}")
            return []
        return response.data or []

    def list_by_seller(self, seller_id: str) -> list[dict]:
        try:
            response = self._supabase.table(TABLE).select("*").eq("seller_id", seller_id).execute()
        except Exception as exc:
            self._notifier.error(f"Failed to load your products: {exc}")
            return []
        return response.data or []

    def list_by_ids(self, product_ids: list[str]) -> list[dict]:
        if not product_ids:
            return []
        try:
            response = self._supabase.table(TABLE).select("*").in_("id", product_ids).execute()
        except Exception as exc:
            self._notifier.error(f"Failed to load products: {exc}")
            return []
        return response.data or []

    def get_by_id(self, product_id: str) -> Optional[dict]:
        try:
            response = self._supabase.table(TABLE).select("*").eq("id", product_id).limit(1).execute()
        except Exception as exc:
            self._notifier.error(f"Failed to load product: {exc}")
            return None
        return response.data[0] if response.data else None

    def insert(self, data: dict) -> Optional[dict]:
        try:
            response = self._supabase.table(TABLE).insert(data).execute()
        except Exception as exc:
            self._notifier.error(f"Failed to add product: {exc}")
            return None
        return response.data[0] if response.data else None

    def update_by_id(self, product_id: str, data: dict) -> Optional[dict]:
        try:
            response = self._supabase.table(TABLE).update(data).eq("id", product_id).execute()
        except Exception as exc:
            self._notifier.error(f"Failed to update product: {exc}")
            return None
        return response.data[0] if response.data else None

    def delete_by_id(self, product_id: str) -> bool:
        try:
            self._supabase.table(TABLE).delete().eq("id", product_id).execute()
        except Exception as exc:
            self._notifier.error(f"Failed to delete product: {exc}")
            return False
        return True
