import logging
from pathlib import Path
from typing import Optional
from urllib.parse import unquote, urlsplit

from supabase import Client

from ..utils.notifications import Notifier

logger = logging.getLogger(__name__)


class ImageStorage:
    """
    Product images in a Supabase storage bucket.

    Objects live at `{seller_id}/{product_id}{ext}`, one per product,
    and uploads overwrite whatever is already there.
    """

    def __init__(self, supabase: Client, bucket: str, notifier: Notifier):
        self._supabase = supabase
        self._bucket = bucket
        self._notifier = notifier

    @property
    def _storage(self):
        return self._supabase.storage.from_(self._bucket)

    @staticmethod
    def object_path(seller_id: str, product_id: str, filename: str | None) -> str:
        extension = Path(filename or "").suffix.lower() or ".jpg"
        return f"{seller_id}/{product_id}{extension}"

    def upload(
        self,
        seller_id: str,
        product_id: str,
        content: bytes,
        filename: str | None,
        content_type: str | None = None,
    ) -> Optional[str]:
        """Upload and return the public URL, or None on failure."""
        object_key = self.object_path(seller_id, product_id, filename)
        try:
            self._storage.upload(
                object_key,
                content,
                {"content-type": content_type or "application/octet-stream", "upsert": "true"},
            )
            return self._storage.get_public_url(object_key)
        except Exception as exc:
            self._notifier.error(f"Failed to upload image: {exc}")
            return None

    def key_from_url(self, public_url: str) -> Optional[str]:
        """Object key inside this bucket for one of its public URLs."""
        path = unquote(urlsplit(public_url).path)
        marker = f"/object/public/{self._bucket}/"
        if marker not in path:
            return None
        return path.split(marker, 1)[1] or None

    def remove_by_url(self, public_url: str | None) -> bool:
        """
        Best-effort removal of the object behind `public_url`.
        Returns False (and logs) instead of raising.
        """
        if not public_url:
            return False
        object_key = self.key_from_url(public_url)
        if object_key is None:
            logger.info("Not a %s bucket URL, nothing to remove: %s", self._bucket, public_url)
            return False
        try:
            # .remove() expects a list of paths
            self._storage.remove([object_key])
        except Exception as exc:
            logger.warning("Failed to remove stored image %s: %s", object_key, exc)
            return False
        return True


class ImageFile:
    """A staged upload: raw bytes plus what the client told us about them."""

    def __init__(self, content: bytes, filename: str | None = None, content_type: str | None = None):
        self.content = content
        self.filename = filename
        self.content_type = content_type

    def __bool__(self) -> bool:
        return bool(self.content)
