import logging
from typing import Optional

from ..repositories.products import ProductRepository
from ..schemas.product import ProductCreate, ProductUpdate
from ..utils.notifications import Notifier
from .images import ImageFile, ImageStorage

logger = logging.getLogger(__name__)


class ProductCatalog:
    """
    Seller-side product flows that span the products table and image storage.

    Creating a product with an image takes three steps: insert the row (to get
    an id), upload the image under that id, then patch the row with the public
    URL. If a later step fails the earlier ones are undone, so a failed create
    leaves neither a row nor an orphaned object behind.
    """

    def __init__(self, products: ProductRepository, images: ImageStorage, notifier: Notifier):
        self.products = products
        self.images = images
        self._notifier = notifier

    def list_for_seller(self, seller_id: str) -> list[dict]:
        return self.products.list_by_seller(seller_id)

    def create(self, seller_id: str, payload: ProductCreate, image: Optional[ImageFile] = None) -> Optional[dict]:
        row = self.products.insert(
            {
                "name": payload.name,
                "description": payload.description,
                "price": payload.price,
                "image_url": None,
                "seller_id": seller_id,
            }
        )
        if row is None:
            return None

        if not image:
            self._notifier.success("Product added successfully!")
            return row

        public_url = self.images.upload(seller_id, row["id"], image.content, image.filename, image.content_type)
        if public_url is None:
            self._rollback(row["id"])
            return None

        patched = self.products.update_by_id(row["id"], {"image_url": public_url})
        if patched is None:
            self.images.remove_by_url(public_url)
            self._rollback(row["id"])
            return None

        self._notifier.success("Product added successfully!")
        return patched

    def _rollback(self, product_id: str) -> None:
        logger.info("Rolling back partially created product %s", product_id)
        self.products.delete_by_id(product_id)
        self._notifier.error("Product was not saved because its image could not be stored.")

    def update(self, product: dict, payload: ProductUpdate, image: Optional[ImageFile] = None) -> Optional[dict]:
        """
        Apply an edit to an existing (already ownership-checked) product.

        A new file replaces the stored image. Without a file, `clear_image`
        drops the association; otherwise the current URL is kept.
        """
        changes = payload.model_dump(exclude_none=True, exclude={"clear_image"})
        old_url = product.get("image_url")
        stale_url = None

        if image:
            public_url = self.images.upload(
                product["seller_id"], product["id"], image.content, image.filename, image.content_type
            )
            if public_url is None:
                return None
            changes["image_url"] = public_url
            if old_url and old_url != public_url:
                stale_url = old_url
        elif payload.clear_image:
            changes["image_url"] = None
            stale_url = old_url

        if not changes:
            self._notifier.info("Nothing to update.")
            return product

        updated = self.products.update_by_id(product["id"], changes)
        if updated is None:
            return None

        if stale_url:
            self.images.remove_by_url(stale_url)
        self._notifier.success("Product updated successfully!")
        return updated

    def delete(self, product: dict) -> bool:
        # Object removal is best-effort and never blocks the row delete
        self.images.remove_by_url(product.get("image_url"))
        if not self.products.delete_by_id(product["id"]):
            return False
        self._notifier.success("Product deleted successfully!")
        return True
