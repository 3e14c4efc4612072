from typing import Iterable, Optional

from .cart import Cart
from .geo import Coordinates
from .repositories.products import ProductRepository
from .schemas.product import ProductCreate, ProductUpdate
from .search import SpeechRecognizer, VoiceSearch, filter_products
from .services.catalog import ProductCatalog
from .services.images import ImageFile
from .services.proximity import NearbySellerFinder
from .utils.notifications import Notifier


class BuyerDashboard:
    """Everything a buyer page shows: the catalogue, a filter, a cart and nearby sellers."""

    def __init__(
        self,
        products: ProductRepository,
        finder: NearbySellerFinder,
        notifier: Notifier,
        recognizer: Optional[SpeechRecognizer] = None,
        language: str = "en-US",
    ):
        self._products = products
        self._finder = finder
        self.products: list[dict] = []
        self.filter_text = ""
        self.cart = Cart(notifier)
        self.voice = VoiceSearch(recognizer, notifier, self.set_filter, language)

    def load(self, product_ids: Optional[Iterable[str]] = None) -> list[dict]:
        """Loads the whole catalogue, or only the given products when ids are passed."""
        if product_ids is None:
            self.products = self._products.list_all()
        else:
            self.products = self._products.list_by_ids(list(dict.fromkeys(product_ids)))
        return self.products

    def set_filter(self, text: str) -> None:
        self.filter_text = text or ""

    def visible_products(self) -> list[dict]:
        return filter_products(self.products, self.filter_text)

    def add_to_cart(self, product_id: str, announce: bool = True) -> bool:
        for product in self.products:
            if product["id"] == product_id:
                self.cart.add(product, announce)
                return True
        return False

    def nearby_sellers(self, origin: Optional[Coordinates], location_error: Optional[str] = None):
        return self._finder.find(origin, location_error)


class SellerDashboard:
    """
    A seller's own products and the create/edit/delete actions on them.

    Edits and deletes are refused for products of another seller. The local
    list follows each successful change without reloading.
    """

    def __init__(self, catalog: ProductCatalog, seller_id: str):
        self._catalog = catalog
        self.seller_id = seller_id
        self.products: list[dict] = []

    def load(self) -> list[dict]:
        self.products = self._catalog.list_for_seller(self.seller_id)
        return self.products

    def owns(self, product: dict) -> bool:
        return product.get("seller_id") == self.seller_id

    def add(self, payload: ProductCreate, image: Optional[ImageFile] = None) -> Optional[dict]:
        created = self._catalog.create(self.seller_id, payload, image)
        if created is not None:
            self.products.append(created)
        return created

    def edit(self, product: dict, payload: ProductUpdate, image: Optional[ImageFile] = None) -> Optional[dict]:
        if not self.owns(product):
            return None
        updated = self._catalog.update(product, payload, image)
        if updated is not None:
            self.products = [updated if p["id"] == updated["id"] else p for p in self.products]
        return updated

    def remove(self, product: dict) -> bool:
        if not self.owns(product):
            return False
        deleted = self._catalog.delete(product)
        if deleted:
            self.products = [p for p in self.products if p["id"] != product["id"]]
        return deleted
