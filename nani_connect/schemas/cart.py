from pydantic import BaseModel

from .notification import Notification
from .product import ProductOut


class CartRequest(BaseModel):
    product_ids: list[str] = []
    add: str | None = None


class CartSummary(BaseModel):
    items: list[ProductOut] = []
    total: float = 0.0
    notifications: list[Notification] = []
