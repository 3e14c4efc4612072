from typing import Optional
from pydantic import BaseModel, Field

from .notification import Notification


class ProductBase(BaseModel):
    name: str = Field(..., max_length=200)
    description: Optional[str] = None
    price: float = Field(..., ge=0)


class ProductCreate(ProductBase):
    pass


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    clear_image: bool = False


class ProductOut(ProductBase):
    id: str
    image_url: Optional[str] = None
    seller_id: Optional[str] = None

    class Config:
        from_attributes = True


class ProductResult(BaseModel):
    product: Optional[ProductOut] = None
    notifications: list[Notification] = []


class ProductList(BaseModel):
    products: list[ProductOut] = []
    notifications: list[Notification] = []
