from typing import Optional
from pydantic import BaseModel

from .notification import Notification


class SellerProfileOut(BaseModel):
    id: str
    role: str = "seller"
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    email: Optional[str] = None
    distance_km: Optional[float] = None


class NearbySellers(BaseModel):
    sellers: list[SellerProfileOut] = []
    filtered: bool = False
    radius_km: float
    notifications: list[Notification] = []


class LocationOptions(BaseModel):
    enable_high_accuracy: bool = True
    timeout_ms: int
    maximum_age: int = 0
