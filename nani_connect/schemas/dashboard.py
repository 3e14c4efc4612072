from pydantic import BaseModel

from ..search import VoiceState
from .notification import Notification
from .product import ProductOut
from .seller import SellerProfileOut


class BuyerDashboardOut(BaseModel):
    products: list[ProductOut] = []
    filter_text: str = ""
    nearby_sellers: list[SellerProfileOut] = []
    sellers_filtered: bool = False
    radius_km: float
    voice_language: str
    voice_supported: bool = False
    voice_state: VoiceState = VoiceState.IDLE
    notifications: list[Notification] = []


class SellerDashboardOut(BaseModel):
    products: list[ProductOut] = []
    notifications: list[Notification] = []
