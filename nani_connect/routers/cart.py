from fastapi import APIRouter, Depends

from ..dashboards import BuyerDashboard
from ..dependencies import get_buyer_dashboard, get_current_user
from ..schemas.cart import CartRequest, CartSummary
from ..utils.notifications import Notifier, get_notifier

router = APIRouter(prefix="/cart", tags=["cart"])


@router.post("/summary", response_model=CartSummary)
def summarize_cart(
    payload: CartRequest,
    dashboard: BuyerDashboard = Depends(get_buyer_dashboard),
    notifier: Notifier = Depends(get_notifier),
    user=Depends(get_current_user),
):
    """
    Price a cart the client keeps, optionally adding one more product to it.

    Nothing is stored; the order and repeats of `product_ids` are kept. Only
    the product named by `add` is announced.
    """
    wanted = list(payload.product_ids)
    if payload.add:
        wanted.append(payload.add)
    dashboard.load(wanted)

    missing = sum(1 for product_id in payload.product_ids if not dashboard.add_to_cart(product_id, announce=False))
    if missing:
        notifier.info(f"{missing} item(s) are no longer available and were left out.")
    if payload.add and not dashboard.add_to_cart(payload.add):
        notifier.error("Product not found")

    cart = dashboard.cart
    return CartSummary(items=cart.items, total=cart.total, notifications=notifier.drain())
