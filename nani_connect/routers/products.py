from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from ..dashboards import BuyerDashboard, SellerDashboard
from ..dependencies import get_buyer_dashboard, get_current_user, get_owned_product, get_seller_dashboard
from ..schemas.product import ProductCreate, ProductList, ProductResult, ProductUpdate
from ..services.images import ImageFile
from ..utils.notifications import Notifier, get_notifier

router = APIRouter(prefix="/products", tags=["products"])


async def _staged(file: UploadFile | None) -> ImageFile | None:
    if file is None:
        return None
    content = await file.read()
    if not content:
        return None
    return ImageFile(content, file.filename, file.content_type)


@router.get("", response_model=ProductList)
def list_products(
    q: str | None = Query(None, description="Case-insensitive filter on name and description"),
    dashboard: BuyerDashboard = Depends(get_buyer_dashboard),
    notifier: Notifier = Depends(get_notifier),
    user=Depends(get_current_user),
):
    """List every product (buyer view), optionally filtered."""
    dashboard.load()
    dashboard.set_filter(q or "")
    return ProductList(products=dashboard.visible_products(), notifications=notifier.drain())


@router.get("/mine", response_model=ProductList)
def list_my_products(
    dashboard: SellerDashboard = Depends(get_seller_dashboard),
    notifier: Notifier = Depends(get_notifier),
):
    """List the calling seller's products."""
    return ProductList(products=dashboard.load(), notifications=notifier.drain())


@router.post("", response_model=ProductResult)
async def create_product(
    name: str = Form(..., min_length=1, max_length=200),
    description: str = Form(..., min_length=1),
    price: float = Form(..., ge=0),
    image: UploadFile | None = File(None),
    dashboard: SellerDashboard = Depends(get_seller_dashboard),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Create a product for the calling seller.
    With an image the row is inserted first, the file stored under its id, then the row patched with the URL.
    """
    payload = ProductCreate(name=name, description=description, price=price)
    created = dashboard.add(payload, await _staged(image))
    return ProductResult(product=created, notifications=notifier.drain())


@router.put("/{product_id}", response_model=ProductResult)
async def update_product(
    name: str | None = Form(None, min_length=1, max_length=200),
    description: str | None = Form(None, min_length=1),
    price: float | None = Form(None, ge=0),
    clear_image: bool = Form(False),
    image: UploadFile | None = File(None),
    product: dict = Depends(get_owned_product),
    dashboard: SellerDashboard = Depends(get_seller_dashboard),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Update a product. Sellers can only update their own products.
    A new file replaces the image; `clear_image` without a file removes it.
    """
    payload = ProductUpdate(name=name, description=description, price=price, clear_image=clear_image)
    updated = dashboard.edit(product, payload, await _staged(image))
    if updated is None:
        # Unchanged on failure
        return ProductResult(product=product, notifications=notifier.drain())
    return ProductResult(product=updated, notifications=notifier.drain())


@router.delete("/{product_id}")
def delete_product(
    product: dict = Depends(get_owned_product),
    dashboard: SellerDashboard = Depends(get_seller_dashboard),
    notifier: Notifier = Depends(get_notifier),
):
    """Delete a product and, best-effort, its stored image."""
    deleted = dashboard.remove(product)
    return {"deleted": deleted, "id": product["id"], "notifications": notifier.drain()}
