# storefront/routers/cart.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from storefront.database import get_session
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.order_repo import OrderRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.checkout import CartValidateRequest, CartValidation
from storefront.services.checkout_service import CheckoutService

router = APIRouter(prefix="/cart", tags=["Cart"])

service = CheckoutService(OrderRepository(), CartRepository(), ProductRepository())


@router.post("/validate", response_model=CartValidation)
def validate_cart(
    payload: CartValidateRequest,
    session: Session = Depends(get_session),
):
    """
    Price a list of items (discounts, subtotals, total) without
    touching any cart. 400 for an empty list or unknown product.
    """
    return service.validate_cart(session, payload)
