# storefront/routers/carts.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from storefront.core.auth import get_current_user_id
from storefront.core.session import get_cart_session_id
from storefront.database import get_session
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.order_repo import OrderRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.cart import (
    CartItemCreate,
    CartItemRead,
    CartItemUpdate,
    CartSummary,
)
from storefront.schemas.checkout import CartCheckoutRequest, CheckoutResult
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService

router = APIRouter(prefix="/carts", tags=["Carts"])

cart_repo = CartRepository()
product_repo = ProductRepository()
order_repo = OrderRepository()
service = CartService(cart_repo, product_repo)
checkout_service = CheckoutService(order_repo, cart_repo, product_repo)


@router.get("", response_model=CartSummary)
def get_cart(
    session: Session = Depends(get_session),
    session_id: str = Depends(get_cart_session_id),
    user_id: int | None = Depends(get_current_user_id),
):
    """
    Get the current session's cart, its items and total.

    The cart is created on first access.
    """
    return service.get_cart_summary(session, session_id, user_id)


@router.post(
    "/items",
    response_model=CartItemRead,
    status_code=status.HTTP_201_CREATED,
)
def add_cart_item(
    payload: CartItemCreate,
    session: Session = Depends(get_session),
    session_id: str = Depends(get_cart_session_id),
    user_id: int | None = Depends(get_current_user_id),
):
    """
    Add a product to the cart; adding it again increments the quantity.
    """
    return service.add_item(session, session_id, payload, user_id)


@router.put("/items/{cart_item_id}", response_model=CartItemRead)
def update_cart_item(
    cart_item_id: int,
    payload: CartItemUpdate,
    session: Session = Depends(get_session),
):
    """
    Set the quantity of a cart item. Zero is rejected; use DELETE to remove.
    """
    return service.update_item_quantity(session, cart_item_id, payload)


@router.delete("/items/{cart_item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_cart_item(
    cart_item_id: int,
    session: Session = Depends(get_session),
):
    service.remove_item(session, cart_item_id)


@router.post(
    "/checkout",
    response_model=CheckoutResult,
    status_code=status.HTTP_201_CREATED,
)
def checkout_cart(
    payload: CartCheckoutRequest,
    session: Session = Depends(get_session),
    session_id: str = Depends(get_cart_session_id),
):
    """
    Convert the session's cart into an order, then empty the cart.
    """
    return checkout_service.checkout_cart(session, session_id, payload)
