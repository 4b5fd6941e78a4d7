# storefront/routers/orders.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from storefront.database import get_session
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.order_repo import OrderRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.checkout import CheckoutRequest, CheckoutResult
from storefront.schemas.order import (
    OrderCreate,
    OrderRead,
    OrderUpdate,
    OrderWithDetailsRead,
)
from storefront.services.checkout_service import CheckoutService
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

order_repo = OrderRepository()
service = OrderService(order_repo)
checkout_service = CheckoutService(order_repo, CartRepository(), ProductRepository())


# -------- Checkout --------


@router.post(
    "/checkout",
    response_model=CheckoutResult,
    status_code=status.HTTP_201_CREATED,
)
def checkout(
    payload: CheckoutRequest,
    session: Session = Depends(get_session),
):
    """
    Create an order with all its items atomically.

    - 400 invalid body
    - 404 unknown product (nothing is written)
    - 500 storage failure (transaction rolled back)
    """
    return checkout_service.checkout_items(session, payload)


# -------- CRUD --------


@router.get("", response_model=list[OrderRead])
def list_orders(
    session: Session = Depends(get_session),
    skip: int = 0,
    limit: int = 50,
):
    return service.list_orders(session, skip, limit)


@router.post("", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
def create_order(
    payload: OrderCreate,
    session: Session = Depends(get_session),
):
    return service.create_order(session, payload)


@router.get("/{order_id}", response_model=OrderWithDetailsRead)
def get_order(
    order_id: int,
    session: Session = Depends(get_session),
):
    """
    Get an order with its details and total.
    """
    return service.get_order(session, order_id)


@router.put("/{order_id}", response_model=OrderRead)
def update_order(
    order_id: int,
    payload: OrderUpdate,
    session: Session = Depends(get_session),
):
    return service.update_order(session, order_id, payload)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(
    order_id: int,
    session: Session = Depends(get_session),
):
    """
    Delete an order and its details.
    """
    service.delete_order(session, order_id)
