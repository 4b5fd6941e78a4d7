# storefront/schemas/cart.py
from datetime import datetime

from sqlmodel import Field

from storefront.schemas.common import APIModel, RequestModel


class CartItemCreate(RequestModel):
    """
    Payload for adding to cart.

    unit_price is optional: if omitted, the current discounted catalog
    price is snapshotted.
    """

    product_id: int = Field(gt=0)
    quantity: int = Field(gt=0)
    unit_price: float | None = Field(default=None, gt=0)


class CartItemUpdate(RequestModel):
    """
    Payload for updating quantity of a cart item.

    Zero is rejected; removal has its own endpoint.
    """

    quantity: int = Field(gt=0)


class CartRead(APIModel):
    id: int
    session_id: str
    user_id: int | None = None
    created_at: datetime
    updated_at: datetime


class CartItemRead(APIModel):
    """
    Read model for a single cart item.
    """

    id: int
    cart_id: int
    product_id: int
    quantity: int
    unit_price: float


class CartSummary(APIModel):
    """
    Full cart response model with total.
    """

    cart: CartRead
    items: list[CartItemRead]
    total: float
