# storefront/schemas/checkout.py
from datetime import datetime

from pydantic import field_validator
from sqlmodel import SQLModel, Field

from storefront.schemas.common import APIModel, RequestModel
from storefront.schemas.order import OrderRead, OrderDetailRead


# -------- Request payloads --------


class CheckoutItem(RequestModel):
    """
    One requested line: product + quantity, optionally client-priced.
    """

    product_id: int = Field(gt=0)
    quantity: int = Field(gt=0)
    unit_price: float | None = Field(default=None, gt=0)


class CheckoutRequest(RequestModel):
    """
    Payload for POST /orders/checkout (ad-hoc item list).
    """

    branch_id: int = Field(gt=0)
    items: list[CheckoutItem]
    order_name: str | None = Field(default=None, max_length=255)
    order_description: str | None = None

    @field_validator("items")
    @classmethod
    def not_empty(cls, v: list[CheckoutItem]) -> list[CheckoutItem]:
        if not v:
            raise ValueError("items must contain at least one product")
        return v


class CartCheckoutRequest(RequestModel):
    """
    Payload for POST /carts/checkout; items come from the session cart.
    """

    branch_id: int = Field(gt=0)
    order_name: str | None = Field(default=None, max_length=255)
    order_description: str | None = None


class ValidateItem(RequestModel):
    product_id: int = Field(gt=0)
    quantity: int = Field(gt=0)


class CartValidateRequest(RequestModel):
    """
    Payload for POST /cart/validate (pricing preview, no writes).
    """

    items: list[ValidateItem]

    @field_validator("items")
    @classmethod
    def not_empty(cls, v: list[ValidateItem]) -> list[ValidateItem]:
        if not v:
            raise ValueError("Cart is empty or invalid")
        return v


# -------- Internal command --------


class CheckoutLine(SQLModel):
    """
    A validated line handed to the checkout transaction.
    unit_price=None means 'price from the catalog'.
    """

    product_id: int = Field(gt=0)
    quantity: int = Field(gt=0)
    unit_price: float | None = Field(default=None, gt=0)


class CheckoutCommand(SQLModel):
    """
    Typed input of the checkout transaction, built from either
    checkout endpoint.
    """

    branch_id: int = Field(gt=0)
    name: str
    description: str = ""
    order_date: datetime | None = None
    lines: list[CheckoutLine]


# -------- Responses --------


class CheckoutResult(APIModel):
    order: OrderRead
    details: list[OrderDetailRead]
    total: float


class ValidatedLine(APIModel):
    product_id: int
    product_name: str
    quantity: int
    unit_price: float
    discount: float
    final_price: float
    subtotal: float


class CartValidation(APIModel):
    items: list[ValidatedLine]
    total: float
