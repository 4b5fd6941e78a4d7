# storefront/schemas/order.py
from datetime import datetime, timezone
from typing import Literal

from pydantic import field_validator
from sqlmodel import Field

from storefront.schemas.common import APIModel, RequestModel

OrderStatus = Literal["pending", "confirmed", "shipped", "canceled"]


class OrderCreate(RequestModel):
    """
    Payload for creating a bare order (no line items).

    Backend derives:
      - order_date = now, if omitted
      - status = 'pending', if omitted
    """

    branch_id: int = Field(gt=0)
    name: str = Field(max_length=255)
    description: str = ""
    order_date: datetime | None = None
    status: OrderStatus = "pending"

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("order_date")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        # Offset-less timestamps are read as UTC
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class OrderUpdate(RequestModel):
    """
    Partial update of an order. Status changes follow the
    pending -> confirmed -> shipped lifecycle.
    """

    branch_id: int | None = Field(default=None, gt=0)
    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    status: OrderStatus | None = None


class OrderRead(APIModel):
    """
    Lightweight representation of an order (without details).
    """

    id: int
    branch_id: int
    order_date: datetime
    name: str
    description: str
    status: OrderStatus


class OrderDetailRead(APIModel):
    """
    Representation of a single order line.
    """

    id: int
    order_id: int
    product_id: int
    quantity: int
    unit_price: float
    notes: str
    subtotal: float


class OrderWithDetailsRead(OrderRead):
    """
    Full order view including details.
    """

    details: list[OrderDetailRead]
    total: float
