# storefront/models/order.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Order(SQLModel, table=True):
    """
    Committed purchase record.

    Independent of any cart once created.
    """

    __tablename__ = "orders"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    branch_id: int = Field(
        index=True,
        description="Fulfillment location",
    )

    order_date: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the order was placed (UTC)",
    )

    name: str = Field(
        max_length=255,
        description="Display name",
    )

    description: str = Field(
        default="",
        description="Free-text description",
    )

    # pending | confirmed | shipped | canceled
    status: str = Field(
        default="pending",
        index=True,
        description="Order status lifecycle",
    )


class OrderDetail(SQLModel, table=True):
    """
    Line item inside an order.

    unit_price is frozen at checkout and never recomputed.
    """

    __tablename__ = "order_details"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    order_id: int = Field(
        foreign_key="orders.id",
        index=True,
    )

    product_id: int = Field(
        foreign_key="products.id",
        index=True,
    )

    quantity: int = Field(
        gt=0,
        description="Quantity ordered (>=1)",
    )

    unit_price: float = Field(
        description="Discounted unit price at time of order",
    )

    notes: str = Field(default="")
