# storefront/models/cart.py
from datetime import datetime, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Cart(SQLModel, table=True):
    """
    Server-side cart for one anonymous browsing session.

    Created lazily on first cart read/write; never deleted.
    """

    __tablename__ = "carts"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    session_id: str = Field(
        unique=True,
        index=True,
        description="Opaque session token correlating the shopper",
    )

    user_id: int | None = Field(
        default=None,
        index=True,
        description="Optional authenticated user",
    )

    created_at: datetime = Field(default_factory=utcnow)

    # Touched by every mutation of the cart's items
    updated_at: datetime = Field(default_factory=utcnow)


class CartItem(SQLModel, table=True):
    """
    Line item inside a cart.
    One cart cannot have 2 rows for the same product.
    """

    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", name="uq_cart_items_cart_product"),
    )

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    cart_id: int = Field(
        foreign_key="carts.id",
        index=True,
    )

    product_id: int = Field(
        foreign_key="products.id",
        index=True,
    )

    quantity: int = Field(
        gt=0,
        description="Must be >= 1",
    )

    unit_price: float = Field(
        description="Price when first added to cart",
    )
