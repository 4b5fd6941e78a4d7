# storefront/models/product.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Product catalog entry.

    The cart and checkout code only borrows `price` and `discount`
    at a point in time; it never owns product data.
    """

    __tablename__ = "products"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    name: str = Field(
        max_length=255,
        index=True,
        description="Display name of the product",
    )

    description: str | None = Field(
        default=None,
        description="Optional long description",
    )

    sku: str | None = Field(
        default=None,
        max_length=64,
        index=True,
        description="Stock keeping unit",
    )

    unit: str | None = Field(
        default=None,
        max_length=32,
        description="Selling unit, e.g. 'piece' or 'box'",
    )

    price: float = Field(
        gt=0,
        description="Current list price",
    )

    # Fraction in [0, 1); 0.2 means 20% off
    discount: float = Field(
        default=0.0,
        ge=0,
        lt=1,
        description="Current discount fraction",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )
