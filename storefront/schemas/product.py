# storefront/schemas/product.py
from datetime import datetime

from pydantic import field_validator
from sqlmodel import Field

from storefront.schemas.common import APIModel, RequestModel


class ProductCreate(RequestModel):
    """
    Payload for creating a product.
    """

    name: str = Field(max_length=255)
    description: str | None = None
    sku: str | None = Field(default=None, max_length=64)
    unit: str | None = Field(default=None, max_length=32)
    price: float = Field(gt=0)
    discount: float = Field(default=0.0, ge=0, lt=1)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class ProductUpdate(RequestModel):
    """
    Partial update payload for products.
    All fields are optional.
    """

    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    sku: str | None = Field(default=None, max_length=64)
    unit: str | None = Field(default=None, max_length=32)
    price: float | None = Field(default=None, gt=0)
    discount: float | None = Field(default=None, ge=0, lt=1)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class ProductRead(APIModel):
    """
    Product representation for clients.
    """

    id: int
    name: str
    description: str | None = None
    sku: str | None = None
    unit: str | None = None
    price: float
    discount: float
    created_at: datetime
