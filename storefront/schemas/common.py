# storefront/schemas/common.py
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel
from sqlmodel import SQLModel


class APIModel(SQLModel):
    """
    Base for request/response bodies.

    JSON keys are camelCase on the wire (productId, unitPrice, ...);
    snake_case names are accepted on input as well.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RequestModel(APIModel):
    """
    Base for request payloads: unknown fields are rejected.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )
