from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, PlainSerializer, StringConstraints
from pydantic.alias_generators import to_camel

# Decimal in Python, plain JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase JSON (shippingAddress, paymentStatus, ...)."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
