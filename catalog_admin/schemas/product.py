"""
Pydantic schemas for Product request payloads.
"""
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class ProductPayload(BaseModel):
    """Body sent on product create and update; field names follow the backend's camelCase."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0)
    stock: int = Field(..., ge=0)
    category_id: Any = Field(..., alias="categoryId")
    image_url: str = Field(..., min_length=1, alias="imageUrl")

    @field_serializer("price")
    def serialize_price(self, value: Decimal) -> float:
        """Send prices as JSON numbers."""
        return float(value)
