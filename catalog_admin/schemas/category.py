"""
Pydantic schemas for Category request payloads.
"""
from pydantic import BaseModel, Field


class CategoryPayload(BaseModel):
    """Body sent on category create and update (never carries the id)."""

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
