"""Pydantic DTOs (Data Transfer Objects) for monthly revenue entries."""

from pydantic import BaseModel, Field, FiniteFloat


class RevenueCreate(BaseModel):
    """Schema for creating a revenue entry. Numeric strings are coerced."""

    month: str = Field(..., min_length=1, examples=["Aug"])
    revenue: FiniteFloat = Field(..., examples=[55000])
    prev: FiniteFloat = Field(0.0, examples=[50000])


class RevenueUpdate(BaseModel):
    """Patch for a revenue entry — the month itself is immutable."""

    revenue: FiniteFloat | None = None
    prev: FiniteFloat | None = None


class RevenueResponse(BaseModel):
    id: str
    month: str
    revenue: float
    prev: float

    model_config = {"from_attributes": True}
