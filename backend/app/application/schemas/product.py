"""Pydantic DTOs (Data Transfer Objects) for the Product feature."""

from pydantic import BaseModel, Field, FiniteFloat

from app.domain.entities import DEFAULT_CATEGORY


class ProductCreate(BaseModel):
    """Schema for creating a product."""

    name: str = Field(..., min_length=1, examples=["Wireless Pro"])
    sales: FiniteFloat = Field(..., examples=[4200])
    category: str = Field(DEFAULT_CATEGORY, examples=["Audio"])


class ProductUpdate(BaseModel):
    """Patch for a product — all fields optional."""

    name: str | None = None
    sales: FiniteFloat | None = None
    category: str | None = None


class ProductResponse(BaseModel):
    id: str
    name: str
    sales: float
    category: str

    model_config = {"from_attributes": True}
