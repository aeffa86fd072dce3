"""Pydantic DTOs (Data Transfer Objects) for the Metric feature."""

from pydantic import BaseModel, Field, FiniteFloat


class MetricUpdate(BaseModel):
    """Patch for a metric — only value and change are writable."""

    value: FiniteFloat | None = Field(None, examples=[52.1])
    change: FiniteFloat | None = Field(None, examples=[2.4])


class MetricResponse(BaseModel):
    """Schema returned to the client; the metric name is the map key."""

    label: str
    value: float
    change: float
    unit: str
    suffix: str

    model_config = {"from_attributes": True}
