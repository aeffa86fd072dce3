"""Pydantic DTOs (Data Transfer Objects) for the Transaction feature."""

import datetime
from typing import Any

from pydantic import BaseModel, Field, FiniteFloat, NonNegativeInt, field_validator

from app.domain.entities import TransactionStatus


def _today() -> datetime.date:
    return datetime.datetime.now(datetime.timezone.utc).date()


class TransactionCreate(BaseModel):
    """Schema for creating a transaction.

    An unknown ``status`` falls back to Pending rather than failing, and a
    missing or blank ``date`` becomes today's UTC date.
    """

    customer: str = Field(..., min_length=1, examples=["Amara Osei"])
    product: str = Field(..., min_length=1, examples=["Wireless Pro"])
    amount: FiniteFloat = Field(..., examples=[249])
    status: TransactionStatus = TransactionStatus.PENDING
    date: datetime.date = Field(default_factory=_today)

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, v: Any) -> TransactionStatus:
        return TransactionStatus.coerce(v)

    @field_validator("date", mode="before")
    @classmethod
    def default_date(cls, v: Any) -> Any:
        return v or _today()


class TransactionUpdate(BaseModel):
    """Patch for a transaction — all fields optional."""

    customer: str | None = None
    product: str | None = None
    amount: FiniteFloat | None = None
    status: TransactionStatus | None = None
    date: datetime.date | None = None

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, v: Any) -> TransactionStatus | None:
        return None if v is None else TransactionStatus.coerce(v)


class TransactionQuery(BaseModel):
    """Query-string filters for listing transactions. Blank values are ignored."""

    status: str | None = None
    search: str | None = None
    limit: NonNegativeInt | None = None

    @field_validator("status", "search", "limit", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        return None if v == "" else v


class TransactionResponse(BaseModel):
    id: str
    customer: str
    product: str
    amount: float
    status: TransactionStatus
    date: datetime.date

    model_config = {"from_attributes": True}
