"""Transaction schemas."""

import re
from datetime import UTC, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ledger.schemas.common import INTEGER_MAX, INTEGER_MIN, EmbeddedRef, reject_bool

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}")


class TransactionCreate(BaseModel):
    """Create a transaction for the signed in user."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    amount: int = Field(..., ge=INTEGER_MIN, le=INTEGER_MAX)
    date: datetime
    product_id: UUID = Field(..., alias="productId")

    @field_validator("amount", mode="before")
    @classmethod
    def amount_not_bool(cls, value):
        return reject_bool(value)

    @field_validator("amount")
    @classmethod
    def amount_not_zero(cls, value: int) -> int:
        if value == 0:
            raise ValueError("amount must not be zero")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def date_is_iso_string(cls, value):
        # Unix timestamps are not accepted
        if isinstance(value, datetime):
            return value
        if not isinstance(value, str) or not ISO_DATE.match(value):
            raise ValueError("date must be an ISO 8601 date string")
        return value

    @field_validator("date")
    @classmethod
    def date_not_in_future(cls, value: datetime) -> datetime:
        # Naive datetimes are read as UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        if value > datetime.now(UTC):
            raise ValueError("date must not be in the future")
        return value.astimezone(UTC)


class TransactionUpdate(TransactionCreate):
    """Replace a transaction's amount, date and product."""


class TransactionResponse(BaseModel):
    """Transaction with its user and product embedded."""

    id: str
    amount: int
    date: datetime
    user: EmbeddedRef
    product: EmbeddedRef
