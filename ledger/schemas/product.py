"""Product schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ledger.schemas.common import INTEGER_MAX, reject_bool


class ProductCreate(BaseModel):
    """Create a new product."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, max_length=255)
    price: int = Field(..., gt=0, le=INTEGER_MAX)

    @field_validator("price", mode="before")
    @classmethod
    def price_not_bool(cls, value):
        return reject_bool(value)


class ProductUpdate(ProductCreate):
    """Replace a product's name and price."""


class ProductResponse(BaseModel):
    """Product response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    price: int
