"""Shared schemas."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

# Integer columns are 32-bit signed
INTEGER_MIN = -(2**31)
INTEGER_MAX = 2**31 - 1


def reject_bool(value: Any) -> Any:
    """Refuse JSON booleans where an integer is expected."""
    if isinstance(value, bool):
        raise ValueError("must be an integer, not a boolean")
    return value


class EmbeddedRef(BaseModel):
    """Minimal view of a related record, used instead of a raw foreign key."""

    id: str
    name: str


class ListResponse(BaseModel, Generic[T]):
    """Paginated list envelope."""

    data: list[T]
    count: int
    limit: int
    offset: int


class ValidationDetail(BaseModel):
    """One violated field."""

    field: str
    reason: str


class ErrorResponse(BaseModel):
    """Error body returned for every failed request."""

    code: str
    message: str
    details: list[ValidationDetail] | dict[str, Any] = {}
    stack: str | None = None
