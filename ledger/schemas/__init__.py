"""Pydantic schemas for API requests and responses."""

from ledger.schemas.common import EmbeddedRef, ErrorResponse, ListResponse, ValidationDetail
from ledger.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from ledger.schemas.transaction import TransactionCreate, TransactionResponse, TransactionUpdate
from ledger.schemas.user import AuthResponse, UserLogin, UserRegister, UserResponse, UserUpdate

__all__ = [
    "EmbeddedRef",
    "ErrorResponse",
    "ListResponse",
    "ValidationDetail",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "TransactionCreate",
    "TransactionUpdate",
    "TransactionResponse",
    "UserRegister",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "AuthResponse",
]
