"""SQLAlchemy models."""

from ledger.models.enums import Role
from ledger.models.product import Product
from ledger.models.transaction import Transaction
from ledger.models.user import User

__all__ = [
    "Role",
    "User",
    "Product",
    "Transaction",
]
