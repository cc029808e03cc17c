"""Transaction repository.

Transactions are never handed out with raw foreign keys: every read joins
the user and product tables and nests them as ``{id, name}``.
"""

import logging
import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ledger.models.product import Product
from ledger.models.transaction import Transaction
from ledger.models.user import User


def format_transaction(row: Any) -> dict[str, Any]:
    """Reshape a joined row into a transaction with embedded user and product."""
    values = row._mapping
    date = values["date"]
    # SQLite hands back naive datetimes; everything is stored in UTC
    if date is not None and date.tzinfo is None:
        date = date.replace(tzinfo=UTC)

    return {
        "id": values["id"],
        "amount": values["amount"],
        "date": date,
        "user": {
            "id": values["user_id"],
            "name": values["user_name"],
        },
        "product": {
            "id": values["product_id"],
            "name": values["product_name"],
        },
    }


class TransactionRepository:
    """Data access for transactions."""

    def __init__(self, db: Session, logger: logging.Logger):
        self.db = db
        self.logger = logger

    def _joined(self) -> Query:
        return (
            self.db.query(
                Transaction.id,
                Transaction.amount,
                Transaction.date,
                Product.id.label("product_id"),
                Product.name.label("product_name"),
                User.id.label("user_id"),
                User.name.label("user_name"),
            )
            .join(Product, Transaction.product_id == Product.id)
            .join(User, Transaction.user_id == User.id)
        )

    def find_all(self, limit: int, offset: int) -> list[dict[str, Any]]:
        """Find `limit` transactions ordered by date, skipping the first `offset`."""
        rows = (
            self._joined()
            .order_by(Transaction.date.asc(), Transaction.id.asc())
            .limit(limit)
            .offset(offset)
            .all()
        )
        return [format_transaction(row) for row in rows]

    def find_count(self) -> int:
        """Total number of transactions, regardless of any pagination window."""
        return self.db.query(func.count(Transaction.id)).scalar()

    def find_by_id(self, transaction_id: str) -> dict[str, Any] | None:
        row = self._joined().filter(Transaction.id == transaction_id).first()
        return format_transaction(row) if row is not None else None

    def create(
        self,
        amount: int,
        date: datetime,
        product_id: str,
        user_id: str,
    ) -> dict[str, Any] | None:
        """Insert a transaction and read it back through the join."""
        transaction_id = str(uuid.uuid4())
        try:
            self.db.add(
                Transaction(
                    id=transaction_id,
                    amount=amount,
                    date=date,
                    product_id=product_id,
                    user_id=user_id,
                )
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(f"Error in create: {e}")
            raise

        return self.find_by_id(transaction_id)

    def update_by_id(
        self,
        transaction_id: str,
        amount: int,
        date: datetime,
        product_id: str,
        user_id: str,
    ) -> dict[str, Any] | None:
        try:
            self.db.query(Transaction).filter(Transaction.id == transaction_id).update(
                {
                    Transaction.amount: amount,
                    Transaction.date: date,
                    Transaction.product_id: product_id,
                    Transaction.user_id: user_id,
                }
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(f"Error in update_by_id: {e}")
            raise

        return self.find_by_id(transaction_id)

    def delete_by_id(self, transaction_id: str) -> bool:
        try:
            rows_affected = (
                self.db.query(Transaction).filter(Transaction.id == transaction_id).delete()
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(f"Error in delete_by_id: {e}")
            raise

        return rows_affected > 0
