"""Transaction service."""

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ledger.config import Settings
from ledger.errors import ServiceError
from ledger.repositories.product import ProductRepository
from ledger.repositories.transaction import TransactionRepository
from ledger.repositories.user import UserRepository


class TransactionService:
    """Service for ledger transactions."""

    def __init__(self, db: Session, settings: Settings, logger: logging.Logger):
        self.settings = settings
        self.logger = logger
        repo_logger = logger.getChild("repository")
        self.repository = TransactionRepository(db, repo_logger)
        self.products = ProductRepository(db, repo_logger)
        self.users = UserRepository(db, repo_logger)

    def get_all(self, limit: int | None = None, offset: int | None = None) -> dict[str, Any]:
        """Get `limit` transactions ordered by date, skipping the first `offset`."""
        if limit is None:
            limit = self.settings.pagination_limit
        if offset is None:
            offset = self.settings.pagination_offset

        self.logger.debug(f"Fetching all transactions (limit={limit}, offset={offset})")
        data = self.repository.find_all(limit, offset)
        count = self.repository.find_count()
        return {"data": data, "count": count, "limit": limit, "offset": offset}

    def get_by_id(self, transaction_id: UUID | str) -> dict[str, Any]:
        self.logger.debug(f"Fetching transaction with id {transaction_id}")
        transaction = self.repository.find_by_id(str(transaction_id))
        if transaction is None:
            raise self._not_found(transaction_id)
        return transaction

    def create(
        self,
        amount: int,
        date: datetime,
        product_id: UUID | str,
        user_id: str,
    ) -> dict[str, Any]:
        """Create a transaction for `user_id` on `product_id`.

        Unknown products or users are reported by the database as foreign key
        violations and are turned into NOT_FOUND errors here.
        """
        self.logger.debug(f"Creating new transaction (amount={amount}, product={product_id})")
        try:
            transaction = self.repository.create(amount, date, str(product_id), user_id)
        except IntegrityError:
            raise self._classify_integrity_error(str(product_id), user_id) from None

        # Read-back is not atomic with the insert; a concurrent delete can win
        if transaction is None:
            raise ServiceError.not_found("The created transaction no longer exists")
        return transaction

    def update_by_id(
        self,
        transaction_id: UUID | str,
        amount: int,
        date: datetime,
        product_id: UUID | str,
        user_id: str,
    ) -> dict[str, Any]:
        self.logger.debug(f"Updating transaction with id {transaction_id}")
        transaction_id = str(transaction_id)
        self.get_by_id(transaction_id)

        try:
            transaction = self.repository.update_by_id(
                transaction_id, amount, date, str(product_id), user_id
            )
        except IntegrityError:
            raise self._classify_integrity_error(str(product_id), user_id) from None

        if transaction is None:
            raise self._not_found(transaction_id)
        return transaction

    def delete_by_id(self, transaction_id: UUID | str) -> None:
        self.logger.debug(f"Deleting transaction with id {transaction_id}")
        if not self.repository.delete_by_id(str(transaction_id)):
            raise self._not_found(transaction_id)

    def _classify_integrity_error(self, product_id: str, user_id: str) -> ServiceError:
        """Map a failed write to the reference that caused it."""
        if self.products.find_by_id(product_id) is None:
            return ServiceError.not_found(
                f"There is no product with id {product_id}", {"productId": product_id}
            )
        if self.users.find_by_id(user_id) is None:
            return ServiceError.not_found(
                f"There is no user with id {user_id}", {"userId": user_id}
            )
        return ServiceError.validation_failed("The transaction violates a data constraint")

    @staticmethod
    def _not_found(transaction_id: UUID | str) -> ServiceError:
        return ServiceError.not_found(
            f"There is no transaction with id {transaction_id}", {"id": str(transaction_id)}
        )
