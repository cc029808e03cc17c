"""Product service."""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ledger.config import Settings
from ledger.errors import ServiceError
from ledger.models.product import Product
from ledger.repositories.product import ProductRepository


class ProductService:
    """Service for product catalog operations."""

    def __init__(self, db: Session, settings: Settings, logger: logging.Logger):
        self.settings = settings
        self.logger = logger
        self.repository = ProductRepository(db, logger.getChild("repository"))

    def get_all(self, limit: int | None = None, offset: int | None = None) -> dict[str, Any]:
        """Get `limit` products, skipping the first `offset`, with the total count."""
        if limit is None:
            limit = self.settings.pagination_limit
        if offset is None:
            offset = self.settings.pagination_offset

        self.logger.debug(f"Fetching all products (limit={limit}, offset={offset})")
        data = self.repository.find_all(limit, offset)
        count = self.repository.find_count()
        return {"data": data, "count": count, "limit": limit, "offset": offset}

    def get_by_id(self, product_id: UUID | str) -> Product:
        self.logger.debug(f"Fetching product with id {product_id}")
        product = self.repository.find_by_id(str(product_id))
        if product is None:
            raise ServiceError.not_found(
                f"There is no product with id {product_id}", {"id": str(product_id)}
            )
        return product

    def create(self, name: str, price: int) -> Product:
        self.logger.debug(f"Creating new product {name!r} (price={price})")
        self._ensure_name_available(name)

        try:
            product = self.repository.create(name, price)
        except IntegrityError:
            raise self._duplicate_name(name) from None

        if product is None:
            raise ServiceError.not_found("The created product no longer exists")
        return product

    def update_by_id(self, product_id: UUID | str, name: str, price: int) -> Product:
        self.logger.debug(f"Updating product with id {product_id}")
        product_id = str(product_id)
        self.get_by_id(product_id)
        self._ensure_name_available(name, product_id)

        try:
            product = self.repository.update_by_id(product_id, name, price)
        except IntegrityError:
            raise self._duplicate_name(name) from None

        if product is None:
            raise ServiceError.not_found(
                f"There is no product with id {product_id}", {"id": product_id}
            )
        return product

    def delete_by_id(self, product_id: UUID | str) -> None:
        """Delete a product together with the transactions that refer to it."""
        self.logger.debug(f"Deleting product with id {product_id}")
        if not self.repository.delete_by_id(str(product_id)):
            raise ServiceError.not_found(
                f"There is no product with id {product_id}", {"id": str(product_id)}
            )

    def _ensure_name_available(self, name: str, product_id: str | None = None) -> None:
        existing = self.repository.find_by_name(name)
        if existing is not None and existing.id != product_id:
            raise self._duplicate_name(name)

    @staticmethod
    def _duplicate_name(name: str) -> ServiceError:
        return ServiceError.validation_failed(
            f"A product with name {name!r} already exists",
            [{"field": "body.name", "reason": "must be unique"}],
        )
