"""Product repository."""

import logging
import uuid

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ledger.models.product import Product


class ProductRepository:
    """Data access for the product catalog."""

    def __init__(self, db: Session, logger: logging.Logger):
        self.db = db
        self.logger = logger

    def find_all(self, limit: int, offset: int) -> list[Product]:
        """Find `limit` products ordered by name, skipping the first `offset`."""
        return self.db.query(Product).order_by(Product.name.asc()).limit(limit).offset(offset).all()

    def find_by_id(self, product_id: str) -> Product | None:
        return self.db.query(Product).filter(Product.id == product_id).first()

    def find_by_name(self, name: str) -> Product | None:
        return self.db.query(Product).filter(Product.name == name).first()

    def find_count(self) -> int:
        return self.db.query(func.count(Product.id)).scalar()

    def create(self, name: str, price: int) -> Product | None:
        """Insert a product and return it as stored."""
        product_id = str(uuid.uuid4())
        try:
            self.db.add(Product(id=product_id, name=name, price=price))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(f"Error in create: {e}")
            raise

        return self.find_by_id(product_id)

    def update_by_id(self, product_id: str, name: str, price: int) -> Product | None:
        """Update a product and return it as stored, or None if it does not exist."""
        try:
            self.db.query(Product).filter(Product.id == product_id).update(
                {Product.name: name, Product.price: price}
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(f"Error in update_by_id: {e}")
            raise

        return self.find_by_id(product_id)

    def delete_by_id(self, product_id: str) -> bool:
        """Delete a product. Returns whether a row was actually removed."""
        try:
            rows_affected = self.db.query(Product).filter(Product.id == product_id).delete()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(f"Error in delete_by_id: {e}")
            raise

        return rows_affected > 0
