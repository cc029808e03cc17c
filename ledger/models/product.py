"""Product model."""

import uuid

from sqlalchemy import CheckConstraint, Column, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from ledger.database import Base


class Product(Base):
    """Catalog item that transactions refer to."""

    __tablename__ = "products"
    __table_args__ = (
        UniqueConstraint("name", name="idx_product_name_unique"),
        CheckConstraint("price > 0", name="ck_product_price_positive"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    price = Column(Integer, nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="product", passive_deletes=True)
