"""Transaction model."""

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from ledger.database import Base


class Transaction(Base):
    """Signed monetary movement: positive is a deposit, negative a withdrawal."""

    __tablename__ = "transactions"
    __table_args__ = (CheckConstraint("amount <> 0", name="ck_transaction_amount_nonzero"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    amount = Column(Integer, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE", name="fk_transaction_user"),
        nullable=False,
        index=True,
    )
    product_id = Column(
        String(36),
        ForeignKey("products.id", ondelete="CASCADE", name="fk_transaction_product"),
        nullable=False,
        index=True,
    )

    # Relationships
    user = relationship("User", back_populates="transactions")
    product = relationship("Product", back_populates="transactions")
