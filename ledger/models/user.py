"""User model."""

import uuid

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from ledger.database import Base
from ledger.models.enums import Role


class User(Base):
    """User model for authentication and transaction ownership."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=Role.USER.value)

    # Relationships
    transactions = relationship("Transaction", back_populates="user", passive_deletes=True)
