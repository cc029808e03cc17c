"""User repository."""

import logging
import uuid

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ledger.models.enums import Role
from ledger.models.user import User


class UserRepository:
    """Data access for users."""

    def __init__(self, db: Session, logger: logging.Logger):
        self.db = db
        self.logger = logger

    def find_all(self, limit: int, offset: int) -> list[User]:
        return (
            self.db.query(User)
            .order_by(User.name.asc(), User.id.asc())
            .limit(limit)
            .offset(offset)
            .all()
        )

    def find_by_id(self, user_id: str) -> User | None:
        return self.db.query(User).filter(User.id == user_id).first()

    def find_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def find_count(self) -> int:
        return self.db.query(func.count(User.id)).scalar()

    def create(
        self,
        name: str,
        email: str,
        password_hash: str,
        role: Role = Role.USER,
    ) -> User | None:
        user_id = str(uuid.uuid4())
        try:
            self.db.add(
                User(
                    id=user_id,
                    name=name,
                    email=email,
                    password_hash=password_hash,
                    role=role.value,
                )
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(f"Error in create: {e}")
            raise

        return self.find_by_id(user_id)

    def update_by_id(self, user_id: str, name: str) -> User | None:
        try:
            self.db.query(User).filter(User.id == user_id).update({User.name: name})
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(f"Error in update_by_id: {e}")
            raise

        return self.find_by_id(user_id)

    def delete_by_id(self, user_id: str) -> bool:
        """Delete a user and, through the foreign key, their transactions."""
        try:
            rows_affected = self.db.query(User).filter(User.id == user_id).delete()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(f"Error in delete_by_id: {e}")
            raise

        return rows_affected > 0
