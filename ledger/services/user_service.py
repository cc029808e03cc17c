"""User service: registration, login and profile management."""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ledger.config import Settings
from ledger.errors import ServiceError
from ledger.models.enums import Role
from ledger.models.user import User
from ledger.repositories.user import UserRepository
from ledger.services.auth import CredentialManager


def expose_user(user: User) -> dict[str, Any]:
    """Public view of a user; the password hash never leaves the service."""
    return {"id": user.id, "name": user.name, "email": user.email, "role": user.role}


class UserService:
    """Service for user accounts."""

    def __init__(
        self,
        db: Session,
        settings: Settings,
        credentials: CredentialManager,
        logger: logging.Logger,
    ):
        self.settings = settings
        self.credentials = credentials
        self.logger = logger
        self.repository = UserRepository(db, logger.getChild("repository"))

    def _session_for(self, user: User) -> dict[str, Any]:
        token = self.credentials.issue_session(user.id, user.role)
        return {"token": token, "user": expose_user(user)}

    def login(self, email: str, password: str) -> dict[str, Any]:
        """Check credentials and issue a session token.

        Unknown email and wrong password share one message and both run the
        password hash, so neither the response nor its timing reveals which
        accounts exist.
        """
        user = self.repository.find_by_email(email)
        if user is None:
            self.credentials.dummy_verify()
            raise ServiceError.unauthorized("The given email and password do not match")
        if not self.credentials.verify_password(password, user.password_hash):
            raise ServiceError.unauthorized("The given email and password do not match")

        self.logger.debug(f"User {user.id} logged in")
        return self._session_for(user)

    def register(self, name: str, email: str, password: str) -> dict[str, Any]:
        self.logger.debug(f"Registering user {email}")
        if self.repository.find_by_email(email) is not None:
            raise self._duplicate_email()

        password_hash = self.credentials.hash_password(password)
        try:
            user = self.repository.create(name, email, password_hash, Role.USER)
        except IntegrityError:
            raise self._duplicate_email() from None

        return self._session_for(user)

    def get_all(self, limit: int | None = None, offset: int | None = None) -> dict[str, Any]:
        if limit is None:
            limit = self.settings.pagination_limit
        if offset is None:
            offset = self.settings.pagination_offset

        self.logger.debug(f"Fetching all users (limit={limit}, offset={offset})")
        data = [expose_user(user) for user in self.repository.find_all(limit, offset)]
        count = self.repository.find_count()
        return {"data": data, "count": count, "limit": limit, "offset": offset}

    def get_by_id(self, user_id: UUID | str) -> dict[str, Any]:
        self.logger.debug(f"Fetching user with id {user_id}")
        user = self.repository.find_by_id(str(user_id))
        if user is None:
            raise self._not_found(user_id)
        return expose_user(user)

    def update_by_id(self, user_id: UUID | str, name: str) -> dict[str, Any]:
        self.logger.debug(f"Updating user with id {user_id}")
        user = self.repository.update_by_id(str(user_id), name)
        if user is None:
            raise self._not_found(user_id)
        return expose_user(user)

    def delete_by_id(self, user_id: UUID | str) -> None:
        self.logger.debug(f"Deleting user with id {user_id}")
        if not self.repository.delete_by_id(str(user_id)):
            raise self._not_found(user_id)

    @staticmethod
    def _duplicate_email() -> ServiceError:
        return ServiceError.validation_failed(
            "There is already a user with this email address",
            [{"field": "body.email", "reason": "already registered"}],
        )

    @staticmethod
    def _not_found(user_id: UUID | str) -> ServiceError:
        return ServiceError.not_found(f"There is no user with id {user_id}", {"id": str(user_id)})
