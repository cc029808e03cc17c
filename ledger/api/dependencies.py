"""FastAPI dependencies for authentication, pagination and services."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ledger.context import AppContext
from ledger.database import get_db
from ledger.errors import ServiceError
from ledger.models.enums import Role
from ledger.services.auth import AuthSession
from ledger.services.product_service import ProductService
from ledger.services.transaction_service import TransactionService
from ledger.services.user_service import UserService

# Missing or non-bearer headers are reported by require_authentication
security = HTTPBearer(auto_error=False)


def get_context(request: Request) -> AppContext:
    """Get the application context built by the app factory."""
    return request.app.state.context


def require_authentication(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    context: Annotated[AppContext, Depends(get_context)],
) -> AuthSession:
    """Get the verified session of the caller from the bearer token."""
    if credentials is None:
        raise ServiceError.unauthorized("You need to be signed in")

    return context.credentials.verify_session(credentials.credentials)


def require_role(role: Role) -> Callable[..., AuthSession]:
    """Build a dependency that only lets sessions whose role satisfies `role` through."""

    def check_role(
        session: Annotated[AuthSession, Depends(require_authentication)],
    ) -> AuthSession:
        if not session.role.satisfies(role):
            raise ServiceError.forbidden(
                "You are not allowed to view this part of the application",
                {"requiredRole": role.value},
            )
        return session

    return check_role


require_admin = require_role(Role.ADMIN)


@dataclass(frozen=True)
class Pagination:
    """Requested pagination window; None means use the configured default."""

    limit: int | None = None
    offset: int | None = None


def get_pagination(
    limit: Annotated[int | None, Query(gt=0, le=1000)] = None,
    offset: Annotated[int | None, Query(ge=0)] = None,
) -> Pagination:
    """Validate the optional limit/offset pair: both or neither."""
    if (limit is None) != (offset is None):
        missing = "limit" if limit is None else "offset"
        raise ServiceError.validation_failed(
            "Validation failed, check details for more information",
            [{"field": f"query.{missing}", "reason": "limit and offset must be given together"}],
        )
    return Pagination(limit=limit, offset=offset)


def get_product_service(
    db: Annotated[Session, Depends(get_db)],
    context: Annotated[AppContext, Depends(get_context)],
) -> ProductService:
    """Get product service with dependencies."""
    return ProductService(db, context.settings, context.child_logger("products"))


def get_transaction_service(
    db: Annotated[Session, Depends(get_db)],
    context: Annotated[AppContext, Depends(get_context)],
) -> TransactionService:
    """Get transaction service with dependencies."""
    return TransactionService(db, context.settings, context.child_logger("transactions"))


def get_user_service(
    db: Annotated[Session, Depends(get_db)],
    context: Annotated[AppContext, Depends(get_context)],
) -> UserService:
    """Get user service with dependencies."""
    return UserService(db, context.settings, context.credentials, context.child_logger("users"))
