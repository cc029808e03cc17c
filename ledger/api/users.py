"""User API endpoints: login, registration and user management."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from ledger.api.dependencies import (
    Pagination,
    get_pagination,
    get_user_service,
    require_admin,
    require_authentication,
)
from ledger.api.errors import ERROR_RESPONSES
from ledger.errors import ServiceError
from ledger.models.enums import Role
from ledger.schemas.common import ListResponse
from ledger.schemas.user import AuthResponse, UserLogin, UserRegister, UserResponse, UserUpdate
from ledger.services.auth import AuthSession
from ledger.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["users"], responses=ERROR_RESPONSES)


def ensure_self_or_admin(session: AuthSession, user_id: UUID) -> None:
    """Users may only touch their own record unless they are an admin."""
    if session.user_id != str(user_id) and not session.role.satisfies(Role.ADMIN):
        raise ServiceError.forbidden("You are not allowed to view this user's information")


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Login with email and password."""
    return service.login(credentials.email, credentials.password)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Register a new user."""
    return service.register(user_data.name, user_data.email, user_data.password)


@router.get("", response_model=ListResponse[UserResponse])
def get_all_users(
    session: Annotated[AuthSession, Depends(require_admin)],
    pagination: Annotated[Pagination, Depends(get_pagination)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Get all users (admin only, paginated)."""
    return service.get_all(pagination.limit, pagination.offset)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: UUID,
    session: Annotated[AuthSession, Depends(require_authentication)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Get a user by id."""
    ensure_self_or_admin(session, user_id)
    return service.get_by_id(user_id)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: UUID,
    user_data: UserUpdate,
    session: Annotated[AuthSession, Depends(require_authentication)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Update a user's name."""
    ensure_self_or_admin(session, user_id)
    return service.update_by_id(user_id, user_data.name)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: UUID,
    session: Annotated[AuthSession, Depends(require_authentication)],
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Delete a user together with their transactions."""
    ensure_self_or_admin(session, user_id)
    service.delete_by_id(user_id)
