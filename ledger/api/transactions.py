"""Transaction API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from ledger.api.dependencies import (
    Pagination,
    get_pagination,
    get_transaction_service,
    require_authentication,
)
from ledger.api.errors import ERROR_RESPONSES
from ledger.schemas.common import ListResponse
from ledger.schemas.transaction import TransactionCreate, TransactionResponse, TransactionUpdate
from ledger.services.auth import AuthSession
from ledger.services.transaction_service import TransactionService

router = APIRouter(
    prefix="/api/transactions", tags=["transactions"], responses=ERROR_RESPONSES
)


@router.get("", response_model=ListResponse[TransactionResponse])
def get_all_transactions(
    session: Annotated[AuthSession, Depends(require_authentication)],
    pagination: Annotated[Pagination, Depends(get_pagination)],
    service: Annotated[TransactionService, Depends(get_transaction_service)],
):
    """Get all transactions, ordered by date (paginated)."""
    return service.get_all(pagination.limit, pagination.offset)


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
def create_transaction(
    transaction_data: TransactionCreate,
    session: Annotated[AuthSession, Depends(require_authentication)],
    service: Annotated[TransactionService, Depends(get_transaction_service)],
):
    """Create a new transaction for the signed in user."""
    return service.create(
        amount=transaction_data.amount,
        date=transaction_data.date,
        product_id=transaction_data.product_id,
        user_id=session.user_id,
    )


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: UUID,
    session: Annotated[AuthSession, Depends(require_authentication)],
    service: Annotated[TransactionService, Depends(get_transaction_service)],
):
    """Get a transaction by id."""
    return service.get_by_id(transaction_id)


@router.put("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: UUID,
    transaction_data: TransactionUpdate,
    session: Annotated[AuthSession, Depends(require_authentication)],
    service: Annotated[TransactionService, Depends(get_transaction_service)],
):
    """Update a transaction. The signed in user becomes its owner."""
    return service.update_by_id(
        transaction_id,
        amount=transaction_data.amount,
        date=transaction_data.date,
        product_id=transaction_data.product_id,
        user_id=session.user_id,
    )


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    transaction_id: UUID,
    session: Annotated[AuthSession, Depends(require_authentication)],
    service: Annotated[TransactionService, Depends(get_transaction_service)],
):
    """Delete a transaction."""
    service.delete_by_id(transaction_id)
