"""Product API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from ledger.api.dependencies import (
    Pagination,
    get_pagination,
    get_product_service,
    require_authentication,
)
from ledger.api.errors import ERROR_RESPONSES
from ledger.schemas.common import ListResponse
from ledger.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from ledger.services.product_service import ProductService

router = APIRouter(
    prefix="/api/products",
    tags=["products"],
    dependencies=[Depends(require_authentication)],
    responses=ERROR_RESPONSES,
)


@router.get("", response_model=ListResponse[ProductResponse])
def get_all_products(
    pagination: Annotated[Pagination, Depends(get_pagination)],
    service: Annotated[ProductService, Depends(get_product_service)],
):
    """Get all products, ordered by name (paginated)."""
    return service.get_all(pagination.limit, pagination.offset)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    product_data: ProductCreate,
    service: Annotated[ProductService, Depends(get_product_service)],
):
    """Create a new product."""
    return service.create(product_data.name, product_data.price)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: UUID,
    service: Annotated[ProductService, Depends(get_product_service)],
):
    """Get a product by id."""
    return service.get_by_id(product_id)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: UUID,
    product_data: ProductUpdate,
    service: Annotated[ProductService, Depends(get_product_service)],
):
    """Update a product."""
    return service.update_by_id(product_id, product_data.name, product_data.price)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: UUID,
    service: Annotated[ProductService, Depends(get_product_service)],
):
    """Delete a product. Its transactions are deleted with it."""
    service.delete_by_id(product_id)
