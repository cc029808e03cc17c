"""Health API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from ledger.api.dependencies import get_context
from ledger.api.errors import ERROR_RESPONSES
from ledger.context import AppContext

router = APIRouter(prefix="/api/health", tags=["health"], responses=ERROR_RESPONSES)


@router.get("/ping")
async def ping():
    """Liveness check."""
    return {"pong": True}


@router.get("/version")
async def version(context: Annotated[AppContext, Depends(get_context)]):
    """Running version and environment."""
    settings = context.settings
    return {"env": settings.environment, "version": settings.version, "name": settings.app_name}
