"""Centralized translation of errors into HTTP responses.

Every failure raised while handling a request ends up here. Classified
``ServiceError``s keep their code and message; anything unclassified becomes
a 500 whose message and stack are only shown outside production.
"""

import traceback
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ledger.errors import INTERNAL_SERVER_ERROR, STATUS_CODES, ErrorCode, ServiceError
from ledger.schemas.common import ErrorResponse

HTTP_ERROR_CODES: dict[int, str] = {status: code.value for code, status in STATUS_CODES.items()}
HTTP_ERROR_CODES[405] = "METHOD_NOT_ALLOWED"

# Documents the error body on every router
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status: {"model": ErrorResponse} for status in (*STATUS_CODES.values(), 500)
}


def _error_body(
    request: Request,
    code: str,
    message: str,
    details: Any,
    exc: Exception,
) -> dict[str, Any]:
    body: dict[str, Any] = {"code": code, "message": message, "details": details}
    if not request.app.state.context.settings.is_production:
        body["stack"] = "".join(traceback.format_exception(exc))
    return body


def _logger(request: Request):
    return request.app.state.context.child_logger("errors")


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Map a classified domain error onto its status code."""
    _logger(request).warning(
        f"{request.method} {request.url.path} failed: {exc.code.value} {exc.message}"
    )
    headers = {"WWW-Authenticate": "Bearer"} if exc.code == ErrorCode.UNAUTHORIZED else None
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.code.value, exc.message, exc.details, exc),
        headers=headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Collect every violated field of the request into one VALIDATION_FAILED error."""
    details = [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "reason": error["msg"],
        }
        for error in exc.errors()
    ]
    _logger(request).warning(f"{request.method} {request.url.path} failed validation: {details}")
    return JSONResponse(
        status_code=STATUS_CODES[ErrorCode.VALIDATION_FAILED],
        content=_error_body(
            request,
            ErrorCode.VALIDATION_FAILED.value,
            "Validation failed, check details for more information",
            details,
            exc,
        ),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Give framework errors (unknown route, wrong method) the same body shape."""
    code = HTTP_ERROR_CODES.get(exc.status_code, INTERNAL_SERVER_ERROR)
    if exc.status_code == 404:
        message = f"Unknown resource: {request.url.path}"
    else:
        message = str(exc.detail)

    _logger(request).warning(f"{request.method} {exc.status_code} {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, code, message, {}, exc),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything unclassified is internal and must not leak details in production."""
    _logger(request).error(
        f"Error occurred while handling {request.method} {request.url.path}", exc_info=exc
    )
    settings = request.app.state.context.settings
    message = "Internal server error" if settings.is_production else str(exc)
    return JSONResponse(
        status_code=500,
        content=_error_body(request, INTERNAL_SERVER_ERROR, message, {}, exc),
    )


def install_error_handlers(app: FastAPI) -> None:
    """Register the error handlers on the application."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
