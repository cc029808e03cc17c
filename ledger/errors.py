"""Domain error taxonomy."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Classified failure reasons raised by the service layer."""

    NOT_FOUND = "NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"


STATUS_CODES: dict[ErrorCode, int] = {
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.VALIDATION_FAILED: 400,
    ErrorCode.UNAUTHORIZED: 401,
    ErrorCode.FORBIDDEN: 403,
}

INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class ServiceError(Exception):
    """A classified failure carrying a code, a message and optional details."""

    def __init__(self, code: ErrorCode, message: str, details: Any = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details if details is not None else {}

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.code]

    @classmethod
    def not_found(cls, message: str, details: Any = None) -> "ServiceError":
        return cls(ErrorCode.NOT_FOUND, message, details)

    @classmethod
    def validation_failed(cls, message: str, details: Any = None) -> "ServiceError":
        return cls(ErrorCode.VALIDATION_FAILED, message, details)

    @classmethod
    def unauthorized(cls, message: str, details: Any = None) -> "ServiceError":
        return cls(ErrorCode.UNAUTHORIZED, message, details)

    @classmethod
    def forbidden(cls, message: str, details: Any = None) -> "ServiceError":
        return cls(ErrorCode.FORBIDDEN, message, details)

    def __repr__(self) -> str:
        return f"ServiceError(code={self.code.value!r}, message={self.message!r})"
