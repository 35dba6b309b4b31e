"""Service layer — business logic orchestration."""

from __future__ import annotations

from typing import Any

from shopcatalog.core.errors import AppError, ErrorCode


class ServiceError(AppError):
    """Base service exception. Subclasses pick a default code."""

    default_code = ErrorCode.INTERNAL_SERVER_ERROR

    def __init__(
        self,
        message: str = "",
        *,
        code: ErrorCode | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(code or self.default_code, message, context=context)


class NotFoundError(ServiceError):
    """Resource not found (-> HTTP 404 for the *_NOT_FOUND codes)."""

    default_code = ErrorCode.RESOURCE_NOT_FOUND


class ConflictError(ServiceError):
    """Business rule conflict (-> HTTP 409)."""

    default_code = ErrorCode.DUPLICATE_REQUEST


class ValidationError(ServiceError):
    """Input validation or state transition error (-> HTTP 400)."""

    default_code = ErrorCode.VALIDATION_ERROR
