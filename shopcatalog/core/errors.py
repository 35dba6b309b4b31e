"""Error codes, their HTTP mapping, and the application error type.

Every :class:`ErrorCode` member has exactly one entry in ``ERROR_CONFIG``.
``lookup`` answers ``(500, "Unknown error.")`` for anything else.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class ErrorCode(str, enum.Enum):
    # authentication
    AUTH_INVALID_CREDENTIALS = "AUTH_INVALID_CREDENTIALS"
    AUTH_TOKEN_EXPIRED = "AUTH_TOKEN_EXPIRED"
    AUTH_UNAUTHORIZED = "AUTH_UNAUTHORIZED"
    AUTH_TOKEN_INVALID = "AUTH_TOKEN_INVALID"
    AUTH_ACCOUNT_LOCKED = "AUTH_ACCOUNT_LOCKED"

    # authorization
    FORBIDDEN = "FORBIDDEN"
    ROLE_NOT_ALLOWED = "ROLE_NOT_ALLOWED"
    INSUFFICIENT_PRIVILEGES = "INSUFFICIENT_PRIVILEGES"

    # validation
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_FIELD_FORMAT = "INVALID_FIELD_FORMAT"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"

    # business logic
    USER_NOT_FOUND = "USER_NOT_FOUND"
    ORDER_ALREADY_COMPLETED = "ORDER_ALREADY_COMPLETED"
    STOCK_NOT_AVAILABLE = "STOCK_NOT_AVAILABLE"
    PAYMENT_FAILED = "PAYMENT_FAILED"
    DUPLICATE_REQUEST = "DUPLICATE_REQUEST"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"
    VARIANT_NOT_FOUND = "VARIANT_NOT_FOUND"
    MEDIA_NOT_FOUND = "MEDIA_NOT_FOUND"
    PARENT_CATEGORY_NOT_FOUND = "PARENT_CATEGORY_NOT_FOUND"
    CATEGORY_HAS_SUBCATEGORIES = "CATEGORY_HAS_SUBCATEGORIES"
    CATEGORY_DEPTH_EXCEEDED = "CATEGORY_DEPTH_EXCEEDED"

    # database
    DB_CONNECTION_FAILED = "DB_CONNECTION_FAILED"
    DB_QUERY_FAILED = "DB_QUERY_FAILED"
    DB_DUPLICATE_KEY = "DB_DUPLICATE_KEY"
    DB_FOREIGN_KEY_VIOLATION = "DB_FOREIGN_KEY_VIOLATION"
    DB_TIMEOUT = "DB_TIMEOUT"

    # external services
    THIRD_PARTY_API_ERROR = "THIRD_PARTY_API_ERROR"
    THIRD_PARTY_TIMEOUT = "THIRD_PARTY_TIMEOUT"
    WEBHOOK_FAILED = "WEBHOOK_FAILED"
    PAYMENT_GATEWAY_ERROR = "PAYMENT_GATEWAY_ERROR"

    # rate limiting
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    TOO_MANY_ATTEMPTS = "TOO_MANY_ATTEMPTS"
    SERVICE_OVERLOADED = "SERVICE_OVERLOADED"

    # files & media
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    FILE_TYPE_NOT_ALLOWED = "FILE_TYPE_NOT_ALLOWED"
    FILE_UPLOAD_FAILED = "FILE_UPLOAD_FAILED"

    # request protocol
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    UNSUPPORTED_MEDIA_TYPE = "UNSUPPORTED_MEDIA_TYPE"

    # system
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    TIMEOUT = "TIMEOUT"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # networking
    DNS_RESOLUTION_FAILED = "DNS_RESOLUTION_FAILED"
    CONNECTION_RESET = "CONNECTION_RESET"
    SSL_HANDSHAKE_FAILED = "SSL_HANDSHAKE_FAILED"

    # concurrency
    OPTIMISTIC_LOCK_FAILED = "OPTIMISTIC_LOCK_FAILED"
    TRANSACTION_ABORTED = "TRANSACTION_ABORTED"
    STALE_DATA = "STALE_DATA"

    # security
    CSRF_TOKEN_INVALID = "CSRF_TOKEN_INVALID"
    XSS_DETECTED = "XSS_DETECTED"
    SQL_INJECTION_ATTEMPT = "SQL_INJECTION_ATTEMPT"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"


@dataclass(frozen=True)
class ErrorConfig:
    status_code: int
    default_message: str


UNKNOWN_ERROR = ErrorConfig(500, "Unknown error.")

ERROR_CONFIG: dict[ErrorCode, ErrorConfig] = {
    ErrorCode.AUTH_INVALID_CREDENTIALS: ErrorConfig(401, "Invalid credentials provided."),
    ErrorCode.AUTH_TOKEN_EXPIRED: ErrorConfig(401, "Authentication token has expired."),
    ErrorCode.AUTH_UNAUTHORIZED: ErrorConfig(401, "Unauthorized access."),
    ErrorCode.AUTH_TOKEN_INVALID: ErrorConfig(401, "Invalid authentication token."),
    ErrorCode.AUTH_ACCOUNT_LOCKED: ErrorConfig(401, "Account is locked."),
    ErrorCode.FORBIDDEN: ErrorConfig(403, "Access forbidden."),
    ErrorCode.ROLE_NOT_ALLOWED: ErrorConfig(403, "Role not allowed for this action."),
    ErrorCode.INSUFFICIENT_PRIVILEGES: ErrorConfig(403, "Insufficient privileges."),
    ErrorCode.VALIDATION_ERROR: ErrorConfig(400, "Validation failed."),
    ErrorCode.INVALID_FIELD_FORMAT: ErrorConfig(400, "Invalid field format."),
    ErrorCode.MISSING_REQUIRED_FIELD: ErrorConfig(400, "Missing required field."),
    ErrorCode.VALUE_OUT_OF_RANGE: ErrorConfig(400, "Value out of range."),
    ErrorCode.USER_NOT_FOUND: ErrorConfig(404, "User not found."),
    ErrorCode.ORDER_ALREADY_COMPLETED: ErrorConfig(409, "Order already completed."),
    ErrorCode.STOCK_NOT_AVAILABLE: ErrorConfig(400, "Stock not available."),
    ErrorCode.PAYMENT_FAILED: ErrorConfig(400, "Payment failed."),
    ErrorCode.DUPLICATE_REQUEST: ErrorConfig(409, "Duplicate request detected."),
    ErrorCode.PRODUCT_NOT_FOUND: ErrorConfig(404, "Product not found."),
    ErrorCode.CATEGORY_NOT_FOUND: ErrorConfig(404, "Category not found."),
    ErrorCode.VARIANT_NOT_FOUND: ErrorConfig(404, "Variant not found."),
    ErrorCode.MEDIA_NOT_FOUND: ErrorConfig(404, "Media not found."),
    ErrorCode.PARENT_CATEGORY_NOT_FOUND: ErrorConfig(400, "Parent category does not exist."),
    ErrorCode.CATEGORY_HAS_SUBCATEGORIES: ErrorConfig(
        409, "Cannot delete category with subcategories."
    ),
    ErrorCode.CATEGORY_DEPTH_EXCEEDED: ErrorConfig(400, "Category nesting is limited to two levels."),
    ErrorCode.DB_CONNECTION_FAILED: ErrorConfig(500, "Database connection failed."),
    ErrorCode.DB_QUERY_FAILED: ErrorConfig(500, "Database query failed."),
    ErrorCode.DB_DUPLICATE_KEY: ErrorConfig(409, "Duplicate key in database."),
    ErrorCode.DB_FOREIGN_KEY_VIOLATION: ErrorConfig(409, "Referenced record does not exist."),
    ErrorCode.DB_TIMEOUT: ErrorConfig(500, "Database operation timed out."),
    ErrorCode.THIRD_PARTY_API_ERROR: ErrorConfig(502, "Third-party API error."),
    ErrorCode.THIRD_PARTY_TIMEOUT: ErrorConfig(504, "Third-party service timed out."),
    ErrorCode.WEBHOOK_FAILED: ErrorConfig(502, "Webhook delivery failed."),
    ErrorCode.PAYMENT_GATEWAY_ERROR: ErrorConfig(504, "Payment gateway error."),
    ErrorCode.RATE_LIMIT_EXCEEDED: ErrorConfig(429, "Rate limit exceeded."),
    ErrorCode.TOO_MANY_ATTEMPTS: ErrorConfig(429, "Too many attempts."),
    ErrorCode.SERVICE_OVERLOADED: ErrorConfig(429, "Service overloaded."),
    ErrorCode.FILE_TOO_LARGE: ErrorConfig(413, "File too large."),
    ErrorCode.FILE_TYPE_NOT_ALLOWED: ErrorConfig(400, "File type not allowed."),
    ErrorCode.FILE_UPLOAD_FAILED: ErrorConfig(400, "File upload failed."),
    ErrorCode.RESOURCE_NOT_FOUND: ErrorConfig(404, "Resource not found."),
    ErrorCode.METHOD_NOT_ALLOWED: ErrorConfig(405, "Method not allowed."),
    ErrorCode.UNSUPPORTED_MEDIA_TYPE: ErrorConfig(415, "Content-Type must be application/json."),
    ErrorCode.INTERNAL_SERVER_ERROR: ErrorConfig(500, "Internal server error."),
    ErrorCode.SERVICE_UNAVAILABLE: ErrorConfig(503, "Service unavailable."),
    ErrorCode.TIMEOUT: ErrorConfig(504, "Operation timed out."),
    ErrorCode.CONFIGURATION_ERROR: ErrorConfig(500, "Configuration error."),
    ErrorCode.DNS_RESOLUTION_FAILED: ErrorConfig(500, "DNS resolution failed."),
    ErrorCode.CONNECTION_RESET: ErrorConfig(500, "Connection reset."),
    ErrorCode.SSL_HANDSHAKE_FAILED: ErrorConfig(500, "SSL handshake failed."),
    ErrorCode.OPTIMISTIC_LOCK_FAILED: ErrorConfig(409, "Optimistic lock failed."),
    ErrorCode.TRANSACTION_ABORTED: ErrorConfig(409, "Transaction aborted."),
    ErrorCode.STALE_DATA: ErrorConfig(409, "Stale data detected."),
    ErrorCode.CSRF_TOKEN_INVALID: ErrorConfig(400, "Invalid CSRF token."),
    ErrorCode.XSS_DETECTED: ErrorConfig(400, "XSS attack detected."),
    ErrorCode.SQL_INJECTION_ATTEMPT: ErrorConfig(400, "SQL injection attempt detected."),
    ErrorCode.INVALID_SIGNATURE: ErrorConfig(400, "Invalid signature."),
}


def lookup(code: ErrorCode | str) -> ErrorConfig:
    """Return the (status, default message) pair for *code*."""
    try:
        return ERROR_CONFIG[ErrorCode(code)]
    except (ValueError, KeyError):
        return UNKNOWN_ERROR


class AppError(Exception):
    """Application error with a machine code, a client-safe message and context.

    ``context`` holds open-ended extra data (e.g. ``retry_after``). It is
    logged, and only the keys the classifier knows about reach the client.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str = "",
        *,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.code = code
        self.message = message or lookup(code).default_message
        self.context: dict[str, Any] = dict(context or {})
        super().__init__(self.message)
        if cause is not None:
            self.__cause__ = cause

    @property
    def status_code(self) -> int:
        return lookup(self.code).status_code

    def with_context(self, key: str, value: Any) -> AppError:
        self.context[key] = value
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code.value!r}, {self.message!r})"
