"""Unified error handling — one classifier, one error envelope.

``classify`` turns any exception into a :class:`ClassifiedError`. The
exception handlers below and the recovery middleware are the only places
that build error responses.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import (
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shopcatalog.api.responses import error_response
from shopcatalog.api.schemas.common import FieldError
from shopcatalog.core.errors import AppError, ErrorCode, lookup

log = structlog.get_logger()

UNEXPECTED_MESSAGE = "An unexpected error occurred."
INTERNAL_MESSAGE = "An internal server error occurred."
INVALID_JSON_MESSAGE = "Invalid JSON format."

# https://www.postgresql.org/docs/current/errcodes-appendix.html
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"

_RETRY_CODES = frozenset({ErrorCode.RATE_LIMIT_EXCEEDED, ErrorCode.TOO_MANY_ATTEMPTS})

_HTTP_STATUS_CODES: dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION_ERROR,
    401: ErrorCode.AUTH_UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.RESOURCE_NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
    413: ErrorCode.FILE_TOO_LARGE,
    415: ErrorCode.UNSUPPORTED_MEDIA_TYPE,
    429: ErrorCode.RATE_LIMIT_EXCEEDED,
    503: ErrorCode.SERVICE_UNAVAILABLE,
}

_LOCATION_PREFIXES = frozenset({"body", "query", "path", "header", "cookie"})


@dataclass
class ClassifiedError:
    status_code: int
    code: str
    message: str
    fields: list[FieldError] | None = None
    headers: dict[str, str] = field(default_factory=dict)


def _from_code(code: ErrorCode, message: str = "") -> ClassifiedError:
    config = lookup(code)
    return ClassifiedError(config.status_code, code.value, message or config.default_message)


# ── validation errors ────────────────────────────────────────────────────


def _field_name(loc: tuple[Any, ...] | list[Any]) -> str:
    parts = [str(p) for p in loc]
    if parts and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(parts) or "body"


def _choices(expected: str) -> str:
    quoted = re.findall(r"'([^']*)'", expected)
    return " ".join(quoted) if quoted else expected


def _tag_and_param(err: dict[str, Any]) -> tuple[str, str | None]:
    err_type = err.get("type", "")
    ctx = err.get("ctx") or {}
    if err_type == "missing":
        return "required", None
    if err_type in ("string_too_short", "too_short"):
        return "min", str(ctx.get("min_length"))
    if err_type in ("greater_than_equal", "greater_than"):
        return "min", str(ctx.get("ge", ctx.get("gt")))
    if err_type in ("string_too_long", "too_long"):
        return "max", str(ctx.get("max_length"))
    if err_type in ("less_than_equal", "less_than"):
        return "max", str(ctx.get("le", ctx.get("lt")))
    if err_type in ("literal_error", "enum"):
        return "oneof", _choices(str(ctx.get("expected", "")))
    if err_type == "value_error" and "email" in str(err.get("msg", "")).lower():
        return "email", None
    return err_type or "invalid", None


def field_message(field_name: str, tag: str, param: str | None) -> str:
    """Human-readable message for one failed constraint."""
    if tag == "required":
        return "This field is required."
    if tag == "email":
        return "Invalid email format."
    if tag == "min":
        return f"Value must be at least {param}."
    if tag == "max":
        return f"Value must not exceed {param}."
    if tag == "len":
        return f"Length must be exactly {param}."
    if tag == "oneof":
        return f"Must be one of: {param}."
    return f"Invalid value for field {field_name}."


def _scalar(value: Any) -> Any:
    if isinstance(value, (str, int, float, bool)):
        return value
    return None


def translate_validation_errors(errors: list[dict[str, Any]]) -> list[FieldError]:
    """One :class:`FieldError` per offending field, first failure wins."""
    fields: list[FieldError] = []
    seen: set[str] = set()
    for err in errors:
        name = _field_name(err.get("loc", ()))
        if name in seen:
            continue
        seen.add(name)
        tag, param = _tag_and_param(err)
        fields.append(
            FieldError(
                field=name,
                tag=tag,
                value=None if tag == "required" else _scalar(err.get("input")),
                param=param,
                message=field_message(name, tag, param),
            )
        )
    return fields


def _classify_validation(exc: RequestValidationError) -> ClassifiedError:
    errors = list(exc.errors())
    if any(err.get("type") == "json_invalid" for err in errors):
        return _from_code(ErrorCode.VALIDATION_ERROR, INVALID_JSON_MESSAGE)
    classified = _from_code(ErrorCode.VALIDATION_ERROR)
    classified.fields = translate_validation_errors(errors)
    return classified


# ── database errors ──────────────────────────────────────────────────────


def _sqlstate(exc: IntegrityError) -> str | None:
    """SQLSTATE of the driver error, from the DBAPI adapter or asyncpg itself."""
    orig = exc.orig
    for candidate in (orig, getattr(orig, "__cause__", None)):
        if candidate is None:
            continue
        code = getattr(candidate, "pgcode", None) or getattr(candidate, "sqlstate", None)
        if code:
            return str(code)
    return None


def _classify_database(exc: SQLAlchemyError) -> ClassifiedError:
    if isinstance(exc, IntegrityError):
        sqlstate = _sqlstate(exc)
        if sqlstate == UNIQUE_VIOLATION:
            return _from_code(ErrorCode.DB_DUPLICATE_KEY)
        if sqlstate == FOREIGN_KEY_VIOLATION:
            return _from_code(ErrorCode.DB_FOREIGN_KEY_VIOLATION)
        return _from_code(ErrorCode.DB_QUERY_FAILED)
    if isinstance(exc, PoolTimeoutError):
        return _from_code(ErrorCode.DB_TIMEOUT)
    if isinstance(exc, (OperationalError, InterfaceError, DisconnectionError)):
        return _from_code(ErrorCode.DB_CONNECTION_FAILED)
    return _from_code(ErrorCode.DB_QUERY_FAILED)


# ── dispatch ─────────────────────────────────────────────────────────────


def _retry_after(value: Any) -> str:
    if isinstance(value, timedelta):
        return str(int(value.total_seconds()))
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, float) and math.isfinite(value):
        return str(int(value))
    # HTTP-date or preformatted strings go out unchanged
    return str(value)


def classify(exc: BaseException) -> ClassifiedError:
    """Map *exc* to status, code, client message, field errors and headers."""
    if isinstance(exc, AppError):
        classified = ClassifiedError(exc.status_code, exc.code.value, exc.message)
        if exc.code in _RETRY_CODES and "retry_after" in exc.context:
            classified.headers["Retry-After"] = _retry_after(exc.context["retry_after"])
        return classified

    if isinstance(exc, RequestValidationError):
        return _classify_validation(exc)

    if isinstance(exc, SQLAlchemyError):
        return _classify_database(exc)

    if isinstance(exc, StarletteHTTPException):
        code = _HTTP_STATUS_CODES.get(exc.status_code, ErrorCode.INTERNAL_SERVER_ERROR)
        classified = ClassifiedError(exc.status_code, code.value, lookup(code).default_message)
        classified.headers.update(exc.headers or {})
        return classified

    return ClassifiedError(500, ErrorCode.INTERNAL_SERVER_ERROR.value, INTERNAL_MESSAGE)


def _respond(request: Request, classified: ClassifiedError) -> JSONResponse:
    return error_response(
        request,
        classified.status_code,
        classified.code,
        classified.message,
        fields=classified.fields,
        headers=classified.headers,
    )


def internal_error_response(request: Request) -> JSONResponse:
    """Body for a fault that escaped every handler."""
    return error_response(
        request, 500, ErrorCode.INTERNAL_SERVER_ERROR.value, UNEXPECTED_MESSAGE
    )


# ── handlers ─────────────────────────────────────────────────────────────


async def _app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    classified = classify(exc)
    level = log.error if classified.status_code >= 500 else log.warning
    level("application error", code=classified.code, error=exc.message, context=exc.context)
    return _respond(request, classified)


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    classified = classify(exc)
    log.info(
        "validation failed",
        fields=[f.field for f in classified.fields or []],
        message=classified.message,
    )
    return _respond(request, classified)


async def _database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    classified = classify(exc)
    level = log.warning if classified.status_code < 500 else log.error
    # raw driver text goes to the log only
    level(
        "database error",
        code=classified.code,
        error=str(exc),
        exc_info=classified.status_code >= 500,
    )
    return _respond(request, classified)


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    classified = classify(exc)
    log.info("http error", status_code=classified.status_code, code=classified.code)
    return _respond(request, classified)


def register_error_handlers(app: FastAPI) -> None:
    """Register exception handlers on the app."""
    app.add_exception_handler(AppError, _app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _database_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)  # type: ignore[arg-type]
