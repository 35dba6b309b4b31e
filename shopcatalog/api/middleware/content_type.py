"""Reject write requests whose body is not declared as JSON."""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from shopcatalog.api.responses import error_response
from shopcatalog.core.errors import ErrorCode, lookup

WRITE_METHODS = frozenset({"POST", "PUT", "PATCH"})
JSON_MEDIA_TYPE = "application/json"


def is_json_content_type(header: str | None) -> bool:
    """True for ``application/json`` in any case, parameters allowed."""
    if not header:
        return False
    media_type = header.split(";", 1)[0].strip().lower()
    return media_type == JSON_MEDIA_TYPE


class JSONContentTypeMiddleware(BaseHTTPMiddleware):
    """POST, PUT and PATCH must carry ``Content-Type: application/json`` (else 415)."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method in WRITE_METHODS and not is_json_content_type(
            request.headers.get("content-type")
        ):
            code = ErrorCode.UNSUPPORTED_MEDIA_TYPE
            config = lookup(code)
            return error_response(request, config.status_code, code.value, config.default_message)
        return await call_next(request)
