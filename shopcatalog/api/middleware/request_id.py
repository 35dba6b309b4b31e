"""Request ID middleware — request id, timing and the last-resort recovery boundary."""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from shopcatalog.api.errors import internal_error_response
from shopcatalog.api.responses import REQUEST_ID_HEADER

log = structlog.get_logger()


def _is_valid_uuid(value: str) -> bool:
    try:
        uuid.UUID(value)
        return True
    except (ValueError, AttributeError):
        return False


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a unique request_id to every request via structlog contextvars.

    Any exception that escapes the registered handlers is logged with its
    stack and answered with a 500 envelope; the server keeps serving.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        raw_id = request.headers.get("x-request-id", "")
        request_id = raw_id if _is_valid_uuid(raw_id) else str(uuid.uuid4())

        start = time.perf_counter()
        request.state.request_id = request_id
        request.state.start_time = start

        tokens = structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        try:
            log.info("request started")
            try:
                response = await call_next(request)
            except Exception:
                duration_ms = round((time.perf_counter() - start) * 1000, 1)
                log.exception("request failed", duration_ms=duration_ms)
                response = internal_error_response(request)
            else:
                duration_ms = round((time.perf_counter() - start) * 1000, 1)
                log.info(
                    "request completed",
                    status_code=response.status_code,
                    duration_ms=duration_ms,
                )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            structlog.contextvars.reset_contextvars(**tokens)
