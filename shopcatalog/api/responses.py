"""Envelope builders — every JSON body the API sends goes through here."""

from __future__ import annotations

import time
import uuid
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response

from shopcatalog.api.pagination import build_pagination
from shopcatalog.api.schemas.common import ErrorBody, ErrorResponse, FieldError, Meta, Pagination
from shopcatalog.core.config import Settings

REQUEST_ID_HEADER = "X-Request-ID"


def request_id_of(request: Request) -> str:
    """Request id set by the middleware, or a fresh UUID when there is none."""
    request_id = getattr(request.state, "request_id", None)
    return request_id or str(uuid.uuid4())


def _processing_time_ms(request: Request) -> int:
    start = getattr(request.state, "start_time", None)
    if start is None:
        return 0
    return max(0, int((time.perf_counter() - start) * 1000))


def _api_version(request: Request) -> str:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        return Settings.api_version
    return settings.api_version


def build_meta(request: Request, pagination: Pagination | None = None) -> Meta:
    return Meta(
        request_id=request_id_of(request),
        timestamp=datetime.now(timezone.utc),
        api_version=_api_version(request),
        processing_time_ms=_processing_time_ms(request),
        pagination=pagination,
    )


def _envelope(request: Request, status_code: int, data: Any, meta: Meta) -> JSONResponse:
    content = {
        "data": jsonable_encoder(data, by_alias=True),
        "meta": meta.model_dump(mode="json", by_alias=True, exclude_none=True),
    }
    return JSONResponse(
        status_code=status_code,
        content=content,
        headers={REQUEST_ID_HEADER: meta.request_id},
    )


def send_success(request: Request, status_code: int, data: Any) -> JSONResponse:
    """Wrap *data* in the success envelope.

    A status outside 200..299 is coerced to 200.
    """
    if not 200 <= status_code <= 299:
        status_code = 200
    return _envelope(request, status_code, data, build_meta(request))


def send_paginated(
    request: Request,
    data: Sequence[Any],
    page: int,
    limit: int,
    total_items: int,
    status_code: int = 200,
) -> JSONResponse:
    if not 200 <= status_code <= 299:
        status_code = 200
    meta = build_meta(request, build_pagination(page, limit, total_items))
    return _envelope(request, status_code, list(data), meta)


def send_no_content(request: Request) -> Response:
    """204 for DELETE: no body, only the request id header."""
    return Response(status_code=204, headers={REQUEST_ID_HEADER: request_id_of(request)})


def error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    fields: list[FieldError] | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(error=ErrorBody(code=code, message=message, fields=fields or None))
    all_headers = {REQUEST_ID_HEADER: request_id_of(request)}
    if headers:
        all_headers.update(headers)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json", by_alias=True, exclude_none=True),
        headers=all_headers,
    )
