"""Shared envelope schemas — success meta, pagination and error bodies."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")

# column limits (BIGINT ids, INTEGER counters)
MAX_ID = 2**63 - 1
MAX_INT = 2**31 - 1


class CamelModel(BaseModel):
    """Base for every wire model: camelCase out, camelCase or snake_case in."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Pagination(CamelModel):
    page: int
    limit: int
    total_pages: int
    total_items: int
    has_next: bool
    has_prev: bool


class Meta(CamelModel):
    request_id: str
    timestamp: datetime
    api_version: str
    processing_time_ms: int
    pagination: Pagination | None = None


class Envelope(CamelModel, Generic[T]):
    """Success body: the payload plus request metadata."""

    data: T
    meta: Meta


class FieldError(CamelModel):
    field: str
    tag: str
    value: Any = None
    param: str | None = None
    message: str


class ErrorBody(CamelModel):
    code: str
    message: str
    fields: list[FieldError] | None = None


class ErrorResponse(CamelModel):
    error: ErrorBody
