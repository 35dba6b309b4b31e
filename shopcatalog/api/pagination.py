"""Offset pagination — lenient query parsing and page metadata."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from fastapi import Query

from shopcatalog.api.schemas.common import MAX_ID, Pagination

# plain ASCII decimal, optionally signed; no "_" separators or other digit sets
_INT_RE = re.compile(r"[+-]?[0-9]+")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass(frozen=True)
class PaginationParams:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _parse_int(raw: str | None) -> int | None:
    if raw is None or not _INT_RE.fullmatch(raw):
        return None
    return int(raw)


def parse_pagination(page: str | None = None, limit: str | None = None) -> PaginationParams:
    """Turn raw ``page`` / ``limit`` query strings into bounded values.

    Never raises: anything missing, unparseable or out of range falls back
    to the default (page 1, limit 10). ``limit`` is capped at 100.
    """
    limit_num = _parse_int(limit)
    if limit_num is None or limit_num < 1 or limit_num > MAX_LIMIT:
        limit_num = DEFAULT_LIMIT

    page_num = _parse_int(page)
    # the row offset must fit a BIGINT
    if page_num is None or page_num < 1 or (page_num - 1) * limit_num > MAX_ID:
        page_num = DEFAULT_PAGE

    return PaginationParams(page=page_num, limit=limit_num)


def pagination_params(
    page: str | None = Query(None, description="1-based page number"),
    limit: str | None = Query(None, description="Page size, 1 to 100"),
) -> PaginationParams:
    """FastAPI dependency; bad input degrades to defaults instead of a 400."""
    return parse_pagination(page, limit)


def build_pagination(page: int, limit: int, total_items: int) -> Pagination:
    total_pages = math.ceil(total_items / limit) if limit > 0 else 0
    return Pagination(
        page=page,
        limit=limit,
        total_pages=total_pages,
        total_items=total_items,
        has_next=page < total_pages,
        has_prev=page > 1,
    )
