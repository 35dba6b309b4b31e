"""Category request/response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field

from shopcatalog.api.schemas.common import MAX_ID, CamelModel


class CategoryIn(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    parent_id: int | None = Field(None, ge=1, le=MAX_ID)


class CategoryOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    depth: int
    parent_id: int | None
    created_at: datetime
    updated_at: datetime
