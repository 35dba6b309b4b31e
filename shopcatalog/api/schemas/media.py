"""Media request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, Field

from shopcatalog.api.schemas.common import MAX_ID, MAX_INT, CamelModel

MediaType = Literal["image", "video"]


class MediaIn(CamelModel):
    product_id: int = Field(ge=1, le=MAX_ID)
    variant_id: int | None = Field(None, ge=1, le=MAX_ID)
    media_type: MediaType
    url: str = Field(min_length=1, max_length=500)
    alt: str | None = Field(None, max_length=255)
    position: int = Field(0, ge=0, le=MAX_INT)
    is_primary: bool = False


class MediaOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    variant_id: int | None
    media_type: str
    url: str
    alt: str | None
    position: int
    is_primary: bool
    created_at: datetime
    updated_at: datetime
