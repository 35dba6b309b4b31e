"""Product request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import ConfigDict, Field

from shopcatalog.api.schemas.common import CamelModel

ProductStatus = Literal["active", "inactive"]


class ProductIn(CamelModel):
    """Body of ``POST /products`` and ``PUT /products/{id}``."""

    name: str = Field(min_length=1, max_length=255)
    description: str | None = None
    short_description: str | None = Field(None, max_length=255)
    status: ProductStatus = "active"


class ProductOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    short_description: str | None
    status: str
    created_at: datetime
    updated_at: datetime
