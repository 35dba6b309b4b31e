"""Variant request/response schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict, Field

from shopcatalog.api.schemas.common import MAX_ID, MAX_INT, CamelModel


class VariantIn(CamelModel):
    product_id: int = Field(ge=1, le=MAX_ID)
    sku: str = Field(min_length=1, max_length=100)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    stock_quantity: int = Field(0, ge=0, le=MAX_INT)
    is_active: bool = True


class StockUpdate(CamelModel):
    """Body of ``PUT /variants/{id}/stock``."""

    quantity: int = Field(ge=0, le=MAX_INT)


class VariantOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    sku: str
    # float on the wire; numeric(10,2) keeps the stored value exact
    price: float
    stock_quantity: int
    is_active: bool
    created_at: datetime
    updated_at: datetime
