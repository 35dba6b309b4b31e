"""Tests for VariantService."""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from shopcatalog.core.errors import ErrorCode
from shopcatalog.dao.product_dao import ProductDAO
from shopcatalog.dao.variant_dao import VariantDAO
from shopcatalog.models.variant import Variant
from shopcatalog.services import ConflictError, NotFoundError, ValidationError
from shopcatalog.services.variant_service import VariantService


def _make_variant(**overrides) -> Variant:
    defaults = {
        "id": 10,
        "product_id": 1,
        "sku": "TSHIRT-RED-M",
        "price": Decimal("19.99"),
        "stock_quantity": 5,
        "is_active": True,
        "created_at": datetime.now(timezone.utc),
        "updated_at": datetime.now(timezone.utc),
    }
    defaults.update(overrides)
    return Variant(**defaults)


def _make_service() -> tuple[VariantService, VariantDAO, ProductDAO]:
    variant_dao = VariantDAO()
    product_dao = ProductDAO()
    return VariantService(variant_dao, product_dao), variant_dao, product_dao


class TestCreate:
    async def test_create_success(self):
        service, variant_dao, product_dao = _make_service()
        product_dao.exists = AsyncMock(return_value=True)
        variant_dao.get_by_sku = AsyncMock(return_value=None)
        variant_dao.create = AsyncMock(return_value=_make_variant())

        result = await service.create(
            AsyncMock(), product_id=1, sku="TSHIRT-RED-M", price=Decimal("19.99")
        )

        assert result.sku == "TSHIRT-RED-M"
        kwargs = variant_dao.create.call_args.kwargs
        assert kwargs["stock_quantity"] == 0
        assert kwargs["is_active"] is True

    async def test_unknown_product(self):
        service, variant_dao, product_dao = _make_service()
        product_dao.exists = AsyncMock(return_value=False)
        variant_dao.create = AsyncMock()

        with pytest.raises(NotFoundError) as info:
            await service.create(AsyncMock(), product_id=99, sku="X", price=Decimal("1"))

        assert info.value.code is ErrorCode.PRODUCT_NOT_FOUND
        variant_dao.create.assert_not_called()

    async def test_duplicate_sku(self):
        service, variant_dao, product_dao = _make_service()
        product_dao.exists = AsyncMock(return_value=True)
        variant_dao.get_by_sku = AsyncMock(return_value=_make_variant())
        variant_dao.create = AsyncMock()

        with pytest.raises(ConflictError, match="TSHIRT-RED-M") as info:
            await service.create(
                AsyncMock(), product_id=1, sku="TSHIRT-RED-M", price=Decimal("5")
            )

        assert info.value.code is ErrorCode.DB_DUPLICATE_KEY
        assert info.value.status_code == 409
        variant_dao.create.assert_not_called()


class TestUpdate:
    async def test_same_sku_is_not_a_conflict(self):
        service, variant_dao, product_dao = _make_service()
        existing = _make_variant()
        variant_dao.get_by_id = AsyncMock(return_value=existing)
        variant_dao.get_by_sku = AsyncMock(return_value=existing)
        product_dao.exists = AsyncMock(return_value=True)
        variant_dao.update = AsyncMock(return_value=existing)

        await service.update(
            AsyncMock(), 10, product_id=1, sku="TSHIRT-RED-M", price=Decimal("21.00")
        )

        variant_dao.get_by_sku.assert_not_called()
        product_dao.exists.assert_not_called()
        assert variant_dao.update.call_args.kwargs["price"] == Decimal("21.00")

    async def test_new_sku_taken(self):
        service, variant_dao, _ = _make_service()
        variant_dao.get_by_id = AsyncMock(return_value=_make_variant())
        variant_dao.get_by_sku = AsyncMock(return_value=_make_variant(id=11, sku="TAKEN"))
        variant_dao.update = AsyncMock()

        with pytest.raises(ConflictError):
            await service.update(AsyncMock(), 10, product_id=1, sku="TAKEN", price=Decimal("1"))

        variant_dao.update.assert_not_called()

    async def test_missing_variant(self):
        service, variant_dao, _ = _make_service()
        variant_dao.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError) as info:
            await service.update(AsyncMock(), 10, product_id=1, sku="X", price=Decimal("1"))

        assert info.value.code is ErrorCode.VARIANT_NOT_FOUND


class TestStockAndActivation:
    async def test_update_stock(self):
        service, variant_dao, _ = _make_service()
        variant = _make_variant(stock_quantity=42)
        variant_dao.update_stock = AsyncMock(return_value=True)
        variant_dao.get_by_id = AsyncMock(return_value=variant)
        variant_dao.refresh = AsyncMock(return_value=variant)

        session = AsyncMock()
        result = await service.update_stock(session, 10, 42)

        assert result.stock_quantity == 42
        variant_dao.update_stock.assert_awaited_once_with(session, 10, 42)

    async def test_negative_stock_rejected(self):
        service, variant_dao, _ = _make_service()
        variant_dao.update_stock = AsyncMock()

        with pytest.raises(ValidationError):
            await service.update_stock(AsyncMock(), 10, -1)

        variant_dao.update_stock.assert_not_called()

    async def test_update_stock_missing_variant(self):
        service, variant_dao, _ = _make_service()
        variant_dao.update_stock = AsyncMock(return_value=False)

        with pytest.raises(NotFoundError) as info:
            await service.update_stock(AsyncMock(), 10, 3)

        assert info.value.code is ErrorCode.VARIANT_NOT_FOUND

    async def test_deactivate(self):
        service, variant_dao, _ = _make_service()
        variant_dao.get_by_id = AsyncMock(return_value=_make_variant())
        variant_dao.update = AsyncMock(return_value=_make_variant(is_active=False))

        session = AsyncMock()
        result = await service.deactivate(session, 10)

        assert result.is_active is False
        variant_dao.update.assert_awaited_once_with(session, 10, is_active=False)

    async def test_activate_missing(self):
        service, variant_dao, _ = _make_service()
        variant_dao.get_by_id = AsyncMock(return_value=None)
        variant_dao.update = AsyncMock()

        with pytest.raises(NotFoundError):
            await service.activate(AsyncMock(), 10)

        variant_dao.update.assert_not_called()

    async def test_get_by_sku_missing(self):
        service, variant_dao, _ = _make_service()
        variant_dao.get_by_sku = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError, match="variant not found"):
            await service.get_by_sku(AsyncMock(), "NOPE")
