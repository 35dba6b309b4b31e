"""VariantService — variant CRUD, stock updates and activation."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from shopcatalog.core.errors import ErrorCode
from shopcatalog.dao.base import Page
from shopcatalog.dao.product_dao import ProductDAO
from shopcatalog.dao.variant_dao import VariantDAO
from shopcatalog.models.variant import Variant
from shopcatalog.services import ConflictError, NotFoundError, ValidationError


class VariantService:
    """Stateless service for product variants."""

    def __init__(self, variant_dao: VariantDAO, product_dao: ProductDAO) -> None:
        self._variant_dao = variant_dao
        self._product_dao = product_dao

    # ── read ──────────────────────────────────────────────────────────────

    async def get(self, session: AsyncSession, variant_id: int) -> Variant:
        variant = await self._variant_dao.get_by_id(session, variant_id)
        if variant is None:
            raise NotFoundError("variant not found", code=ErrorCode.VARIANT_NOT_FOUND)
        return variant

    async def get_by_sku(self, session: AsyncSession, sku: str) -> Variant:
        variant = await self._variant_dao.get_by_sku(session, sku)
        if variant is None:
            raise NotFoundError("variant not found", code=ErrorCode.VARIANT_NOT_FOUND)
        return variant

    async def list_by_product(
        self,
        session: AsyncSession,
        product_id: int,
        page: int,
        limit: int,
        *,
        active_only: bool = False,
    ) -> Page[Variant]:
        return await self._variant_dao.list_by_product(
            session, product_id, page, limit, active_only=active_only
        )

    # ── write ─────────────────────────────────────────────────────────────

    async def create(
        self,
        session: AsyncSession,
        *,
        product_id: int,
        sku: str,
        price: Decimal,
        stock_quantity: int = 0,
        is_active: bool = True,
    ) -> Variant:
        """Create a variant under an existing product.

        Raises :class:`NotFoundError` for an unknown product and
        :class:`ConflictError` when the SKU is taken.
        """
        await self._require_product(session, product_id)
        await self._require_free_sku(session, sku)
        return await self._variant_dao.create(
            session,
            product_id=product_id,
            sku=sku,
            price=price,
            stock_quantity=stock_quantity,
            is_active=is_active,
        )

    async def update(
        self,
        session: AsyncSession,
        variant_id: int,
        *,
        product_id: int,
        sku: str,
        price: Decimal,
        stock_quantity: int = 0,
        is_active: bool = True,
    ) -> Variant:
        """Replace every mutable field of a variant."""
        variant = await self.get(session, variant_id)
        if product_id != variant.product_id:
            await self._require_product(session, product_id)
        if sku != variant.sku:
            await self._require_free_sku(session, sku)
        return await self._variant_dao.update(
            session,
            variant_id,
            product_id=product_id,
            sku=sku,
            price=price,
            stock_quantity=stock_quantity,
            is_active=is_active,
        )

    async def update_stock(self, session: AsyncSession, variant_id: int, quantity: int) -> Variant:
        if quantity < 0:
            raise ValidationError(
                "stock quantity cannot be negative", code=ErrorCode.VALUE_OUT_OF_RANGE
            )
        if not await self._variant_dao.update_stock(session, variant_id, quantity):
            raise NotFoundError("variant not found", code=ErrorCode.VARIANT_NOT_FOUND)
        variant = await self.get(session, variant_id)
        return await self._variant_dao.refresh(session, variant)

    async def activate(self, session: AsyncSession, variant_id: int) -> Variant:
        return await self._set_active(session, variant_id, True)

    async def deactivate(self, session: AsyncSession, variant_id: int) -> Variant:
        return await self._set_active(session, variant_id, False)

    async def delete(self, session: AsyncSession, variant_id: int) -> None:
        if not await self._variant_dao.delete(session, variant_id):
            raise NotFoundError("variant not found", code=ErrorCode.VARIANT_NOT_FOUND)

    # ── helpers ───────────────────────────────────────────────────────────

    async def _set_active(self, session: AsyncSession, variant_id: int, active: bool) -> Variant:
        await self.get(session, variant_id)
        return await self._variant_dao.update(session, variant_id, is_active=active)

    async def _require_product(self, session: AsyncSession, product_id: int) -> None:
        if not await self._product_dao.exists(session, product_id):
            raise NotFoundError("product not found", code=ErrorCode.PRODUCT_NOT_FOUND)

    async def _require_free_sku(self, session: AsyncSession, sku: str) -> None:
        if await self._variant_dao.get_by_sku(session, sku) is not None:
            raise ConflictError(
                f"variant with sku '{sku}' already exists", code=ErrorCode.DB_DUPLICATE_KEY
            )
