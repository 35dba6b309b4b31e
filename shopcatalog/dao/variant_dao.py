"""VariantDAO — variants table operations."""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shopcatalog.dao.base import BaseDAO, Page
from shopcatalog.models.variant import Variant


class VariantDAO(BaseDAO[Variant]):
    model = Variant

    # ── read ──────────────────────────────────────────────────────────────

    async def get_by_sku(self, session: AsyncSession, sku: str) -> Variant | None:
        return await self.find_one(session, sku=sku)

    async def list_by_product(
        self,
        session: AsyncSession,
        product_id: int,
        page: int,
        limit: int,
        *,
        active_only: bool = False,
    ) -> Page[Variant]:
        """Paginated variants of one product, optionally only active ones."""
        query = select(Variant).where(Variant.product_id == product_id)
        if active_only:
            query = query.where(Variant.is_active.is_(True))
        query = query.order_by(Variant.id)
        return await self.paginate(session, query, page, limit)

    # ── write ─────────────────────────────────────────────────────────────

    async def update_stock(self, session: AsyncSession, pk: int, quantity: int) -> bool:
        """Set stock_quantity for one variant. Returns False if no row matched."""
        self._require_pk(pk)
        stmt = (
            update(Variant)
            .where(Variant.id == pk)
            .values(stock_quantity=quantity)
            .execution_options(synchronize_session="fetch")
        )
        result = await session.execute(stmt)
        return result.rowcount > 0
