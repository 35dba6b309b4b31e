"""MediaDAO — media table operations, including primary-media switching."""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from shopcatalog.dao.base import BaseDAO, Page
from shopcatalog.models.media import Media


class MediaDAO(BaseDAO[Media]):
    model = Media

    # ── read ──────────────────────────────────────────────────────────────

    async def list_by_product(
        self, session: AsyncSession, product_id: int, page: int, limit: int
    ) -> Page[Media]:
        """Gallery order: position ascending, then id."""
        query = (
            select(Media)
            .where(Media.product_id == product_id)
            .order_by(Media.position.asc(), Media.id.asc())
        )
        return await self.paginate(session, query, page, limit)

    async def list_by_variant(
        self, session: AsyncSession, variant_id: int, page: int, limit: int
    ) -> Page[Media]:
        query = (
            select(Media)
            .where(Media.variant_id == variant_id)
            .order_by(Media.position.asc(), Media.id.asc())
        )
        return await self.paginate(session, query, page, limit)

    async def get_primary(self, session: AsyncSession, product_id: int) -> Media | None:
        return await self.find_one(session, product_id=product_id, is_primary=True)

    # ── write ─────────────────────────────────────────────────────────────

    async def clear_primary(
        self, session: AsyncSession, product_id: int, *, except_id: int | None = None
    ) -> None:
        """Unset is_primary on every media row of *product_id* (but *except_id*)."""
        stmt = update(Media).where(Media.product_id == product_id, Media.is_primary.is_(True))
        if except_id is not None:
            stmt = stmt.where(Media.id != except_id)
        stmt = stmt.values(is_primary=False).execution_options(synchronize_session="fetch")
        await session.execute(stmt)

    async def set_primary(self, session: AsyncSession, product_id: int, media_id: int) -> bool:
        """Make *media_id* the only primary media of *product_id*.

        Clear and set run inside one savepoint: either both apply or the
        product keeps its previous primary. Returns False (and changes
        nothing) when *media_id* does not belong to *product_id*.
        """
        async with session.begin_nested() as savepoint:
            await self.clear_primary(session, product_id)
            stmt = (
                update(Media)
                .where(Media.id == media_id, Media.product_id == product_id)
                .values(is_primary=True)
                .execution_options(synchronize_session="fetch")
            )
            result = await session.execute(stmt)
            if result.rowcount != 1:
                await savepoint.rollback()
                return False
        return True
