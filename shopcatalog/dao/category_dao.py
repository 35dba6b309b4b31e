"""CategoryDAO — categories table operations."""

from sqlalchemy import select
from sqlalchemy import exists as sa_exists
from sqlalchemy.ext.asyncio import AsyncSession

from shopcatalog.dao.base import BaseDAO, Page
from shopcatalog.models.category import Category


class CategoryDAO(BaseDAO[Category]):
    model = Category

    # ── read ──────────────────────────────────────────────────────────────

    async def list_paginated(self, session: AsyncSession, page: int, limit: int) -> Page[Category]:
        query = select(Category).order_by(Category.id)
        return await self.paginate(session, query, page, limit)

    async def list_roots(self, session: AsyncSession) -> list[Category]:
        """Return every top-level category (parent_id IS NULL)."""
        query = select(Category).where(Category.parent_id.is_(None)).order_by(Category.id)
        return await self.list_all(session, query)

    async def list_children_paginated(
        self, session: AsyncSession, parent_id: int, page: int, limit: int
    ) -> Page[Category]:
        query = select(Category).where(Category.parent_id == parent_id).order_by(Category.id)
        return await self.paginate(session, query, page, limit)

    async def has_children(self, session: AsyncSession, category_id: int) -> bool:
        """True when at least one category names *category_id* as its parent."""
        stmt = select(sa_exists().where(Category.parent_id == category_id))
        result = await session.execute(stmt)
        return result.scalar_one()
