"""ProductDAO — products table operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shopcatalog.dao.base import BaseDAO, Page
from shopcatalog.models.product import Product


class ProductDAO(BaseDAO[Product]):
    model = Product

    async def list_paginated(self, session: AsyncSession, page: int, limit: int) -> Page[Product]:
        """Paginated product list for the API, ordered by id."""
        query = select(Product).order_by(Product.id)
        return await self.paginate(session, query, page, limit)
