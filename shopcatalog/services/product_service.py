"""ProductService — product CRUD."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from shopcatalog.core.errors import ErrorCode
from shopcatalog.dao.base import Page
from shopcatalog.dao.product_dao import ProductDAO
from shopcatalog.models.product import Product
from shopcatalog.services import NotFoundError


class ProductService:
    """Stateless service for product CRUD."""

    def __init__(self, product_dao: ProductDAO) -> None:
        self._product_dao = product_dao

    async def get(self, session: AsyncSession, product_id: int) -> Product:
        """Return one product.

        Raises :class:`NotFoundError` if the product does not exist.
        """
        product = await self._product_dao.get_by_id(session, product_id)
        if product is None:
            raise NotFoundError("product not found", code=ErrorCode.PRODUCT_NOT_FOUND)
        return product

    async def list(self, session: AsyncSession, page: int, limit: int) -> Page[Product]:
        return await self._product_dao.list_paginated(session, page, limit)

    async def create(
        self,
        session: AsyncSession,
        *,
        name: str,
        description: str | None = None,
        short_description: str | None = None,
        status: str = "active",
    ) -> Product:
        return await self._product_dao.create(
            session,
            name=name,
            description=description,
            short_description=short_description,
            status=status,
        )

    async def update(
        self,
        session: AsyncSession,
        product_id: int,
        *,
        name: str,
        description: str | None = None,
        short_description: str | None = None,
        status: str = "active",
    ) -> Product:
        """Replace every mutable field of a product."""
        product = await self._product_dao.update(
            session,
            product_id,
            name=name,
            description=description,
            short_description=short_description,
            status=status,
        )
        if product is None:
            raise NotFoundError("product not found", code=ErrorCode.PRODUCT_NOT_FOUND)
        return product

    async def delete(self, session: AsyncSession, product_id: int) -> None:
        """Delete a product; its variants and media go with it (ON DELETE CASCADE)."""
        if not await self._product_dao.delete(session, product_id):
            raise NotFoundError("product not found", code=ErrorCode.PRODUCT_NOT_FOUND)
