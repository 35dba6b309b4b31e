"""CategoryService — two-level category tree management."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from shopcatalog.core.errors import ErrorCode
from shopcatalog.dao.base import Page
from shopcatalog.dao.category_dao import CategoryDAO
from shopcatalog.models.category import Category
from shopcatalog.services import ConflictError, NotFoundError, ValidationError

ROOT_DEPTH = 0
CHILD_DEPTH = 1


class CategoryService:
    """Stateless service for category CRUD.

    Depth is never taken from the client: it is 0 for a root and 1 for a
    child. Only roots can have children.
    """

    def __init__(self, category_dao: CategoryDAO) -> None:
        self._category_dao = category_dao

    # ── read ──────────────────────────────────────────────────────────────

    async def get(self, session: AsyncSession, category_id: int) -> Category:
        category = await self._category_dao.get_by_id(session, category_id)
        if category is None:
            raise NotFoundError("category not found", code=ErrorCode.CATEGORY_NOT_FOUND)
        return category

    async def list(self, session: AsyncSession, page: int, limit: int) -> Page[Category]:
        return await self._category_dao.list_paginated(session, page, limit)

    async def list_roots(self, session: AsyncSession) -> list[Category]:
        return await self._category_dao.list_roots(session)

    async def list_subcategories(
        self, session: AsyncSession, parent_id: int, page: int, limit: int
    ) -> Page[Category]:
        return await self._category_dao.list_children_paginated(session, parent_id, page, limit)

    # ── write ─────────────────────────────────────────────────────────────

    async def create(
        self,
        session: AsyncSession,
        *,
        name: str,
        description: str | None = None,
        parent_id: int | None = None,
    ) -> Category:
        """Create a category; depth is derived from *parent_id*.

        Raises :class:`ValidationError` for a blank name or a missing or
        non-root parent. Nothing is written when validation fails.
        """
        name = self._require_name(name)
        depth = await self._depth_for_parent(session, parent_id)
        return await self._category_dao.create(
            session,
            name=name,
            description=description,
            parent_id=parent_id,
            depth=depth,
        )

    async def update(
        self,
        session: AsyncSession,
        category_id: int,
        *,
        name: str,
        description: str | None = None,
        parent_id: int | None = None,
    ) -> Category:
        """Replace name, description and parent of a category."""
        name = self._require_name(name)
        await self.get(session, category_id)

        if parent_id is not None:
            if parent_id == category_id:
                raise ValidationError("category cannot be its own parent")
            if await self._category_dao.has_children(session, category_id):
                raise ValidationError(
                    "category with subcategories cannot become a subcategory",
                    code=ErrorCode.CATEGORY_DEPTH_EXCEEDED,
                )
        depth = await self._depth_for_parent(session, parent_id)

        return await self._category_dao.update(
            session,
            category_id,
            name=name,
            description=description,
            parent_id=parent_id,
            depth=depth,
        )

    async def delete(self, session: AsyncSession, category_id: int) -> None:
        """Delete a leaf or an empty root.

        Raises :class:`ConflictError` when any category still names this
        one as its parent; the category and its children stay untouched.
        """
        await self.get(session, category_id)
        if await self._category_dao.has_children(session, category_id):
            raise ConflictError(
                "cannot delete category with subcategories",
                code=ErrorCode.CATEGORY_HAS_SUBCATEGORIES,
            )
        await self._category_dao.delete(session, category_id)

    # ── helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def _require_name(name: str | None) -> str:
        if name is None or not name.strip():
            raise ValidationError("category name is required")
        return name.strip()

    async def _depth_for_parent(self, session: AsyncSession, parent_id: int | None) -> int:
        if parent_id is None:
            return ROOT_DEPTH
        parent = await self._category_dao.get_by_id(session, parent_id)
        if parent is None:
            raise ValidationError(
                "parent category does not exist", code=ErrorCode.PARENT_CATEGORY_NOT_FOUND
            )
        if parent.depth != ROOT_DEPTH:
            raise ValidationError(
                "parent category must be a root category",
                code=ErrorCode.CATEGORY_DEPTH_EXCEEDED,
            )
        return CHILD_DEPTH
