"""Generic base DAO — row CRUD plus offset pagination.

DAOs never commit: they flush so constraint violations surface inside the
request transaction, and they report absent rows as ``None`` / ``False``.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, delete, func, select
from sqlalchemy import exists as sa_exists
from sqlalchemy.ext.asyncio import AsyncSession

from shopcatalog.core.database import Base

ModelT = TypeVar("ModelT", bound=Base)

# managed by the database, never written through update()
_SERVER_MANAGED = frozenset({"id", "created_at", "updated_at"})


@dataclass
class Page(Generic[ModelT]):
    """One offset page plus the total row count of the unpaged query."""

    data: list[ModelT]
    total: int
    page: int
    limit: int


class BaseDAO(Generic[ModelT]):
    """Base data-access object. Subclasses set ``model`` class attribute."""

    model: type[ModelT]

    @staticmethod
    def _require_pk(pk: int | None) -> None:
        if pk is None:
            raise ValueError("pk must not be None")

    def _check_writable(self, values: dict[str, Any]) -> None:
        columns = self.model.__mapper__.column_attrs.keys()
        for key in values:
            if key in _SERVER_MANAGED:
                raise AttributeError(f"'{key}' is immutable and cannot be updated")
            if key not in columns:
                raise AttributeError(f"{self.model.__name__} has no column '{key}'")

    # ── single rows ──────────────────────────────────────────────────────

    async def get_by_id(self, session: AsyncSession, pk: int) -> ModelT | None:
        self._require_pk(pk)
        return await session.get(self.model, pk)

    async def find_one(self, session: AsyncSession, **filters: Any) -> ModelT | None:
        """First row whose columns equal *filters*, lowest id first.

        ``await dao.find_one(session, sku="TSHIRT-RED-M")``
        """
        if not filters:
            raise ValueError("find_one() requires at least one filter")
        stmt = select(self.model).filter_by(**filters).order_by(self.model.id).limit(1)
        return (await session.scalars(stmt)).first()

    async def exists(self, session: AsyncSession, pk: int) -> bool:
        """Check existence without loading the full ORM object."""
        self._require_pk(pk)
        return bool(await session.scalar(select(sa_exists().where(self.model.id == pk))))

    async def create(self, session: AsyncSession, **values: Any) -> ModelT:
        """Insert one row and load its server defaults (id, timestamps)."""
        obj = self.model(**values)
        session.add(obj)
        await session.flush()
        await session.refresh(obj)
        return obj

    async def update(self, session: AsyncSession, pk: int, **values: Any) -> ModelT | None:
        """Apply *values* to the row and reload it. ``None`` if it does not exist.

        Raises ``AttributeError`` for unknown or server-managed columns.
        """
        self._require_pk(pk)
        self._check_writable(values)
        obj = await session.get(self.model, pk)
        if obj is None:
            return None
        for key, val in values.items():
            setattr(obj, key, val)
        await session.flush()
        await session.refresh(obj)
        return obj

    async def delete(self, session: AsyncSession, pk: int) -> bool:
        """Delete by primary key; FK cascades run in the database."""
        self._require_pk(pk)
        result = await session.execute(delete(self.model).where(self.model.id == pk))
        return result.rowcount > 0

    async def refresh(self, session: AsyncSession, obj: ModelT) -> ModelT:
        """Reload *obj* after a bulk UPDATE touched its row."""
        await session.refresh(obj)
        return obj

    # ── row sets ─────────────────────────────────────────────────────────

    async def list_all(self, session: AsyncSession, query: Select | None = None) -> list[ModelT]:
        """Every row of *query* (default: the whole table by id)."""
        if query is None:
            query = select(self.model).order_by(self.model.id)
        return list((await session.scalars(query)).all())

    async def count(self, session: AsyncSession, query: Select | None = None) -> int:
        """Row count of *query*, or of the whole table."""
        if query is None:
            stmt = select(func.count()).select_from(self.model)
        else:
            stmt = select(func.count()).select_from(query.order_by(None).subquery())
        return (await session.scalar(stmt)) or 0

    async def paginate(
        self,
        session: AsyncSession,
        query: Select,
        page: int,
        limit: int,
    ) -> Page[ModelT]:
        """Apply offset pagination to *query*.

        *page* is 1-based and *limit* already validated by the caller.
        Callers supply the ORDER BY so pages are stable. The total is
        counted over the unpaged query; a page past the end yields an
        empty ``data`` list.
        """
        total = await self.count(session, query)
        paged = query.offset((page - 1) * limit).limit(limit)
        rows = list((await session.scalars(paged)).all())
        return Page(data=rows, total=total, page=page, limit=limit)
