"""MediaService — product/variant media and the single-primary rule."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from shopcatalog.core.errors import ErrorCode
from shopcatalog.dao.base import Page
from shopcatalog.dao.media_dao import MediaDAO
from shopcatalog.dao.product_dao import ProductDAO
from shopcatalog.dao.variant_dao import VariantDAO
from shopcatalog.models.media import Media
from shopcatalog.services import NotFoundError, ValidationError


class MediaService:
    """Stateless service for media rows.

    A product has at most one primary media. Every write that sets
    ``is_primary`` demotes the product's other primaries in the same
    transaction.
    """

    def __init__(self, media_dao: MediaDAO, product_dao: ProductDAO, variant_dao: VariantDAO) -> None:
        self._media_dao = media_dao
        self._product_dao = product_dao
        self._variant_dao = variant_dao

    # ── read ──────────────────────────────────────────────────────────────

    async def get(self, session: AsyncSession, media_id: int) -> Media:
        media = await self._media_dao.get_by_id(session, media_id)
        if media is None:
            raise NotFoundError("media not found", code=ErrorCode.MEDIA_NOT_FOUND)
        return media

    async def list_by_product(
        self, session: AsyncSession, product_id: int, page: int, limit: int
    ) -> Page[Media]:
        return await self._media_dao.list_by_product(session, product_id, page, limit)

    async def list_by_variant(
        self, session: AsyncSession, variant_id: int, page: int, limit: int
    ) -> Page[Media]:
        return await self._media_dao.list_by_variant(session, variant_id, page, limit)

    async def get_primary(self, session: AsyncSession, product_id: int) -> Media:
        media = await self._media_dao.get_primary(session, product_id)
        if media is None:
            raise NotFoundError("primary media not found", code=ErrorCode.MEDIA_NOT_FOUND)
        return media

    # ── write ─────────────────────────────────────────────────────────────

    async def create(
        self,
        session: AsyncSession,
        *,
        product_id: int,
        media_type: str,
        url: str,
        variant_id: int | None = None,
        alt: str | None = None,
        position: int = 0,
        is_primary: bool = False,
    ) -> Media:
        await self._check_owner(session, product_id, variant_id)
        if is_primary:
            await self._media_dao.clear_primary(session, product_id)
        return await self._media_dao.create(
            session,
            product_id=product_id,
            variant_id=variant_id,
            media_type=media_type,
            url=url,
            alt=alt,
            position=position,
            is_primary=is_primary,
        )

    async def update(
        self,
        session: AsyncSession,
        media_id: int,
        *,
        product_id: int,
        media_type: str,
        url: str,
        variant_id: int | None = None,
        alt: str | None = None,
        position: int = 0,
        is_primary: bool = False,
    ) -> Media:
        """Replace every mutable field of a media row."""
        await self.get(session, media_id)
        await self._check_owner(session, product_id, variant_id)
        if is_primary:
            await self._media_dao.clear_primary(session, product_id, except_id=media_id)
        return await self._media_dao.update(
            session,
            media_id,
            product_id=product_id,
            variant_id=variant_id,
            media_type=media_type,
            url=url,
            alt=alt,
            position=position,
            is_primary=is_primary,
        )

    async def delete(self, session: AsyncSession, media_id: int) -> None:
        if not await self._media_dao.delete(session, media_id):
            raise NotFoundError("media not found", code=ErrorCode.MEDIA_NOT_FOUND)

    async def set_primary(self, session: AsyncSession, product_id: int, media_id: int) -> Media:
        """Make *media_id* the product's only primary media.

        Raises :class:`NotFoundError` when the media does not exist or
        belongs to another product; the current primary is kept then.
        """
        media = await self._media_dao.get_by_id(session, media_id)
        if media is None or media.product_id != product_id:
            raise NotFoundError("media not found for product", code=ErrorCode.MEDIA_NOT_FOUND)
        if not await self._media_dao.set_primary(session, product_id, media_id):
            raise NotFoundError("media not found for product", code=ErrorCode.MEDIA_NOT_FOUND)
        return await self._media_dao.refresh(session, media)

    # ── helpers ───────────────────────────────────────────────────────────

    async def _check_owner(
        self, session: AsyncSession, product_id: int, variant_id: int | None
    ) -> None:
        if not await self._product_dao.exists(session, product_id):
            raise NotFoundError("product not found", code=ErrorCode.PRODUCT_NOT_FOUND)
        if variant_id is None:
            return
        variant = await self._variant_dao.get_by_id(session, variant_id)
        if variant is None:
            raise NotFoundError("variant not found", code=ErrorCode.VARIANT_NOT_FOUND)
        if variant.product_id != product_id:
            raise ValidationError("variant does not belong to product")
