"""Dependency injection — session and service getters backed by the app container."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shopcatalog.api.schemas.common import MAX_ID
from shopcatalog.container import Container
from shopcatalog.services.category_service import CategoryService
from shopcatalog.services.media_service import MediaService
from shopcatalog.services.product_service import ProductService
from shopcatalog.services.variant_service import VariantService

PathId = Annotated[int, Path(ge=1, le=MAX_ID)]


def get_container(request: Request) -> Container:
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise RuntimeError("application container not initialised; is the lifespan running?")
    return container


async def get_session(
    container: Container = Depends(get_container),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a per-request session with automatic commit/rollback."""
    async with container.session_factory() as session:
        async with session.begin():
            yield session


# ---------------------------------------------------------------------------
# Service getters (for Depends())
# ---------------------------------------------------------------------------


def get_product_service(container: Container = Depends(get_container)) -> ProductService:
    return container.product_service


def get_category_service(container: Container = Depends(get_container)) -> CategoryService:
    return container.category_service


def get_variant_service(container: Container = Depends(get_container)) -> VariantService:
    return container.variant_service


def get_media_service(container: Container = Depends(get_container)) -> MediaService:
    return container.media_service
