"""Application container — engine, session factory, DAOs and services.

One container is built per application in the FastAPI lifespan and
disposed on shutdown. Nothing here is module-global, so tests can build
as many isolated containers as they need.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from shopcatalog.core.config import Settings
from shopcatalog.core.database import create_engine
from shopcatalog.dao.category_dao import CategoryDAO
from shopcatalog.dao.media_dao import MediaDAO
from shopcatalog.dao.product_dao import ProductDAO
from shopcatalog.dao.variant_dao import VariantDAO
from shopcatalog.services.category_service import CategoryService
from shopcatalog.services.media_service import MediaService
from shopcatalog.services.product_service import ProductService
from shopcatalog.services.variant_service import VariantService


class Container:
    def __init__(self, settings: Settings, engine: AsyncEngine | None = None) -> None:
        self.settings = settings
        self.engine = engine if engine is not None else create_engine(settings)
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine, expire_on_commit=False
        )

        # DAOs are stateless
        self.product_dao = ProductDAO()
        self.category_dao = CategoryDAO()
        self.variant_dao = VariantDAO()
        self.media_dao = MediaDAO()

        self.product_service = ProductService(self.product_dao)
        self.category_service = CategoryService(self.category_dao)
        self.variant_service = VariantService(self.variant_dao, self.product_dao)
        self.media_service = MediaService(self.media_dao, self.product_dao, self.variant_dao)

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()
