"""Tests for the application container and lifespan wiring."""

from unittest.mock import AsyncMock, MagicMock

from shopcatalog.api import create_app
from shopcatalog.container import Container
from shopcatalog.core.config import Settings


def test_container_wires_services():
    engine = MagicMock()
    container = Container(Settings(), engine=engine)

    assert container.engine is engine
    assert container.variant_service._product_dao is container.product_dao
    assert container.media_service._variant_dao is container.variant_dao
    assert container.category_service._category_dao is container.category_dao


async def test_dispose_closes_engine():
    engine = MagicMock()
    engine.dispose = AsyncMock()
    container = Container(Settings(), engine=engine)

    await container.dispose()

    engine.dispose.assert_awaited_once()


async def test_lifespan_builds_container():
    app = create_app(Settings(db_pool_size=3))

    async with app.router.lifespan_context(app):
        container = app.state.container
        assert isinstance(container, Container)
        assert container.engine.pool.size() == 3
