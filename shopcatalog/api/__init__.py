"""shopcatalog REST API — FastAPI application factory."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shopcatalog.api.errors import register_error_handlers
from shopcatalog.api.middleware.content_type import JSONContentTypeMiddleware
from shopcatalog.api.middleware.request_id import RequestIDMiddleware
from shopcatalog.api.routers import categories, media, products, variants
from shopcatalog.container import Container
from shopcatalog.core.config import Settings
from shopcatalog.core.logging import setup_logging

API_PREFIX = "/api/v1"

log = structlog.get_logger()


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: build the container. Shutdown: dispose the engine."""
    settings: Settings = app.state.settings
    container = Container(settings)
    app.state.container = container
    log.info(
        "shopcatalog started",
        environment=settings.environment,
        api_version=settings.api_version,
        pool_size=settings.db_pool_size,
    )
    try:
        yield
    finally:
        await container.dispose()
        log.info("shopcatalog stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build and return the FastAPI application."""
    settings = settings or Settings.from_env()
    setup_logging(settings)

    app = FastAPI(
        title="shopcatalog",
        version=settings.api_version,
        docs_url=f"{API_PREFIX}/docs",
        openapi_url=f"{API_PREFIX}/openapi.json",
        lifespan=_lifespan,
    )
    app.state.settings = settings

    register_error_handlers(app)

    # last added runs first: request id -> CORS -> content type -> routes
    app.add_middleware(JSONContentTypeMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health", tags=["ops"])
    async def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    app.include_router(products.router, prefix=f"{API_PREFIX}/products", tags=["products"])
    app.include_router(
        categories.router, prefix=f"{API_PREFIX}/categories", tags=["categories"]
    )
    app.include_router(variants.router, prefix=f"{API_PREFIX}/variants", tags=["variants"])
    app.include_router(media.router, prefix=f"{API_PREFIX}/media", tags=["media"])

    return app
