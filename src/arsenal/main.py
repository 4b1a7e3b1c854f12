"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from arsenal.config import get_settings
from arsenal.health.router import router as health_router
from arsenal.middleware import setup_middleware
from arsenal.progression.router import router as progression_router
from arsenal.redis_client import close_redis, init_redis
from arsenal.store.client import close_store, init_store

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_redis(settings.redis_url)
    await init_store(settings)
    logger.info(
        "arsenal_started",
        store=settings.shopify_store_url,
        namespace=settings.metafield_namespace,
        environment=settings.environment,
    )

    yield

    await close_store()
    await close_redis()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="RC Arsenal API",
        description="Killboard, garage profiles and admin metafield sync for RC Arsenal pilots",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(progression_router)

    return app


app = create_app()
