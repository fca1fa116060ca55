"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from skillswap.admin.router import router as admin_router
from skillswap.auth.router import router as auth_router
from skillswap.config import get_settings
from skillswap.database import close_db, init_db
from skillswap.health.router import router as health_router
from skillswap.messages.router import router as messages_router
from skillswap.middleware import setup_middleware
from skillswap.ratings.router import router as ratings_router
from skillswap.redis_client import close_redis, init_redis
from skillswap.swaps.router import router as swaps_router
from skillswap.users.router import router as users_router

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup and shutdown lifecycle."""
    settings = get_settings()
    await init_db(settings.database_url)
    await init_redis(settings.redis_url)
    logger.info("app_started", environment=settings.environment, version=settings.app_version)

    yield

    await close_db()
    await close_redis()
    logger.info("app_stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="SkillSwap API",
        description="Backend API for SkillSwap, a peer-to-peer skill exchange platform",
        version=settings.app_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    setup_middleware(app, settings)
    app.include_router(health_router, tags=["Health"])
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(swaps_router)
    app.include_router(ratings_router)
    app.include_router(messages_router)
    app.include_router(admin_router)

    return app


app = create_app()
