"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from creator_feed import __version__
from creator_feed.api.dependencies import get_cache_service
from creator_feed.api.error_handlers import register_error_handlers
from creator_feed.api.middleware import setup_middleware
from creator_feed.api.routes import router
from creator_feed.config.settings import get_settings
from creator_feed.db.base import close_db, init_db
from creator_feed.utils.logging import get_logger, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings = get_settings()
    logger = get_logger(__name__)

    setup_logging(log_level=settings.log_level, log_format=settings.log_format)

    logger.info(
        "application_starting",
        version=__version__,
        debug=settings.debug,
        cache_enabled=settings.cache_enabled,
    )

    await init_db(create_schema=settings.create_schema or settings.seed_demo_data)
    logger.info("database_initialized")

    if settings.seed_demo_data:
        from creator_feed.db.seed import seed_demo_creators

        await seed_demo_creators()

    yield

    await get_cache_service().close()
    await close_db()
    logger.info("application_shutdown")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Creator Feed API",
        description=(
            "Personalised, ranked feed of sports creators for a marketplace viewer. "
            "Ranks creators by recent activity, rating, media, shared interests "
            "and booking history."
        ),
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    setup_middleware(app)
    register_error_handlers(app)
    app.include_router(router)

    return app


# Create application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "creator_feed.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
    )
