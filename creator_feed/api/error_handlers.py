"""API error handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from creator_feed.utils.exceptions import (
    APIError,
    CacheError,
    CreatorFeedError,
    RepositoryError,
)
from creator_feed.utils.logging import get_logger

logger = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register custom error handlers with the FastAPI app."""

    @app.exception_handler(RepositoryError)
    async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
        logger.error("repository_error", source=exc.source, message=exc.message)
        return JSONResponse(
            status_code=503,
            content={
                "error": "repository_error",
                "message": exc.message,
                "source": exc.source,
            },
        )

    @app.exception_handler(CacheError)
    async def cache_error_handler(request: Request, exc: CacheError) -> JSONResponse:
        logger.error("cache_error", message=exc.message)
        return JSONResponse(
            status_code=503,
            content={
                "error": "cache_error",
                "message": exc.message,
                "details": exc.details,
            },
        )

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            "api_error",
            message=exc.message,
            status_code=exc.status_code,
            error_code=exc.error_code,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error_code,
                "message": exc.message,
                "details": exc.details,
            },
        )

    @app.exception_handler(CreatorFeedError)
    async def creator_feed_error_handler(
        request: Request, exc: CreatorFeedError
    ) -> JSONResponse:
        logger.error("creator_feed_error", message=exc.message)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_error",
                "message": exc.message,
                "details": exc.details,
            },
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_exception", error=str(exc))
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_error",
                "message": "An unexpected error occurred",
            },
        )
