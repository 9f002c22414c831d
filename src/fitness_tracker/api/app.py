"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fitness_tracker.api.recipes import router as recipes_router
from fitness_tracker.api.shop import router as shop_router
from fitness_tracker.api.tracker import router as tracker_router
from fitness_tracker.api.users import router as users_router
from fitness_tracker.app_logging import configure_logging
from fitness_tracker.containers import AppContainer
from fitness_tracker.errors import (
    GenerationFailed,
    InvalidInput,
    NotFound,
    TrackerError,
)

_STATUS_CODES: dict[type[TrackerError], int] = {
    InvalidInput: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    GenerationFailed: status.HTTP_502_BAD_GATEWAY,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(users_router)
    app.include_router(tracker_router)
    app.include_router(recipes_router)
    app.include_router(shop_router)

    @app.exception_handler(TrackerError)
    async def tracker_error_handler(
        request: Request, exc: TrackerError
    ) -> JSONResponse:
        code = status_code_for(exc)
        if code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=code, content={"message": exc.message})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def status_code_for(exc: TrackerError) -> int:
    """Return the HTTP status for a domain failure."""
    for error_type, code in _STATUS_CODES.items():
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR
