"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from content_studio import __version__
from content_studio.api.deps import get_store
from content_studio.api.routes import channels, health, projects, settings as settings_routes
from content_studio.config import settings
from content_studio.exceptions import (
    BulkAbortError,
    BusyError,
    GenerationError,
    ImageGenerationError,
    PermissionDeniedError,
    StoreError,
    StudioError,
    ValidationError,
)
from content_studio.logging import get_logger, setup_logging

# Setup logging
setup_logging()
logger = get_logger(__name__)

ERROR_STATUS: dict[type[StudioError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    BusyError: status.HTTP_409_CONFLICT,
    GenerationError: status.HTTP_502_BAD_GATEWAY,
    ImageGenerationError: status.HTTP_502_BAD_GATEWAY,
    BulkAbortError: status.HTTP_502_BAD_GATEWAY,
    StoreError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    logger.info("application_starting", version=__version__, store_backend=settings.store_backend)

    if not settings.google_api_key and settings.llm_provider != "stub":
        logger.warning("google_api_key_missing", detail="generation calls will be refused")

    # Startup: verify store connection
    store = get_store()
    if await store.health_check():
        logger.info("store_connected", backend=store.name)
    else:
        # Don't raise - let health checks report the issue
        logger.error("store_connection_failed", backend=store.name)

    yield

    # Shutdown
    logger.info("application_shutting_down")


# Create FastAPI app
app = FastAPI(
    title="Content Studio",
    description="Multi-phase YouTube content package generation",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StudioError)
async def studio_error_handler(request: Request, exc: StudioError) -> JSONResponse:
    """Turn domain errors into JSON error responses."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type in type(exc).__mro__:
        if error_type in ERROR_STATUS:
            status_code = ERROR_STATUS[error_type]
            break

    content: dict[str, object] = {"detail": str(exc), "error": type(exc).__name__}
    if isinstance(exc, BulkAbortError):
        content.update(
            failed_indices=exc.failed_indices,
            completed=exc.completed,
            total=exc.total,
        )

    logger.warning(
        "request_failed",
        path=request.url.path,
        error=type(exc).__name__,
        detail=str(exc),
    )
    return JSONResponse(status_code=status_code, content=content)


# Register routers
app.include_router(health.router)
app.include_router(projects.router, prefix="/api/v1")
app.include_router(channels.router, prefix="/api/v1")
app.include_router(settings_routes.router, prefix="/api/v1")


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    """Root endpoint redirect to docs."""
    return {
        "name": "Content Studio",
        "version": __version__,
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "content_studio.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
