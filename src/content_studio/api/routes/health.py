"""Health check endpoints."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from content_studio.api.deps import ContentGeneratorDep, StoreDep
from content_studio.config import settings
from content_studio.logging import get_logger

router = APIRouter(tags=["Health"])
logger = get_logger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    store_backend: str
    warnings: list[str] = []
    components: dict[str, bool] | None = None


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    ready: bool
    store: bool
    llm: bool


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Basic health check endpoint that verifies the API is running.",
)
async def health_check() -> HealthResponse:
    """Basic health check - is the API up?

    A missing API key is reported as a warning; the service still runs
    but every generation call is refused.
    """
    from content_studio import __version__

    warnings = []
    if not settings.google_api_key and settings.llm_provider != "stub":
        warnings.append("GOOGLE_API_KEY is missing; generation is disabled")

    return HealthResponse(
        status="healthy",
        version=__version__,
        store_backend=settings.store_backend,
        warnings=warnings,
        components={
            "llm": settings.llm_provider != "stub",
            "image_gen": settings.image_gen_provider != "stub",
        },
    )


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness check",
    description="Checks that the store is reachable and the generator is configured.",
)
async def readiness_check(store: StoreDep, generator: ContentGeneratorDep) -> ReadinessResponse:
    """Readiness check including dependencies."""
    store_ok = await store.health_check()
    llm_ok = generator.is_configured
    return ReadinessResponse(ready=store_ok and llm_ok, store=store_ok, llm=llm_ok)


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    description="Simple liveness probe for Kubernetes.",
)
async def liveness_check() -> dict[str, str]:
    """Kubernetes liveness probe - is the process alive?"""
    return {"status": "alive"}
