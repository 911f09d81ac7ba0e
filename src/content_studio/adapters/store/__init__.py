"""Project store adapters."""

from content_studio.adapters.store.base import ProjectStore
from content_studio.adapters.store.local import LocalProjectStore
from content_studio.config import settings
from content_studio.logging import get_logger

logger = get_logger(__name__)


def create_store(backend: str | None = None) -> ProjectStore:
    """Build the store chosen for this process.

    Called once at startup; the result is passed to the services that need it.
    """
    backend = (backend or settings.store_backend).lower()

    if backend == "mongo":
        # Import lazily so the local backend works without a MongoDB driver configured
        from content_studio.adapters.store.mongo import MongoProjectStore

        logger.info("store_selected", backend="mongo", db=settings.mongodb_db_name)
        return MongoProjectStore()
    if backend == "local":
        logger.info("store_selected", backend="local", path=str(settings.local_store_path))
        return LocalProjectStore()

    raise ValueError(f"Unknown store backend: {backend}")


__all__ = [
    "LocalProjectStore",
    "ProjectStore",
    "create_store",
]
