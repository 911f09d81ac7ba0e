"""FastAPI dependencies."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from content_studio.adapters.store import ProjectStore, create_store
from content_studio.domain.users import DEFAULT_USER, User
from content_studio.services.content_generator import ContentGenerator


@lru_cache
def get_store() -> ProjectStore:
    """The process-wide store, created on first use."""
    return create_store()


StoreDep = Annotated[ProjectStore, Depends(get_store)]


def get_content_generator(store: StoreDep) -> ContentGenerator:
    """Get a generation client bound to the store."""
    return ContentGenerator(store)


ContentGeneratorDep = Annotated[ContentGenerator, Depends(get_content_generator)]


def get_current_user() -> User:
    """Single static user; there is no login."""
    return DEFAULT_USER


CurrentUserDep = Annotated[User, Depends(get_current_user)]
