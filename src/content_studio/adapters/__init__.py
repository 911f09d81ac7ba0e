"""Adapters for external services."""

from content_studio.adapters.image_gen.base import ImageGenProvider
from content_studio.adapters.llm.base import LLMProvider
from content_studio.adapters.store.base import ProjectStore

__all__ = [
    "ImageGenProvider",
    "LLMProvider",
    "ProjectStore",
]
