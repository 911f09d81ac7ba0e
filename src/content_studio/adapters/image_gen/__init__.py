"""Image generation adapters."""

from content_studio.adapters.image_gen.base import ImageGenProvider, ImageGenRequest, ImageGenResult
from content_studio.adapters.image_gen.imagen import ImagenProvider
from content_studio.adapters.image_gen.stub import StubImageGenProvider

__all__ = [
    "ImageGenProvider",
    "ImageGenRequest",
    "ImageGenResult",
    "ImagenProvider",
    "StubImageGenProvider",
]
