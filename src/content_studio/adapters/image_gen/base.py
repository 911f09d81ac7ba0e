"""Base interface for image generation providers."""

import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class ImageGenRequest:
    """Request for a single image from one model."""

    prompt: str
    model: str
    aspect_ratio: str = "16:9"  # Landscape for YouTube
    number_of_images: int = 1
    output_mime_type: str = "image/jpeg"
    options: dict[str, Any] = field(default_factory=dict)


@dataclass
class ImageGenResult:
    """Result from image generation."""

    success: bool
    image_data: bytes | None = None
    mime_type: str = "image/jpeg"
    error_message: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_data_uri(self) -> str:
        """Encode the image as a base64 data URI."""
        if not self.image_data:
            raise ValueError("Result carries no image data")
        encoded = base64.b64encode(self.image_data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


class ImageGenProvider(ABC):
    """Abstract base class for image generation providers.

    Implementations:
    - ImagenProvider: Google Imagen models through the Gemini API
    - StubImageGenProvider: Returns a tiny placeholder image for testing

    Providers report failures through ``ImageGenResult.success`` rather
    than raising, so callers can fall back to another model.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name identifier."""
        ...

    @property
    def is_configured(self) -> bool:
        """Whether credentials are present so a call can be attempted."""
        return True

    @abstractmethod
    async def generate(self, request: ImageGenRequest) -> ImageGenResult:
        """Generate an image from the given request."""
        ...

    async def health_check(self) -> bool:
        """Check if the provider is available."""
        return True
