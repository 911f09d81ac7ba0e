"""Stub image generation provider for testing."""

import base64

from content_studio.adapters.image_gen.base import ImageGenProvider, ImageGenRequest, ImageGenResult
from content_studio.logging import get_logger

logger = get_logger(__name__)

# 1x1 grey JPEG
PLACEHOLDER_JPEG = base64.b64decode(
    "/9j/4AAQSkZJRgABAQEASABIAAD/2wBDAP//////////////////////////////////////"
    "////////////////////////////////////////////////wgALCAABAAEBAREA/8QAFBAB"
    "AAAAAAAAAAAAAAAAAAAAAP/aAAgBAQABPxA="
)


class StubImageGenProvider(ImageGenProvider):
    """Returns a placeholder image without making API calls."""

    @property
    def name(self) -> str:
        return "stub"

    async def generate(self, request: ImageGenRequest) -> ImageGenResult:
        logger.info(
            "stub_image_generated",
            model=request.model,
            prompt_length=len(request.prompt),
            aspect_ratio=request.aspect_ratio,
        )
        return ImageGenResult(
            success=True,
            image_data=PLACEHOLDER_JPEG,
            mime_type=request.output_mime_type,
            metadata={"provider": self.name, "model": request.model, "is_placeholder": True},
        )
