"""Google Imagen image generation provider."""

import asyncio

from google import genai
from google.genai import types

from content_studio.adapters.image_gen.base import ImageGenProvider, ImageGenRequest, ImageGenResult
from content_studio.config import settings
from content_studio.logging import get_logger

logger = get_logger(__name__)


class ImagenProvider(ImageGenProvider):
    """Generates images with Imagen models via the google-genai SDK."""

    def __init__(self, api_key: str | None = None) -> None:
        self.api_key = api_key or settings.google_api_key
        self._client: genai.Client | None = None

    @property
    def client(self) -> genai.Client:
        """Get or create the Gemini client."""
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    @property
    def name(self) -> str:
        return "imagen"

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def generate(self, request: ImageGenRequest) -> ImageGenResult:
        """Generate one image with the requested Imagen model."""
        if not self.api_key:
            return ImageGenResult(success=False, error_message="Google API key not configured")

        logger.info(
            "imagen_generation_started",
            model=request.model,
            prompt_length=len(request.prompt),
            aspect_ratio=request.aspect_ratio,
        )

        config = types.GenerateImagesConfig(
            number_of_images=request.number_of_images,
            aspect_ratio=request.aspect_ratio,
            output_mime_type=request.output_mime_type,
        )

        try:
            loop = asyncio.get_running_loop()
            response = await loop.run_in_executor(
                None,
                lambda: self.client.models.generate_images(
                    model=request.model,
                    prompt=request.prompt,
                    config=config,
                ),
            )
        except Exception as e:
            logger.warning("imagen_generation_exception", model=request.model, error=str(e))
            return ImageGenResult(
                success=False,
                error_message=f"Imagen API exception: {e}",
                metadata={"provider": self.name, "model": request.model},
            )

        images = response.generated_images or []
        image_bytes = images[0].image.image_bytes if images and images[0].image else None
        if not image_bytes:
            # Usually a safety filter rejection
            return ImageGenResult(
                success=False,
                error_message="No image in response",
                metadata={"provider": self.name, "model": request.model},
            )

        logger.info("imagen_generation_completed", model=request.model, size=len(image_bytes))

        return ImageGenResult(
            success=True,
            image_data=image_bytes,
            mime_type=request.output_mime_type,
            metadata={"provider": self.name, "model": request.model},
        )
