"""Google Gemini LLM provider."""

import asyncio
import base64
from typing import Any

from google import genai
from google.genai import types
from pydantic import BaseModel

from content_studio.adapters.llm.base import LLMMessage, LLMProvider, LLMResponse, VisionMessage
from content_studio.config import settings
from content_studio.exceptions import ValidationError
from content_studio.logging import get_logger

logger = get_logger(__name__)


def parse_data_uri(data_uri: str) -> tuple[str, bytes] | None:
    """Split a ``data:<mime>;base64,<payload>`` URI into mime type and bytes.

    Returns None when the string is not a base64 data URI.
    """
    if not data_uri.startswith("data:") or "," not in data_uri:
        return None
    header, data = data_uri.split(",", 1)
    if ";base64" not in header:
        return None
    mime_type = header[len("data:") :].split(";")[0]
    if not mime_type:
        return None
    try:
        return mime_type, base64.b64decode(data, validate=True)
    except ValueError:
        return None


class GeminiProvider(LLMProvider):
    """Google Gemini API provider.

    Uses the google-genai SDK (Client-based API). The SDK is synchronous,
    so calls run in the default executor.
    """

    def __init__(self, api_key: str | None = None) -> None:
        """Initialize Gemini provider.

        Args:
            api_key: Google API key (uses GOOGLE_API_KEY from settings if not provided)
        """
        self.api_key = api_key or settings.google_api_key
        self._client: genai.Client | None = None

        if not self.api_key:
            logger.warning("google_api_key_missing")

    @property
    def client(self) -> genai.Client:
        """Get or create the Gemini client."""
        if self._client is None:
            if not self.api_key:
                raise ValidationError("GOOGLE_API_KEY is missing from environment variables.")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    @property
    def name(self) -> str:
        return "gemini"

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def supports_vision(self) -> bool:
        """Gemini models support vision."""
        return True

    def _get_generation_config(
        self,
        system_instruction: str | None,
        temperature: float,
        max_tokens: int | None,
        response_schema: type[BaseModel] | None,
    ) -> types.GenerateContentConfig:
        """Build generation config for Gemini API."""
        config_dict: dict[str, Any] = {"temperature": temperature}
        if max_tokens is not None:
            config_dict["max_output_tokens"] = max_tokens
        if system_instruction:
            config_dict["system_instruction"] = system_instruction
        if response_schema is not None:
            config_dict["response_mime_type"] = "application/json"
            config_dict["response_schema"] = response_schema
        return types.GenerateContentConfig(**config_dict)

    async def _generate(
        self,
        model: str,
        contents: list[types.Content],
        config: types.GenerateContentConfig,
    ) -> LLMResponse:
        loop = asyncio.get_running_loop()
        response = await loop.run_in_executor(
            None,
            lambda: self.client.models.generate_content(
                model=model,
                contents=contents,  # type: ignore[arg-type]
                config=config,
            ),
        )

        usage = {}
        if response.usage_metadata:
            usage = {
                "prompt_tokens": response.usage_metadata.prompt_token_count or 0,
                "completion_tokens": response.usage_metadata.candidates_token_count or 0,
                "total_tokens": response.usage_metadata.total_token_count or 0,
            }

        logger.info(
            "gemini_response",
            model=model,
            tokens_used=usage.get("total_tokens", 0),
        )

        return LLMResponse(
            content=response.text or "",
            model=model,
            usage=usage,
            finish_reason=(
                str(response.candidates[0].finish_reason) if response.candidates else None
            ),
        )

    async def complete(
        self,
        messages: list[LLMMessage],
        model: str,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        response_schema: type[BaseModel] | None = None,
    ) -> LLMResponse:
        """Generate completion using Gemini API."""
        if not self.api_key:
            raise ValidationError("GOOGLE_API_KEY is missing from environment variables.")

        contents: list[types.Content] = []
        system_parts: list[str] = []

        for msg in messages:
            if msg.role == "system":
                system_parts.append(msg.content)
            elif msg.role == "user":
                contents.append(types.Content(role="user", parts=[types.Part(text=msg.content)]))
            elif msg.role == "assistant":
                contents.append(types.Content(role="model", parts=[types.Part(text=msg.content)]))

        logger.debug(
            "gemini_request",
            model=model,
            message_count=len(contents),
            structured=response_schema is not None,
        )

        config = self._get_generation_config(
            "\n\n".join(system_parts) or None, temperature, max_tokens, response_schema
        )
        return await self._generate(model, contents, config)

    async def complete_with_vision(
        self,
        messages: list[VisionMessage],
        model: str,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        response_schema: type[BaseModel] | None = None,
    ) -> LLMResponse:
        """Generate completion with inline images using Gemini API.

        All user messages are merged into a single user turn, keeping the
        order of their text and image parts.
        """
        if not self.api_key:
            raise ValidationError("GOOGLE_API_KEY is missing from environment variables.")

        parts: list[types.Part] = []
        system_parts: list[str] = []

        for msg in messages:
            if msg.role == "system":
                system_parts.append(msg.text)
                continue
            if msg.text:
                parts.append(types.Part(text=msg.text))
            for image_url in msg.image_urls:
                decoded = parse_data_uri(image_url)
                if decoded is None:
                    # Gemini doesn't fetch remote URLs
                    logger.warning("gemini_vision_image_skipped", url=image_url[:50])
                    continue
                mime_type, image_bytes = decoded
                parts.append(
                    types.Part(inline_data=types.Blob(mime_type=mime_type, data=image_bytes))
                )

        logger.debug(
            "gemini_vision_request",
            model=model,
            part_count=len(parts),
            image_count=sum(len(m.image_urls) for m in messages),
            structured=response_schema is not None,
        )

        config = self._get_generation_config(
            "\n\n".join(system_parts) or None, temperature, max_tokens, response_schema
        )
        return await self._generate(model, [types.Content(role="user", parts=parts)], config)

    async def health_check(self) -> bool:
        """Check if Gemini API is accessible."""
        if not self.api_key:
            return False

        try:
            loop = asyncio.get_running_loop()
            response = await loop.run_in_executor(
                None,
                lambda: self.client.models.generate_content(
                    model=settings.default_model,
                    contents="Say 'ok' if you can hear me.",
                ),
            )
            return bool(response.text)
        except Exception as e:
            logger.error("gemini_health_check_failed", error=str(e))
            return False
