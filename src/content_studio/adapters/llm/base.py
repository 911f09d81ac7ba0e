"""Base interface for LLM providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    content: str
    model: str
    usage: dict[str, int] = field(default_factory=dict)
    raw_response: dict[str, Any] | None = None
    finish_reason: str | None = None

    @property
    def prompt_tokens(self) -> int:
        return self.usage.get("prompt_tokens", 0)

    @property
    def completion_tokens(self) -> int:
        return self.usage.get("completion_tokens", 0)


@dataclass
class LLMMessage:
    """A message in a conversation."""

    role: str  # "system", "user", "assistant"
    content: str


@dataclass
class VisionMessage:
    """A message that can include images for vision-capable models."""

    role: str  # "system", "user", "assistant"
    text: str
    image_urls: list[str] = field(default_factory=list)  # base64 data URIs


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    Implementations:
    - GeminiProvider: Uses the Google Gemini API
    - StubLLMProvider: Returns canned data for offline runs and tests

    The model is chosen per call because the studio lets the user switch
    models between calls without rebuilding the provider.
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
    async def complete(
        self,
        messages: list[LLMMessage],
        model: str,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        response_schema: type[BaseModel] | None = None,
    ) -> LLMResponse:
        """Generate a completion from messages.

        Args:
            messages: Conversation messages; "system" messages become the
                system instruction
            model: Model identifier to call
            temperature: Sampling temperature (0-2)
            max_tokens: Maximum tokens in response, provider default if None
            response_schema: If set, request JSON matching this schema

        Returns:
            LLMResponse with generated content
        """
        ...

    async def complete_with_vision(
        self,
        messages: list[VisionMessage],
        model: str,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        response_schema: type[BaseModel] | None = None,
    ) -> LLMResponse:
        """Generate a completion from messages that may include images.

        Raises:
            NotImplementedError: If the provider doesn't support vision
        """
        raise NotImplementedError(f"{self.name} does not support vision")

    @property
    def supports_vision(self) -> bool:
        """Check if this provider supports vision (image) inputs."""
        return False

    async def health_check(self) -> bool:
        """Check if the provider is available."""
        return True
