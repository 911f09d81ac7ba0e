"""LLM provider adapters."""

from content_studio.adapters.llm.base import LLMMessage, LLMProvider, LLMResponse, VisionMessage
from content_studio.adapters.llm.gemini import GeminiProvider
from content_studio.adapters.llm.stub import StubLLMProvider

__all__ = [
    "GeminiProvider",
    "LLMMessage",
    "LLMProvider",
    "LLMResponse",
    "StubLLMProvider",
    "VisionMessage",
]
