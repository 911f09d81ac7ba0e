"""Stub LLM provider for offline runs and testing."""

import json

from pydantic import BaseModel

from content_studio.adapters.llm.base import LLMMessage, LLMProvider, LLMResponse, VisionMessage
from content_studio.domain.enums import HookType
from content_studio.logging import get_logger
from content_studio.schemas import BlueprintResponse, HooksResponse, RepurposingResponse

logger = get_logger(__name__)

STUB_MODEL = "stub-model"


def _stub_payload(response_schema: type[BaseModel], prompt: str) -> dict:
    """Canned JSON for each structured phase."""
    if response_schema is HooksResponse:
        return {
            "hooks": [
                {"type": str(hook_type), "content": f"{hook_type.title()} hook: {prompt[:40]}"}
                for hook_type in HookType
            ]
        }
    if response_schema is BlueprintResponse:
        return {
            "seo": {
                "youtube_title": "The Future Nobody Saw Coming",
                "youtube_description": "A deep dive into what happens next.",
                "tags": [f"tag{i + 1}" for i in range(15)],
            },
            "thumbnail": {
                "thumbnail_text": "IT'S HERE",
                "thumbnail_visual_prompt": "Split screen, old versus new, neon lighting",
            },
            "script_sections": [
                {
                    "section_title": f"Part {i + 1}",
                    "voiceover_text": "",
                    "visual_prompt": f"B-roll for part {i + 1}, animated text overlay",
                }
                for i in range(12)
            ],
        }
    if response_schema is RepurposingResponse:
        return {
            "shorts_ideas": [
                {"title": f"Short {i + 1}", "visual_concept": f"Quick cut montage {i + 1}"}
                for i in range(3)
            ],
            "community_post": "Which part surprised you most? Vote below!",
            "social_blurb": "New video out now. You won't believe part 3.",
        }
    return {}


class StubLLMProvider(LLMProvider):
    """Stub provider that returns canned responses without network access."""

    @property
    def name(self) -> str:
        return "stub"

    @property
    def supports_vision(self) -> bool:
        return True

    async def complete(
        self,
        messages: list[LLMMessage],
        model: str,
        temperature: float = 0.7,  # noqa: ARG002
        max_tokens: int | None = None,  # noqa: ARG002
        response_schema: type[BaseModel] | None = None,
    ) -> LLMResponse:
        """Return a canned completion response."""
        logger.info(
            "stub_llm_complete",
            message_count=len(messages),
            structured=response_schema is not None,
        )

        user_message = ""
        for msg in reversed(messages):
            if msg.role == "user":
                user_message = msg.content
                break

        if response_schema is not None:
            content = json.dumps(_stub_payload(response_schema, user_message), indent=2)
        else:
            paragraph = (
                "This is stub voiceover narration written for offline runs. "
                "It is long enough to count as a filled section of the script."
            )
            content = "\n\n".join([paragraph] * 3)

        return LLMResponse(
            content=content,
            model=model or STUB_MODEL,
            usage={
                "prompt_tokens": len(user_message.split()),
                "completion_tokens": len(content.split()),
                "total_tokens": len(user_message.split()) + len(content.split()),
            },
            finish_reason="stop",
        )

    async def complete_with_vision(
        self,
        messages: list[VisionMessage],
        model: str,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        response_schema: type[BaseModel] | None = None,
    ) -> LLMResponse:
        """Flatten vision messages and answer like ``complete``."""
        flattened = [LLMMessage(role=m.role, content=m.text) for m in messages]
        return await self.complete(flattened, model, temperature, max_tokens, response_schema)

    async def health_check(self) -> bool:
        """Stub provider is always healthy."""
        return True
