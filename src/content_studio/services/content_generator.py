"""Generation client for the four content phases and image synthesis.

Every call reads the preferred model and the global instruction from the
project store at call time, so edits made between calls take effect
immediately.
"""

from dataclasses import dataclass
from typing import TypeVar
from uuid import uuid4

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from content_studio.adapters.image_gen.base import ImageGenProvider, ImageGenRequest
from content_studio.adapters.image_gen.imagen import ImagenProvider
from content_studio.adapters.image_gen.stub import StubImageGenProvider
from content_studio.adapters.llm.base import LLMMessage, LLMProvider, LLMResponse, VisionMessage
from content_studio.adapters.llm.gemini import GeminiProvider, parse_data_uri
from content_studio.adapters.llm.stub import StubLLMProvider
from content_studio.adapters.store.base import ProjectStore
from content_studio.config import settings
from content_studio.domain.enums import Language, VideoMode
from content_studio.domain.models import (
    ChannelProfile,
    HookVariant,
    RepurposingPackage,
    ScriptSection,
    SeoPackage,
    ShortsIdea,
    ThumbnailPackage,
    TokenUsage,
    VideoProject,
)
from content_studio.exceptions import (
    GenerationError,
    ImageGenerationError,
    StudioError,
    ValidationError,
)
from content_studio.logging import get_logger
from content_studio.schemas import BlueprintResponse, HooksResponse, RepurposingResponse
from content_studio.services.usage import calculate_usage

logger = get_logger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

BLUEPRINT_SECTION_COUNT = 12
HOOK_COUNT = 4


@dataclass
class HookBatch:
    """Hooks from one generation call."""

    hooks: list[HookVariant]
    usage: TokenUsage


@dataclass
class Blueprint:
    """Script skeleton plus SEO and thumbnail metadata."""

    seo: SeoPackage
    thumbnail: ThumbnailPackage
    script_sections: list[ScriptSection]
    usage: TokenUsage


@dataclass
class SectionContent:
    """Voiceover text for one section."""

    text: str
    usage: TokenUsage


@dataclass
class RepurposingResult:
    """Repurposed social content for a project."""

    package: RepurposingPackage
    usage: TokenUsage


def get_default_llm_provider() -> LLMProvider:
    """Get the text provider selected in settings."""
    if settings.llm_provider.lower() == "stub":
        return StubLLMProvider()
    return GeminiProvider()


def get_default_image_provider() -> ImageGenProvider:
    """Get the image provider selected in settings."""
    if settings.image_gen_provider.lower() == "stub":
        return StubImageGenProvider()
    return ImagenProvider()


class ContentGenerator:
    """Calls the generation API for each pipeline phase.

    Structured phases (hooks, blueprint, repurposing) are validated
    against pydantic schemas; anything that does not parse is a
    GenerationError. Transport failures are wrapped the same way.
    """

    def __init__(
        self,
        store: ProjectStore,
        llm_provider: LLMProvider | None = None,
        image_provider: ImageGenProvider | None = None,
    ) -> None:
        self.store = store
        self.llm = llm_provider or get_default_llm_provider()
        self.image_gen = image_provider or get_default_image_provider()
        logger.info(
            "content_generator_initialized",
            llm_provider=self.llm.name,
            image_provider=self.image_gen.name,
        )

    @property
    def is_configured(self) -> bool:
        return self.llm.is_configured

    def ensure_configured(self) -> None:
        """Raise ValidationError when no API key is available."""
        if not self.llm.is_configured:
            raise ValidationError("GOOGLE_API_KEY is missing from environment variables.")

    async def _call(
        self,
        phase: str,
        model: str,
        messages: list[LLMMessage] | list[VisionMessage],
        temperature: float,
        max_tokens: int | None = None,
        response_schema: type[BaseModel] | None = None,
    ) -> LLMResponse:
        """Run one completion, converting provider failures to GenerationError."""
        try:
            if messages and isinstance(messages[0], VisionMessage):
                return await self.llm.complete_with_vision(
                    messages,  # type: ignore[arg-type]
                    model=model,
                    temperature=temperature,
                    max_tokens=max_tokens,
                    response_schema=response_schema,
                )
            return await self.llm.complete(
                messages,  # type: ignore[arg-type]
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                response_schema=response_schema,
            )
        except StudioError:
            raise
        except Exception as e:
            logger.error("generation_call_failed", phase=phase, model=model, error=str(e))
            raise GenerationError(f"{phase} generation failed: {e}") from e

    @staticmethod
    def _parse(phase: str, response: LLMResponse, schema: type[SchemaT]) -> SchemaT:
        """Validate a structured response. Fails closed on malformed output."""
        try:
            return schema.model_validate_json(response.content or "")
        except SchemaValidationError as e:
            logger.error(
                "generation_parse_failed",
                phase=phase,
                error_count=e.error_count(),
                content=(response.content or "")[:500],
            )
            raise GenerationError(f"{phase} response did not match the expected format") from e

    # Phase 1

    async def generate_hooks(
        self,
        topic: str,
        audience: str,
        language: Language,
        channel: ChannelProfile,
    ) -> HookBatch:
        """Generate opening hook variants, one per hook category.

        Each hook gets a fresh id here; the API does not supply ids.
        Category coverage is requested but not enforced.
        """
        if not topic.strip() or not audience.strip():
            raise ValidationError("Topic and target audience are required")
        self.ensure_configured()

        global_instruction = await self.store.get_global_instruction()
        model = self.store.get_preferred_model()

        prompt = f"""{global_instruction}

Generate {HOOK_COUNT} distinct "killer hooks" (the first 3-10 seconds) for a YouTube video.

TOPIC: {topic}
TARGET AUDIENCE: {audience}
LANGUAGE: {language}
CHANNEL STYLE: {channel.script_prompt}

ONE HOOK OF EACH TYPE:
1. CONTROVERSIAL - challenge a common belief
2. STORY - start in the middle of the action
3. QUESTION - provoke curiosity
4. STATISTIC - lead with a shocking number

Output strict JSON."""

        logger.info("hooks_generation_started", topic=topic[:100], model=model)

        response = await self._call(
            "hooks",
            model,
            [LLMMessage(role="user", content=prompt)],
            temperature=0.8,
            response_schema=HooksResponse,
        )
        parsed = self._parse("hooks", response, HooksResponse)
        if not parsed.hooks:
            raise GenerationError("hooks response contained no hooks")

        hooks = [
            HookVariant(id=uuid4().hex, type=item.type, content=item.content)
            for item in parsed.hooks
        ]
        if len(hooks) != HOOK_COUNT or len({h.type for h in hooks}) != len(hooks):
            logger.warning(
                "hooks_category_mismatch",
                count=len(hooks),
                types=[str(h.type) for h in hooks],
            )

        usage = calculate_usage(response.prompt_tokens, response.completion_tokens, model)
        logger.info("hooks_generated", count=len(hooks), cost=usage.estimated_cost)
        return HookBatch(hooks=hooks, usage=usage)

    # Phase 2

    async def generate_video_package(
        self,
        topic: str,
        mode: VideoMode,
        language: Language,
        channel: ChannelProfile,
        audience: str,
        selected_hook: str,
    ) -> Blueprint:
        """Generate the 12-section blueprint with SEO and thumbnail metadata.

        Voiceover text is requested empty; sections are filled later.
        The channel's reference image, when present, is sent along as
        thumbnail style guidance.
        """
        if not selected_hook.strip():
            raise ValidationError("A selected hook is required to build the blueprint")
        self.ensure_configured()

        global_instruction = await self.store.get_global_instruction()
        model = self.store.get_preferred_model()

        system_prompt = f"""{global_instruction}

TASK: Generate a VIDEO BLUEPRINT for a long-form YouTube video.

CONTEXT:
- TOPIC: {topic}
- TARGET AUDIENCE: {audience}
- SELECTED HOOK (open the script with this): "{selected_hook}"

STRUCTURE REQUIREMENTS:
1. Generate exactly {BLUEPRINT_SECTION_COUNT} sections in "script_sections".
2. Return an empty string "" for every "voiceover_text"; it is written later.
3. Put the creativity into "section_title" and "visual_prompt".
4. "visual_prompt" must be detailed: B-roll, text overlays, animations.

METADATA REQUIREMENTS:
1. SEO: high-CTR title, description and 15 tags.
2. THUMBNAIL: concept and overlay text.

LANGUAGE: {language}
MODE: {mode}"""

        channel_brief = f"""--- CHANNEL IDENTITY ---
{channel.script_prompt}
--- VISUAL STYLE ---
{channel.image_prompt}
--- THUMBNAIL GUIDANCE ---
{channel.thumbnail_prompt}"""

        messages = [
            VisionMessage(role="system", text=system_prompt),
            VisionMessage(role="user", text=channel_brief),
        ]
        has_reference = bool(
            channel.thumbnail_ref_image and parse_data_uri(channel.thumbnail_ref_image)
        )
        if has_reference:
            # Image part first, then its caption
            messages.append(
                VisionMessage(role="user", text="", image_urls=[channel.thumbnail_ref_image])
            )
            messages.append(
                VisionMessage(role="user", text="Use this reference image for thumbnail style.")
            )

        logger.info(
            "blueprint_generation_started",
            topic=topic[:100],
            model=model,
            has_reference_image=has_reference,
        )

        response = await self._call(
            "blueprint",
            model,
            messages,
            temperature=0.7,
            response_schema=BlueprintResponse,
        )
        parsed = self._parse("blueprint", response, BlueprintResponse)

        if len(parsed.script_sections) != BLUEPRINT_SECTION_COUNT:
            logger.error(
                "blueprint_section_count_mismatch",
                expected=BLUEPRINT_SECTION_COUNT,
                actual=len(parsed.script_sections),
            )
            raise GenerationError(
                f"Blueprint must contain exactly {BLUEPRINT_SECTION_COUNT} sections, "
                f"got {len(parsed.script_sections)}"
            )

        usage = calculate_usage(response.prompt_tokens, response.completion_tokens, model)
        blueprint = Blueprint(
            seo=SeoPackage(
                youtube_title=parsed.seo.youtube_title,
                youtube_description=parsed.seo.youtube_description,
                tags=list(parsed.seo.tags),
            ),
            thumbnail=ThumbnailPackage(
                thumbnail_text=parsed.thumbnail.thumbnail_text,
                thumbnail_visual_prompt=parsed.thumbnail.thumbnail_visual_prompt,
            ),
            script_sections=[
                ScriptSection(
                    section_title=section.section_title,
                    visual_prompt=section.visual_prompt,
                    voiceover_text=section.voiceover_text,
                )
                for section in parsed.script_sections
            ],
            usage=usage,
        )

        logger.info(
            "blueprint_generated",
            title=blueprint.seo.youtube_title,
            sections=len(blueprint.script_sections),
            cost=usage.estimated_cost,
        )
        return blueprint

    # Phase 3

    async def generate_section_content_with_usage(
        self,
        channel: ChannelProfile,
        topic: str,
        section_title: str,
        visual_context: str,
        language: Language,
    ) -> SectionContent:
        """Write the voiceover for one section, with the call's usage."""
        self.ensure_configured()

        global_instruction = await self.store.get_global_instruction()
        model = self.store.get_preferred_model()

        prompt = f"""{global_instruction}
CHANNEL IDENTITY: {channel.script_prompt}
TOPIC: {topic}
SECTION TITLE: {section_title}
VISUAL CONTEXT: {visual_context}
LANGUAGE: {language}

TASK: Write the voiceover for this section (800-1200 words).
Do NOT include "Scene" or "Visual" labels. Only the spoken words."""

        logger.debug("section_generation_started", section_title=section_title[:80], model=model)

        response = await self._call(
            "section",
            model,
            [LLMMessage(role="user", content=prompt)],
            temperature=0.7,
            max_tokens=settings.section_max_output_tokens,
        )

        text = response.content or ""
        usage = calculate_usage(response.prompt_tokens, response.completion_tokens, model)
        logger.info(
            "section_generated",
            section_title=section_title[:80],
            word_count=len(text.split()),
            cost=usage.estimated_cost,
        )
        return SectionContent(text=text, usage=usage)

    async def generate_section_content(
        self,
        channel: ChannelProfile,
        topic: str,
        section_title: str,
        visual_context: str,
        language: Language,
    ) -> str:
        """Write the voiceover for one section.

        Returns an empty string when the API answers with no text.
        """
        result = await self.generate_section_content_with_usage(
            channel, topic, section_title, visual_context, language
        )
        return result.text

    # Phase 4

    async def generate_repurposed_content(self, project: VideoProject) -> RepurposingResult:
        """Derive shorts ideas, a community post and a social blurb from the script."""
        self.ensure_configured()

        model = self.store.get_preferred_model()
        script_context = "\n".join(s.voiceover_text for s in project.script)
        script_context = script_context[: settings.repurpose_context_chars]

        prompt = f"""Based on this YouTube script, generate repurposed content:
1. 3 YouTube Shorts ideas (title + visual concept).
2. 1 engaging Community tab post (poll or question).
3. 1 short social media blurb (Twitter/TikTok style).

SCRIPT CONTEXT:
{script_context}"""

        logger.info(
            "repurposing_started",
            project_id=project.id,
            context_chars=len(script_context),
            model=model,
        )

        response = await self._call(
            "repurposing",
            model,
            [LLMMessage(role="user", content=prompt)],
            temperature=0.7,
            response_schema=RepurposingResponse,
        )
        parsed = self._parse("repurposing", response, RepurposingResponse)

        package = RepurposingPackage(
            shorts_ideas=[
                ShortsIdea(title=idea.title, visual_concept=idea.visual_concept)
                for idea in parsed.shorts_ideas
            ],
            community_post=parsed.community_post,
            social_blurb=parsed.social_blurb,
        )
        usage = calculate_usage(response.prompt_tokens, response.completion_tokens, model)
        logger.info(
            "repurposing_generated",
            project_id=project.id,
            shorts_ideas=len(package.shorts_ideas),
            cost=usage.estimated_cost,
        )
        return RepurposingResult(package=package, usage=usage)

    # Images

    async def generate_image(self, prompt: str) -> str:
        """Generate a 16:9 JPEG and return it as a data URI.

        Tries each configured image model in order and returns the first
        success. Raises ImageGenerationError only after all have failed.
        """
        if not self.image_gen.is_configured:
            raise ValidationError("GOOGLE_API_KEY is missing from environment variables.")

        last_error: Exception | None = None
        for model in settings.image_models:
            request = ImageGenRequest(prompt=prompt, model=model)
            try:
                result = await self.image_gen.generate(request)
            except Exception as e:
                logger.warning("image_model_failed", model=model, error=str(e))
                last_error = e
                continue

            if result.success and result.image_data:
                logger.info("image_generated", model=model, size=len(result.image_data))
                return result.to_data_uri()

            logger.warning("image_model_failed", model=model, error=result.error_message)
            last_error = RuntimeError(result.error_message or "No image in response")

        logger.error("image_generation_exhausted", models=settings.image_models, error=str(last_error))
        raise ImageGenerationError(
            "No image generated. The prompt might have triggered safety filters, "
            "or the service is temporarily unavailable."
        ) from last_error
