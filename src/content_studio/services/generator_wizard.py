"""Generator wizard: briefing, hook selection, blueprint commit."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from content_studio.adapters.store.base import ProjectStore
from content_studio.domain.enums import Language, ProjectStatus, VideoMode, WizardStep
from content_studio.domain.models import ChannelProfile, HookVariant, VideoProject, new_id
from content_studio.domain.users import DEFAULT_USER, User
from content_studio.exceptions import BusyError, StudioError, ValidationError
from content_studio.logging import get_logger
from content_studio.services.content_generator import ContentGenerator
from content_studio.services.usage import UsageAccumulator

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class Brief:
    """What the user asks for in the briefing step."""

    channel_id: str
    topic: str
    target_audience: str
    mode: VideoMode = VideoMode.ORIGINAL
    language: Language = Language.EN

    def missing_fields(self) -> list[str]:
        missing = []
        if not (self.channel_id or "").strip():
            missing.append("channel_id")
        if not (self.topic or "").strip():
            missing.append("topic")
        if not (self.target_audience or "").strip():
            missing.append("target_audience")
        if self.mode is None:
            missing.append("mode")
        if self.language is None:
            missing.append("language")
        return missing


class GeneratorWizard:
    """Drives one generation session from brief to committed project.

    BRIEFING -> HOOK_SELECTION -> COMMITTED. A failed call leaves the
    wizard in the step it was in. Only one call may be in flight at a
    time; a second one raises BusyError. Usage from every call,
    including hooks discarded by ``back()``, ends up on the project.
    """

    def __init__(
        self,
        generator: ContentGenerator,
        store: ProjectStore,
        user: User = DEFAULT_USER,
    ) -> None:
        self.generator = generator
        self.store = store
        self.user = user
        self.step = WizardStep.BRIEFING
        self.usage = UsageAccumulator()
        self.brief: Brief | None = None
        self.channel: ChannelProfile | None = None
        self.hooks: list[HookVariant] = []
        self.selected_hook_id: str | None = None
        self.project: VideoProject | None = None
        self.last_error: str | None = None
        self._busy = False

    @property
    def is_busy(self) -> bool:
        return self._busy

    @property
    def selected_hook(self) -> HookVariant | None:
        for hook in self.hooks:
            if hook.id == self.selected_hook_id:
                return hook
        return None

    async def _guarded(self, operation: Callable[[], Awaitable[T]]) -> T:
        if self._busy:
            raise BusyError("A generation call is already in progress")
        self._busy = True
        self.last_error = None
        try:
            return await operation()
        except StudioError as e:
            self.last_error = str(e)
            raise
        finally:
            self._busy = False

    def _require_step(self, step: WizardStep) -> None:
        if self.step != step:
            raise ValidationError(f"Expected step {step}, wizard is at {self.step}")

    async def generate_hooks(self, brief: Brief) -> list[HookVariant]:
        """Validate the brief and generate hook variants."""
        self._require_step(WizardStep.BRIEFING)
        missing = brief.missing_fields()
        if missing:
            raise ValidationError(f"Please fill all required fields: {', '.join(missing)}")

        async def run() -> list[HookVariant]:
            channels = await self.store.list_channel_profiles()
            channel = next((c for c in channels if c.id == brief.channel_id), None)
            if channel is None:
                raise ValidationError(f"Unknown channel: {brief.channel_id}")

            batch = await self.generator.generate_hooks(
                brief.topic, brief.target_audience, brief.language, channel
            )
            self.usage.add(batch.usage)
            self.brief = brief
            self.channel = channel
            self.hooks = batch.hooks
            self.selected_hook_id = None
            self.step = WizardStep.HOOK_SELECTION
            logger.info("wizard_hooks_ready", count=len(self.hooks), channel_id=channel.id)
            return self.hooks

        return await self._guarded(run)

    def select_hook(self, hook_id: str) -> HookVariant:
        """Mark one of the generated hooks as selected."""
        self._require_step(WizardStep.HOOK_SELECTION)
        for hook in self.hooks:
            if hook.id == hook_id:
                self.selected_hook_id = hook_id
                return hook
        raise ValidationError(f"Unknown hook id: {hook_id}")

    def back(self) -> None:
        """Return to the briefing step, dropping hooks but keeping usage."""
        self._require_step(WizardStep.HOOK_SELECTION)
        if self._busy:
            raise BusyError("A generation call is already in progress")
        self.hooks = []
        self.selected_hook_id = None
        self.step = WizardStep.BRIEFING

    async def generate_blueprint(self) -> VideoProject:
        """Generate the blueprint and commit the new project to the store."""
        self._require_step(WizardStep.HOOK_SELECTION)
        hook = self.selected_hook
        if hook is None:
            raise ValidationError("Select a hook first")
        if self.brief is None or self.channel is None:
            raise ValidationError("Generate hooks from a brief first")
        brief, channel = self.brief, self.channel

        async def run() -> VideoProject:
            blueprint = await self.generator.generate_video_package(
                brief.topic,
                brief.mode,
                brief.language,
                channel,
                brief.target_audience,
                hook.content,
            )
            total = self.usage.add(blueprint.usage)

            project = VideoProject(
                id=new_id(),
                channel_id=channel.id,
                topic=brief.topic,
                mode=brief.mode,
                language=brief.language,
                target_audience=brief.target_audience,
                created_by=self.user.name,
                status=ProjectStatus.GENERATED,
                hook_variants=list(self.hooks),
                selected_hook=hook.content,
                script=blueprint.script_sections,
                seo=blueprint.seo,
                thumbnail=blueprint.thumbnail,
                token_usage=total,
            )
            await self.store.save_project(project)

            self.project = project
            self.step = WizardStep.COMMITTED
            logger.info(
                "project_committed",
                project_id=project.id,
                sections=len(project.script),
                cost=total.estimated_cost,
            )
            return project

        return await self._guarded(run)
