"""Operations on a committed project: fills, images, repurposing, export."""

from collections.abc import Awaitable, Callable
from typing import TypeVar

from content_studio.adapters.store.base import ProjectStore
from content_studio.domain.models import ChannelProfile, RepurposingPackage, VideoProject
from content_studio.exceptions import BusyError, StudioError, ValidationError
from content_studio.logging import bind_project, get_logger
from content_studio.services.bulk_regeneration import (
    BulkRegenerationScheduler,
    BulkResult,
    ProgressCallback,
)
from content_studio.services.content_generator import ContentGenerator

logger = get_logger(__name__)

T = TypeVar("T")

SECTION_DIVIDER = "-----------------------------------"


def export_script(project: VideoProject) -> str:
    """Render the project as a plain-text script document."""
    lines = [
        f"TITLE: {project.seo.youtube_title}",
        "",
        f"HOOK: {project.selected_hook or ''}",
        "",
    ]
    for i, section in enumerate(project.script, start=1):
        lines.extend(
            [
                "",
                f"[SECTION {i}: {section.section_title}]",
                f"VISUAL: {section.visual_prompt}",
                f"AUDIO: {section.voiceover_text}",
                SECTION_DIVIDER,
            ]
        )
    return "\n".join(lines) + "\n"


def export_filename(project: VideoProject) -> str:
    return f"{project.topic[:15]}_script.txt"


class ProjectEditor:
    """Viewer-side actions for one project held in memory.

    Each mutation is saved to the store right away. One call at a time;
    a second concurrent call raises BusyError.
    """

    def __init__(
        self,
        generator: ContentGenerator,
        store: ProjectStore,
        project: VideoProject,
        scheduler: BulkRegenerationScheduler | None = None,
    ) -> None:
        self.generator = generator
        self.store = store
        self.project = project
        self.scheduler = scheduler or BulkRegenerationScheduler(generator, store)
        self.last_error: str | None = None
        self._busy = False

    @property
    def is_busy(self) -> bool:
        return self._busy

    @property
    def next_unfilled_index(self) -> int | None:
        pending = self.project.unfilled_indices()
        return pending[0] if pending else None

    async def _guarded(self, operation: Callable[[], Awaitable[T]]) -> T:
        if self._busy:
            raise BusyError("Another generation call is already in progress")
        self._busy = True
        self.last_error = None
        try:
            with bind_project(self.project.id):
                return await operation()
        except StudioError as e:
            self.last_error = str(e)
            raise
        finally:
            self._busy = False

    async def _channel(self) -> ChannelProfile:
        channel = await self.store.get_channel_profile(self.project.channel_id)
        if channel is None:
            raise ValidationError("No channel profiles are available")
        if channel.id != self.project.channel_id:
            logger.warning(
                "channel_fallback",
                project_id=self.project.id,
                missing_channel_id=self.project.channel_id,
                fallback_channel_id=channel.id,
            )
        return channel

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.project.script):
            raise ValidationError(f"Section index {index} is out of range")

    async def fill_section(self, index: int) -> str:
        """Generate voiceover text for one section, filled or not."""
        self._check_index(index)

        async def run() -> str:
            channel = await self._channel()
            section = self.project.script[index]
            content = await self.generator.generate_section_content_with_usage(
                channel,
                self.project.topic,
                section.section_title,
                section.visual_prompt,
                self.project.language,
            )
            section.voiceover_text = content.text
            self.project.add_usage(content.usage)
            await self.store.save_project(self.project)
            return content.text

        return await self._guarded(run)

    async def fill_all(self, on_progress: ProgressCallback | None = None) -> BulkResult:
        """Fill every unfilled section in batches."""

        async def run() -> BulkResult:
            channel = await self._channel()
            return await self.scheduler.run(self.project, channel, on_progress=on_progress)

        return await self._guarded(run)

    async def generate_section_image(self, index: int) -> str:
        """Generate a preview image for a section from its visual prompt."""
        self._check_index(index)

        async def run() -> str:
            image_url = await self.generator.generate_image(self.project.script[index].visual_prompt)
            self.project.script[index].image_url = image_url
            await self.store.save_project(self.project)
            return image_url

        return await self._guarded(run)

    async def generate_thumbnail_image(self) -> str:
        """Generate the thumbnail image from its concept and the channel's style."""

        async def run() -> str:
            channel = await self._channel()
            prompt = self.project.thumbnail.thumbnail_visual_prompt
            if channel.thumbnail_prompt:
                prompt = f"{prompt}\n\n{channel.thumbnail_prompt}"
            image_url = await self.generator.generate_image(prompt)
            self.project.thumbnail.image_url = image_url
            await self.store.save_project(self.project)
            return image_url

        return await self._guarded(run)

    async def repurpose(self) -> RepurposingPackage:
        """Generate repurposed social content and attach it to the project."""

        async def run() -> RepurposingPackage:
            result = await self.generator.generate_repurposed_content(self.project)
            self.project.repurposing = result.package
            self.project.add_usage(result.usage)
            await self.store.save_project(self.project)
            return result.package

        return await self._guarded(run)

    def export_script(self) -> str:
        return export_script(self.project)
