"""Batched fill of every unfilled script section."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field

from content_studio.adapters.store.base import ProjectStore
from content_studio.config import settings
from content_studio.domain.models import ChannelProfile, TokenUsage, VideoProject
from content_studio.exceptions import BulkAbortError
from content_studio.logging import get_logger
from content_studio.services.content_generator import ContentGenerator, SectionContent

logger = get_logger(__name__)

ProgressCallback = Callable[[int, int], None]


@dataclass
class BulkResult:
    """Outcome of a bulk run."""

    total: int = 0
    completed: int = 0
    batches: int = 0
    filled_indices: list[int] = field(default_factory=list)
    usage: TokenUsage = field(default_factory=TokenUsage.zero)

    @property
    def skipped(self) -> bool:
        return self.total == 0


class BulkRegenerationScheduler:
    """Fills unfilled sections in consecutive batches.

    Calls within a batch run concurrently; the next batch starts only
    after the whole previous batch has finished. The project is saved
    once per batch. When a call fails, the sections that did succeed in
    that batch are still applied and saved, then the run stops with
    BulkAbortError. Later batches are never started and nothing is
    retried.
    """

    def __init__(
        self,
        generator: ContentGenerator,
        store: ProjectStore,
        batch_size: int | None = None,
    ) -> None:
        self.generator = generator
        self.store = store
        self.batch_size = batch_size or settings.bulk_batch_size
        if self.batch_size < 1:
            raise ValueError("batch_size must be at least 1")

    async def _fill(
        self, project: VideoProject, channel: ChannelProfile, index: int
    ) -> SectionContent:
        section = project.script[index]
        return await self.generator.generate_section_content_with_usage(
            channel,
            project.topic,
            section.section_title,
            section.visual_prompt,
            project.language,
        )

    async def run(
        self,
        project: VideoProject,
        channel: ChannelProfile,
        on_progress: ProgressCallback | None = None,
    ) -> BulkResult:
        """Fill every unfilled section of ``project`` in place."""
        pending = project.unfilled_indices()
        result = BulkResult(total=len(pending))
        if not pending:
            logger.info("bulk_fill_skipped", project_id=project.id)
            return result
        self.generator.ensure_configured()

        logger.info(
            "bulk_fill_started",
            project_id=project.id,
            unfilled=result.total,
            batch_size=self.batch_size,
        )

        for start in range(0, len(pending), self.batch_size):
            batch = pending[start : start + self.batch_size]
            outcomes = await asyncio.gather(
                *(self._fill(project, channel, index) for index in batch),
                return_exceptions=True,
            )

            failures: dict[int, BaseException] = {}
            applied = 0
            for index, outcome in zip(batch, outcomes):
                if isinstance(outcome, BaseException):
                    failures[index] = outcome
                    continue
                project.script[index].voiceover_text = outcome.text
                project.add_usage(outcome.usage)
                result.usage = result.usage + outcome.usage
                result.filled_indices.append(index)
                applied += 1

            result.batches += 1
            if applied:
                await self.store.save_project(project)
                result.completed += applied
                if on_progress is not None:
                    on_progress(result.completed, result.total)

            logger.info(
                "bulk_batch_completed",
                project_id=project.id,
                batch=result.batches,
                applied=applied,
                failed=len(failures),
                progress=f"{result.completed}/{result.total}",
            )

            if failures:
                failed_indices = sorted(failures)
                cause = failures[failed_indices[0]]
                logger.error(
                    "bulk_fill_aborted",
                    project_id=project.id,
                    failed_indices=failed_indices,
                    error=str(cause),
                )
                raise BulkAbortError(
                    f"Bulk generation stopped due to error: {cause}",
                    failed_indices=failed_indices,
                    completed=result.completed,
                    total=result.total,
                ) from cause

        logger.info(
            "bulk_fill_completed",
            project_id=project.id,
            completed=result.completed,
            batches=result.batches,
            cost=result.usage.estimated_cost,
        )
        return result
