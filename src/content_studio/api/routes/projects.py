"""Project endpoints: browse, delete, export and post-blueprint generation."""

from datetime import datetime
from typing import Any

from fastapi import APIRouter, HTTPException, Response, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from content_studio.api.deps import ContentGeneratorDep, StoreDep
from content_studio.domain.models import VideoProject
from content_studio.logging import get_logger
from content_studio.services.project_editor import ProjectEditor, export_filename, export_script

router = APIRouter(prefix="/projects", tags=["Projects"])
logger = get_logger(__name__)


class TokenUsageResponse(BaseModel):
    """Token usage and estimated cost."""

    input_tokens: int
    output_tokens: int
    estimated_cost: float


class ProjectSummary(BaseModel):
    """Project list item."""

    id: str
    topic: str
    channel_id: str
    status: str
    language: str
    youtube_title: str
    created_at: datetime
    created_by: str
    sections_total: int
    sections_filled: int
    token_usage: TokenUsageResponse | None = None


class BulkFillResponse(BaseModel):
    """Result of a bulk fill."""

    project_id: str
    total: int
    completed: int
    batches: int
    filled_indices: list[int]
    estimated_cost: float


class SectionResponse(BaseModel):
    """One section after a fill or image call."""

    index: int
    section_title: str
    voiceover_text: str
    image_url: str | None = None


class ImageResponse(BaseModel):
    """A generated image as a data URI."""

    image_url: str


def _to_summary(project: VideoProject) -> ProjectSummary:
    usage = project.token_usage
    return ProjectSummary(
        id=project.id,
        topic=project.topic,
        channel_id=project.channel_id,
        status=str(project.status),
        language=str(project.language),
        youtube_title=project.seo.youtube_title,
        created_at=project.created_at,
        created_by=project.created_by,
        sections_total=len(project.script),
        sections_filled=len(project.script) - len(project.unfilled_indices()),
        token_usage=TokenUsageResponse(**usage.to_dict()) if usage else None,
    )


async def _load(store: StoreDep, project_id: str) -> VideoProject:
    project = await store.get_project(project_id)
    if project is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Project {project_id} not found",
        )
    return project


@router.get(
    "",
    response_model=list[ProjectSummary],
    summary="List projects",
    description="List all projects, newest first.",
)
async def list_projects(store: StoreDep) -> list[ProjectSummary]:
    """List all projects."""
    return [_to_summary(p) for p in await store.list_projects()]


@router.get(
    "/{project_id}",
    summary="Get project",
    description="Full project document including script, SEO and thumbnail.",
)
async def get_project(project_id: str, store: StoreDep) -> dict[str, Any]:
    """Get a project by id."""
    project = await _load(store, project_id)
    return project.to_dict()


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
)
async def delete_project(project_id: str, store: StoreDep) -> Response:
    """Delete a project."""
    await _load(store, project_id)
    await store.delete_project(project_id)
    logger.info("project_deleted", project_id=project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{project_id}/export",
    response_class=PlainTextResponse,
    summary="Export script",
    description="Download the script as a plain-text document.",
)
async def export_project(project_id: str, store: StoreDep) -> PlainTextResponse:
    """Export the script as text."""
    project = await _load(store, project_id)
    return PlainTextResponse(
        export_script(project),
        headers={"Content-Disposition": f'attachment; filename="{export_filename(project)}"'},
    )


@router.post(
    "/{project_id}/fill",
    response_model=BulkFillResponse,
    summary="Fill all sections",
    description="Generate voiceover for every unfilled section in batches.",
)
async def fill_project(
    project_id: str, store: StoreDep, generator: ContentGeneratorDep
) -> BulkFillResponse:
    """Bulk-fill unfilled sections."""
    project = await _load(store, project_id)
    editor = ProjectEditor(generator, store, project)
    result = await editor.fill_all()
    return BulkFillResponse(
        project_id=project.id,
        total=result.total,
        completed=result.completed,
        batches=result.batches,
        filled_indices=result.filled_indices,
        estimated_cost=result.usage.estimated_cost,
    )


@router.post(
    "/{project_id}/sections/{index}/fill",
    response_model=SectionResponse,
    summary="Fill one section",
)
async def fill_section(
    project_id: str, index: int, store: StoreDep, generator: ContentGeneratorDep
) -> SectionResponse:
    """Generate (or regenerate) voiceover for one section."""
    project = await _load(store, project_id)
    editor = ProjectEditor(generator, store, project)
    await editor.fill_section(index)
    section = project.script[index]
    return SectionResponse(
        index=index,
        section_title=section.section_title,
        voiceover_text=section.voiceover_text,
        image_url=section.image_url,
    )


@router.post(
    "/{project_id}/sections/{index}/image",
    response_model=ImageResponse,
    summary="Generate section image",
)
async def generate_section_image(
    project_id: str, index: int, store: StoreDep, generator: ContentGeneratorDep
) -> ImageResponse:
    """Generate a preview image for one section."""
    project = await _load(store, project_id)
    editor = ProjectEditor(generator, store, project)
    return ImageResponse(image_url=await editor.generate_section_image(index))


@router.post(
    "/{project_id}/thumbnail/image",
    response_model=ImageResponse,
    summary="Generate thumbnail image",
)
async def generate_thumbnail_image(
    project_id: str, store: StoreDep, generator: ContentGeneratorDep
) -> ImageResponse:
    """Generate the thumbnail image."""
    project = await _load(store, project_id)
    editor = ProjectEditor(generator, store, project)
    return ImageResponse(image_url=await editor.generate_thumbnail_image())


@router.post(
    "/{project_id}/repurpose",
    summary="Repurpose content",
    description="Generate shorts ideas, a community post and a social blurb.",
)
async def repurpose_project(
    project_id: str, store: StoreDep, generator: ContentGeneratorDep
) -> dict[str, Any]:
    """Generate repurposed content for a project."""
    project = await _load(store, project_id)
    editor = ProjectEditor(generator, store, project)
    package = await editor.repurpose()
    return package.to_dict()
