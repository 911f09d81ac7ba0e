"""Application services."""

from content_studio.services.bulk_regeneration import BulkRegenerationScheduler, BulkResult
from content_studio.services.content_generator import (
    Blueprint,
    ContentGenerator,
    HookBatch,
    RepurposingResult,
    SectionContent,
)
from content_studio.services.generator_wizard import Brief, GeneratorWizard
from content_studio.services.project_editor import ProjectEditor, export_script
from content_studio.services.usage import UsageAccumulator, calculate_usage

__all__ = [
    "Blueprint",
    "Brief",
    "BulkRegenerationScheduler",
    "BulkResult",
    "ContentGenerator",
    "GeneratorWizard",
    "HookBatch",
    "ProjectEditor",
    "RepurposingResult",
    "SectionContent",
    "UsageAccumulator",
    "calculate_usage",
    "export_script",
]
