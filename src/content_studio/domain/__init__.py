"""Domain models and business logic."""

from content_studio.domain.enums import (
    HookType,
    Language,
    ProjectStatus,
    UserRole,
    VideoMode,
    WizardStep,
)
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

__all__ = [
    "ChannelProfile",
    "HookType",
    "HookVariant",
    "Language",
    "ProjectStatus",
    "RepurposingPackage",
    "ScriptSection",
    "SeoPackage",
    "ShortsIdea",
    "ThumbnailPackage",
    "TokenUsage",
    "UserRole",
    "VideoMode",
    "VideoProject",
    "WizardStep",
]
