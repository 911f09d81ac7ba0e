"""Domain enumerations."""

from enum import StrEnum


class HookType(StrEnum):
    """Categories of opening hooks."""

    CONTROVERSIAL = "CONTROVERSIAL"  # Challenge a common belief
    STORY = "STORY"  # Start in the middle of action
    QUESTION = "QUESTION"  # Provoke curiosity
    STATISTIC = "STATISTIC"  # Shocking number


class VideoMode(StrEnum):
    """Whether the topic is a fresh idea or a reference to rewrite."""

    ORIGINAL = "ORIGINAL"
    REWRITE = "REWRITE"


class Language(StrEnum):
    """Output language of the generated package."""

    EN = "EN"
    VI = "VI"
    EN_VI = "EN_VI"


class ProjectStatus(StrEnum):
    """Lifecycle status of a video project."""

    DRAFT = "DRAFT"
    GENERATED = "GENERATED"
    PUBLISHED = "PUBLISHED"


class UserRole(StrEnum):
    """Role of a studio user."""

    OWNER = "OWNER"
    EDITOR = "EDITOR"


class WizardStep(StrEnum):
    """Steps of the generator wizard."""

    BRIEFING = "BRIEFING"
    HOOK_SELECTION = "HOOK_SELECTION"
    COMMITTED = "COMMITTED"
