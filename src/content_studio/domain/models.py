"""Domain models - pure Python classes independent of storage."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from content_studio.config import settings
from content_studio.domain.enums import HookType, Language, ProjectStatus, VideoMode


def new_id() -> str:
    """Generate a fresh entity id."""
    return str(uuid4())


@dataclass
class ChannelProfile:
    """A channel identity whose prompt fragments steer every generation call."""

    id: str
    name: str
    description: str = ""
    script_prompt: str = ""  # Tone and structure of the script
    image_prompt: str = ""  # Visual style of scene images
    thumbnail_prompt: str = ""  # Thumbnail text and concept
    thumbnail_ref_image: str | None = None  # data-URI guiding thumbnail style

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "script_prompt": self.script_prompt,
            "image_prompt": self.image_prompt,
            "thumbnail_prompt": self.thumbnail_prompt,
            "thumbnail_ref_image": self.thumbnail_ref_image,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChannelProfile":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            description=data.get("description", ""),
            script_prompt=data.get("script_prompt", ""),
            image_prompt=data.get("image_prompt", ""),
            thumbnail_prompt=data.get("thumbnail_prompt", ""),
            thumbnail_ref_image=data.get("thumbnail_ref_image"),
        )


@dataclass(frozen=True)
class HookVariant:
    """One candidate opening line. The id only lives for selection."""

    id: str
    type: HookType
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "type": str(self.type), "content": self.content}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HookVariant":
        return cls(id=data["id"], type=HookType(data["type"]), content=data.get("content", ""))


@dataclass
class ScriptSection:
    """A section of the script; voiceover is filled in after the blueprint."""

    section_title: str
    visual_prompt: str
    voiceover_text: str = ""
    image_url: str | None = None  # data-URI of a generated preview

    @property
    def is_filled(self) -> bool:
        return len(self.voiceover_text or "") >= settings.min_section_length

    def to_dict(self) -> dict[str, Any]:
        return {
            "section_title": self.section_title,
            "visual_prompt": self.visual_prompt,
            "voiceover_text": self.voiceover_text,
            "image_url": self.image_url,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScriptSection":
        return cls(
            section_title=data.get("section_title", ""),
            visual_prompt=data.get("visual_prompt", ""),
            voiceover_text=data.get("voiceover_text") or "",
            image_url=data.get("image_url"),
        )


@dataclass
class SeoPackage:
    """Title, description and tags for the upload."""

    youtube_title: str
    youtube_description: str
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "youtube_title": self.youtube_title,
            "youtube_description": self.youtube_description,
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SeoPackage":
        return cls(
            youtube_title=data.get("youtube_title", ""),
            youtube_description=data.get("youtube_description", ""),
            tags=list(data.get("tags", [])),
        )


@dataclass
class ThumbnailPackage:
    """Thumbnail overlay text and image concept."""

    thumbnail_text: str
    thumbnail_visual_prompt: str
    image_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "thumbnail_text": self.thumbnail_text,
            "thumbnail_visual_prompt": self.thumbnail_visual_prompt,
            "image_url": self.image_url,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ThumbnailPackage":
        return cls(
            thumbnail_text=data.get("thumbnail_text", ""),
            thumbnail_visual_prompt=data.get("thumbnail_visual_prompt", ""),
            image_url=data.get("image_url"),
        )


@dataclass
class ShortsIdea:
    """A short-form video idea derived from the script."""

    title: str
    visual_concept: str


@dataclass
class RepurposingPackage:
    """Derivative short-form and social content."""

    shorts_ideas: list[ShortsIdea] = field(default_factory=list)
    community_post: str = ""
    social_blurb: str = ""  # For TikTok/FB/Twitter

    def to_dict(self) -> dict[str, Any]:
        return {
            "shorts_ideas": [
                {"title": idea.title, "visual_concept": idea.visual_concept}
                for idea in self.shorts_ideas
            ],
            "community_post": self.community_post,
            "social_blurb": self.social_blurb,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RepurposingPackage":
        return cls(
            shorts_ideas=[
                ShortsIdea(title=i.get("title", ""), visual_concept=i.get("visual_concept", ""))
                for i in data.get("shorts_ideas", [])
            ],
            community_post=data.get("community_post", ""),
            social_blurb=data.get("social_blurb", ""),
        )


@dataclass(frozen=True)
class TokenUsage:
    """Token counts and estimated USD cost of one or more API calls."""

    input_tokens: int = 0
    output_tokens: int = 0
    estimated_cost: float = 0.0

    @classmethod
    def zero(cls) -> "TokenUsage":
        return cls()

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def __add__(self, other: "TokenUsage") -> "TokenUsage":
        return TokenUsage(
            input_tokens=self.input_tokens + other.input_tokens,
            output_tokens=self.output_tokens + other.output_tokens,
            estimated_cost=self.estimated_cost + other.estimated_cost,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "estimated_cost": self.estimated_cost,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TokenUsage":
        return cls(
            input_tokens=int(data.get("input_tokens", 0)),
            output_tokens=int(data.get("output_tokens", 0)),
            estimated_cost=float(data.get("estimated_cost", 0.0)),
        )


@dataclass
class VideoProject:
    """A committed video package.

    Created only after the blueprint phase succeeds. The length of
    ``script`` is fixed from then on; later phases only fill in
    ``voiceover_text`` and ``image_url`` of existing sections.
    """

    id: str
    channel_id: str
    topic: str
    mode: VideoMode
    language: Language
    target_audience: str
    created_by: str
    script: list[ScriptSection]
    seo: SeoPackage
    thumbnail: ThumbnailPackage
    status: ProjectStatus = ProjectStatus.GENERATED
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    hook_variants: list[HookVariant] | None = None
    selected_hook: str | None = None
    repurposing: RepurposingPackage | None = None
    token_usage: TokenUsage | None = None

    def unfilled_indices(self) -> list[int]:
        """Indices of sections still waiting for voiceover text, in script order."""
        return [i for i, section in enumerate(self.script) if not section.is_filled]

    def add_usage(self, usage: TokenUsage) -> None:
        """Fold the cost of another call into the running total."""
        self.token_usage = (self.token_usage or TokenUsage.zero()) + usage

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "channel_id": self.channel_id,
            "topic": self.topic,
            "mode": str(self.mode),
            "language": str(self.language),
            "target_audience": self.target_audience,
            "created_at": self.created_at.isoformat(),
            "created_by": self.created_by,
            "status": str(self.status),
            "hook_variants": (
                [h.to_dict() for h in self.hook_variants] if self.hook_variants is not None else None
            ),
            "selected_hook": self.selected_hook,
            "script": [s.to_dict() for s in self.script],
            "seo": self.seo.to_dict(),
            "thumbnail": self.thumbnail.to_dict(),
            "repurposing": self.repurposing.to_dict() if self.repurposing else None,
            "token_usage": self.token_usage.to_dict() if self.token_usage else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VideoProject":
        hooks = data.get("hook_variants")
        repurposing = data.get("repurposing")
        usage = data.get("token_usage")
        return cls(
            id=data["id"],
            channel_id=data.get("channel_id", ""),
            topic=data.get("topic", ""),
            mode=VideoMode(data.get("mode", VideoMode.ORIGINAL)),
            language=Language(data.get("language", Language.EN)),
            target_audience=data.get("target_audience", ""),
            created_at=datetime.fromisoformat(data["created_at"]),
            created_by=data.get("created_by", ""),
            status=ProjectStatus(data.get("status", ProjectStatus.GENERATED)),
            hook_variants=[HookVariant.from_dict(h) for h in hooks] if hooks is not None else None,
            selected_hook=data.get("selected_hook"),
            script=[ScriptSection.from_dict(s) for s in data.get("script", [])],
            seo=SeoPackage.from_dict(data.get("seo") or {}),
            thumbnail=ThumbnailPackage.from_dict(data.get("thumbnail") or {}),
            repurposing=RepurposingPackage.from_dict(repurposing) if repurposing else None,
            token_usage=TokenUsage.from_dict(usage) if usage else None,
        )
