"""Structured response schemas for the generation phases.

These models are sent to Gemini as the response schema and used to
validate what comes back. A response that does not validate is a
GenerationError; missing fields are never silently defaulted.
"""

from pydantic import BaseModel

from content_studio.domain.enums import HookType


class HookItem(BaseModel):
    type: HookType
    content: str


class HooksResponse(BaseModel):
    hooks: list[HookItem]


class SeoSchema(BaseModel):
    youtube_title: str
    youtube_description: str
    tags: list[str]


class ThumbnailSchema(BaseModel):
    thumbnail_text: str
    thumbnail_visual_prompt: str


class SectionSchema(BaseModel):
    section_title: str
    voiceover_text: str
    visual_prompt: str


class BlueprintResponse(BaseModel):
    seo: SeoSchema
    thumbnail: ThumbnailSchema
    script_sections: list[SectionSchema]


class ShortsIdeaSchema(BaseModel):
    title: str
    visual_concept: str


class RepurposingResponse(BaseModel):
    shorts_ideas: list[ShortsIdeaSchema]
    community_post: str
    social_blurb: str
