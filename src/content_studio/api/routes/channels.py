"""Channel profile endpoints."""

from fastapi import APIRouter, HTTPException, Response, status
from pydantic import BaseModel, Field

from content_studio.api.deps import CurrentUserDep, StoreDep
from content_studio.domain.models import ChannelProfile
from content_studio.domain.users import require_owner
from content_studio.logging import get_logger

router = APIRouter(prefix="/channels", tags=["Channels"])
logger = get_logger(__name__)


class ChannelPayload(BaseModel):
    """Channel profile body for create/update."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    script_prompt: str = ""
    image_prompt: str = ""
    thumbnail_prompt: str = ""
    thumbnail_ref_image: str | None = Field(None, description="data-URI of a style reference image")


class ChannelResponse(ChannelPayload):
    """Channel profile."""

    id: str


@router.get(
    "",
    response_model=list[ChannelResponse],
    summary="List channels",
    description="Saved channel profiles, or the built-in defaults if none are saved.",
)
async def list_channels(store: StoreDep) -> list[ChannelResponse]:
    """List channel profiles."""
    return [ChannelResponse(**c.to_dict()) for c in await store.list_channel_profiles()]


@router.put(
    "/{channel_id}",
    response_model=ChannelResponse,
    summary="Create or update channel",
)
async def save_channel(
    channel_id: str, payload: ChannelPayload, store: StoreDep, user: CurrentUserDep
) -> ChannelResponse:
    """Upsert a channel profile. Owners only."""
    require_owner(user, "edit channel profiles")
    channel = ChannelProfile(id=channel_id, **payload.model_dump())
    await store.save_channel_profile(channel)
    logger.info("channel_saved", channel_id=channel_id, name=channel.name)
    return ChannelResponse(**channel.to_dict())


@router.delete(
    "/{channel_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete channel",
    description="Existing projects keep their channel id; lookups fall back to the first profile.",
)
async def delete_channel(channel_id: str, store: StoreDep, user: CurrentUserDep) -> Response:
    """Delete a channel profile. Owners only."""
    require_owner(user, "delete channel profiles")
    channels = await store.list_channel_profiles()
    if not any(c.id == channel_id for c in channels):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Channel {channel_id} not found",
        )
    await store.delete_channel_profile(channel_id)
    logger.info("channel_deleted", channel_id=channel_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
