"""Global prompt and preferred model endpoints."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from content_studio.api.deps import CurrentUserDep, StoreDep
from content_studio.domain.users import require_owner
from content_studio.logging import get_logger
from content_studio.services.usage import AI_MODELS

router = APIRouter(prefix="/settings", tags=["Settings"])
logger = get_logger(__name__)


class GlobalPromptPayload(BaseModel):
    """Global instruction text."""

    content: str = Field(..., min_length=1)


class ModelOptionResponse(BaseModel):
    id: str
    label: str
    description: str


class PreferredModelPayload(BaseModel):
    """Preferred text model."""

    model_id: str = Field(..., min_length=1)


class PreferredModelResponse(PreferredModelPayload):
    options: list[ModelOptionResponse] = []


def _model_response(model_id: str) -> PreferredModelResponse:
    return PreferredModelResponse(
        model_id=model_id,
        options=[
            ModelOptionResponse(id=m.id, label=m.label, description=m.description)
            for m in AI_MODELS
        ],
    )


@router.get("/prompt", response_model=GlobalPromptPayload, summary="Get global prompt")
async def get_global_prompt(store: StoreDep) -> GlobalPromptPayload:
    """The instruction preamble sent with every generation call."""
    return GlobalPromptPayload(content=await store.get_global_instruction())


@router.put("/prompt", response_model=GlobalPromptPayload, summary="Set global prompt")
async def set_global_prompt(
    payload: GlobalPromptPayload, store: StoreDep, user: CurrentUserDep
) -> GlobalPromptPayload:
    """Replace the global prompt. Owners only."""
    require_owner(user, "edit the global prompt")
    await store.set_global_instruction(payload.content)
    logger.info("global_prompt_updated", length=len(payload.content))
    return payload


@router.get("/model", response_model=PreferredModelResponse, summary="Get preferred model")
async def get_preferred_model(store: StoreDep) -> PreferredModelResponse:
    """The preferred text model and the known options."""
    return _model_response(store.get_preferred_model())


@router.put("/model", response_model=PreferredModelResponse, summary="Set preferred model")
async def set_preferred_model(
    payload: PreferredModelPayload, store: StoreDep
) -> PreferredModelResponse:
    """Change the preferred text model."""
    store.set_preferred_model(payload.model_id)
    logger.info("preferred_model_updated", model_id=payload.model_id)
    return _model_response(payload.model_id)
