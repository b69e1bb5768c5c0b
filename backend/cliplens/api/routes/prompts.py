"""
Prompt engineering API route.
"""
from fastapi import APIRouter, Depends

from cliplens.core.config import Settings, get_settings
from cliplens.core.errors import require_fields
from cliplens.schemas.search import EngineerPromptRequest, EngineerPromptResponse
from cliplens.services.prompt_engineer_service import PromptEngineerService

router = APIRouter(prefix="/api", tags=["prompts"])


@router.post("/engineer-prompt", response_model=EngineerPromptResponse)
async def engineer_prompt(
    request: EngineerPromptRequest,
    app_settings: Settings = Depends(get_settings)
) -> EngineerPromptResponse:
    """Rewrite a raw prompt into one tuned for multimodal video search."""
    require_fields(prompt=request.prompt)

    service = PromptEngineerService(
        api_key=app_settings.OPENAI_API_KEY or "",
        model=app_settings.PROMPT_ENGINEER_MODEL
    )
    engineered = await service.engineer(request.prompt.strip())

    return EngineerPromptResponse(engineered_prompt=engineered)
