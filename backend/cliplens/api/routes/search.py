"""
Search API route: forwards a clip query to the video search provider.
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from cliplens.api.dependencies.credentials import require_search_key
from cliplens.core.config import Settings, get_settings
from cliplens.core.errors import ClipLensError, require_fields
from cliplens.schemas.search import SearchRequest
from cliplens.services.twelvelabs_service import TwelveLabsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["search"])


@router.post("/search")
async def search(
    request: SearchRequest,
    app_settings: Settings = Depends(get_settings)
) -> Dict[str, Any]:
    """
    Search an index for clips matching a prompt.

    - Requires indexId and prompt, plus a credential (server or caller)
    - Requests visual and audio modalities, at most 10 results
    - Returns the provider envelope unchanged
    """
    require_fields(indexId=request.index_id, prompt=request.prompt)
    api_key = require_search_key(request.api_key, app_settings)

    try:
        async with TwelveLabsService(api_key) as provider:
            return await provider.search(
                request.index_id,
                request.prompt,
                page_limit=request.page_limit
            )
    except ClipLensError as e:
        logger.error(f"Error in /api/search for index {request.index_id}: {e.message} {e.details!r}")
        raise
