"""
Video API routes: card metadata (title/summary) and stream info.
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Query

from cliplens.api.dependencies.credentials import require_provider_key
from cliplens.core.config import Settings, get_settings
from cliplens.core.constants import ErrorMessages
from cliplens.core.errors import ClipLensError, UpstreamError, UpstreamNotFound, require_fields
from cliplens.schemas.video import AnalyzeRequest, AnalyzeResponse, VideoInfoRequest
from cliplens.services.analysis_service import AnalysisService
from cliplens.services.twelvelabs_service import TwelveLabsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["videos"])


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_video(
    request: AnalyzeRequest,
    app_settings: Settings = Depends(get_settings)
) -> AnalyzeResponse:
    """
    Generate a title and a one-paragraph summary for a video.

    Both are computed concurrently; a missing part is replaced by a
    placeholder instead of failing the request.
    """
    require_fields(indexId=request.index_id, videoId=request.video_id)
    api_key = require_provider_key(request.api_key, app_settings)

    try:
        async with TwelveLabsService(api_key) as provider:
            service = AnalysisService(
                provider,
                timeout=app_settings.ANALYSIS_TIMEOUT_SECONDS,
                poll_interval=app_settings.TASK_POLL_INTERVAL_SECONDS
            )
            result = await service.analyze(request.index_id, request.video_id)
    except UpstreamError as e:
        logger.error(f"Error in /api/analyze for video {request.video_id}: {e.details!r}")
        raise

    return AnalyzeResponse(title=result.title, summary=result.summary)


async def _fetch_video(index_id: str, video_id: str, api_key: str) -> Dict[str, Any]:
    """
    Retrieve provider video info.

    404 stays distinct (the stream is still transcoding); every other
    failure collapses to a 500.
    """
    try:
        async with TwelveLabsService(api_key) as provider:
            return await provider.get_video(index_id, video_id)
    except UpstreamNotFound as e:
        logger.info(f"Video {video_id} not ready yet in index {index_id}")
        raise UpstreamNotFound(ErrorMessages.VIDEO_NOT_READY, details=e.details)
    except ClipLensError as e:
        logger.error(f"Error retrieving video {video_id}: {e.details!r}")
        raise UpstreamError(ErrorMessages.VIDEO_INFO_FAILED, details=e.details)


@router.post("/videos")
async def get_video_info(
    request: VideoInfoRequest,
    app_settings: Settings = Depends(get_settings)
) -> Dict[str, Any]:
    """Return the provider video object, including HLS info once ready."""
    require_fields(indexId=request.index_id, videoId=request.video_id)
    api_key = require_provider_key(request.api_key, app_settings)

    return await _fetch_video(request.index_id, request.video_id, api_key)


@router.get("/videos/{index_id}/{video_id}")
async def get_video_info_by_path(
    index_id: str,
    video_id: str,
    api_key: str | None = Query(default=None, alias="apiKey"),
    app_settings: Settings = Depends(get_settings)
) -> Dict[str, Any]:
    """GET form of the stream-info lookup used by result cards."""
    api_key = require_provider_key(api_key, app_settings)

    return await _fetch_video(index_id, video_id, api_key)
