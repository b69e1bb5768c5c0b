"""
Pydantic schemas for video analysis and stream-info endpoints.
"""
from typing import Optional

from pydantic import BaseModel, Field


class VideoRequest(BaseModel):
    """Identifies one indexed video, optionally with a caller credential."""
    index_id: Optional[str] = Field(default=None, alias="indexId")
    video_id: Optional[str] = Field(default=None, alias="videoId")
    api_key: Optional[str] = Field(default=None, alias="apiKey")

    model_config = {"populate_by_name": True}


class AnalyzeRequest(VideoRequest):
    """Request body for title and summary generation."""
    pass


class VideoInfoRequest(VideoRequest):
    """Request body for stream-info retrieval."""
    pass


class AnalyzeResponse(BaseModel):
    """Title and summary for a video."""
    title: str
    summary: str
