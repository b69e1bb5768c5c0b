from cliplens.schemas.search import (
    SearchRequest,
    EngineerPromptRequest,
    EngineerPromptResponse,
)
from cliplens.schemas.video import (
    VideoRequest,
    AnalyzeRequest,
    AnalyzeResponse,
    VideoInfoRequest,
)

__all__ = [
    "SearchRequest",
    "EngineerPromptRequest",
    "EngineerPromptResponse",
    "VideoRequest",
    "AnalyzeRequest",
    "AnalyzeResponse",
    "VideoInfoRequest",
]
