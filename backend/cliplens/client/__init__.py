"""
Python rendition of the search UI logic: orchestration and clip hydration.
"""
from cliplens.client.api import ClientConfig, ProxyApiClient, ProxyRequestError
from cliplens.client.hydration import ClipHydrationController, format_timestamp, stream_url_from
from cliplens.client.models import (
    AnalysisStatus,
    ClipHydrationState,
    ClipMatch,
    SearchQuery,
    SearchResultSet,
    StreamStatus,
)
from cliplens.client.orchestrator import SearchOrchestrator, SearchPhase
from cliplens.client.playback import HlsPlaybackEngine, MediaView, PlaybackEngine, PlaybackEvents
from cliplens.client.prompts import DEFAULT_PROMPTS, PromptDeck
from cliplens.client.results import ResultsGrid
from cliplens.client.scheduling import AsyncioScheduler, CancellationToken, Scheduler

__all__ = [
    "ClientConfig",
    "ProxyApiClient",
    "ProxyRequestError",
    "ClipHydrationController",
    "format_timestamp",
    "stream_url_from",
    "AnalysisStatus",
    "ClipHydrationState",
    "ClipMatch",
    "SearchQuery",
    "SearchResultSet",
    "StreamStatus",
    "SearchOrchestrator",
    "SearchPhase",
    "HlsPlaybackEngine",
    "MediaView",
    "PlaybackEngine",
    "PlaybackEvents",
    "DEFAULT_PROMPTS",
    "PromptDeck",
    "ResultsGrid",
    "AsyncioScheduler",
    "CancellationToken",
    "Scheduler",
]
