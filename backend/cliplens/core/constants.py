"""
Centralized constants for the application.
"""


class SearchOptions:
    """Modalities requested from the video search provider."""
    VISUAL = "visual"
    AUDIO = "audio"
    ALL = [VISUAL, AUDIO]

    # Provider rejects larger pages
    MAX_PAGE_LIMIT = 10


class Placeholders:
    """Values shown when analysis could not produce a result."""
    TITLE = "Untitled Video"
    SUMMARY = "Summary could not be generated."

    # Shown on a card while its requests are in flight
    TITLE_PENDING = "Generating title..."
    SUMMARY_PENDING = "Generating summary..."
    STREAM_PENDING = "Video is processing..."
    STREAM_FAILED = "Failed to load video stream."


class ErrorMessages:
    """User-facing error messages returned by the proxy."""
    SEARCH_FAILED = "Failed to perform search"
    ENGINEER_FAILED = "Failed to engineer prompt"
    ANALYZE_FAILED = "Failed to analyze video"
    VIDEO_NOT_READY = "Video not ready or not found."
    VIDEO_INFO_FAILED = "Failed to retrieve video stream info."
    MISSING_PROVIDER_KEY = "TWELVELABS_API_KEY is not configured on the server"
    MISSING_LLM_KEY = "OPENAI_API_KEY is not configured on the server"


class TaskStatus:
    """Provider task lifecycle states."""
    PENDING = "pending"
    INDEXING = "indexing"
    READY = "ready"
    FAILED = "failed"

    TERMINAL = {READY, FAILED}


class ClientDefaults:
    """Defaults for the browser-side logic."""
    PROXY_BASE_URL = "http://localhost:3001"
    STREAM_POLL_SECONDS = 5.0
    REQUEST_TIMEOUT_SECONDS = 1300.0
