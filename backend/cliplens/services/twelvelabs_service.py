"""
Twelve Labs service for multimodal video search and video metadata.

Talks to the provider's REST API directly over httpx:
- POST /search                            semantic clip search
- GET  /indexes/{index}/videos/{video}   video info incl. HLS stream
- POST /gist, POST /summarize             title and summary generation
- GET  /tasks/{task_id}                   asynchronous task status
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx

from cliplens.core.config import settings
from cliplens.core.constants import ErrorMessages, SearchOptions, TaskStatus
from cliplens.core.errors import UpstreamError, UpstreamNotFound

logger = logging.getLogger(__name__)


def _response_body(response: httpx.Response) -> Any:
    """Best-effort decode of a provider error body for diagnostics."""
    try:
        return response.json()
    except ValueError:
        return response.text or None


def _dig(payload: Dict[str, Any], *path: str) -> Optional[Any]:
    """Follow nested keys, returning None as soon as one is missing."""
    current: Any = payload
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


class TwelveLabsService:
    """Async client for the Twelve Labs API, one instance per credential."""

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key
        self.base_url = (base_url or settings.TWELVELABS_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.PROVIDER_HTTP_TIMEOUT_SECONDS
        self._transport = transport
        self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"x-api-key": self.api_key},
                timeout=self.timeout,
                transport=self._transport
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "TwelveLabsService":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _request(self, method: str, url: str, failure_message: str, **kwargs) -> Dict[str, Any]:
        """
        Send one request and decode the JSON body.

        Raises UpstreamNotFound on 404, UpstreamError (carrying the provider
        status and body) on any other HTTP or transport failure.
        """
        try:
            response = await self.client.request(method, url, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            body = _response_body(e.response)
            if status_code == 404:
                raise UpstreamNotFound(failure_message, details=body)
            raise UpstreamError(failure_message, details=body, status_code=status_code)
        except httpx.RequestError as e:
            raise UpstreamError(failure_message, details=str(e))
        except ValueError as e:
            raise UpstreamError(failure_message, details=f"Invalid JSON from provider: {e}")

    async def search(
        self,
        index_id: str,
        query_text: str,
        page_limit: Optional[int] = None,
        search_options: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        """
        Run a semantic search over an index.

        The page size is capped at the provider maximum. Returns the provider
        envelope ({"data": [...], "page_info": ..., ...}) unchanged.
        """
        limit = min(page_limit or settings.SEARCH_PAGE_LIMIT, SearchOptions.MAX_PAGE_LIMIT)
        options = search_options or SearchOptions.ALL

        # The search endpoint only accepts multipart/form-data
        form = [
            ("index_id", (None, index_id)),
            ("query_text", (None, query_text)),
            ("page_limit", (None, str(limit))),
        ]
        form.extend(("search_options", (None, option)) for option in options)

        logger.info(f"Searching index {index_id} (limit={limit}, options={options})")
        return await self._request("POST", "/search", ErrorMessages.SEARCH_FAILED, files=form)

    async def get_video(self, index_id: str, video_id: str) -> Dict[str, Any]:
        """Retrieve one video; the HLS block appears once transcoding is done."""
        return await self._request(
            "GET",
            f"/indexes/{index_id}/videos/{video_id}",
            ErrorMessages.VIDEO_INFO_FAILED
        )

    async def get_task(self, task_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/tasks/{task_id}", ErrorMessages.ANALYZE_FAILED)

    async def wait_for_task(
        self,
        task_id: str,
        poll_interval: Optional[float] = None
    ) -> Dict[str, Any]:
        """
        Poll a provider task until it reaches a terminal status.

        Has no timeout of its own; callers bound it with asyncio.wait_for.
        """
        interval = poll_interval if poll_interval is not None else settings.TASK_POLL_INTERVAL_SECONDS

        while True:
            task = await self.get_task(task_id)
            status = task.get("status")
            if status == TaskStatus.FAILED:
                raise UpstreamError(ErrorMessages.ANALYZE_FAILED, details=task)
            if status == TaskStatus.READY:
                return task
            logger.debug(f"Task {task_id} is {status}, polling again in {interval}s")
            await asyncio.sleep(interval)

    async def _resolve_task(self, payload: Dict[str, Any], poll_interval: Optional[float]) -> Dict[str, Any]:
        """Follow a task reference when the provider answered asynchronously."""
        task_id = payload.get("task_id")
        if task_id and payload.get("status") not in TaskStatus.TERMINAL:
            return await self.wait_for_task(task_id, poll_interval)
        return payload

    async def generate_title(
        self,
        video_id: str,
        poll_interval: Optional[float] = None
    ) -> Optional[str]:
        """Gist a video and return its title, or None if the provider gave none."""
        payload = await self._request(
            "POST",
            "/gist",
            ErrorMessages.ANALYZE_FAILED,
            json={"video_id": video_id, "types": ["title"]}
        )
        payload = await self._resolve_task(payload, poll_interval)
        return payload.get("title") or _dig(payload, "video", "metadata", "gist", "title")

    async def generate_summary(
        self,
        video_id: str,
        prompt: str,
        poll_interval: Optional[float] = None
    ) -> Optional[str]:
        """Summarize a video and return the summary text, or None."""
        payload = await self._request(
            "POST",
            "/summarize",
            ErrorMessages.ANALYZE_FAILED,
            json={"video_id": video_id, "type": "summary", "prompt": prompt}
        )
        payload = await self._resolve_task(payload, poll_interval)
        return payload.get("summary") or _dig(payload, "video", "metadata", "summary", "content")
