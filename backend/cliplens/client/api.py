"""
HTTP client for the ClipLens proxy, used by the search UI logic.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from cliplens.client.models import SearchQuery, SearchResultSet
from cliplens.core.constants import ClientDefaults

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientConfig:
    """Explicit configuration handed to every client component."""
    base_url: str = ClientDefaults.PROXY_BASE_URL
    api_key: Optional[str] = None
    stream_poll_seconds: float = ClientDefaults.STREAM_POLL_SECONDS
    timeout: float = ClientDefaults.REQUEST_TIMEOUT_SECONDS


class ProxyRequestError(Exception):
    """A proxy call failed; status_code is None for transport failures."""

    def __init__(self, status_code: Optional[int], message: Optional[str] = None):
        super().__init__(message or f"Proxy request failed ({status_code})")
        self.status_code = status_code
        self.server_message = message

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class ProxyApiClient:
    """Async wrapper around the four proxy endpoints."""

    def __init__(self, config: Optional[ClientConfig] = None, http: Optional[httpx.AsyncClient] = None):
        self.config = config or ClientConfig()
        self._client = http

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.config.base_url, timeout=self.config.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _with_credential(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if self.config.api_key:
            payload.setdefault("apiKey", self.config.api_key)
        return payload

    async def _send(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ProxyRequestError(None, None)

        if response.is_success:
            try:
                return response.json()
            except ValueError:
                logger.warning(f"{method} {path} returned a non-JSON body")
                raise ProxyRequestError(response.status_code, None)

        message = None
        try:
            body = response.json()
            if isinstance(body, dict):
                message = body.get("error")
        except ValueError:
            pass
        raise ProxyRequestError(response.status_code, message)

    async def search(self, query: SearchQuery) -> SearchResultSet:
        payload = {"indexId": query.index_id, "prompt": query.prompt_text}
        if query.credential:
            payload["apiKey"] = query.credential
        envelope = await self._send("POST", "/api/search", json=self._with_credential(payload))
        try:
            return SearchResultSet.from_envelope(envelope or {})
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Malformed search envelope: {e!r}")
            raise ProxyRequestError(200, None)

    async def engineer_prompt(self, prompt: str) -> str:
        body = await self._send("POST", "/api/engineer-prompt", json={"prompt": prompt})
        engineered = body.get("engineeredPrompt") if isinstance(body, dict) else None
        if not isinstance(engineered, str) or not engineered.strip():
            raise ProxyRequestError(200, None)
        return engineered

    async def analyze(self, index_id: str, video_id: str) -> Dict[str, Any]:
        payload = self._with_credential({"indexId": index_id, "videoId": video_id})
        return await self._send("POST", "/api/analyze", json=payload)

    async def get_video(self, index_id: str, video_id: str) -> Dict[str, Any]:
        params = {"apiKey": self.config.api_key} if self.config.api_key else None
        return await self._send("GET", f"/api/videos/{index_id}/{video_id}", params=params)
