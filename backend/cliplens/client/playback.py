"""
HLS playback for result cards.

MediaView stands in for the card's video element. A PlaybackEngine binds a
stream URL to a view and reports MANIFEST_PARSED once the master playlist
has been fetched and parsed; the card seeks to the clip start on that
event.
"""
import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urljoin

import httpx

logger = logging.getLogger(__name__)

HLS_MIME_TYPE = "application/vnd.apple.mpegurl"


class PlaybackEvents:
    MANIFEST_PARSED = "manifestParsed"
    ERROR = "error"


@dataclass
class Variant:
    """One rendition listed in an HLS master playlist."""
    uri: str
    bandwidth: Optional[int] = None
    resolution: Optional[str] = None


class MediaView:
    """The playable surface of a card."""

    def __init__(self, native_hls: bool = False):
        self.native_hls = native_hls
        self.src: Optional[str] = None
        self.current_time: float = 0.0
        self.engine: Optional["PlaybackEngine"] = None

    def can_play_type(self, mime_type: str) -> bool:
        return self.native_hls and mime_type == HLS_MIME_TYPE

    def can_play_native_hls(self) -> bool:
        return self.can_play_type(HLS_MIME_TYPE)


class PlaybackEngine:
    """Event-emitting base for streaming playback engines."""

    def __init__(self):
        self._handlers: Dict[str, List[Callable[..., None]]] = {}
        self.destroyed = False

    def on(self, event: str, handler: Callable[..., None]) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def emit(self, event: str, *args: Any) -> None:
        if self.destroyed:
            return
        for handler in list(self._handlers.get(event, [])):
            handler(*args)

    def is_supported(self) -> bool:
        return True

    def load_source(self, url: str) -> None:
        raise NotImplementedError

    def attach_media(self, view: MediaView) -> None:
        raise NotImplementedError

    def destroy(self) -> None:
        self.destroyed = True
        self._handlers.clear()


_ATTRIBUTE_RE = re.compile(r'([A-Z0-9-]+)=("[^"]*"|[^,]*)')


def parse_master_playlist(text: str, base_url: str) -> List[Variant]:
    """
    Parse an HLS playlist into its variants.

    A media playlist (no #EXT-X-STREAM-INF tags) yields a single variant
    pointing at base_url itself.
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines or lines[0] != "#EXTM3U":
        raise ValueError("Not an HLS playlist")

    variants = []
    pending: Optional[Dict[str, str]] = None
    for line in lines[1:]:
        if line.startswith("#EXT-X-STREAM-INF:"):
            pending = {k: v.strip('"') for k, v in _ATTRIBUTE_RE.findall(line.split(":", 1)[1])}
        elif pending is not None and not line.startswith("#"):
            bandwidth = pending.get("BANDWIDTH")
            variants.append(Variant(
                uri=urljoin(base_url, line),
                bandwidth=int(bandwidth) if bandwidth and bandwidth.isdigit() else None,
                resolution=pending.get("RESOLUTION")
            ))
            pending = None

    return variants or [Variant(uri=base_url)]


class HlsPlaybackEngine(PlaybackEngine):
    """
    Fetches the HLS manifest once both a source and a view are set.

    Owns its httpx client unless one is injected; destroy() cancels the
    pending load and releases the client.
    """

    def __init__(
        self,
        http: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        super().__init__()
        self._http = http
        self._transport = transport
        self._owns_http = http is None
        self._source: Optional[str] = None
        self._view: Optional[MediaView] = None
        self._load_task: Optional[asyncio.Task] = None
        self._close_task: Optional[asyncio.Task] = None
        self.variants: List[Variant] = []

    def load_source(self, url: str) -> None:
        self._source = url
        self._maybe_load()

    def attach_media(self, view: MediaView) -> None:
        self._view = view
        view.engine = self
        self._maybe_load()

    def _maybe_load(self) -> None:
        if self.destroyed or not self._source or self._view is None or self._load_task is not None:
            return
        self._load_task = asyncio.get_running_loop().create_task(self._load(self._source))

    async def _load(self, url: str) -> None:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=30.0, transport=self._transport)
        try:
            response = await self._http.get(url)
            response.raise_for_status()
            self.variants = parse_master_playlist(response.text, str(response.url))
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"Failed to load HLS manifest {url}: {e}")
            self.emit(PlaybackEvents.ERROR, e)
            return

        if self._view is not None:
            self._view.src = url
        self.emit(PlaybackEvents.MANIFEST_PARSED, self.variants)

    def destroy(self) -> None:
        if self.destroyed:
            return
        super().destroy()
        if self._load_task is not None and not self._load_task.done():
            self._load_task.cancel()
        if self._view is not None and self._view.engine is self:
            self._view.engine = None
        if self._owns_http and self._http is not None:
            http, self._http = self._http, None
            try:
                self._close_task = asyncio.get_running_loop().create_task(http.aclose())
            except RuntimeError:
                # no running loop; the client is dropped unclosed
                pass
