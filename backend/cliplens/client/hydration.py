"""
Clip hydration controller: the per-card state machine.

Each rendered result card owns one controller. On mount it runs two
independent tracks:

- Stream track: processing -> ready | stream-failed. Polls video info
  until the provider has finished transcoding and exposes an HLS URL.
  A missing URL or a 404 schedules exactly one retry after a fixed delay;
  any other failure is terminal.
- Metadata track: analyzing -> analyzed | analysis-failed. One analysis
  request, never retried; failure yields placeholder title and summary.

The tracks may finish in either order. unmount() invalidates the mount's
CancellationToken, cancels the pending retry timer and releases the
playback engine; responses arriving afterwards are dropped.
"""
import asyncio
import logging
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Set

from cliplens.client.api import ProxyApiClient, ProxyRequestError
from cliplens.client.models import AnalysisStatus, ClipHydrationState, ClipMatch, StreamStatus
from cliplens.client.playback import HlsPlaybackEngine, MediaView, PlaybackEngine, PlaybackEvents
from cliplens.client.scheduling import AsyncioScheduler, CancellationToken, Scheduler, TimerHandle
from cliplens.core.constants import ClientDefaults, Placeholders

logger = logging.getLogger(__name__)

StateListener = Callable[["ClipHydrationController"], None]


def stream_url_from(video_info: Optional[Dict[str, Any]]) -> Optional[str]:
    """Playable HLS URL from a provider video object, if transcoding is done."""
    if not isinstance(video_info, dict):
        return None
    hls = video_info.get("hls")
    if not isinstance(hls, dict):
        return None
    return hls.get("video_url") or None


def format_timestamp(seconds: float) -> str:
    """Render an offset as HH:MM:SS."""
    total = max(int(seconds), 0)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


class ClipHydrationController:
    """Owns the ClipHydrationState of exactly one rendered clip."""

    def __init__(
        self,
        clip: ClipMatch,
        index_id: str,
        api: ProxyApiClient,
        scheduler: Optional[Scheduler] = None,
        playback_factory: Optional[Callable[[], PlaybackEngine]] = None,
        view: Optional[MediaView] = None,
        poll_delay: float = ClientDefaults.STREAM_POLL_SECONDS
    ):
        self.clip = clip
        self.index_id = index_id
        self.api = api
        self.scheduler = scheduler or AsyncioScheduler()
        self.playback_factory = playback_factory or HlsPlaybackEngine
        self.view = view or MediaView()
        self.poll_delay = poll_delay
        self.key = clip.video_id

        self.state = ClipHydrationState()
        self._token: Optional[CancellationToken] = None
        self._retry_timer: Optional[TimerHandle] = None
        self._tasks: Set[asyncio.Task] = set()
        self._engine: Optional[PlaybackEngine] = None
        self._listeners: List[StateListener] = []

    # -- lifecycle ---------------------------------------------------------

    @property
    def mounted(self) -> bool:
        return self._token is not None and not self._token.cancelled

    @property
    def has_pending_retry(self) -> bool:
        return self._retry_timer is not None

    @property
    def engine(self) -> Optional[PlaybackEngine]:
        return self._engine

    def mount(self) -> None:
        """Start both hydration tracks. Must be called from a running loop."""
        if self.mounted:
            return

        token = CancellationToken()
        self._token = token
        self.state = ClipHydrationState()
        logger.debug(f"Mounting card {self.key} ({self.index_id}/{self.clip.video_id})")

        self._spawn(self._fetch_stream(token))
        self._spawn(self._analyze(token))

    def unmount(self) -> None:
        """Tear down synchronously: no timer, no engine, no late updates."""
        if self._token is None:
            return

        self._token.cancel()
        self._token = None

        if self._retry_timer is not None:
            self._retry_timer.cancel()
            self._retry_timer = None

        if self._engine is not None:
            self._engine.destroy()
            self._engine = None

        logger.debug(f"Unmounted card {self.key}")

    def update_identity(self, index_id: str, video_id: Optional[str] = None) -> None:
        """Re-hydrate from scratch when the (index, video) pair changes."""
        video_id = video_id or self.clip.video_id
        if index_id == self.index_id and video_id == self.clip.video_id:
            return

        was_mounted = self.mounted
        self.unmount()
        self.index_id = index_id
        self.clip = replace(self.clip, video_id=video_id)
        if was_mounted:
            self.mount()

    async def settle(self) -> None:
        """Wait until no request of this controller is in flight."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    # -- internals ---------------------------------------------------------

    def _spawn(self, coro) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # Stream track

    async def _fetch_stream(self, token: CancellationToken) -> None:
        try:
            video_info = await self.api.get_video(self.index_id, self.clip.video_id)
        except ProxyRequestError as e:
            if token.cancelled:
                return
            if e.is_not_found:
                self._schedule_retry(token)
            else:
                self._fail_stream(e)
            return
        except Exception as e:
            if not token.cancelled:
                self._fail_stream(e)
            return

        if token.cancelled:
            return

        url = stream_url_from(video_info)
        if url:
            self._set_stream_ready(url, token)
        else:
            self._schedule_retry(token)

    def _schedule_retry(self, token: CancellationToken) -> None:
        if self._retry_timer is not None:
            return
        logger.debug(f"Card {self.key} still processing, retrying in {self.poll_delay}s")
        self._retry_timer = self.scheduler.call_later(self.poll_delay, lambda: self._on_retry(token))

    def _on_retry(self, token: CancellationToken) -> None:
        if token.cancelled:
            return
        self._retry_timer = None
        self._spawn(self._fetch_stream(token))

    def _fail_stream(self, error: Exception) -> None:
        logger.warning(f"Stream lookup failed for card {self.key}: {error}")
        self.state.stream_status = StreamStatus.FAILED
        self.state.status_message = Placeholders.STREAM_FAILED
        self._notify()

    def _set_stream_ready(self, url: str, token: CancellationToken) -> None:
        self.state.stream_url = url
        self.state.stream_status = StreamStatus.READY
        self.state.status_message = None
        logger.debug(f"Card {self.key} stream ready: {url}")
        self._attach_playback(url, token)
        self._notify()

    def _attach_playback(self, url: str, token: CancellationToken) -> None:
        engine = self.playback_factory()
        start = self.clip.start

        if engine.is_supported():
            def seek_to_start(*_):
                if not token.cancelled:
                    self.view.current_time = start

            engine.on(PlaybackEvents.MANIFEST_PARSED, seek_to_start)
            engine.load_source(url)
            engine.attach_media(self.view)
            self._engine = engine
        elif self.view.can_play_native_hls():
            self.view.src = url
            self.view.current_time = start

    # Metadata track

    async def _analyze(self, token: CancellationToken) -> None:
        try:
            analysis = await self.api.analyze(self.index_id, self.clip.video_id)
        except Exception as e:
            logger.warning(f"Error analyzing video {self.clip.video_id}: {e}")
            if token.cancelled:
                return
            self.state.title = Placeholders.TITLE
            self.state.summary = Placeholders.SUMMARY
            self.state.analysis_status = AnalysisStatus.FAILED
            self._notify()
            return

        if token.cancelled:
            return

        analysis = analysis if isinstance(analysis, dict) else {}
        self.state.title = analysis.get("title") or Placeholders.TITLE
        self.state.summary = analysis.get("summary") or Placeholders.SUMMARY
        self.state.analysis_status = AnalysisStatus.ANALYZED
        self._notify()

    # Presentation helpers

    @property
    def time_range(self) -> str:
        return f"{format_timestamp(self.clip.start)} - {format_timestamp(self.clip.end)}"
