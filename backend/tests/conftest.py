"""
Pytest configuration and fixtures for testing.
"""
from typing import Callable, List
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from cliplens.client.api import ClientConfig
from cliplens.client.models import ClipMatch
from cliplens.client.playback import PlaybackEngine
from cliplens.client.scheduling import Scheduler, TimerHandle
from cliplens.core.config import Settings, get_settings
from cliplens.main import app
from cliplens.services.twelvelabs_service import TwelveLabsService

PROVIDER_BASE_URL = "https://provider.test/v1.3"


class FakeTimer(TimerHandle):
    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler(Scheduler):
    """Virtual clock: timers only fire when the test advances time."""

    def __init__(self):
        self.now = 0.0
        self.timers: List[FakeTimer] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> List[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def advance(self, seconds: float) -> int:
        """Move the clock and fire every due timer; returns how many fired."""
        self.now += seconds
        due = sorted((t for t in self.pending if t.when <= self.now), key=lambda t: t.when)
        for timer in due:
            timer.fired = True
            timer.callback()
        return len(due)


class FakePlaybackEngine(PlaybackEngine):
    """Records what the card asked of it; tests emit events by hand."""

    def __init__(self, supported: bool = True):
        super().__init__()
        self.supported = supported
        self.source = None
        self.view = None

    def is_supported(self) -> bool:
        return self.supported

    def load_source(self, url: str) -> None:
        self.source = url

    def attach_media(self, view) -> None:
        self.view = view


@pytest.fixture
def fake_scheduler():
    return FakeScheduler()


@pytest.fixture
def clip():
    return ClipMatch(
        video_id="vid-1",
        start=12.5,
        end=20.0,
        confidence="high",
        thumbnail_url="https://thumbs.test/vid-1.jpg"
    )


@pytest.fixture
def fake_api():
    """Proxy client double; tests set side effects per call."""
    api = MagicMock()
    api.config = ClientConfig()
    api.search = AsyncMock()
    api.engineer_prompt = AsyncMock()
    api.analyze = AsyncMock(return_value={"title": "Beach Day", "summary": "A dog runs on the beach."})
    api.get_video = AsyncMock(return_value={"_id": "vid-1"})
    return api


@pytest.fixture
def sample_search_envelope():
    """Provider search response with two clips."""
    return {
        "data": [
            {
                "score": 84.2,
                "start": 12.5,
                "end": 20.0,
                "video_id": "vid-1",
                "confidence": "high",
                "thumbnail_url": "https://thumbs.test/vid-1.jpg"
            },
            {
                "score": 61.0,
                "start": 3.0,
                "end": 9.25,
                "video_id": "vid-2",
                "confidence": "medium",
                "thumbnail_url": "https://thumbs.test/vid-2.jpg"
            },
        ],
        "page_info": {"limit_per_page": 10, "total_results": 2}
    }


@pytest.fixture
def server_settings():
    """Settings with a server-held provider key and no .env lookup."""
    return Settings(
        _env_file=None,
        TWELVELABS_API_KEY="server-key",
        OPENAI_API_KEY="openai-key"
    )


@pytest.fixture
def client(server_settings):
    """Test client with the settings dependency overridden."""
    app.dependency_overrides[get_settings] = lambda: server_settings

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def provider_factory(handler: Callable[[httpx.Request], httpx.Response], seen_keys: list = None):
    """Build a TwelveLabsService stand-in whose HTTP goes to handler."""
    def build(api_key: str, **kwargs) -> TwelveLabsService:
        if seen_keys is not None:
            seen_keys.append(api_key)
        return TwelveLabsService(
            api_key,
            base_url=PROVIDER_BASE_URL,
            transport=httpx.MockTransport(handler)
        )
    return build


@pytest.fixture
def make_provider():
    """Fixture form of provider_factory."""
    return provider_factory


@pytest.fixture
def playback_engine_class():
    return FakePlaybackEngine
