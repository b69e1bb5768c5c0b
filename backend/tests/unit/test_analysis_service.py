"""
Unit tests for AnalysisService.
"""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from cliplens.core.errors import UpstreamError
from cliplens.services.analysis_service import AnalysisService


def make_provider(title=None, summary=None):
    provider = MagicMock()
    provider.generate_title = AsyncMock(return_value=title) if not callable(title) else title
    provider.generate_summary = AsyncMock(return_value=summary) if not callable(summary) else summary
    return provider


class TestAnalysisService:
    """Tests for the title/summary fan-out."""

    @pytest.mark.asyncio
    async def test_returns_title_and_summary(self):
        provider = make_provider(title="Beach Day", summary="A dog runs on the beach.")
        service = AnalysisService(provider, timeout=5, poll_interval=0)

        result = await service.analyze("idx-1", "vid-1")

        assert result.title == "Beach Day"
        assert result.summary == "A dog runs on the beach."
        provider.generate_title.assert_awaited_once_with("vid-1", poll_interval=0)
        summary_call = provider.generate_summary.await_args
        assert summary_call.args[0] == "vid-1"
        assert "one-paragraph" in summary_call.args[1]

    @pytest.mark.asyncio
    async def test_sub_calls_run_concurrently(self):
        title_started = asyncio.Event()
        summary_started = asyncio.Event()

        # Each call waits for the other to start; sequential execution would deadlock
        async def title(video_id, poll_interval=None):
            title_started.set()
            await summary_started.wait()
            return "Concurrent Title"

        async def summary(video_id, prompt, poll_interval=None):
            summary_started.set()
            await title_started.wait()
            return "Concurrent summary."

        service = AnalysisService(make_provider(title=title, summary=summary), timeout=1)

        result = await service.analyze("idx-1", "vid-1")

        assert result.title == "Concurrent Title"
        assert result.summary == "Concurrent summary."

    @pytest.mark.asyncio
    async def test_missing_parts_become_placeholders(self):
        service = AnalysisService(make_provider(title=None, summary=""), timeout=5)

        result = await service.analyze("idx-1", "vid-1")

        assert result.title == "Untitled Video"
        assert result.summary == "Summary could not be generated."

    @pytest.mark.asyncio
    async def test_one_failed_part_degrades(self):
        provider = make_provider(summary="Still summarized.")
        provider.generate_title = AsyncMock(side_effect=UpstreamError("Failed to analyze video"))
        service = AnalysisService(provider, timeout=5)

        result = await service.analyze("idx-1", "vid-1")

        assert result.title == "Untitled Video"
        assert result.summary == "Still summarized."

    @pytest.mark.asyncio
    async def test_both_failed_raises_with_details(self):
        provider = make_provider()
        provider.generate_title = AsyncMock(
            side_effect=UpstreamError("Failed to analyze video", details={"code": "gist_failed"})
        )
        provider.generate_summary = AsyncMock(side_effect=RuntimeError("boom"))
        service = AnalysisService(provider, timeout=5)

        with pytest.raises(UpstreamError) as exc_info:
            await service.analyze("idx-1", "vid-1")

        assert exc_info.value.status_code == 500
        assert exc_info.value.details == {
            "title": {"message": "Failed to analyze video", "details": {"code": "gist_failed"}},
            "summary": "boom",
        }

    @pytest.mark.asyncio
    async def test_single_budget_for_the_pair(self):
        async def slow(*args, **kwargs):
            await asyncio.sleep(10)
            return "never"

        service = AnalysisService(make_provider(title=slow, summary=slow), timeout=0.05)

        with pytest.raises(UpstreamError) as exc_info:
            await service.analyze("idx-1", "vid-1")

        assert "Timed out" in exc_info.value.details
