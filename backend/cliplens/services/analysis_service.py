"""
Video analysis service: a title and a one-paragraph summary per video.

The two provider calls are independent, so they are fanned out together
and joined under a single timeout budget. A sub-call that fails or returns
nothing degrades to a placeholder; the request only fails when both
sub-calls fail or the budget runs out.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from cliplens.core.config import settings
from cliplens.core.constants import ErrorMessages, Placeholders
from cliplens.core.errors import UpstreamError
from cliplens.prompts import SUMMARY_PROMPT
from cliplens.services.twelvelabs_service import TwelveLabsService

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Title and summary for one video."""
    title: str
    summary: str


class AnalysisService:
    """Runs gist and summarize concurrently against the provider."""

    def __init__(
        self,
        provider: TwelveLabsService,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None
    ):
        self.provider = provider
        self.timeout = timeout if timeout is not None else settings.ANALYSIS_TIMEOUT_SECONDS
        self.poll_interval = poll_interval if poll_interval is not None else settings.TASK_POLL_INTERVAL_SECONDS

    async def _fan_out(self, video_id: str):
        return await asyncio.gather(
            self.provider.generate_title(video_id, poll_interval=self.poll_interval),
            self.provider.generate_summary(video_id, SUMMARY_PROMPT, poll_interval=self.poll_interval),
            return_exceptions=True
        )

    async def analyze(self, index_id: str, video_id: str) -> AnalysisResult:
        """
        Generate title and summary for a video.

        Args:
            index_id: Index the video belongs to (used for logging only;
                the provider addresses videos by id alone)
            video_id: Provider video id

        Returns:
            AnalysisResult with placeholders substituted for missing parts
        """
        try:
            title, summary = await asyncio.wait_for(self._fan_out(video_id), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"Analysis of video {video_id} in {index_id} timed out after {self.timeout}s")
            raise UpstreamError(
                ErrorMessages.ANALYZE_FAILED,
                details=f"Timed out after {self.timeout} seconds"
            )

        title_failed = isinstance(title, BaseException)
        summary_failed = isinstance(summary, BaseException)

        if title_failed and summary_failed:
            logger.error(f"Analysis of video {video_id} failed: title={title!r}, summary={summary!r}")
            raise UpstreamError(
                ErrorMessages.ANALYZE_FAILED,
                details={"title": _describe(title), "summary": _describe(summary)}
            )

        if title_failed:
            logger.warning(f"Title generation failed for video {video_id}: {title!r}")
            title = None
        if summary_failed:
            logger.warning(f"Summary generation failed for video {video_id}: {summary!r}")
            summary = None

        return AnalysisResult(
            title=title or Placeholders.TITLE,
            summary=summary or Placeholders.SUMMARY
        )


def _describe(error: BaseException):
    """Details payload for one failed sub-call."""
    details = getattr(error, "details", None)
    message = getattr(error, "message", None) or str(error)
    if details is None:
        return message
    return {"message": message, "details": details}
