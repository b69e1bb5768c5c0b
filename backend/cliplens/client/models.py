"""
Transient, UI-scoped data model for the search client.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple

from cliplens.core.constants import Placeholders


@dataclass(frozen=True)
class SearchQuery:
    """One submitted search; immutable once sent."""
    index_id: str
    prompt_text: str
    credential: Optional[str] = None


@dataclass(frozen=True)
class ClipMatch:
    """A time-bounded segment of a source video returned by search."""
    video_id: str
    start: float
    end: float
    confidence: str
    thumbnail_url: str = ""

    @classmethod
    def from_provider(cls, data: Dict[str, Any]) -> "ClipMatch":
        return cls(
            video_id=data["video_id"],
            start=float(data.get("start") or 0),
            end=float(data.get("end") or 0),
            confidence=str(data.get("confidence") or ""),
            thumbnail_url=data.get("thumbnail_url") or "",
        )


@dataclass(frozen=True)
class SearchResultSet:
    """Ordered clips produced by one search call. Never mutated."""
    clips: Tuple[ClipMatch, ...] = ()

    @classmethod
    def from_envelope(cls, envelope: Dict[str, Any]) -> "SearchResultSet":
        return cls(clips=tuple(ClipMatch.from_provider(item) for item in envelope.get("data") or []))

    def __len__(self) -> int:
        return len(self.clips)

    def __iter__(self) -> Iterator[ClipMatch]:
        return iter(self.clips)

    def __getitem__(self, index: int) -> ClipMatch:
        return self.clips[index]


class StreamStatus(str, Enum):
    PROCESSING = "processing"
    READY = "ready"
    FAILED = "stream-failed"


class AnalysisStatus(str, Enum):
    ANALYZING = "analyzing"
    ANALYZED = "analyzed"
    FAILED = "analysis-failed"


@dataclass
class ClipHydrationState:
    """Visual state of one result card, owned exclusively by its controller."""
    stream_url: Optional[str] = None
    title: str = Placeholders.TITLE_PENDING
    summary: str = Placeholders.SUMMARY_PENDING
    status_message: Optional[str] = Placeholders.STREAM_PENDING
    stream_status: StreamStatus = StreamStatus.PROCESSING
    analysis_status: AnalysisStatus = AnalysisStatus.ANALYZING

    @property
    def show_thumbnail(self) -> bool:
        """Thumbnail with spinner (or message) until the stream is ready."""
        return self.stream_status != StreamStatus.READY
