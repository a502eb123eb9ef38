"""Value objects passed between the stages of the transcript pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class TimedSegment:
    """One caption cue: decoded text plus its timing in seconds."""

    text: str
    language_code: Optional[str]
    start: float
    duration: float

    @property
    def end(self) -> float:
        return self.start + self.duration


@dataclass(frozen=True)
class CaptionTrack:
    """A caption track advertised on the watch page."""

    language_code: str
    base_url: str
    name: str = ""
    is_generated: bool = False


@dataclass(frozen=True)
class FetchCandidate:
    """One format variant of a track's timedtext URL."""

    url: str
    fmt: str


@dataclass(frozen=True)
class FormatOptions:
    """Controls how segments are rendered into text."""

    enable_paragraphs: bool = False
    time_gap_threshold: float = 2.0
    max_sentences_per_paragraph: int = 5


@dataclass(frozen=True)
class TranscriptResult:
    """Segments for one video together with its title."""

    video_id: str
    title: str
    language_code: Optional[str]
    segments: List[TimedSegment] = field(default_factory=list)

