"""
Pure text helpers for caption payloads.

Nothing in here performs I/O.  The functions decode the handful of HTML
entities YouTube leaves in caption text, tidy up punctuation and
whitespace, and optionally group cues into paragraphs.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence

from yt_transcript.models import FormatOptions, TimedSegment

HTML_ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&apos;": "'",
    "&#x27;": "'",
    "&#x2F;": "/",
    "&#x2f;": "/",
    "&#47;": "/",
    "&#xa0;": " ",
    "&nbsp;": " ",
}

_ENTITY_RE = re.compile(r"&[^;\s]+;")
_REPEATED_TERMINATOR_RE = re.compile(r"([.?!])(?:\s*[.?!])+")
_WHITESPACE_RE = re.compile(r"\s+")
_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([,.?!])")
_AFTER_QUESTION_RE = re.compile(r"([?!])(?=\w)")
_UPPERCASE_START_RE = re.compile(r"^[A-Z]")


def decode_html(text: str) -> str:
    """Replace known HTML entities and non-breaking spaces, then trim.

    Unknown entities are left untouched.
    """
    decoded = _ENTITY_RE.sub(lambda m: HTML_ENTITIES.get(m.group(0), m.group(0)), text)
    return decoded.replace("\u00a0", " ").strip()


def normalize_text(text: str) -> str:
    """Flatten ``text`` into a single tidy line.

    Newlines become spaces, runs of sentence terminators collapse to the
    first one, whitespace runs collapse, spaces before punctuation are
    removed and ``?``/``!`` are followed by exactly one space.  Applying
    the function to its own output returns the same string.
    """
    text = text.replace("\n", " ")
    text = _REPEATED_TERMINATOR_RE.sub(r"\1", text)
    text = _WHITESPACE_RE.sub(" ", text)
    text = _SPACE_BEFORE_PUNCT_RE.sub(r"\1", text)
    text = _AFTER_QUESTION_RE.sub(r"\1 ", text)
    return text.strip()


def format_time(seconds: float) -> str:
    """Format seconds as ``HH:MM:SS.mmm``."""
    total_ms = int(round(max(seconds, 0) * 1000))
    hours, rem = divmod(total_ms, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    secs, ms = divmod(rem, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{ms:03d}"


def calculate_total_duration(segments: Iterable[TimedSegment]) -> float:
    """Return the end time of the last-ending segment (0 for no segments)."""
    return max((segment.end for segment in segments), default=0.0)


def _paragraphs(segments: Sequence[TimedSegment], options: FormatOptions) -> List[str]:
    paragraphs: List[str] = []
    current: List[str] = []
    last_end = 0.0

    for segment in segments:
        text = decode_html(segment.text)
        if not text:
            continue

        gap = segment.start - last_end
        previous = current[-1] if current else ""
        new_paragraph = (
            gap > options.time_gap_threshold
            or (previous.endswith(".") and _UPPERCASE_START_RE.match(text) is not None)
            or len(current) >= options.max_sentences_per_paragraph
        )
        if new_paragraph and current:
            paragraphs.append(normalize_text(" ".join(current)))
            current = []

        current.append(text)
        last_end = segment.end

    if current:
        paragraphs.append(normalize_text(" ".join(current)))
    return paragraphs


def format_transcript_text(
    segments: Sequence[TimedSegment],
    options: Optional[FormatOptions] = None,
) -> str:
    """Render segments as flat prose or as blank-line separated paragraphs.

    Args:
        segments: Segments in playback order.
        options: Formatting switches.  Defaults to flat mode.

    Returns:
        The formatted transcript.  Paragraph mode starts a new paragraph
        when the pause since the previous cue exceeds
        ``time_gap_threshold``, when the previous cue ends a sentence and
        the next one starts with a capital letter, or when the current
        paragraph already holds ``max_sentences_per_paragraph`` cues.
    """
    options = options or FormatOptions()
    if not options.enable_paragraphs:
        texts = [decode_html(segment.text) for segment in segments]
        return normalize_text(" ".join(text for text in texts if text))
    return "\n\n".join(_paragraphs(segments, options))
