"""
Fetch the transcript of a YouTube video.

This module ties the pipeline together: the input is resolved to a
video ID, the watch page is scanned for caption tracks, the chosen
track's timedtext URL is tried in several formats until one parses to
at least one segment, and the video title is looked up through the
public oEmbed endpoint at the same time.

Functions:
    fetch_transcript(value: str, lang: Optional[str]) -> TranscriptResult:
        Resolve ``value``, download captions and title, return both.

    fetch_video_title(video_id: str) -> str:
        Look up a video's title, falling back to a placeholder.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Tuple
from urllib.parse import urlencode

from yt_transcript import config
from yt_transcript.candidates import build_candidates, extract_fmt
from yt_transcript.errors import (
    NetworkFailure,
    NoUsableTranscript,
    ParseError,
    TranscriptError,
    TranscriptFetchError,
)
from yt_transcript.models import CaptionTrack, TimedSegment, TranscriptResult
from yt_transcript.parsers import is_json_payload, parse_payload
from yt_transcript.text import decode_html
from yt_transcript.tracks import discover_track
from yt_transcript.transport import build_headers, fetch_with_retry
from yt_transcript.video_id import extract_video_id

logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 200


async def fetch_video_title(video_id: str) -> str:
    """Return the video's title from oEmbed, or a placeholder on any error."""
    watch_url = config.WATCH_URL.format(video_id=video_id)
    url = f"{config.OEMBED_URL}?{urlencode({'url': watch_url, 'format': 'json'})}"
    try:
        response = await fetch_with_retry(url, build_headers(), retries=0)
        title = response.json().get("title")
        if not isinstance(title, str) or not title.strip():
            raise ValueError("oEmbed response has no title")
        return decode_html(title)
    except Exception as exc:  # noqa: BLE001
        logger.error("Failed to fetch video title for %s: %s", video_id, exc)
        return config.DEFAULT_TITLE


async def fetch_track_content(
    track: CaptionTrack,
    lang: Optional[str] = None,
) -> List[TimedSegment]:
    """Download a track's captions, trying each format candidate in turn.

    Candidates are attempted one at a time; the first that parses to at
    least one segment wins.  A candidate that fails to download or to
    parse is logged and skipped.

    Raises:
        NoUsableTranscript: If no candidate produced any segments.
    """
    headers = build_headers(lang, referer=True)
    candidates = build_candidates(track.base_url)
    formats = [candidate.fmt for candidate in candidates]
    logger.info(
        "[transcripts] track=%s candidates=%s",
        track.language_code, " -> ".join(formats),
    )

    last_snippet = ""
    last_error: Optional[TranscriptError] = None

    for candidate in candidates:
        try:
            response = await fetch_with_retry(candidate.url, headers)
            payload = response.text.strip()
            logger.info(
                "[transcripts] attempt lang=%s fmt=%s payloadLength=%d",
                track.language_code, candidate.fmt, len(payload),
            )
            if not payload:
                continue
            last_snippet = payload[:SNIPPET_LENGTH]

            segments = parse_payload(payload, track.language_code)
            logger.info(
                "[transcripts] track=%s fmt=%s payloadType=%s segments=%d",
                track.language_code, candidate.fmt,
                "json" if is_json_payload(payload) else "xml", len(segments),
            )
            if segments:
                return segments
        except (NetworkFailure, ParseError) as exc:
            last_error = exc
            logger.warning(
                "[transcripts] track=%s fmt=%s attemptError=%s",
                track.language_code, candidate.fmt, exc,
            )

    tried = ", ".join(formats)
    snippet = f"\npayloadSnippet={last_snippet}" if last_snippet else ""
    if last_error is not None:
        raise NoUsableTranscript(
            f"Failed to fetch transcript content after trying fmts=[{tried}]: "
            f"{last_error}{snippet}",
            formats=formats,
        ) from last_error
    raise NoUsableTranscript(
        f"No transcripts found for track {track.language_code} "
        f"after trying fmts=[{tried}]{snippet}",
        formats=formats,
    )


async def _fetch_segments(video_id: str, lang: Optional[str]) -> Tuple[CaptionTrack, List[TimedSegment]]:
    track = await discover_track(video_id, lang)
    logger.info(
        "[transcripts] video=%s selectedTrack=%s fmt=%s",
        video_id, track.language_code, extract_fmt(track.base_url) or "auto",
    )
    segments = await fetch_track_content(track, lang)
    return track, segments


async def fetch_transcript(value: str, lang: Optional[str] = None) -> TranscriptResult:
    """Fetch the transcript and title of a YouTube video.

    Args:
        value: Video ID or URL.
        lang: Exact caption language code to use.  When omitted the first
            track YouTube lists is used.

    Returns:
        A :class:`TranscriptResult` whose segments are sorted by start time.

    Raises:
        TranscriptError: A classified failure; unexpected exceptions are
            wrapped in :class:`TranscriptFetchError`.
    """
    try:
        video_id = extract_video_id(value)
        title_task = asyncio.ensure_future(fetch_video_title(video_id))
        try:
            (track, segments), title = await asyncio.gather(
                _fetch_segments(video_id, lang),
                title_task,
            )
        finally:
            # no-op once the title has arrived
            title_task.cancel()
    except TranscriptError:
        raise
    except Exception as exc:
        raise TranscriptFetchError(f"Failed to fetch transcripts: {exc}") from exc

    return TranscriptResult(
        video_id=video_id,
        title=title,
        language_code=track.language_code,
        segments=sorted(segments, key=lambda segment: segment.start),
    )
