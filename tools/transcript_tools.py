"""MCP tools for retrieving YouTube transcripts.

This module exposes three tools built on ``yt_transcript.video_transcript``:

* ``get_transcripts`` – the video's captions as readable text, either
  one flowing block or split into paragraphs, plus the title and some
  basic metadata.
* ``get_timed_transcript`` – the individual caption cues with their
  start times, for answering "when is X said" questions.
* ``list_transcript_languages`` – the caption tracks a video offers, so
  the model can pick a valid ``lang`` before fetching.

Example call:

.. code-block:: json

    {
      "url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
      "lang": "en",
      "enable_paragraphs": true
    }

Failures are reported as MCP errors carrying a human-readable message,
for example the list of available languages when ``lang`` is not one
of them.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from mcp.shared.exceptions import McpError

from server import mcp  # Shared FastMCP instance
from yt_transcript.errors import TranscriptError
from yt_transcript.models import FormatOptions
from yt_transcript.text import calculate_total_duration, format_time, format_transcript_text
from yt_transcript.tracks import list_tracks
from yt_transcript.video_id import extract_video_id
from yt_transcript.video_transcript import fetch_transcript


@mcp.tool()
async def get_transcripts(
    url: str,
    lang: Optional[str] = None,
    enable_paragraphs: bool = False,
    time_gap_threshold: float = 2.0,
    max_sentences_per_paragraph: int = 5,
) -> Dict[str, Any]:
    """Retrieve the transcript of a YouTube video as text.

    Args:
        url: YouTube video URL (``watch?v=``, ``youtu.be``, ``shorts`` or
            embed) or a bare 11-character video ID.
        lang: Caption language code such as ``en`` or ``fr``.  If
            omitted, YouTube's first listed track is used.
        enable_paragraphs: Split the text into paragraphs instead of
            returning a single block.
        time_gap_threshold: In paragraph mode, a pause longer than this
            many seconds starts a new paragraph.
        max_sentences_per_paragraph: In paragraph mode, the maximum
            number of caption cues per paragraph.

    Returns:
        A dictionary with ``video_id``, ``title``, ``language``,
        ``transcript`` (the formatted text), ``segment_count``,
        ``total_duration`` (seconds) and ``duration`` (``HH:MM:SS.mmm``).
    """
    try:
        result = await fetch_transcript(url, lang)
    except TranscriptError as exc:
        raise McpError(exc.to_error_data()) from exc

    options = FormatOptions(
        enable_paragraphs=enable_paragraphs,
        time_gap_threshold=time_gap_threshold,
        max_sentences_per_paragraph=max_sentences_per_paragraph,
    )
    total_duration = calculate_total_duration(result.segments)
    return {
        "video_id": result.video_id,
        "title": result.title,
        "language": result.language_code,
        "transcript": format_transcript_text(result.segments, options),
        "segment_count": len(result.segments),
        "total_duration": total_duration,
        "duration": format_time(total_duration),
    }


@mcp.tool()
async def get_timed_transcript(url: str, lang: Optional[str] = None) -> Dict[str, Any]:
    """Retrieve a YouTube transcript as timed caption cues.

    Args:
        url: YouTube video URL or bare video ID.
        lang: Caption language code; defaults to the first listed track.

    Returns:
        A dictionary with ``video_id``, ``title``, ``language`` and
        ``segments``: a list of ``{start, duration, timestamp, text}``
        entries in playback order, ``timestamp`` being ``start``
        formatted as ``HH:MM:SS.mmm``.
    """
    try:
        result = await fetch_transcript(url, lang)
    except TranscriptError as exc:
        raise McpError(exc.to_error_data()) from exc

    return {
        "video_id": result.video_id,
        "title": result.title,
        "language": result.language_code,
        "segments": [
            {
                "start": segment.start,
                "duration": segment.duration,
                "timestamp": format_time(segment.start),
                "text": segment.text,
            }
            for segment in result.segments
        ],
    }


@mcp.tool()
async def list_transcript_languages(url: str) -> Dict[str, Any]:
    """List the caption languages available for a YouTube video.

    Returns:
        A dictionary with ``video_id`` and ``languages``, each entry
        holding ``language_code``, ``name`` and ``is_generated`` (True for
        YouTube's automatic captions).
    """
    try:
        video_id = extract_video_id(url)
        tracks = await list_tracks(video_id)
    except TranscriptError as exc:
        raise McpError(exc.to_error_data()) from exc

    return {
        "video_id": video_id,
        "languages": [
            {
                "language_code": track.language_code,
                "name": track.name,
                "is_generated": track.is_generated,
            }
            for track in tracks
        ],
    }
