"""Resolve free-form user input into a canonical YouTube video ID."""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import parse_qs, urlparse

from yt_transcript.errors import InvalidInput

_VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")

# Embed, /v/, /e/, watch?...&v= and youtu.be shapes that urlparse misses,
# e.g. URLs pasted without a scheme.
_FALLBACK_RE = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)"
    r"([A-Za-z0-9_-]{11})(?![A-Za-z0-9_-])"
)


def _from_url(value: str) -> Optional[str]:
    parsed = urlparse(value)
    host = (parsed.hostname or "").lower()
    if not parsed.scheme or not host:
        return None
    video_id = ""
    if host == "youtu.be":
        video_id = parsed.path.lstrip("/").split("/")[0]
    elif "youtube.com" in host:
        if parsed.path.startswith("/shorts/"):
            video_id = parsed.path[len("/shorts/"):].split("/")[0]
        else:
            video_id = (parse_qs(parsed.query).get("v") or [""])[0]
    return video_id if _VIDEO_ID_RE.fullmatch(video_id) else None


def extract_video_id(value: str) -> str:
    """Extract the YouTube video ID from a bare ID or a URL.

    Args:
        value: An 11-character video ID, or a ``youtu.be``,
            ``youtube.com/watch?v=``, ``youtube.com/shorts/`` or embed URL.

    Returns:
        The video ID.

    Raises:
        InvalidInput: If ``value`` is empty or no ID can be found.

    Examples::

        >>> extract_video_id("https://youtu.be/dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
        >>> extract_video_id("https://www.youtube.com/shorts/dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
    """
    value = (value or "").strip()
    if not value:
        raise InvalidInput("YouTube URL or ID is required")

    if _VIDEO_ID_RE.fullmatch(value):
        return value

    video_id = _from_url(value)
    if video_id:
        return video_id

    match = _FALLBACK_RE.search(value)
    if match:
        return match.group(1)

    raise InvalidInput(f"Could not extract video ID from: {value}")
