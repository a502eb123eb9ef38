"""
Process-wide configuration for the transcript server.

Values are read once at import time.  A handful of them can be
overridden through environment variables, which is mostly useful when
YouTube starts throttling a particular network and you want a gentler
retry cadence without editing code.
"""

from __future__ import annotations

import os


# Base URL for YouTube pages and public endpoints
YOUTUBE_BASE_URL = "https://www.youtube.com"
WATCH_URL = YOUTUBE_BASE_URL + "/watch?v={video_id}"
OEMBED_URL = YOUTUBE_BASE_URL + "/oembed"

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36"
)
DEFAULT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

# Retry policy for every GET issued by yt_transcript.transport
MAX_RETRIES = int(os.getenv("YT_TRANSCRIPT_MAX_RETRIES", "3"))
RETRY_DELAY = float(os.getenv("YT_TRANSCRIPT_RETRY_DELAY", "1.0"))
REQUEST_TIMEOUT = float(os.getenv("YT_TRANSCRIPT_TIMEOUT", "10"))

# Alternate timedtext formats, in the order they are tried
FALLBACK_FORMATS = ("srv3", "json3", "srv1")

DEFAULT_TITLE = "Untitled Video"

LOG_LEVEL = os.getenv("YT_TRANSCRIPT_LOG_LEVEL", "INFO")
