"""
Caption track discovery from the YouTube watch page.

The watch page embeds the player response as inline JavaScript.  Its
``captions`` object lists one entry per caption track with a
``languageCode`` and a ``baseUrl`` pointing at the timedtext endpoint.
There is no documented way to get at it, so extraction is a short list
of independent strategies tried in order.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Dict, List, Optional, Sequence

from yt_transcript import config
from yt_transcript.errors import LanguageNotAvailable, NoTranscriptData, VideoUnavailable
from yt_transcript.models import CaptionTrack
from yt_transcript.transport import build_headers, fetch_with_retry, raise_if_rate_limited

logger = logging.getLogger(__name__)

CAPTIONS_MARKER = '"captions":'
VIDEO_DETAILS_BOUNDARY = ',"videoDetails'
PLAYABILITY_MARKER = '"playabilityStatus":'

_RENDERER_RE = re.compile(r'"playerCaptionsTracklistRenderer"\s*:\s*(?=\{)')

Strategy = Callable[[str], Optional[List[Dict[str, Any]]]]


def _caption_tracks(renderer: Any) -> Optional[List[Dict[str, Any]]]:
    if not isinstance(renderer, dict):
        return None
    tracks = renderer.get("captionTracks")
    if not isinstance(tracks, list) or not tracks:
        return None
    return tracks


def _tracks_from_captions_field(html: str) -> Optional[List[Dict[str, Any]]]:
    """Cut the ``"captions":`` object out of the page and decode it."""
    parts = html.split(CAPTIONS_MARKER, 1)
    if len(parts) < 2:
        return None
    raw = parts[1].split(VIDEO_DETAILS_BOUNDARY, 1)[0].replace("\n", "", 1)
    try:
        captions = json.loads(raw)
    except ValueError:
        logger.debug("[transcripts] captions field present but not decodable")
        return None
    if not isinstance(captions, dict):
        return None
    return _caption_tracks(captions.get("playerCaptionsTracklistRenderer"))


def _tracks_from_renderer(html: str) -> Optional[List[Dict[str, Any]]]:
    """Find the tracklist renderer object directly and decode it in place."""
    match = _RENDERER_RE.search(html)
    if not match:
        return None
    try:
        renderer, _ = json.JSONDecoder().raw_decode(html, match.end())
    except ValueError:
        logger.debug("[transcripts] tracklist renderer present but not decodable")
        return None
    return _caption_tracks(renderer)


EXTRACTION_STRATEGIES: Sequence[Strategy] = (
    _tracks_from_captions_field,
    _tracks_from_renderer,
)


def _track_name(raw: Dict[str, Any]) -> str:
    name = raw.get("name")
    if not isinstance(name, dict):
        return ""
    if isinstance(name.get("simpleText"), str):
        return name["simpleText"]
    runs = name.get("runs")
    if isinstance(runs, list):
        return "".join(run.get("text", "") for run in runs if isinstance(run, dict))
    return ""


def _to_track(raw: Any) -> Optional[CaptionTrack]:
    if not isinstance(raw, dict):
        return None
    language_code = raw.get("languageCode")
    base_url = raw.get("baseUrl")
    if not isinstance(language_code, str) or not isinstance(base_url, str) or not base_url:
        return None
    return CaptionTrack(
        language_code=language_code,
        base_url=base_url,
        name=_track_name(raw),
        is_generated=raw.get("kind") == "asr",
    )


def extract_tracks(html: str, video_id: str) -> List[CaptionTrack]:
    """Return the caption tracks advertised in a watch page.

    Raises:
        VideoUnavailable: The page has no player at all.
        NoTranscriptData: The page has a player but no caption tracks.
    """
    for strategy in EXTRACTION_STRATEGIES:
        raw_tracks = strategy(html)
        if not raw_tracks:
            continue
        tracks = [track for track in map(_to_track, raw_tracks) if track is not None]
        if tracks:
            return tracks

    if PLAYABILITY_MARKER not in html:
        raise VideoUnavailable(f"Video {video_id} is unavailable")
    raise NoTranscriptData(
        f"Could not find transcript data for video {video_id}. Response size: {len(html)}"
    )


def select_track(
    tracks: Sequence[CaptionTrack],
    lang: Optional[str],
    video_id: str,
) -> CaptionTrack:
    """Pick the track matching ``lang`` exactly, or the first one.

    Without a language the first listed track is returned.  YouTube's
    ordering is undocumented, so treat that as a best-effort default.
    """
    available = [track.language_code for track in tracks]
    logger.info(
        "[transcripts] video=%s availableLangs=[%s] requested=%s",
        video_id, ", ".join(available), lang or "default",
    )
    if not lang:
        return tracks[0]
    for track in tracks:
        if track.language_code == lang:
            return track
    raise LanguageNotAvailable(
        f"Language {lang} not available for video {video_id}. "
        f"Available languages: {', '.join(available)}",
        available=available,
    )


async def fetch_watch_page(video_id: str, lang: Optional[str] = None) -> str:
    """Download the watch page, refusing anti-automation responses."""
    url = config.WATCH_URL.format(video_id=video_id)
    response = await fetch_with_retry(url, build_headers(lang), check_rate_limit=True)
    html = response.text
    raise_if_rate_limited(html)
    logger.debug(
        "[transcripts] video=%s pageLength=%d containsCaptions=%s",
        video_id, len(html), CAPTIONS_MARKER in html,
    )
    return html


async def list_tracks(video_id: str, lang: Optional[str] = None) -> List[CaptionTrack]:
    html = await fetch_watch_page(video_id, lang)
    return extract_tracks(html, video_id)


async def discover_track(video_id: str, lang: Optional[str] = None) -> CaptionTrack:
    """Fetch the watch page for ``video_id`` and choose a caption track."""
    tracks = await list_tracks(video_id, lang)
    return select_track(tracks, lang, video_id)
