"""
Decoders for YouTube timedtext payloads.

The timedtext endpoint answers in different encodings depending on the
``fmt`` parameter and, occasionally, on what it feels like serving:

* ``json3`` – a JSON document with an ``events`` list, each event holding
  ``tStartMs``, ``dDurationMs`` and a list of ``segs`` with ``utf8`` text.
* ``srv1``/``srv3``/unspecified – XML built from
  ``<text start="…" dur="…">…</text>`` elements.

:func:`parse_payload` looks at the payload itself rather than the
requested format and hands it to the right decoder.  Both decoders
return segments sorted by start time; an empty list means the payload
held nothing usable.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, List, Optional

from yt_transcript.errors import ParseError
from yt_transcript.models import TimedSegment
from yt_transcript.text import decode_html

logger = logging.getLogger(__name__)

# Prefix Google prepends to JSON responses to defeat script inclusion
ANTI_HIJACK_PREFIX = ")]}'"

_TEXT_ELEMENT_RE = re.compile(r'<text start="([^"]+)" dur="([^"]+)"[^>]*>([^<]*)</text>')


def _seconds_from_ms(value: Any) -> float:
    """Convert a millisecond field to seconds, treating junk as zero."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number / 1000 if math.isfinite(number) else 0.0


def _event_text(event: dict) -> str:
    segs = event.get("segs")
    if isinstance(segs, list):
        text = "".join(
            seg["utf8"] for seg in segs
            if isinstance(seg, dict) and isinstance(seg.get("utf8"), str)
        )
        if text:
            return text
    utf8 = event.get("utf8")
    return utf8 if isinstance(utf8, str) else ""


def parse_json_payload(payload: str, language_code: Optional[str]) -> List[TimedSegment]:
    """Decode a ``json3`` events document.

    Raises:
        ParseError: If ``payload`` is not valid JSON.
    """
    try:
        data = json.loads(payload)
    except ValueError as exc:
        logger.error("[transcripts] failedJsonParse payloadSnippet=%s", payload[:200])
        raise ParseError(f"Failed to parse JSON transcript payload: {exc}") from exc

    events = data.get("events") if isinstance(data, dict) else None
    if not isinstance(events, list):
        events = []
    logger.debug("[transcripts] parseJson events=%d", len(events))

    segments: List[TimedSegment] = []
    for event in events:
        if not isinstance(event, dict):
            continue
        text = decode_html(_event_text(event))
        if not text:
            continue
        duration_ms = event.get("dDurationMs")
        if duration_ms is None:
            duration_ms = event.get("tDurationMs")
        segments.append(TimedSegment(
            text=text,
            language_code=language_code,
            start=_seconds_from_ms(event.get("tStartMs", 0)),
            duration=_seconds_from_ms(duration_ms),
        ))
    return sorted(segments, key=lambda segment: segment.start)


def parse_xml_payload(payload: str, language_code: Optional[str]) -> List[TimedSegment]:
    """Decode ``<text>`` elements from a timedtext XML document.

    Elements with empty text or unreadable timing are skipped; this
    function never raises on malformed input.
    """
    segments: List[TimedSegment] = []
    for match in _TEXT_ELEMENT_RE.finditer(payload):
        try:
            start = float(match.group(1))
            duration = float(match.group(2))
        except ValueError:
            continue
        if not (math.isfinite(start) and math.isfinite(duration)):
            continue
        text = decode_html(match.group(3))
        if not text:
            continue
        segments.append(TimedSegment(
            text=text,
            language_code=language_code,
            start=start,
            duration=duration,
        ))
    return sorted(segments, key=lambda segment: segment.start)


def strip_anti_hijack_prefix(payload: str) -> str:
    payload = payload.strip()
    if payload.startswith(ANTI_HIJACK_PREFIX):
        payload = payload[len(ANTI_HIJACK_PREFIX):].lstrip()
    return payload


def is_json_payload(payload: str) -> bool:
    return strip_anti_hijack_prefix(payload).startswith(("{", "["))


def parse_payload(payload: str, language_code: Optional[str]) -> List[TimedSegment]:
    """Pick a decoder from the payload's first character and run it."""
    body = strip_anti_hijack_prefix(payload)
    if body.startswith(("{", "[")):
        return parse_json_payload(body, language_code)
    return parse_xml_payload(body, language_code)
