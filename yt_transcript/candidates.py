"""Derive the ordered list of timedtext URLs to try for a caption track."""

from __future__ import annotations

from typing import List, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from yt_transcript import config
from yt_transcript.models import FetchCandidate

AUTO_FORMAT = "auto"


def extract_fmt(url: str) -> Optional[str]:
    """Return the ``fmt`` query parameter of ``url``, if any."""
    for key, value in parse_qsl(urlsplit(url).query, keep_blank_values=True):
        if key == "fmt":
            return value
    return None


def with_fmt(url: str, fmt: str) -> str:
    """Return ``url`` with its ``fmt`` parameter set to ``fmt``.

    Other parameters keep their order; ``fmt`` is appended when missing.
    """
    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True)
    replaced = False
    rewritten = []
    for key, value in query:
        if key == "fmt":
            if replaced:
                continue
            value, replaced = fmt, True
        rewritten.append((key, value))
    if not replaced:
        rewritten.append(("fmt", fmt))
    return urlunsplit(parts._replace(query=urlencode(rewritten, safe=",")))


def build_candidates(base_url: str) -> List[FetchCandidate]:
    """List format variants of ``base_url`` in the order to try them.

    The unmodified URL comes first, tagged with its own ``fmt`` (or
    ``auto``), followed by the fallback formats from
    ``config.FALLBACK_FORMATS`` other than the original one.
    """
    candidates: List[FetchCandidate] = []
    seen = set()

    def push(url: str, fmt: str) -> None:
        url = url.strip()
        if not url or url in seen:
            return
        seen.add(url)
        candidates.append(FetchCandidate(url=url, fmt=fmt))

    base_fmt = extract_fmt(base_url) or AUTO_FORMAT
    push(base_url, base_fmt)
    for fmt in config.FALLBACK_FORMATS:
        if fmt == base_fmt:
            continue
        push(with_fmt(base_url, fmt), fmt)
    return candidates
