"""
HTTP access to YouTube with bounded retries and rate-limit detection.

``requests`` is blocking, so each attempt runs in a worker thread via
:func:`asyncio.to_thread`.  Retries are sequential and sleep
cooperatively between attempts, which keeps them cancellable.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional

import requests

from yt_transcript import config
from yt_transcript.errors import NetworkFailure, RateLimited

logger = logging.getLogger(__name__)

# Markers of the anti-automation pages YouTube serves with HTTP 200.
# Update this list when YouTube changes its interstitials.
RATE_LIMIT_SIGNATURES = (
    'class="g-recaptcha"',
    "sorry/index",
    "consent.youtube.com",
)

RATE_LIMIT_MESSAGE = (
    "YouTube rate limit detected. This could be due to:\n"
    "1. Too many requests from your IP\n"
    "2. YouTube requiring CAPTCHA verification\n"
    "3. Regional restrictions\n"
    "Try:\n"
    "- Waiting a few minutes\n"
    "- Using a different IP address\n"
    "- Using a VPN service"
)


def build_headers(lang: Optional[str] = None, referer: bool = False) -> Dict[str, str]:
    """Return browser-like request headers.

    Args:
        lang: If given, replaces the default ``Accept-Language``.
        referer: Add ``Referer``/``Origin`` headers pointing at YouTube,
            as the timedtext endpoint expects for in-page requests.
    """
    headers = dict(config.DEFAULT_HEADERS)
    if lang:
        headers["Accept-Language"] = lang
    headers["User-Agent"] = config.USER_AGENT
    if referer:
        headers["Referer"] = config.YOUTUBE_BASE_URL + "/"
        headers["Origin"] = config.YOUTUBE_BASE_URL
    return headers


def is_rate_limited(body: str) -> bool:
    """Return True if ``body`` is one of YouTube's anti-automation pages."""
    return any(signature in body for signature in RATE_LIMIT_SIGNATURES)


def raise_if_rate_limited(body: str) -> None:
    if is_rate_limited(body):
        raise RateLimited(RATE_LIMIT_MESSAGE)


def _get(url: str, headers: Dict[str, str]) -> requests.Response:
    response = requests.get(url, headers=headers, timeout=config.REQUEST_TIMEOUT)
    response.raise_for_status()
    return response


async def fetch_with_retry(
    url: str,
    headers: Dict[str, str],
    retries: Optional[int] = None,
    delay: Optional[float] = None,
    check_rate_limit: bool = False,
) -> requests.Response:
    """GET ``url``, retrying failed attempts.

    Any exception from ``requests`` (connection errors, timeouts, non-2xx
    status) counts as a failed attempt.

    Args:
        url: Absolute URL to fetch.
        headers: Request headers, usually from :func:`build_headers`.
        retries: Extra attempts after the first.  Defaults to
            ``config.MAX_RETRIES``.
        delay: Seconds to wait between attempts.  Defaults to
            ``config.RETRY_DELAY``.
        check_rate_limit: Raise :class:`RateLimited` at once when a failed
            response carries an anti-automation page, instead of retrying.

    Returns:
        The successful response.

    Raises:
        NetworkFailure: If every attempt failed.
        RateLimited: If ``check_rate_limit`` is set and YouTube answered
            with a CAPTCHA, "sorry" or consent page.
    """
    retries = config.MAX_RETRIES if retries is None else retries
    delay = config.RETRY_DELAY if delay is None else delay

    attempt = 0
    while True:
        try:
            return await asyncio.to_thread(_get, url, headers)
        except requests.RequestException as exc:
            if check_rate_limit and exc.response is not None:
                raise_if_rate_limited(exc.response.text)
            remaining = retries - attempt
            if remaining <= 0:
                raise NetworkFailure(f"Request to {url} failed: {exc}") from exc
            logger.warning("Fetch failed, retrying... (%d attempts left): %s", remaining, exc)
            attempt += 1
            await asyncio.sleep(delay)
