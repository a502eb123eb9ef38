"""
Exception hierarchy for transcript retrieval.

Every failure the pipeline knows how to classify is a subclass of
:class:`TranscriptError`.  Lower layers raise these directly; only the
tool layer turns them into MCP protocol errors, using
:meth:`TranscriptError.to_error_data`.
"""

from __future__ import annotations

from typing import List

from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, ErrorData


class TranscriptError(Exception):
    """Base class for classified transcript failures."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_error_data(self) -> ErrorData:
        return ErrorData(code=self.code, message=self.message)


class InvalidInput(TranscriptError):
    """The URL or video ID is empty or malformed."""

    code = INVALID_PARAMS


class VideoUnavailable(TranscriptError):
    """The watch page has no sign of a playable video."""


class NoTranscriptData(TranscriptError):
    """The watch page is valid but carries no caption manifest."""


class LanguageNotAvailable(TranscriptError):
    """The requested caption language is not offered for the video."""

    def __init__(self, message: str, available: List[str]) -> None:
        super().__init__(message)
        self.available = available


class RateLimited(TranscriptError):
    """YouTube answered with a CAPTCHA, "sorry" or consent page."""


class ParseError(TranscriptError):
    """A payload that looked like JSON could not be decoded."""


class NoUsableTranscript(TranscriptError):
    """Every format candidate was tried and none produced segments."""

    def __init__(self, message: str, formats: List[str]) -> None:
        super().__init__(message)
        self.formats = formats


class NetworkFailure(TranscriptError):
    """A request kept failing after all retries were spent."""


class TranscriptFetchError(TranscriptError):
    """Wrapper for unexpected failures anywhere in the pipeline."""
