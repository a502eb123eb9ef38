import pytest
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS

import tools.transcript_tools as transcript_tools
from conftest import FakeResponse, track, watch_page
from yt_transcript.errors import InvalidInput, RateLimited
from yt_transcript.models import TimedSegment, TranscriptResult


def result():
    return TranscriptResult(
        video_id="dQw4w9WgXcQ",
        title="Never Gonna",
        language_code="en",
        segments=[
            TimedSegment(text="Never gonna give you up.", language_code="en", start=0.0, duration=2.0),
            TimedSegment(text="Never gonna let you down", language_code="en", start=2.0, duration=1.5),
        ],
    )


@pytest.fixture
def fetched(monkeypatch):
    calls = []

    async def fake_fetch(url, lang=None):
        calls.append((url, lang))
        return result()

    monkeypatch.setattr(transcript_tools, "fetch_transcript", fake_fetch)
    return calls


def failing(monkeypatch, error):
    async def fake_fetch(url, lang=None):
        raise error

    monkeypatch.setattr(transcript_tools, "fetch_transcript", fake_fetch)


class TestGetTranscripts:
    @pytest.mark.asyncio
    async def test_flat_text(self, fetched):
        output = await transcript_tools.get_transcripts("dQw4w9WgXcQ", lang="en")
        assert fetched == [("dQw4w9WgXcQ", "en")]
        assert output["title"] == "Never Gonna"
        assert output["transcript"] == "Never gonna give you up. Never gonna let you down"
        assert output["segment_count"] == 2
        assert output["total_duration"] == 3.5
        assert output["duration"] == "00:00:03.500"

    @pytest.mark.asyncio
    async def test_paragraphs(self, fetched):
        output = await transcript_tools.get_transcripts("dQw4w9WgXcQ", enable_paragraphs=True)
        assert output["transcript"] == "Never gonna give you up.\n\nNever gonna let you down"

    @pytest.mark.asyncio
    async def test_invalid_input_maps_to_invalid_params(self, monkeypatch):
        failing(monkeypatch, InvalidInput("YouTube URL or ID is required"))
        with pytest.raises(McpError) as excinfo:
            await transcript_tools.get_transcripts("")
        assert excinfo.value.error.code == INVALID_PARAMS
        assert excinfo.value.error.message == "YouTube URL or ID is required"

    @pytest.mark.asyncio
    async def test_other_errors_map_to_internal_error(self, monkeypatch):
        failing(monkeypatch, RateLimited("YouTube rate limit detected."))
        with pytest.raises(McpError) as excinfo:
            await transcript_tools.get_transcripts("dQw4w9WgXcQ")
        assert excinfo.value.error.code == INTERNAL_ERROR


class TestGetTimedTranscript:
    @pytest.mark.asyncio
    async def test_segments_with_timestamps(self, fetched):
        output = await transcript_tools.get_timed_transcript("dQw4w9WgXcQ")
        assert output["language"] == "en"
        assert output["segments"][1] == {
            "start": 2.0,
            "duration": 1.5,
            "timestamp": "00:00:02.000",
            "text": "Never gonna let you down",
        }


class TestListTranscriptLanguages:
    @pytest.mark.asyncio
    async def test_lists_tracks(self, youtube):
        page = watch_page([track("en", kind="asr", name={"simpleText": "English (auto-generated)"}), track("fr")])
        youtube.add("/watch?v=", FakeResponse(page))
        output = await transcript_tools.list_transcript_languages("https://youtu.be/dQw4w9WgXcQ")
        assert output["video_id"] == "dQw4w9WgXcQ"
        assert output["languages"] == [
            {"language_code": "en", "name": "English (auto-generated)", "is_generated": True},
            {"language_code": "fr", "name": "", "is_generated": False},
        ]

    @pytest.mark.asyncio
    async def test_bad_url(self, youtube):
        with pytest.raises(McpError) as excinfo:
            await transcript_tools.list_transcript_languages("not a video")
        assert excinfo.value.error.code == INVALID_PARAMS
