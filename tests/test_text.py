import pytest

from yt_transcript.models import FormatOptions, TimedSegment
from yt_transcript.text import (
    calculate_total_duration,
    decode_html,
    format_time,
    format_transcript_text,
    normalize_text,
)


def seg(text, start, duration=1.0):
    return TimedSegment(text=text, language_code="en", start=start, duration=duration)


class TestDecodeHtml:
    def test_known_entities(self):
        assert decode_html("Tom &amp; Jerry &#39;hi&#39; &lt;b&gt;") == "Tom & Jerry 'hi' <b>"

    def test_unknown_entities_pass_through(self):
        assert decode_html("AT&amp;T &copy; 2024") == "AT&T &copy; 2024"

    def test_bare_ampersand_does_not_swallow_entities(self):
        assert decode_html("rock & roll &amp; blues;") == "rock & roll & blues;"

    def test_non_breaking_space_and_trim(self):
        assert decode_html(" hello&nbsp;world ") == "hello world"


class TestNormalizeText:
    def test_cleans_punctuation_and_spacing(self):
        raw = "Hello ,  world .. How are you ?I am fine!!\nBye"
        assert normalize_text(raw) == "Hello, world. How are you? I am fine! Bye"

    @pytest.mark.parametrize(
        "raw",
        [
            "Hello ,  world .. How are you ?I am fine!!",
            "what? , ok",
            "Wait... what?! Really ?? yes . . .",
            "a ., . b",
            "line one\nline two\n\nline three",
            "  spaced   out   text  ",
            "no punctuation at all",
        ],
    )
    def test_idempotent(self, raw):
        once = normalize_text(raw)
        assert normalize_text(once) == once


class TestFormatTranscriptText:
    def test_flat_mode_joins_and_skips_empty(self):
        segments = [seg("Hello", 0), seg("&amp;", 1), seg("   ", 2), seg("world .", 3)]
        assert format_transcript_text(segments) == "Hello & world."

    def test_paragraph_breaks(self):
        segments = [
            seg("first part", 0),
            seg("second part.", 1),
            seg("Third starts", 2),
            seg("after pause", 10),
        ]
        text = format_transcript_text(segments, FormatOptions(enable_paragraphs=True))
        assert text == "first part second part.\n\nThird starts\n\nafter pause"

    def test_max_fragments_per_paragraph(self):
        segments = [seg("a", 0), seg("b", 1), seg("c", 2)]
        options = FormatOptions(enable_paragraphs=True, max_sentences_per_paragraph=2)
        assert format_transcript_text(segments, options) == "a b\n\nc"

    def test_time_gap_threshold_is_configurable(self):
        segments = [seg("a", 0), seg("b", 4)]
        options = FormatOptions(enable_paragraphs=True, time_gap_threshold=5)
        assert format_transcript_text(segments, options) == "a b"


class TestTiming:
    def test_format_time(self):
        assert format_time(3661.5) == "01:01:01.500"
        assert format_time(0) == "00:00:00.000"

    def test_total_duration(self):
        assert calculate_total_duration([seg("a", 0, 5), seg("b", 3, 1)]) == 5
        assert calculate_total_duration([]) == 0
