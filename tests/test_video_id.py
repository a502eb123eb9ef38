import pytest

from yt_transcript.errors import InvalidInput
from yt_transcript.video_id import extract_video_id


class TestExtractVideoId:
    @pytest.mark.parametrize(
        "value",
        [
            "dQw4w9WgXcQ",
            "  dQw4w9WgXcQ  ",
            "https://youtu.be/dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ?t=42",
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://m.youtube.com/watch?feature=share&v=dQw4w9WgXcQ",
            "https://www.youtube.com/shorts/dQw4w9WgXcQ",
            "https://youtube.com/shorts/dQw4w9WgXcQ?feature=share",
            "https://www.youtube.com/embed/dQw4w9WgXcQ",
            "youtube.com/watch?v=dQw4w9WgXcQ",
        ],
    )
    def test_supported_shapes(self, value):
        assert extract_video_id(value) == "dQw4w9WgXcQ"

    def test_empty_input_rejected(self):
        with pytest.raises(InvalidInput, match="required"):
            extract_video_id("")

    def test_whitespace_only_rejected(self):
        with pytest.raises(InvalidInput):
            extract_video_id("   ")

    @pytest.mark.parametrize(
        "value",
        ["not a video", "https://example.com/watch?v=dQw4w9WgXcQx", "https://www.youtube.com/feed"],
    )
    def test_unrecognised_input_rejected(self, value):
        with pytest.raises(InvalidInput, match="Could not extract video ID"):
            extract_video_id(value)

    @pytest.mark.parametrize(
        "value",
        [
            "https://youtu.be/abc",
            "https://www.youtube.com/watch?v=a%26b",
            "https://www.youtube.com/shorts/short",
            "https://youtu.be/dQw4w9WgXcQextra",
        ],
    )
    def test_ids_must_have_video_id_shape(self, value):
        with pytest.raises(InvalidInput):
            extract_video_id(value)
