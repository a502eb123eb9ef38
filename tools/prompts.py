"""
Reusable prompts to guide the language model when using the transcript
tools.

They are registered with FastMCP via the ``@mcp.prompt()`` decorator.
When queried, the model can consult this guidance before calling a
tool.
"""

from __future__ import annotations

# Absolute import so this works both when the server is started from
# the project root and when the project is installed.
from server import mcp  # type: ignore


@mcp.prompt()
def transcript_usage_guidance() -> str:
    """
    Guidance on using the YouTube transcript tools.

    - ``get_transcripts`` returns readable text.  Pass
      ``enable_paragraphs=true`` for long videos; a new paragraph starts
      after a pause longer than ``time_gap_threshold`` seconds, at a
      sentence boundary, or after ``max_sentences_per_paragraph`` cues.

    - ``get_timed_transcript`` returns individual cues with
      ``HH:MM:SS.mmm`` timestamps.  Use it when the user asks *when*
      something is said, or wants quotes with times.

    - ``list_transcript_languages`` shows which ``lang`` codes a video
      offers.  Call it first if the user wants a specific language and
      you are unsure it exists.

    - ``url`` may be a ``youtube.com/watch?v=`` link, a ``youtu.be``
      link, a ``youtube.com/shorts/`` link, an embed link, or a bare
      11-character video ID.

    - ``lang`` must match a track's language code exactly (``en`` is
      not ``en-US``).  Without ``lang`` YouTube's first listed track is
      used, which is usually but not always the original language.

    Common errors:

    - *Language X not available*: the message lists the codes that do
      exist; retry with one of them.
    - *YouTube rate limit detected*: do not retry immediately.  Tell the
      user to wait a few minutes or change network (VPN).
    - *Video is unavailable* / *Could not find transcript data*: the
      video is private, removed, or has no captions.  Retrying will not
      help.
    """
    return (
        "Use `get_transcripts` for readable text (set enable_paragraphs=true for long videos), "
        "`get_timed_transcript` when timestamps matter, and `list_transcript_languages` to see which "
        "`lang` codes exist. `url` may be a watch, youtu.be, shorts or embed link, or a bare 11-character "
        "video ID. `lang` must match a language code exactly; without it the first listed track is used. "
        "If a language is not available, retry with one of the codes listed in the error. If YouTube rate "
        "limiting is reported, do not retry immediately: ask the user to wait or change network. Unavailable "
        "videos and videos without captions will not succeed on retry."
    )
