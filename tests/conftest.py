import json

import pytest
import requests

from yt_transcript import config


class FakeResponse:
    def __init__(self, text="", status_code=200):
        self.text = text
        self.status_code = status_code

    def json(self):
        return json.loads(self.text)

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeYouTube:
    """Route ``requests.get`` calls to canned responses.

    ``routes`` maps a substring of the URL to either a FakeResponse, an
    exception instance to raise, a callable taking the URL and returning
    a FakeResponse, or a list of those consumed one per call.  The first
    matching substring wins, so list more specific routes first.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, fragment, *responses):
        self.routes[fragment] = list(responses) if len(responses) > 1 else responses[0]

    def get(self, url, headers=None, timeout=None):
        self.calls.append((url, headers))
        for fragment, outcome in self.routes.items():
            if fragment not in url:
                continue
            if isinstance(outcome, list):
                outcome = outcome.pop(0) if len(outcome) > 1 else outcome[0]
            if isinstance(outcome, Exception):
                raise outcome
            if callable(outcome):
                return outcome(url)
            return outcome
        return FakeResponse("", status_code=404)

    def urls(self, fragment):
        return [url for url, _ in self.calls if fragment in url]


@pytest.fixture
def youtube(monkeypatch):
    fake = FakeYouTube()
    monkeypatch.setattr(requests, "get", fake.get)
    monkeypatch.setattr(config, "RETRY_DELAY", 0.0)
    return fake


def watch_page(tracks, extra=""):
    """Build a minimal watch page embedding ``tracks`` the way YouTube does."""
    captions = {"playerCaptionsTracklistRenderer": {"captionTracks": tracks}}
    return (
        "<html><script>var ytInitialPlayerResponse = {"
        '"playabilityStatus":{"status":"OK"},'
        f'"captions":{json.dumps(captions)},"videoDetails":{{"videoId":"dQw4w9WgXcQ"}}'
        f"}};</script>{extra}</html>"
    )


def track(lang, url=None, **extra):
    data = {
        "languageCode": lang,
        "baseUrl": url or f"https://www.youtube.com/api/timedtext?v=dQw4w9WgXcQ&lang={lang}",
    }
    data.update(extra)
    return data
