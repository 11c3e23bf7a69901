"""
Shared fixtures: in-memory HTTP session and fetcher doubles
"""

import pytest
import requests

from galleryscraper.models import FetchOutcome


class FakeResponse:
    def __init__(self, url, text="", status_code=200, content=b""):
        self.url = url
        self.text = text
        self.status_code = status_code
        self.content = content or text.encode()

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error for url: {self.url}", response=self)

    def iter_content(self, chunk_size=1):
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start:start + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False


class FakeSession:
    """Serves canned pages by URL and records every request"""

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.headers = {}
        self.requested = []
        self.closed = False

    def get(self, url, timeout=None, stream=False):
        self.requested.append(url)
        page = self.pages.get(url)
        if page is None:
            return FakeResponse(url, status_code=404)
        if isinstance(page, Exception):
            raise page
        if isinstance(page, bytes):
            return FakeResponse(url, content=page)
        return FakeResponse(url, text=page)

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class RecordingFetcher:
    """Writes a small payload for every URL it is asked to fetch"""

    def __init__(self, succeed=True):
        self.succeed = succeed
        self.calls = []

    def fetch(self, url, destination):
        self.calls.append((url, destination))
        destination.write_bytes(b"partial" if not self.succeed else b"media")
        if self.succeed:
            return FetchOutcome(success=True, detail="ok")
        return FetchOutcome(success=False, detail="connection reset")


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def fetcher():
    return RecordingFetcher()
