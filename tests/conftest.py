import io
import time

import pytest
import requests

from seedpick.sources import Source, SourceRegistry


class FakeSource(Source):
    """Source answering from canned data."""

    def __init__(self, name, results=None, error=None, location=None, delay=0.0, key=None):
        super().__init__()
        self.name = name
        self.key = key or name.lower()
        self.results = results or []
        self.error = error
        self.location = location
        self.delay = delay
        self.queries = []
        self.downloads = []

    def lookup(self, query):
        self.queries.append(query)
        if self.delay:
            time.sleep(self.delay)
        if self.error:
            raise self.error
        return list(self.results)

    def download(self, ref):
        self.downloads.append(ref)
        if isinstance(self.location, Exception):
            raise self.location
        return self.location


class FakeResponse:
    def __init__(self, text="", json_data=None, content=b"", status_code=200):
        self.text = text
        self._json = json_data
        self.content = content
        self.status_code = status_code

    def json(self):
        return self._json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def raw(title, seeders=0, ref=None):
    return {
        "title": title,
        "seeders": seeders,
        "leechers": 1,
        "magnet_link": ref or f"magnet:?xt=urn:btih:{title}",
    }


@pytest.fixture
def make_registry():
    def _make(*sources):
        return SourceRegistry(list(sources))

    return _make


@pytest.fixture
def stdout():
    return io.StringIO()
