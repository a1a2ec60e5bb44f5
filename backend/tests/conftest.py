"""Shared fakes for the network collaborators."""

from __future__ import annotations

import pytest
from requests.structures import CaseInsensitiveDict

HTML_HEADERS = {"Content-Type": "text/html; charset=utf-8"}


class FakeResponse:
    """Stand-in for a streamed requests.Response."""

    def __init__(
        self,
        body: bytes | str = b"",
        status_code: int = 200,
        headers: dict | None = None,
        url: str = "https://example.com/",
        reason: str = "OK",
        chunk_error: Exception | None = None,
    ) -> None:
        self._body = body.encode("utf-8") if isinstance(body, str) else body
        self.status_code = status_code
        self.headers = CaseInsensitiveDict(HTML_HEADERS if headers is None else headers)
        self.url = url
        self.reason = reason
        self.closed = False
        self._chunk_error = chunk_error

    def iter_content(self, chunk_size: int = 1):
        if self._chunk_error is not None:
            raise self._chunk_error
        for start in range(0, len(self._body), chunk_size):
            yield self._body[start : start + chunk_size]

    def close(self) -> None:
        self.closed = True


class FakeSession:
    """Records every GET and answers with a canned response or error."""

    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None) -> None:
        self.response = response or FakeResponse()
        self.error = error
        self.calls: list[tuple[str, dict]] = []

    def get(self, url: str, **kwargs) -> FakeResponse:
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


class FakeResolver:
    """DNS resolver returning a fixed address (or raising)."""

    def __init__(self, address: str = "93.184.216.34", error: Exception | None = None) -> None:
        self.address = address
        self.error = error
        self.calls: list[str] = []

    def __call__(self, hostname: str) -> str:
        self.calls.append(hostname)
        if self.error is not None:
            raise self.error
        return self.address


def build_html(head: str = "", body: str = "<p>Hello</p>") -> str:
    return f"<!DOCTYPE html><html><head>{head}</head><body>{body}</body></html>"


COMPLETE_HEAD = (
    "<title>" + "T" * 45 + "</title>"
    '<meta name="description" content="' + "d" * 140 + '">'
    '<meta property="og:title" content="OG Title">'
    '<meta property="og:description" content="OG description">'
    '<meta property="og:image" content="/img.png">'
    '<meta property="og:type" content="website">'
    '<meta name="twitter:card" content="summary_large_image">'
    '<meta name="twitter:title" content="Tw Title">'
    '<meta name="twitter:description" content="Tw description">'
    '<meta name="twitter:image" content="https://cdn.example.com/tw.png">'
    '<link rel="canonical" href="/canonical">'
    '<meta name="robots" content="index, follow">'
    '<meta name="viewport" content="width=device-width, initial-scale=1">'
)


@pytest.fixture
def make_response():
    return FakeResponse


@pytest.fixture
def make_session():
    return FakeSession


@pytest.fixture
def public_resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def html_page():
    return build_html


@pytest.fixture
def complete_html() -> str:
    return build_html(COMPLETE_HEAD)


@pytest.fixture
def make_resolver():
    return FakeResolver
