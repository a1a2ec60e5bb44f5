"""Page fetcher and SEO tag extractor.

fetch_page performs one bounded HTTP GET (timeout, size cap, HTML-only).
extract_metadata pulls the title, meta description, Open Graph, Twitter
Card and technical tags out of the returned document.
Does NOT crawl subpages.
"""

import logging
import re
import threading
import time
from urllib.parse import urljoin

import requests
from bs4 import BeautifulSoup, UnicodeDammit

from config import FETCH_TIMEOUT_SECONDS, FETCH_USER_AGENT, MAX_RESPONSE_BYTES
from errors import (
    AnalysisError,
    FetchFailedError,
    FetchTimeoutError,
    PayloadTooLargeError,
    UnreachableError,
    UnsupportedContentTypeError,
)
from models import FetchedPage
from schemas import SeoAnalysis

logger = logging.getLogger(__name__)

_REQUEST_HEADERS = {
    "User-Agent": FETCH_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}
_CHUNK_SIZE = 64 * 1024
_CHARSET_PATTERN = re.compile(r"charset=[\"']?([^\"';\s]+)", re.I)


def _charset_from_content_type(content_type: str) -> str | None:
    match = _CHARSET_PATTERN.search(content_type or "")
    return match.group(1) if match else None


def _declared_length(response: requests.Response) -> int | None:
    raw = response.headers.get("Content-Length")
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def _read_body(
    response: requests.Response,
    deadline: float,
    max_bytes: int,
    expired: threading.Event,
) -> bytes:
    """
    Read the streamed body, stopping at the deadline or once over `max_bytes`.

    `expired` is set by the fetch watchdog when it closes the response at
    the deadline; any read error after that point is a timeout.
    """
    body = bytearray()
    try:
        for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
            if expired.is_set() or time.monotonic() > deadline:
                raise FetchTimeoutError()
            if not chunk:
                continue
            body.extend(chunk)
            if len(body) > max_bytes:
                raise PayloadTooLargeError()
    except AnalysisError:
        raise
    except (requests.RequestException, OSError, ValueError, AttributeError) as exc:
        if expired.is_set() or isinstance(exc, requests.Timeout):
            raise FetchTimeoutError() from exc
        if isinstance(exc, (requests.ConnectionError, requests.exceptions.ChunkedEncodingError)):
            raise UnreachableError() from exc
        raise

    if expired.is_set():
        raise FetchTimeoutError()
    return bytes(body)


def _decode_body(raw: bytes, content_type: str) -> str:
    charset = _charset_from_content_type(content_type)
    dammit = UnicodeDammit(raw, known_definite_encodings=[charset] if charset else [], is_html=True)
    if dammit.unicode_markup is not None:
        return dammit.unicode_markup
    return raw.decode("utf-8", errors="replace")


def fetch_page(
    url: str,
    session: requests.Session | None = None,
    timeout: float = FETCH_TIMEOUT_SECONDS,
    max_bytes: int = MAX_RESPONSE_BYTES,
) -> FetchedPage:
    """
    GET `url` following redirects and return the HTML plus the final URL.

    The whole exchange (connect, headers, body) must finish within
    `timeout` seconds. The size cap is checked against Content-Length
    before reading and against the decoded text afterwards.
    """
    client = session if session is not None else requests
    deadline = time.monotonic() + timeout

    try:
        response = client.get(
            url,
            headers=_REQUEST_HEADERS,
            timeout=(timeout, timeout),
            allow_redirects=True,
            stream=True,
        )
    except requests.Timeout as exc:
        raise FetchTimeoutError() from exc
    except requests.ConnectionError as exc:
        raise UnreachableError() from exc
    except requests.RequestException as exc:
        raise AnalysisError(str(exc) or None) from exc

    expired = threading.Event()

    def _expire() -> None:
        expired.set()
        response.close()

    watchdog: threading.Timer | None = None
    try:
        content_type = response.headers.get("Content-Type", "") or ""
        final_url = response.url or url
        logger.debug("GET %s -> %s %s (%s)", url, response.status_code, content_type, final_url)

        remaining = deadline - time.monotonic()
        if remaining < 0:
            raise FetchTimeoutError()

        # Closing the response unblocks a body read stalled past the deadline.
        watchdog = threading.Timer(remaining, _expire)
        watchdog.daemon = True
        watchdog.start()

        if not 200 <= response.status_code < 300:
            raise FetchFailedError(response.status_code, response.reason or "")

        if "text/html" not in content_type.lower():
            raise UnsupportedContentTypeError()

        declared = _declared_length(response)
        if declared is not None and declared > max_bytes:
            raise PayloadTooLargeError()

        raw = _read_body(response, deadline, max_bytes, expired)
    finally:
        if watchdog is not None:
            watchdog.cancel()
        response.close()

    html = _decode_body(raw, content_type)
    if len(html) > max_bytes:
        raise PayloadTooLargeError()

    return {
        "html": html,
        "final_url": final_url,
        "status_code": response.status_code,
        "content_type": content_type,
    }


def _clean(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _meta_content(soup: BeautifulSoup, attr: str, value: str) -> str | None:
    tag = soup.find("meta", attrs={attr: value})
    if tag is None:
        return None
    return _clean(tag.get("content"))


def _resolve_url(value: str | None, base_url: str) -> str | None:
    """Make `value` absolute against `base_url`; keep it as-is if that fails."""
    if not value:
        return None
    try:
        return urljoin(base_url, value)
    except ValueError:
        return value


def extract_metadata(html: str, final_url: str) -> SeoAnalysis:
    """Parse `html` and return the tag values the scorer looks at."""
    soup = BeautifulSoup(html, "html.parser")

    # --- Title ---
    title_tag = soup.find("title")
    title = _clean(title_tag.get_text()) if title_tag is not None else None

    # --- Canonical URL ---
    canonical_tag = soup.find("link", attrs={"rel": "canonical"})
    canonical = _clean(canonical_tag.get("href")) if canonical_tag is not None else None

    return SeoAnalysis(
        url=final_url,
        title=title,
        description=_meta_content(soup, "name", "description"),
        og_title=_meta_content(soup, "property", "og:title"),
        og_description=_meta_content(soup, "property", "og:description"),
        og_image=_resolve_url(_meta_content(soup, "property", "og:image"), final_url),
        og_type=_meta_content(soup, "property", "og:type"),
        twitter_card=_meta_content(soup, "name", "twitter:card"),
        twitter_title=_meta_content(soup, "name", "twitter:title"),
        twitter_description=_meta_content(soup, "name", "twitter:description"),
        twitter_image=_resolve_url(_meta_content(soup, "name", "twitter:image"), final_url),
        canonical=_resolve_url(canonical, final_url),
        robots=_meta_content(soup, "name", "robots"),
        viewport=_meta_content(soup, "name", "viewport"),
    )
