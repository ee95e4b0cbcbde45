"""Bounded HTTP fetcher: one GET, a hard deadline, and a byte cap."""

from __future__ import annotations

import logging
import time
from typing import Optional

import httpx

from firmscope.config import settings

logger = logging.getLogger(__name__)

_ACCEPT_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

_HTML_CONTENT_TYPES = ("text/html", "application/xhtml")


class FetchError(Exception):
    """Raised when a page cannot be fetched as HTML.

    Covers timeouts, transport failures, non-2xx responses and non-HTML
    content types.  The message always names the URL.
    """

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


def _default_headers() -> dict[str, str]:
    return {"User-Agent": settings.user_agent, **_ACCEPT_HEADERS}


def _read_capped(response: httpx.Response, url: str, max_bytes: int, deadline: float, timeout: float) -> bytes:
    """Stream the body, keeping at most *max_bytes* bytes.

    Reaching the cap truncates silently; crossing *deadline* raises.
    """
    chunks: list[bytes] = []
    total = 0
    for chunk in response.iter_bytes():
        if time.monotonic() > deadline:
            raise FetchError(url, f"Timeout after {timeout:g}s for {url}")
        remaining = max_bytes - total
        if len(chunk) >= remaining:
            chunks.append(chunk[:remaining])
            total += remaining
            logger.debug("Response for %s truncated at %d bytes", url, max_bytes)
            break
        chunks.append(chunk)
        total += len(chunk)
    return b"".join(chunks)


def _fetch(client: httpx.Client, url: str, timeout: float, max_bytes: int) -> str:
    deadline = time.monotonic() + timeout
    with client.stream(
        "GET",
        url,
        headers=_default_headers(),
        timeout=timeout,
        follow_redirects=True,
    ) as response:
        if not response.is_success:
            raise FetchError(url, f"HTTP {response.status_code} for {url}")

        content_type = response.headers.get("content-type", "")
        if not any(ct in content_type.lower() for ct in _HTML_CONTENT_TYPES):
            raise FetchError(url, f"Non-HTML content type: {content_type or '(none)'} for {url}")

        body = _read_capped(response, url, max_bytes, deadline, timeout)

    return body.decode("utf-8", errors="replace")


def fetch_page(
    url: str,
    timeout: Optional[float] = None,
    *,
    max_bytes: Optional[int] = None,
    client: Optional[httpx.Client] = None,
) -> str:
    """Fetch *url* and return its markup as text.

    Performs exactly one GET (redirects followed, no retries).  The body is
    read incrementally and cut off at *max_bytes*; partial HTML is returned
    rather than treated as an error.  Bytes are decoded as UTF-8 with
    invalid sequences replaced.

    Args:
        url: Absolute URL to fetch.
        timeout: Whole-request deadline in seconds.  Defaults to
            ``settings.request_timeout``.
        max_bytes: Body size cap.  Defaults to ``settings.max_response_bytes``.
        client: Optional shared ``httpx.Client`` for connection reuse.

    Raises:
        FetchError: On timeout, transport failure, non-2xx status, or a
            non-HTML content type.
    """
    timeout = settings.request_timeout if timeout is None else timeout
    max_bytes = settings.max_response_bytes if max_bytes is None else max_bytes

    try:
        if client is not None:
            return _fetch(client, url, timeout, max_bytes)

        with httpx.Client(
            headers=_default_headers(),
            timeout=timeout,
            follow_redirects=True,
        ) as one_off:
            return _fetch(one_off, url, timeout, max_bytes)
    except httpx.TimeoutException as exc:
        raise FetchError(url, f"Timeout after {timeout:g}s for {url}") from exc
    except httpx.TooManyRedirects as exc:
        raise FetchError(url, f"Too many redirects for {url}") from exc
    except httpx.HTTPError as exc:
        error_type = type(exc).__name__
        raise FetchError(url, f"{error_type} for {url}: {str(exc)[:100]}") from exc
    except httpx.InvalidURL as exc:
        raise FetchError(url, f"Invalid URL {url!r}: {exc}") from exc
