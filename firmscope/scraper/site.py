"""Site orchestration: homepage → discovery → parallel subpages → bundle."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional
from urllib.parse import urlparse

from firmscope.config import settings
from firmscope.scraper.discovery import discover_subpages
from firmscope.scraper.fetcher import fetch_page
from firmscope.scraper.models import ParsedPage, ScrapedSite
from firmscope.scraper.parser import parse_page

logger = logging.getLogger(__name__)


def normalize_url(url: str) -> str:
    """Prepend ``https://`` when *url* has no scheme.

    The core entry points expect absolute URLs; the API and CLI call this
    before handing user input over.

    Raises:
        ValueError: If *url* is empty or has no host after normalisation.
    """
    url = (url or "").strip()
    if not url:
        raise ValueError("URL is required")
    if not url.lower().startswith(("http://", "https://")):
        url = f"https://{url}"
    if not urlparse(url).hostname:
        raise ValueError(f"Invalid URL format: {url!r}")
    return url


def fetch_and_parse(url: str, timeout: Optional[float] = None) -> ParsedPage:
    """Fetch *url* and parse it.  Raises :class:`FetchError` on fetch failure."""
    html = fetch_page(url, timeout)
    return parse_page(html, url)


def scrape_site(url: str) -> ScrapedSite:
    """Scrape *url* and a few of its most relevant subpages.

    Steps:
        1. Fetch and parse the homepage.  A failure here is the only fatal
           path: the bundle comes back with no homepage and one error.
        2. :func:`~firmscope.scraper.discovery.discover_subpages` picks up
           to ``settings.max_subpages`` subpage URLs.
        3. Subpages are fetched **in parallel** with the shorter subpage
           timeout.  Every fetch is allowed to settle; each failure adds one
           error string and never affects its siblings.
        4. Parsed subpages are kept in discovery order.

    Never raises.
    """
    errors: List[str] = []

    try:
        homepage = fetch_and_parse(url, settings.request_timeout)
    except Exception as exc:
        logger.warning("Homepage fetch failed for %s: %s", url, exc)
        errors.append(f"Homepage fetch failed: {exc}")
        return ScrapedSite(homepage=None, subpages=[], errors=errors)

    subpage_urls = discover_subpages(homepage, url)
    subpages: List[ParsedPage] = []

    if subpage_urls:
        with ThreadPoolExecutor(max_workers=len(subpage_urls)) as pool:
            futures: List[Future[ParsedPage]] = [
                pool.submit(fetch_and_parse, sub_url, settings.subpage_timeout)
                for sub_url in subpage_urls
            ]
            # Iterate in submission order so results keep discovery priority.
            for sub_url, future in zip(subpage_urls, futures):
                try:
                    subpages.append(future.result())
                except Exception as exc:
                    logger.warning("Subpage fetch failed for %s: %s", sub_url, exc)
                    errors.append(f"Subpage fetch failed: {exc}")

    logger.info(
        "Scraped %s: %d subpage(s) parsed, %d error(s)", url, len(subpages), len(errors)
    )
    return ScrapedSite(homepage=homepage, subpages=subpages, errors=errors)
