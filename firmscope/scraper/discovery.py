"""Subpage discovery: pick the few homepage links worth fetching next."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlparse

from firmscope.config import settings
from firmscope.scraper.models import ParsedPage

logger = logging.getLogger(__name__)

PRIORITY_KEYWORDS: tuple[str, ...] = (
    "about",
    "team",
    "attorneys",
    "lawyers",
    "people",
    "practice",
    "services",
    "expertise",
    "professionals",
    "our-firm",
)

_SKIPPED_EXTENSIONS_RE = re.compile(
    r"\.(?:pdf|jpe?g|png|gif|webp|svg|ico|css|js|zip|gz|rar)$", re.IGNORECASE
)


@dataclass(frozen=True)
class _Candidate:
    url: str
    score: int


def _strip_trailing_slash(path: str) -> str:
    return path[:-1] if path.endswith("/") else path


def _keyword_score(path: str, text: str) -> int:
    haystack = f"{path} {text}".lower()
    return sum(1 for keyword in PRIORITY_KEYWORDS if keyword in haystack)


def discover_subpages(homepage: ParsedPage, base_url: str, limit: Optional[int] = None) -> List[str]:
    """Return up to *limit* same-host subpage URLs ranked by keyword relevance.

    Candidates come only from ``homepage.nav_links``.  Links to another
    hostname, to the homepage path itself, or to non-document files are
    ignored.  URLs are normalised to ``origin + path`` (query, fragment and
    one trailing slash dropped) and deduplicated on that form.  Each
    candidate scores one point per :data:`PRIORITY_KEYWORDS` entry found in
    its path plus link text; zero-score candidates are discarded.  Ties keep
    link order.
    """
    limit = settings.max_subpages if limit is None else limit
    base = urlparse(base_url)
    base_host = base.hostname
    home_path = _strip_trailing_slash(base.path)

    seen: set[str] = set()
    candidates: List[_Candidate] = []
    for link in homepage.nav_links:
        try:
            parsed = urlparse(link.href)
            host = parsed.hostname
        except ValueError:
            continue
        if parsed.scheme not in ("http", "https"):
            continue
        if not host or host != base_host:
            continue
        path = _strip_trailing_slash(parsed.path)
        if path in ("", home_path):
            continue
        if _SKIPPED_EXTENSIONS_RE.search(path):
            continue

        normalized = f"{parsed.scheme}://{parsed.netloc}{path}"
        if normalized in seen:
            continue
        seen.add(normalized)

        score = _keyword_score(parsed.path, link.text)
        if score > 0:
            candidates.append(_Candidate(url=normalized, score=score))

    ranked = sorted(candidates, key=lambda c: c.score, reverse=True)
    selected = [c.url for c in ranked[:limit]]
    logger.debug("Discovered %d subpage candidate(s) for %s: %s", len(candidates), base_url, selected)
    return selected
