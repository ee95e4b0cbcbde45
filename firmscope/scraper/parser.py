"""Page parsing: turns raw markup into a :class:`ParsedPage`.

The parser must never raise for decoded input.  Malformed or sparse markup
simply leaves fields at their empty defaults.

Slogan priority chain (first accepted candidate wins):
    header region → hero/banner region → JSON-LD strings → og:description
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Callable, Iterable, List, Optional, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from firmscope.scraper.models import (
    MAX_BODY_CHARS,
    MAX_HEADER_CHARS,
    MAX_HEADINGS,
    MAX_IMAGE_ALTS,
    MAX_NAV_LINKS,
    NavLink,
    ParsedPage,
    SloganLocation,
)

logger = logging.getLogger(__name__)

_WS_RE = re.compile(r"\s+")

_HEADER_REGIONS = "header, nav, .header, .top-bar, .site-header"
_STRIPPED_TAGS = ["script", "style", "nav", "footer", "header", "noscript", "iframe", "svg"]

_HEADER_SLOGAN_SELECTORS = (
    "header .tagline",
    "header .slogan",
    "header .subtitle",
    "header .motto",
    ".header-tagline",
    ".header-slogan",
    ".site-tagline",
    ".site-slogan",
    "header p",
    ".top-bar p",
    ".header-tag",
)

_HERO_SLOGAN_SELECTORS = (
    ".hero .subtitle",
    ".hero-subtitle",
    ".hero-tagline",
    ".hero-slogan",
    ".hero h2",
    ".banner h2",
    ".hero p:first-of-type",
)

_SCHEMA_MAX_DEPTH = 3

SloganCandidate = Tuple[str, SloganLocation]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _collapse(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def _attr(tag: Tag, name: str) -> str:
    """Return attribute *name* of *tag* as a stripped string ('' if missing)."""
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        value = " ".join(value)
    return str(value).strip()


def _is_slogan_length(text: str) -> bool:
    return 5 < len(text) < 200


def _extract_title(soup: BeautifulSoup) -> str:
    tag = soup.find("title")
    return tag.get_text().strip() if tag else ""


def _extract_meta(soup: BeautifulSoup, **attrs: str) -> str:
    tag = soup.find("meta", attrs=attrs)
    return _attr(tag, "content") if isinstance(tag, Tag) else ""


def _extract_headings(soup: BeautifulSoup) -> List[str]:
    headings: List[str] = []
    for tag in soup.select("h1, h2, h3"):
        if len(headings) >= MAX_HEADINGS:
            break
        text = _collapse(tag.get_text(" "))
        if text:
            headings.append(text)
    return headings


def _extract_header_text(soup: BeautifulSoup) -> str:
    parts = [tag.get_text(" ") for tag in soup.select(_HEADER_REGIONS)]
    return _collapse(" ".join(parts))[:MAX_HEADER_CHARS]


def _walk_schema(obj: Any, out: List[str], depth: int = 0) -> None:
    """Collect description/slogan/name strings from a JSON-LD value."""
    if depth > _SCHEMA_MAX_DEPTH or not obj:
        return
    if isinstance(obj, list):
        for item in obj:
            _walk_schema(item, out, depth + 1)
        return
    if not isinstance(obj, dict):
        return

    description = obj.get("description")
    if isinstance(description, str) and description.strip():
        out.append(description.strip())
    slogan = obj.get("slogan")
    if isinstance(slogan, str) and slogan.strip():
        out.append(slogan.strip())
    name = obj.get("name")
    schema_type = obj.get("@type")
    if isinstance(name, str) and schema_type:
        if isinstance(schema_type, list):
            schema_type = ",".join(str(t) for t in schema_type)
        out.append(f"{schema_type}: {name}")

    for value in obj.values():
        if isinstance(value, (dict, list)):
            _walk_schema(value, out, depth + 1)


def _extract_schema_data(soup: BeautifulSoup) -> List[str]:
    schema_data: List[str] = []
    for tag in soup.find_all("script", attrs={"type": "application/ld+json"}):
        raw = tag.string if tag.string is not None else tag.get_text()
        if not raw or not raw.strip():
            continue
        try:
            parsed = json.loads(raw)
        except (ValueError, RecursionError) as exc:
            logger.debug("Skipping invalid JSON-LD block: %s", exc)
            continue
        # A top-level array is a list of documents, not a nesting level.
        for document in parsed if isinstance(parsed, list) else [parsed]:
            _walk_schema(document, schema_data)
    return schema_data


def _extract_nav_links(soup: BeautifulSoup, base_url: str) -> List[NavLink]:
    links: List[NavLink] = []
    for tag in soup.find_all("a", href=True):
        if len(links) >= MAX_NAV_LINKS:
            break
        href = _attr(tag, "href")
        text = _collapse(tag.get_text(" "))
        if not href or not text:
            continue
        try:
            resolved = urljoin(base_url, href)
        except ValueError:
            continue
        links.append(NavLink(text=text, href=resolved))
    return links


def _extract_image_alts(soup: BeautifulSoup) -> List[str]:
    alts: List[str] = []
    for tag in soup.find_all("img", alt=True):
        if len(alts) >= MAX_IMAGE_ALTS:
            break
        alt = _attr(tag, "alt")
        if alt:
            alts.append(alt)
    return alts


def _extract_body_text(soup: BeautifulSoup) -> str:
    """Strip boilerplate regions in place and flatten what is left.

    Mutates *soup*; call after everything that needs the full tree.
    """
    for tag in soup(_STRIPPED_TAGS):
        tag.decompose()
    container = soup.body or soup
    return _collapse(container.get_text(" "))[:MAX_BODY_CHARS]


# ---------------------------------------------------------------------------
# Slogan strategy chain
# ---------------------------------------------------------------------------

def _first_selector_match(soup: BeautifulSoup, selectors: Iterable[str]) -> Optional[str]:
    """Return the first acceptable text, trying only the first hit per selector."""
    for selector in selectors:
        tag = soup.select_one(selector)
        if tag is None:
            continue
        text = _collapse(tag.get_text(" "))
        if text and _is_slogan_length(text):
            return text
    return None


def _header_slogan(soup: BeautifulSoup, schema_data: List[str]) -> Optional[SloganCandidate]:
    text = _first_selector_match(soup, _HEADER_SLOGAN_SELECTORS)
    return (text, "header") if text else None


def _hero_slogan(soup: BeautifulSoup, schema_data: List[str]) -> Optional[SloganCandidate]:
    text = _first_selector_match(soup, _HERO_SLOGAN_SELECTORS)
    return (text, "hero") if text else None


def _schema_slogan(soup: BeautifulSoup, schema_data: List[str]) -> Optional[SloganCandidate]:
    for text in schema_data:
        # Skip anything that looks like serialised data rather than prose.
        if text.startswith(("{", "[")):
            continue
        if _is_slogan_length(text):
            return text, "schema"
    return None


def _meta_slogan(soup: BeautifulSoup, schema_data: List[str]) -> Optional[SloganCandidate]:
    text = _collapse(_extract_meta(soup, property="og:description"))
    if text and _is_slogan_length(text):
        return text, "meta"
    return None


_SLOGAN_STRATEGIES: Tuple[Callable[[BeautifulSoup, List[str]], Optional[SloganCandidate]], ...] = (
    _header_slogan,
    _hero_slogan,
    _schema_slogan,
    _meta_slogan,
)


def _extract_slogan(soup: BeautifulSoup, schema_data: List[str]) -> Optional[SloganCandidate]:
    for strategy in _SLOGAN_STRATEGIES:
        found = strategy(soup, schema_data)
        if found is not None:
            return found
    return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_page(html: str, url: str) -> ParsedPage:
    """Parse *html* fetched from *url* into a :class:`ParsedPage`.

    Everything that needs the intact document (headings, header/nav text,
    structured data, slogan, links, image alts) is read first; boilerplate
    regions are then removed to produce ``body_text``.  All list and text
    fields are capped at the ceilings defined in
    :mod:`firmscope.scraper.models`.
    """
    soup = BeautifulSoup(html or "", "html.parser")

    schema_data = _extract_schema_data(soup)
    slogan = _extract_slogan(soup, schema_data)

    page = ParsedPage(
        url=url,
        title=_extract_title(soup),
        meta_description=_extract_meta(soup, name="description"),
        headings=_extract_headings(soup),
        header_text=_extract_header_text(soup),
        nav_links=_extract_nav_links(soup, url),
        image_alts=_extract_image_alts(soup),
        slogan=slogan[0] if slogan else None,
        slogan_location=slogan[1] if slogan else None,
        schema_data=schema_data,
    )
    page.body_text = _extract_body_text(soup)
    return page
