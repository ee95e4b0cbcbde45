"""Render a :class:`ScrapedSite` into a length-capped text summary."""

from __future__ import annotations

from typing import List, Optional
from urllib.parse import urlparse

from firmscope.config import settings
from firmscope.scraper.models import ParsedPage, ScrapedSite

TRUNCATION_MARKER = "\n[... content truncated ...]"

_NAV_LINKS_IN_SUMMARY = 15

# Checked in order; the first matching role names the section.
_SUBPAGE_ROLES = (
    ("ABOUT PAGE", ("about",)),
    ("TEAM/PEOPLE PAGE", ("team", "people", "attorney", "lawyer", "professional")),
    ("PRACTICE AREAS PAGE", ("practice", "service", "expertise")),
)


def subpage_label(page: ParsedPage, index: int) -> str:
    """Label a subpage section by the role its URL path suggests."""
    path = urlparse(page.url).path.lower()
    for label, keywords in _SUBPAGE_ROLES:
        if any(keyword in path for keyword in keywords):
            return label
    return f"SUBPAGE {index + 1}"


def format_page_section(page: ParsedPage, label: str) -> str:
    parts: List[str] = [f"=== {label} ===", f"URL: {page.url}"]
    if page.title:
        parts.append(f"Title: {page.title}")
    if page.meta_description:
        parts.append(f"Meta: {page.meta_description}")
    if page.slogan:
        parts.append(f'Slogan/Tagline: "{page.slogan}" (found in: {page.slogan_location})')
    if page.schema_data:
        parts.append(f"Schema/Structured Data: {' | '.join(page.schema_data)}")
    if page.header_text:
        parts.append(f"Header/Nav Text: {page.header_text}")
    if page.headings:
        parts.append(f"Headings: {' | '.join(page.headings)}")
    if page.body_text:
        parts.append(f"Content: {page.body_text}")
    if page.image_alts:
        parts.append(f"Image Alts: {', '.join(page.image_alts)}")
    if page.nav_links:
        nav_summary = ", ".join(link.text for link in page.nav_links[:_NAV_LINKS_IN_SUMMARY])
        parts.append(f"Nav Links: {nav_summary}")
    return "\n".join(parts)


def build_content_summary(site: ScrapedSite, budget: Optional[int] = None) -> Optional[str]:
    """Return a labelled text summary of *site*, or ``None`` without a homepage.

    ``None`` tells the caller there is no usable content and analysis must
    fall back to inference.  Summaries longer than *budget* characters
    (default ``settings.summary_budget``) are cut to exactly *budget*
    characters and :data:`TRUNCATION_MARKER` is appended.
    """
    if site.homepage is None:
        return None

    budget = settings.summary_budget if budget is None else budget

    sections = [format_page_section(site.homepage, "HOMEPAGE")]
    for i, page in enumerate(site.subpages):
        sections.append(format_page_section(page, subpage_label(page, i)))

    summary = "\n\n".join(sections)
    if len(summary) > budget:
        summary = summary[:budget] + TRUNCATION_MARKER
    return summary
