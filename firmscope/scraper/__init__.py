"""Scraper package: fetch, parse, discover and assemble site content."""

from firmscope.scraper.discovery import discover_subpages
from firmscope.scraper.fetcher import FetchError, fetch_page
from firmscope.scraper.models import NavLink, ParsedPage, ScrapedSite
from firmscope.scraper.parser import parse_page
from firmscope.scraper.site import normalize_url, scrape_site
from firmscope.scraper.summary import build_content_summary

__all__ = [
    "fetch_page",
    "parse_page",
    "discover_subpages",
    "scrape_site",
    "build_content_summary",
    "normalize_url",
    "FetchError",
    "NavLink",
    "ParsedPage",
    "ScrapedSite",
]
