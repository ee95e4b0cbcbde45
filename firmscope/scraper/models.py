"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

SloganLocation = Literal["header", "hero", "schema", "meta"]

# Hard ceilings applied by the parser.
MAX_HEADINGS = 30
MAX_NAV_LINKS = 30
MAX_IMAGE_ALTS = 20
MAX_BODY_CHARS = 3000
MAX_HEADER_CHARS = 500


@dataclass(frozen=True)
class NavLink:
    """A single anchor: its visible text and the resolved absolute URL."""

    text: str
    href: str


@dataclass
class ParsedPage:
    """Normalised content extracted from one fetched page."""

    url: str
    title: str = ""
    meta_description: str = ""
    headings: List[str] = field(default_factory=list)
    body_text: str = ""
    # Raw header/nav text captured before those regions are stripped.
    header_text: str = ""
    nav_links: List[NavLink] = field(default_factory=list)
    image_alts: List[str] = field(default_factory=list)
    slogan: Optional[str] = None
    slogan_location: Optional[SloganLocation] = None
    schema_data: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ScrapedSite:
    """Everything gathered for one analysis run.

    ``homepage`` is ``None`` when the homepage fetch failed; in that case
    ``subpages`` is empty and ``errors`` holds exactly one entry.
    """

    homepage: Optional[ParsedPage] = None
    subpages: List[ParsedPage] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def pages(self) -> List[ParsedPage]:
        """Homepage (when present) followed by subpages, in discovery order."""
        if self.homepage is None:
            return list(self.subpages)
        return [self.homepage, *self.subpages]
