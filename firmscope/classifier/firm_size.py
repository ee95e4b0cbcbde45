"""Heuristic firm-size classification.

:func:`detect_firm_size` is a pure function of a :class:`ScrapedSite`.

Pipeline
--------
1. Known mega-firm match: marks the site as an outlier, scoring continues.
2. Known BigLaw match: returns ``biglaw`` / outlier immediately.
3. Independent detectors (headcount, offices, practice breadth, prestige
   terms).  Each one that fires contributes an ordinal score from 1 to 4
   and one or more human-readable signals.
4. The mean of the fired scores maps to a tier; with nothing fired the
   result defaults to ``boutique``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, List, Literal, Optional, Pattern, Sequence, Tuple
from urllib.parse import urlparse

from firmscope.classifier.lexicon import KNOWN_BIGLAW_NAMES, KNOWN_MEGA_FIRMS, PRESTIGE_TERMS
from firmscope.scraper.models import ParsedPage, ScrapedSite

logger = logging.getLogger(__name__)

FirmTier = Literal["boutique", "midsize", "large", "biglaw"]

# Ordinal scale, smallest first.
TIERS: Tuple[FirmTier, ...] = ("boutique", "midsize", "large", "biglaw")

OUTLIER_HEADCOUNT = 500
MAX_PLAUSIBLE_HEADCOUNT = 50_000
MAX_PLAUSIBLE_OFFICES = 500

_HEADCOUNT_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"(\d[\d,]*)\s*(?:\+\s*)?(?:attorneys|lawyers|professionals|associates|partners)"),
    re.compile(r"(?:more than|over|approximately|nearly)\s*(\d[\d,]*)\s*(?:attorneys|lawyers|professionals)"),
)
_OFFICE_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"(\d+)\s*(?:offices|locations|cities)"),
    re.compile(r"(?:offices?\s+in|locations?\s+in|across)\s+(\d+)"),
)
# Two to four capitalised tokens, optionally with a middle initial.
_PERSON_NAME_RE = re.compile(r"^[A-Z][a-z]+(?:\s+[A-Z]\.?)?\s+[A-Z][a-z]+(?:\s+[A-Z][a-z]+)?$")
_TEAM_URL_HINTS = ("team", "attorney", "people", "lawyer", "professional")
_PRACTICE_URL_HINTS = ("practice", "service", "expertise")
_PRACTICE_LINK_RE = re.compile(r"practice|service|expertise|area|specialt", re.IGNORECASE)

_WHITESPACE_RE = re.compile(r"\s+")
_AMP_WHITESPACE_RE = re.compile(r"[&\s]+")


@dataclass(frozen=True)
class FirmSizeResult:
    tier: FirmTier
    signals: List[str] = field(default_factory=list)
    # Large enough (500+ or a known mega firm) that scoring should be lenient.
    is_outlier: bool = False
    estimated_headcount: Optional[int] = None


@dataclass(frozen=True)
class _SiteText:
    """Lowercased views of a site shared by every detector."""

    site: ScrapedSite
    all_text: str
    firm_name: str
    firm_url: str

    @classmethod
    def from_site(cls, site: ScrapedSite) -> "_SiteText":
        parts: List[str] = []
        for page in site.pages:
            parts.append(page.title)
            parts.append(page.meta_description)
            parts.append(page.body_text)
            parts.append(" ".join(page.headings))
            parts.append(" ".join(link.text for link in page.nav_links))
        homepage = site.homepage
        return cls(
            site=site,
            all_text=" ".join(parts).lower(),
            firm_name=homepage.title.lower() if homepage else "",
            firm_url=homepage.url.lower() if homepage else "",
        )


@dataclass(frozen=True)
class _Detection:
    score: int
    signals: List[str]
    headcount: Optional[int] = None
    outlier: bool = False


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _bucket(value: int, thresholds: Tuple[int, int, int]) -> int:
    """Map *value* to 4/3/2/1 by strictly exceeding descending *thresholds*."""
    for score, threshold in zip((4, 3, 2), thresholds):
        if value > threshold:
            return score
    return 1


def _max_count(text: str, patterns: Sequence[Pattern[str]], ceiling: int) -> int:
    best = 0
    for pattern in patterns:
        for match in pattern.finditer(text):
            value = int(match.group(1).replace(",", ""))
            if best < value < ceiling:
                best = value
    return best


def _match_known_name(ctx: _SiteText, names: Sequence[str], url_strip: Pattern[str]) -> Optional[str]:
    for name in names:
        if name in ctx.firm_name or name in ctx.all_text or url_strip.sub("", name) in ctx.firm_url:
            return name
    return None


def tier_for_average(average: float) -> FirmTier:
    """Map a mean ordinal score onto a tier via fixed cut points."""
    if average >= 3.5:
        return "biglaw"
    if average >= 2.5:
        return "large"
    if average >= 1.5:
        return "midsize"
    return "boutique"


# ---------------------------------------------------------------------------
# Detectors
# ---------------------------------------------------------------------------

def estimate_headcount(ctx: _SiteText) -> Optional[int]:
    """Best headcount estimate, or ``None``.

    Explicit "N attorneys"-style counts win.  Otherwise headings that look
    like person names are counted on subpages whose URL suggests a team
    listing.  Name-shaped headings such as "Contact Our Firm" also count;
    the shape check is the only guard.
    """
    best = _max_count(ctx.all_text, _HEADCOUNT_PATTERNS, MAX_PLAUSIBLE_HEADCOUNT)
    if best > 0:
        return best

    for page in ctx.site.subpages:
        page_url = page.url.lower()
        if not any(hint in page_url for hint in _TEAM_URL_HINTS):
            continue
        names = sum(1 for heading in page.headings if _PERSON_NAME_RE.match(heading.strip()))
        best = max(best, names)
    return best or None


def estimate_office_count(ctx: _SiteText) -> Optional[int]:
    return _max_count(ctx.all_text, _OFFICE_PATTERNS, MAX_PLAUSIBLE_OFFICES) or None


def _practice_link_count(page: ParsedPage) -> int:
    count = 0
    for link in page.nav_links:
        try:
            path = urlparse(link.href).path
        except ValueError:
            continue
        if _PRACTICE_LINK_RE.search(path):
            count += 1
    return count


def estimate_practice_areas(ctx: _SiteText) -> int:
    """Breadth proxy: headings on practice pages, or practice links on the homepage."""
    count = 0
    for page in ctx.site.pages:
        page_url = page.url.lower()
        if any(hint in page_url for hint in _PRACTICE_URL_HINTS):
            count = max(count, len(page.headings))
    if ctx.site.homepage is not None:
        count = max(count, _practice_link_count(ctx.site.homepage))
    return count


def find_prestige_terms(ctx: _SiteText) -> List[str]:
    return [term for term in PRESTIGE_TERMS if term in ctx.all_text]


def _headcount_detector(ctx: _SiteText) -> Optional[_Detection]:
    headcount = estimate_headcount(ctx)
    if headcount is None:
        return None
    signals = [f"Detected ~{headcount} attorneys/professionals"]
    outlier = headcount >= OUTLIER_HEADCOUNT
    if outlier:
        signals.append(f"{OUTLIER_HEADCOUNT}+ attorneys; outlier grading applies")
    return _Detection(
        score=_bucket(headcount, (250, 75, 15)),
        signals=signals,
        headcount=headcount,
        outlier=outlier,
    )


def _office_detector(ctx: _SiteText) -> Optional[_Detection]:
    offices = estimate_office_count(ctx)
    if offices is None:
        return None
    return _Detection(
        score=_bucket(offices, (10, 4, 1)),
        signals=[f"Detected ~{offices} office locations"],
    )


def _practice_detector(ctx: _SiteText) -> Optional[_Detection]:
    practices = estimate_practice_areas(ctx)
    if practices <= 0:
        return None
    return _Detection(
        score=_bucket(practices, (30, 15, 5)),
        signals=[f"Detected ~{practices} practice areas"],
    )


def _prestige_detector(ctx: _SiteText) -> Optional[_Detection]:
    hits = find_prestige_terms(ctx)
    if not hits:
        return None
    return _Detection(
        score=4 if len(hits) >= 3 else 3,
        signals=[f"Prestige mentions: {', '.join(hits)}"],
    )


_DETECTORS: Tuple[Callable[[_SiteText], Optional[_Detection]], ...] = (
    _headcount_detector,
    _office_detector,
    _practice_detector,
    _prestige_detector,
)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def detect_firm_size(site: ScrapedSite) -> FirmSizeResult:
    """Classify *site* into a size tier.

    Deterministic and side-effect free; never raises.  A site without a
    homepage yields the default ``boutique`` result.
    """
    ctx = _SiteText.from_site(site)
    signals: List[str] = []
    is_outlier = False

    mega = _match_known_name(ctx, KNOWN_MEGA_FIRMS, _AMP_WHITESPACE_RE)
    if mega is not None:
        signals.append(f'Known mega firm (500+ attorneys): "{mega}"')
        is_outlier = True

    biglaw = _match_known_name(ctx, KNOWN_BIGLAW_NAMES, _WHITESPACE_RE)
    if biglaw is not None:
        signals.append(f'Known BigLaw firm name match: "{biglaw}"')
        logger.info("BigLaw name match %r for %s", biglaw, ctx.firm_url)
        return FirmSizeResult(tier="biglaw", signals=signals, is_outlier=True)

    scores: List[int] = []
    headcount: Optional[int] = None
    for detector in _DETECTORS:
        detection = detector(ctx)
        if detection is None:
            continue
        scores.append(detection.score)
        signals.extend(detection.signals)
        if detection.headcount is not None:
            headcount = detection.headcount
        is_outlier = is_outlier or detection.outlier

    if not scores:
        signals.append("No strong size signals detected; defaulting to boutique")
        return FirmSizeResult(
            tier="boutique", signals=signals, is_outlier=is_outlier, estimated_headcount=headcount
        )

    average = sum(scores) / len(scores)
    tier = tier_for_average(average)
    logger.debug("Firm size scores %s (mean %.2f) -> %s", scores, average, tier)
    return FirmSizeResult(
        tier=tier, signals=signals, is_outlier=is_outlier, estimated_headcount=headcount
    )
