"""Tests for the heuristic firm-size classifier.

All inputs are hand-built ``ScrapedSite`` bundles; nothing is fetched.
"""

from __future__ import annotations

import pytest

from firmscope.classifier.firm_size import (
    TIERS,
    FirmSizeResult,
    detect_firm_size,
    tier_for_average,
)
from firmscope.scraper.models import NavLink, ParsedPage, ScrapedSite


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _site(
    body: str = "",
    title: str = "Acme Law",
    url: str = "https://acme-law.com/",
    headings: list[str] | None = None,
    nav_links: list[NavLink] | None = None,
    subpages: list[ParsedPage] | None = None,
) -> ScrapedSite:
    homepage = ParsedPage(
        url=url,
        title=title,
        body_text=body,
        headings=headings or [],
        nav_links=nav_links or [],
    )
    return ScrapedSite(homepage=homepage, subpages=subpages or [])


# ---------------------------------------------------------------------------
# Known-name overrides
# ---------------------------------------------------------------------------

class TestKnownNames:
    def test_biglaw_title_short_circuits(self) -> None:
        site = _site(title="Skadden, Arps, Slate, Meagher & Flom LLP", body="Our 5 attorneys serve 1 office.")
        result = detect_firm_size(site)

        assert result.tier == "biglaw"
        assert result.is_outlier is True
        assert result.estimated_headcount is None
        assert result.signals == ['Known BigLaw firm name match: "skadden"']

    def test_biglaw_url_match_ignores_spaces(self) -> None:
        site = _site(title="Home", url="https://www.davispolk.com/")
        result = detect_firm_size(site)
        assert result.tier == "biglaw"
        assert 'Known BigLaw firm name match: "davis polk"' in result.signals

    def test_mega_firm_sets_outlier_only(self) -> None:
        site = _site(title="Home", url="https://www.forthepeople.com/", body="Morgan & Morgan handles injury cases.")
        result = detect_firm_size(site)

        assert result.is_outlier is True
        assert result.tier == "boutique"
        assert result.signals[0] == 'Known mega firm (500+ attorneys): "morgan & morgan"'

    def test_mega_url_match_strips_ampersand(self) -> None:
        site = _site(title="Home", url="https://www.morganandmorgan.com/")
        result = detect_firm_size(site)
        assert result.is_outlier is True

    def test_mega_then_biglaw_keeps_both_signals(self) -> None:
        site = _site(title="Littler vs Latham")
        result = detect_firm_size(site)
        assert result.tier == "biglaw"
        assert len(result.signals) == 2


# ---------------------------------------------------------------------------
# Individual detectors
# ---------------------------------------------------------------------------

class TestHeadcount:
    @pytest.mark.parametrize(
        ("body", "expected", "tier"),
        [
            ("Our 12 attorneys", 12, "boutique"),
            ("Over 40 lawyers on staff", 40, "midsize"),
            ("approximately 150 professionals", 150, "large"),
            ("1,200+ attorneys worldwide", 1200, "biglaw"),
        ],
    )
    def test_explicit_counts(self, body: str, expected: int, tier: str) -> None:
        result = detect_firm_size(_site(body=body))
        assert result.estimated_headcount == expected
        assert result.tier == tier

    def test_keeps_maximum_and_ignores_implausible(self) -> None:
        result = detect_firm_size(_site(body="12 partners and 30 associates; 99999 lawyers"))
        assert result.estimated_headcount == 30

    def test_five_hundred_marks_outlier(self) -> None:
        result = detect_firm_size(_site(body="more than 500 lawyers"))
        assert result.is_outlier is True
        assert "500+ attorneys; outlier grading applies" in result.signals

    def test_falls_back_to_name_headings_on_team_page(self) -> None:
        team = ParsedPage(
            url="https://acme-law.com/our-team",
            headings=["Meet the Team", "Jane Doe", "John Q. Public", "Mary Ann Smith", "Contact Us Today Now Please"],
        )
        result = detect_firm_size(_site(subpages=[team]))
        # "Meet the Team" has a lowercase word; the last heading has five tokens.
        assert result.estimated_headcount == 3

    def test_name_headings_ignored_off_team_pages(self) -> None:
        other = ParsedPage(url="https://acme-law.com/news", headings=["Jane Doe", "John Smith"])
        result = detect_firm_size(_site(subpages=[other]))
        assert result.estimated_headcount is None


class TestOffices:
    @pytest.mark.parametrize(
        ("body", "tier"),
        [
            ("offices in 1 city", "boutique"),
            ("3 offices", "midsize"),
            ("offices in 8 states", "large"),
            ("across 25 cities", "biglaw"),
        ],
    )
    def test_office_buckets(self, body: str, tier: str) -> None:
        result = detect_firm_size(_site(body=body))
        assert result.tier == tier

    def test_office_signal_text(self) -> None:
        result = detect_firm_size(_site(body="We have 3 offices."))
        assert result.signals == ["Detected ~3 office locations"]

    def test_single_office_is_a_signal(self) -> None:
        result = detect_firm_size(_site(body="Our offices in 1 city serve the region."))
        assert result.signals == ["Detected ~1 office locations"]

    def test_implausible_office_count_ignored(self) -> None:
        result = detect_firm_size(_site(body="serving 900 locations"))
        assert result.tier == "boutique"
        assert result.signals[-1].startswith("No strong size signals")


class TestPracticeAreas:
    def test_headings_on_practice_page(self) -> None:
        practice = ParsedPage(
            url="https://acme-law.com/practice-areas",
            headings=[f"Area {i}" for i in range(20)],
        )
        result = detect_firm_size(_site(subpages=[practice]))
        assert "Detected ~20 practice areas" in result.signals
        assert result.tier == "large"

    def test_homepage_practice_links(self) -> None:
        links = [NavLink(f"Area {i}", f"https://acme-law.com/practice/{i}") for i in range(7)]
        links.append(NavLink("Contact", "https://acme-law.com/contact"))
        result = detect_firm_size(_site(nav_links=links))
        assert "Detected ~7 practice areas" in result.signals
        assert result.tier == "midsize"

    def test_subpage_practice_links_not_counted(self) -> None:
        links = [NavLink(f"Area {i}", f"https://acme-law.com/practice/{i}") for i in range(7)]
        about = ParsedPage(url="https://acme-law.com/about", nav_links=links)
        result = detect_firm_size(_site(subpages=[about]))
        assert not any("practice areas" in s for s in result.signals)


class TestPrestige:
    def test_one_term_scores_three(self) -> None:
        result = detect_firm_size(_site(body="Ranked by Chambers USA"))
        assert result.signals == ["Prestige mentions: chambers"]
        assert result.tier == "large"

    def test_three_terms_score_four(self) -> None:
        result = detect_firm_size(_site(body="Chambers, Legal 500 and Vault all rank us"))
        assert result.tier == "biglaw"


# ---------------------------------------------------------------------------
# Combination and defaults
# ---------------------------------------------------------------------------

class TestCombination:
    def test_default_is_boutique_with_note(self) -> None:
        result = detect_firm_size(_site(body="We help families with estate planning."))

        assert result == FirmSizeResult(
            tier="boutique",
            signals=["No strong size signals detected; defaulting to boutique"],
            is_outlier=False,
            estimated_headcount=None,
        )
        assert "no strong size signals" in result.signals[0].lower()

    def test_absent_homepage_defaults(self) -> None:
        result = detect_firm_size(ScrapedSite(homepage=None, errors=["Homepage fetch failed: x"]))
        assert result.tier == "boutique"
        assert result.is_outlier is False

    def test_scores_are_averaged(self) -> None:
        # 300 attorneys scores 4, 3 offices scores 2 -> mean 3.0.
        result = detect_firm_size(_site(body="300 attorneys in 3 offices"))
        assert result.estimated_headcount == 300
        assert result.tier == "large"
        assert result.signals == [
            "Detected ~300 attorneys/professionals",
            "Detected ~3 office locations",
        ]

    def test_deterministic(self) -> None:
        site = _site(body="40 lawyers, 5 offices, Chambers ranked")
        assert detect_firm_size(site) == detect_firm_size(site)

    @pytest.mark.parametrize(
        ("average", "tier"),
        [(1.0, "boutique"), (1.49, "boutique"), (1.5, "midsize"), (2.5, "large"), (3.0, "large"), (3.5, "biglaw")],
    )
    def test_cut_points(self, average: float, tier: str) -> None:
        assert tier_for_average(average) == tier

    def test_tiers_are_ordered(self) -> None:
        assert TIERS == ("boutique", "midsize", "large", "biglaw")
