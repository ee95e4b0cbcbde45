"""Tests for the FirmScope CLI commands."""

from __future__ import annotations

import json
from unittest.mock import patch

from typer.testing import CliRunner

from cli.main import app
from firmscope.scraper.models import ParsedPage, ScrapedSite

runner = CliRunner()

_SITE = ScrapedSite(
    homepage=ParsedPage(
        url="https://acme.com",
        title="Acme Law",
        slogan="Justice, delivered.",
        slogan_location="hero",
        body_text="Ranked by Chambers.",
    ),
)
_FAILED = ScrapedSite(homepage=None, errors=["Homepage fetch failed: HTTP 404 for https://acme.com"])


def test_scrape_prints_summary():
    with patch("cli.main.scrape_site", return_value=_SITE) as mock_scrape:
        result = runner.invoke(app, ["scrape", "--url", "acme.com"])

    assert result.exit_code == 0
    mock_scrape.assert_called_once_with("https://acme.com")
    assert "=== HOMEPAGE ===" in result.stdout
    assert 'Slogan/Tagline: "Justice, delivered." (found in: hero)' in result.stdout


def test_scrape_without_content_exits_nonzero():
    with patch("cli.main.scrape_site", return_value=_FAILED):
        result = runner.invoke(app, ["scrape", "--url", "acme.com"])

    assert result.exit_code == 1
    assert "Homepage fetch failed" in result.stdout
    assert "inference-based" in result.stdout


def test_classify_prints_tier_and_signals():
    with patch("cli.main.scrape_site", return_value=_SITE):
        result = runner.invoke(app, ["classify", "--url", "https://acme.com"])

    assert result.exit_code == 0
    assert "Tier      : large" in result.stdout
    assert "Prestige mentions: chambers" in result.stdout


def test_analyze_json_output():
    with patch("cli.main.scrape_site", return_value=_FAILED):
        result = runner.invoke(app, ["analyze", "--url", "acme.com", "--json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["analysis_basis"] == "inference-based"
    assert payload["content_summary"] is None
    assert payload["firm_size"]["tier"] == "boutique"
    assert payload["errors"] == _FAILED.errors
