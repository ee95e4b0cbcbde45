"""FirmScope CLI — entry-point for site analysis from the terminal.

Usage:
    python cli/main.py --help

Commands:
    scrape    → fetch a site and print its content summary
    classify  → fetch a site and print its size tier
    analyze   → both, optionally as JSON
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from firmscope.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import json
import logging

import typer

from firmscope.classifier import FirmSizeResult, detect_firm_size
from firmscope.config import settings
from firmscope.scraper import ScrapedSite, build_content_summary, normalize_url, scrape_site

app = typer.Typer(
    name="firmscope",
    help="Extract website content and classify firm size.",
    no_args_is_help=True,
)


@app.callback()
def main() -> None:
    """Configure logging for every command."""
    logging.basicConfig(level=settings.log_level)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _scrape(tag: str, url: str) -> ScrapedSite:
    try:
        url = normalize_url(url)
    except ValueError as exc:
        typer.echo(f"[{tag}] {exc}", err=True)
        raise typer.Exit(1)

    typer.echo(f"[{tag}] Fetching {url!r} …")
    site = scrape_site(url)
    for error in site.errors:
        typer.echo(f"[{tag}] ✗ {error}")
    pages = len(site.pages)
    typer.echo(f"[{tag}] {pages} page(s) parsed.")
    return site


def _echo_firm_size(tag: str, result: FirmSizeResult) -> None:
    headcount = result.estimated_headcount if result.estimated_headcount is not None else "(unknown)"
    typer.echo(f"[{tag}] Tier      : {result.tier}")
    typer.echo(f"[{tag}] Outlier   : {'yes' if result.is_outlier else 'no'}")
    typer.echo(f"[{tag}] Headcount : {headcount}")
    for signal in result.signals:
        typer.echo(f"  - {signal}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command("scrape")
def scrape(
    url: str = typer.Option(..., help="Site URL (scheme optional)."),
) -> None:
    """Scrape a site and print its content summary to stdout."""
    site = _scrape("scrape", url)
    summary = build_content_summary(site)
    if summary is None:
        typer.echo("[scrape] No content could be extracted; analysis would be inference-based.")
        raise typer.Exit(1)
    typer.echo("")
    typer.echo(summary)


@app.command("classify")
def classify(
    url: str = typer.Option(..., help="Site URL (scheme optional)."),
) -> None:
    """Scrape a site and print its firm-size classification."""
    site = _scrape("classify", url)
    _echo_firm_size("classify", detect_firm_size(site))


@app.command("analyze")
def analyze(
    url: str = typer.Option(..., help="Site URL (scheme optional)."),
    as_json: bool = typer.Option(False, "--json", help="Emit a JSON document instead of text."),
) -> None:
    """Scrape, classify and summarise a site in one pass."""
    if as_json:
        try:
            url = normalize_url(url)
        except ValueError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(1)
        site = scrape_site(url)
    else:
        site = _scrape("analyze", url)

    result = detect_firm_size(site)
    summary = build_content_summary(site)

    if as_json:
        payload = {
            "url": url,
            "firm_size": {
                "tier": result.tier,
                "signals": result.signals,
                "is_outlier": result.is_outlier,
                "estimated_headcount": result.estimated_headcount,
            },
            "content_summary": summary,
            "analysis_basis": "content-based" if summary else "inference-based",
            "errors": site.errors,
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    _echo_firm_size("analyze", result)
    typer.echo("")
    if summary is None:
        typer.echo("[analyze] No content summary; analysis would be inference-based.")
    else:
        typer.echo(summary)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
