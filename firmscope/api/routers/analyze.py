"""Analysis endpoint.

Routes
------
POST /analyze    Body: {"url": "example.com"}    → scrape + classify + summary

A site that cannot be fetched is not an error here: the response carries
``content_summary: null`` and ``analysis_basis: "inference-based"`` so the
consumer can fall back to reasoning without page content.
"""

from __future__ import annotations

from typing import Any, Literal, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from firmscope.classifier import detect_firm_size
from firmscope.scraper import build_content_summary, normalize_url, scrape_site

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class AnalyzeRequest(BaseModel):
    url: str


class FirmSizeResponse(BaseModel):
    tier: Literal["boutique", "midsize", "large", "biglaw"]
    signals: list[str]
    is_outlier: bool
    estimated_headcount: Optional[int] = None


class AnalyzeResponse(BaseModel):
    url: str
    firm_size: FirmSizeResponse
    content_summary: Optional[str] = None
    analysis_basis: Literal["content-based", "inference-based"]
    pages: list[str]
    errors: list[str]


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

@router.post("", response_model=AnalyzeResponse)
def analyze(body: AnalyzeRequest) -> dict[str, Any]:
    """Scrape the site at ``url``, classify the firm's size, and summarise its content."""
    try:
        url = normalize_url(body.url)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    site = scrape_site(url)
    firm_size = detect_firm_size(site)
    summary = build_content_summary(site)

    return {
        "url": url,
        "firm_size": {
            "tier": firm_size.tier,
            "signals": firm_size.signals,
            "is_outlier": firm_size.is_outlier,
            "estimated_headcount": firm_size.estimated_headcount,
        },
        "content_summary": summary,
        "analysis_basis": "content-based" if summary else "inference-based",
        "pages": [page.url for page in site.pages],
        "errors": site.errors,
    }
