"""Centralised settings for FirmScope.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).

Static data tables (known firm names, prestige terms, discovery keywords)
are deliberately *not* configurable; they live in
``firmscope.classifier.lexicon`` and ``firmscope.scraper.discovery``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Fetcher
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "8.0"))
    )
    subpage_timeout: float = field(
        default_factory=lambda: float(os.environ.get("SUBPAGE_TIMEOUT", "6.0"))
    )
    max_response_bytes: int = field(
        default_factory=lambda: int(os.environ.get("MAX_RESPONSE_BYTES", "1000000"))
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get("SCRAPER_USER_AGENT", _BROWSER_USER_AGENT)
    )

    # ------------------------------------------------------------------
    # Orchestrator / summary
    # ------------------------------------------------------------------
    max_subpages: int = field(
        default_factory=lambda: int(os.environ.get("MAX_SUBPAGES", "3"))
    )
    summary_budget: int = field(
        default_factory=lambda: int(os.environ.get("SUMMARY_BUDGET", "12000"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "WARNING").upper()
    )


# Module-level singleton; import this everywhere:
#   from firmscope.config import settings
settings = Settings()
