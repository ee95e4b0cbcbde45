"""FastAPI application factory.

Routers
-------
    /analyze   — scrape a site, classify its size, build the content summary
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from firmscope import __version__
from firmscope.api.routers import analyze as analyze_router
from firmscope.config import settings


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(
        title="FirmScope API",
        description=(
            "Extracts structured content from a firm's website and classifies "
            "the firm into a size tier (boutique, midsize, large, biglaw)."
        ),
        version=__version__,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(analyze_router.router, prefix="/analyze", tags=["analyze"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn firmscope.api.app:app --reload
app = create_app()
