"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from firmscope.api import app

    uvicorn firmscope.api:app --reload
"""

from firmscope.api.app import app

__all__ = ["app"]
