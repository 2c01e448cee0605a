"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from serpa.api import app

    uvicorn serpa.api:app --reload
"""

from serpa.api.app import app

__all__ = ["app"]
