"""Topic analysis endpoint.

Routes
------
POST /analyze    Body: {"domain": "example.com"}    → run_topic_analysis
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter
from pydantic import BaseModel

from serpa.api.errors import error_response
from serpa.pipeline.runner import run_topic_analysis

router = APIRouter()


class DomainRequest(BaseModel):
    domain: Optional[str] = None


@router.post("")
def analyze(body: DomainRequest) -> Any:
    """Group the site's URLs into its main topics plus outliers.

    An empty ``topics`` list is a successful result, not an error.
    """
    try:
        return run_topic_analysis(body.domain)
    except Exception as exc:
        print(f"[ANALYZE] Analysis error: {exc}")
        return error_response(exc)
