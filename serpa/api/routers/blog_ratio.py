"""Blog ratio endpoint.

Routes
------
POST /blog-ratio    Body: {"domain": "example.com"}    → run_blog_ratio
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from serpa.api.errors import error_response
from serpa.api.routers.analyze import DomainRequest
from serpa.pipeline.blog_ratio import run_blog_ratio

router = APIRouter()


@router.post("")
def blog_ratio(body: DomainRequest) -> Any:
    """Split the site into blog and website pages and report the ratio."""
    try:
        return run_blog_ratio(body.domain)
    except Exception as exc:
        print(f"[BLOG-RATIO] Error: {exc}")
        return error_response(exc)
