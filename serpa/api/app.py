"""FastAPI application factory.

Routers
-------
    /analyze     — topic analysis (site topics + outliers)
    /blog-ratio  — blog versus website page ratio with folder topics

Every failure is returned as ``{"error": "..."}``; request validation
errors included.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from serpa.api.errors import validation_error_handler
from serpa.api.routers import analyze as analyze_router
from serpa.api.routers import blog_ratio as blog_ratio_router


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="Serpa API",
        description=(
            "Website content analysis: discovers a domain's URLs, groups them "
            "into topics and folders, and measures the blog-to-website ratio."
        ),
        version="0.1.0",
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(analyze_router.router, prefix="/analyze", tags=["analyze"])
    app.include_router(blog_ratio_router.router, prefix="/blog-ratio", tags=["blog-ratio"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn serpa.api.app:app --reload
app = create_app()
