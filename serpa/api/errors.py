"""Map analysis failures onto ``{"error": "..."}`` JSON responses."""

from __future__ import annotations

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from serpa.errors import DiscoveryError, LabelingError


def status_for(exc: Exception) -> int:
    """HTTP status for *exc*: 400 bad input, 502 upstream failure, 500 otherwise."""
    if isinstance(exc, ValueError):
        return 400
    if isinstance(exc, (DiscoveryError, LabelingError)):
        return 502
    return 500


def error_response(exc: Exception) -> JSONResponse:
    message = str(exc) or "Analysis failed"
    return JSONResponse(status_code=status_for(exc), content={"error": message})


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies in the same shape as other failures."""
    return JSONResponse(status_code=400, content={"error": "Domain is required"})
