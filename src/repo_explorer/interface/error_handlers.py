"""Global exception handlers — translate domain errors to HTTP responses.

Each domain exception maps to a specific HTTP status code and the
standard ``{"status": "error", "message": "..."}`` envelope. Session notices
that carry an error type reuse the same table via :func:`status_code_for`.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from repo_explorer.domain.exceptions import (
    AnalysisApiError,
    ContentEncodingError,
    ContentExtractionError,
    GitHubApiError,
    GitHubRateLimitError,
    InvalidGitHubUrlError,
    MissingCredentialError,
    RepoExplorerError,
)

logger = logging.getLogger(__name__)

_EXCEPTION_STATUS: list[tuple[type[RepoExplorerError], int]] = [
    (InvalidGitHubUrlError, 422),
    (GitHubRateLimitError, 429),
    (GitHubApiError, 502),
    (ContentExtractionError, 502),
    (ContentEncodingError, 422),
    (MissingCredentialError, 503),
    (AnalysisApiError, 502),
]


def status_code_for(exc_type: type[RepoExplorerError] | None) -> int:
    """Return the HTTP status for a domain error type (500 if unmapped)."""
    if exc_type is None:
        return 500
    for mapped, code in _EXCEPTION_STATUS:
        if issubclass(exc_type, mapped):
            return code
    return 500


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    @app.exception_handler(RepoExplorerError)
    async def domain_handler(request: Request, exc: RepoExplorerError) -> JSONResponse:
        logger.warning("%s: %s", type(exc).__name__, exc)
        return _error_json(status_code_for(type(exc)), str(exc))

    # ── Pydantic / FastAPI validation errors ────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = []
        for err in exc.errors():
            loc = " → ".join(str(p) for p in err.get("loc", []))
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        return _error_json(422, "; ".join(messages))

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "An unexpected error occurred. Please try again later.")
