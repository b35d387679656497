"""Global exception handlers — translate domain errors to HTTP responses.

Each domain exception maps to an HTTP status code and the standard
``{"status": "error", "message": "..."}`` envelope.  Messages are chosen from
the exception's structured fields (status code, whether a token was sent).
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from commit_insight.domain.exceptions import (
    CommitInsightError,
    HttpStatusError,
    InvalidRepositoryReferenceError,
    RateLimitExceededError,
    TransportError,
    UnexpectedResponseError,
)

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "An error occurred. Please try again."


def describe(exc: CommitInsightError) -> tuple[int, str]:
    """Return the (HTTP status, user-facing message) pair for a domain error."""
    if isinstance(exc, InvalidRepositoryReferenceError):
        return 422, "Please enter a valid GitHub repository (e.g., facebook/react)"

    if isinstance(exc, RateLimitExceededError):
        return 429, str(exc)

    if isinstance(exc, HttpStatusError):
        if exc.status_code == 404:
            return 404, (
                "Repository not found. Please check the repository name and try again."
            )
        if exc.status_code == 403:
            if exc.authenticated:
                return 403, (
                    "API rate limit exceeded or token lacks permissions. "
                    'Check your API key has "repo" scope and try again.'
                )
            return 403, (
                "API rate limit exceeded or repository is private. "
                "Add a GitHub API key for higher limits and private repo access."
            )
        if exc.status_code == 401:
            return 401, (
                "Invalid API key. Please check your GitHub Personal Access Token "
                'and ensure it has the "repo" scope.'
            )
        return 502, GENERIC_MESSAGE

    if isinstance(exc, (TransportError, UnexpectedResponseError)):
        return 502, GENERIC_MESSAGE

    return 500, GENERIC_MESSAGE


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    @app.exception_handler(CommitInsightError)
    async def domain_handler(request: Request, exc: CommitInsightError) -> JSONResponse:
        status_code, message = describe(exc)
        logger.warning("%s: %s", type(exc).__name__, exc)
        return _error_json(status_code, message)

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
        return _error_json(500, GENERIC_MESSAGE)
