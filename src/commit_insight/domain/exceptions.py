"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
An empty repository is a result state, not an exception.
"""

from __future__ import annotations

from datetime import datetime


class CommitInsightError(Exception):
    """Base exception for the entire application."""


# ── Input validation ────────────────────────────────────────────────────────


class InvalidRepositoryReferenceError(CommitInsightError):
    """The user input names no repository (neither a URL nor ``owner/repo``)."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Cannot parse a repository reference from {raw!r}.")
        self.raw = raw


# ── GitHub API errors ───────────────────────────────────────────────────────


class RateLimitExceededError(CommitInsightError):
    """GitHub API rate limit exceeded (403 with ``X-RateLimit-Remaining: 0``)."""

    def __init__(self, limit: int | None, reset_at: datetime | None) -> None:
        self.limit = limit
        self.reset_at = reset_at
        super().__init__(
            f"Rate limit exceeded. Limit: {limit if limit is not None else 'unknown'}/hour. "
            f"Resets at: {self.reset_time}."
        )

    @property
    def reset_time(self) -> str:
        """The reset moment as a wall-clock time, e.g. ``14:05:00 UTC``."""
        if self.reset_at is None:
            return "unknown"
        return self.reset_at.strftime("%H:%M:%S %Z")


class HttpStatusError(CommitInsightError):
    """GitHub answered with a non-success status that has no dedicated meaning."""

    def __init__(self, status_code: int, *, authenticated: bool = False) -> None:
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code
        self.authenticated = authenticated


class TransportError(CommitInsightError):
    """The request never produced an HTTP response (DNS, connect, timeout...)."""


class UnexpectedResponseError(CommitInsightError):
    """GitHub answered successfully but with a payload of the wrong shape."""
