"""FastAPI dependency injection wiring."""

from __future__ import annotations

import httpx
from fastapi import Depends

from commit_insight.domain.ports.credential_store import CredentialStore
from commit_insight.infrastructure.config import get_settings
from commit_insight.infrastructure.credential_store import (
    FileCredentialStore,
    InMemoryCredentialStore,
)
from commit_insight.infrastructure.github_rest_adapter import GitHubRestAdapter
from commit_insight.services.analyze_repo import AnalyzeRepoUseCase

_http_client: httpx.AsyncClient | None = None
_credential_store: CredentialStore | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _credential_store  # noqa: PLW0603

    settings = get_settings()
    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout))
    if settings.credential_file is not None:
        _credential_store = FileCredentialStore(settings.credential_file)
    else:
        _credential_store = InMemoryCredentialStore()


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _credential_store  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None
    _credential_store = None


def get_credential_store() -> CredentialStore:
    assert _credential_store is not None, "startup() was not called"
    return _credential_store


def get_use_case(
    credential_store: CredentialStore = Depends(get_credential_store),
) -> AnalyzeRepoUseCase:
    """Build the use case with injected adapters."""
    settings = get_settings()

    assert _http_client is not None, "startup() was not called"

    adapter = GitHubRestAdapter(
        client=_http_client,
        api_base=settings.github_api_base,
        max_commits=settings.max_commits,
        per_page=settings.commits_per_page,
    )
    default_token = settings.github_token.get_secret_value() if settings.github_token else None

    return AnalyzeRepoUseCase(
        commit_source=adapter,
        credential_store=credential_store,
        default_token=default_token,
    )
