"""API routes — thin controllers that delegate to the use case."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from commit_insight.domain.ports.credential_store import CredentialStore
from commit_insight.infrastructure.config import get_settings
from commit_insight.interface.dependencies import get_credential_store, get_use_case
from commit_insight.interface.schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    CredentialRequest,
    CredentialStatus,
)
from commit_insight.services.analyze_repo import AnalyzeRepoUseCase

router = APIRouter()


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={
        422: {"description": "Input does not name a GitHub repository"},
        401: {"description": "Invalid GitHub token"},
        403: {"description": "Rate limited or repository is private"},
        404: {"description": "Repository not found"},
        429: {"description": "GitHub API rate limit exceeded"},
        502: {"description": "GitHub API unreachable or returned an error"},
    },
)
async def analyze(
    body: AnalyzeRequest,
    use_case: AnalyzeRepoUseCase = Depends(get_use_case),
) -> AnalyzeResponse:
    """Analyze the commit messages of a GitHub repository."""
    token = body.token.get_secret_value() if body.token else None
    report = await use_case.execute(body.repository, token=token)
    return AnalyzeResponse.from_report(
        report, recent_limit=get_settings().recent_commits_limit
    )


@router.get("/credential", response_model=CredentialStatus)
def credential_status(
    store: CredentialStore = Depends(get_credential_store),
) -> CredentialStatus:
    return CredentialStatus(saved=store.get() is not None)


@router.put("/credential", response_model=CredentialStatus)
def save_credential(
    body: CredentialRequest,
    store: CredentialStore = Depends(get_credential_store),
) -> CredentialStatus:
    """Save a GitHub token for later requests; a blank token clears it."""
    store.set(body.token.get_secret_value())
    return CredentialStatus(saved=store.get() is not None)


@router.delete("/credential", response_model=CredentialStatus)
def clear_credential(
    store: CredentialStore = Depends(get_credential_store),
) -> CredentialStatus:
    store.clear()
    return CredentialStatus(saved=False)
