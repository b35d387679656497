"""Analyze-repository use case — the main orchestration pipeline.

Depends only on the :class:`CommitSource` and :class:`CredentialStore` ports
and the pure analyzer.  The interface layer injects concrete adapters.
"""

from __future__ import annotations

import asyncio
import logging

from commit_insight.domain.entities import AnalysisReport
from commit_insight.domain.exceptions import InvalidRepositoryReferenceError
from commit_insight.domain.ports.commit_source import CommitSource
from commit_insight.domain.ports.credential_store import CredentialStore
from commit_insight.domain.value_objects import RepoRef
from commit_insight.services.commit_analyzer import analyze

logger = logging.getLogger(__name__)


class AnalyzeRepoUseCase:
    """Orchestrates the input → fetch → analyze pipeline.

    Parameters
    ----------
    commit_source:
        Adapter that can fetch repository metadata and commits.
    credential_store:
        Where a previously saved token is looked up when the caller does not
        pass one explicitly.
    default_token:
        Token from configuration, used when neither of the above supplies one.
    """

    def __init__(
        self,
        commit_source: CommitSource,
        credential_store: CredentialStore | None = None,
        default_token: str | None = None,
    ) -> None:
        self._source = commit_source
        self._credentials = credential_store
        self._default_token = default_token

    async def execute(self, raw_input: str, token: str | None = None) -> AnalysisReport:
        """Analyze the repository named by *raw_input*."""
        ref = RepoRef.parse(raw_input)
        if ref is None:
            raise InvalidRepositoryReferenceError(raw_input)

        # The store may hit the filesystem; keep it off the event loop.
        token = await asyncio.to_thread(self.resolve_token, token)
        logger.info(
            "Analyzing %s (%s)", ref.full_name, "authenticated" if token else "anonymous"
        )

        repo, commits = await asyncio.gather(
            self._source.fetch_repo_info(ref, token),
            self._source.fetch_commits(ref, token),
        )

        if not commits:
            logger.info("%s has no commits", ref.full_name)
            return AnalysisReport(repo=repo, commits=(), summary=None)

        summary = analyze(commits)
        logger.info(
            "%s: %d commits, quality score %d",
            ref.full_name,
            summary.total_commits,
            summary.quality_score,
        )
        return AnalysisReport(repo=repo, commits=tuple(commits), summary=summary)

    def resolve_token(self, token: str | None = None) -> str | None:
        """Pick the credential for one request; the store is read at most once."""
        if token and token.strip():
            return token.strip()
        if self._credentials is not None:
            stored = self._credentials.get()
            if stored:
                return stored
        return self._default_token or None
