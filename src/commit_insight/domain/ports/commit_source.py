"""Port: commit source — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from commit_insight.domain.entities import CommitRecord, RepoInfo
from commit_insight.domain.value_objects import RepoRef


class CommitSource(Protocol):
    """Abstract contract for fetching a repository's metadata and history."""

    async def fetch_repo_info(self, ref: RepoRef, token: str | None = None) -> RepoInfo:
        """Return high-level repository metadata."""
        ...

    async def fetch_commits(
        self, ref: RepoRef, token: str | None = None
    ) -> list[CommitRecord]:
        """Return the newest commits (bounded), newest first.

        An empty repository yields an empty list.
        """
        ...
