"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class RepoInfo:
    """High-level metadata about a GitHub repository."""

    full_name: str
    description: str | None = None


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """A single commit as returned by the GitHub commits API."""

    message: str
    author_name: str
    author_date: datetime
    sha: str = ""

    @property
    def first_line(self) -> str:
        return self.message.split("\n", 1)[0]


@dataclass(frozen=True, slots=True)
class RecentCommit:
    """A commit reduced to what the "recent commits" list shows."""

    message: str
    author: str
    date: datetime


@dataclass(frozen=True, slots=True)
class AnalysisSummary:
    """Aggregate commit-message metrics for one analysis run."""

    total_commits: int
    avg_length: int
    quality_score: int
    time_range: str
    conventional_format: int
    descriptive_messages: int
    merge_commits: int
    no_merge_commits: int
    commit_types: Mapping[str, int] = field(default_factory=dict, hash=False)
    common_words: tuple[tuple[str, int], ...] = ()
    messages: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        # Stored read-only so a held summary cannot drift.
        object.__setattr__(self, "commit_types", MappingProxyType(dict(self.commit_types)))
        object.__setattr__(self, "common_words", tuple(self.common_words))
        object.__setattr__(self, "messages", tuple(self.messages))

    @property
    def conventional_percent(self) -> int:
        return _percent(self.conventional_format, self.total_commits)

    @property
    def descriptive_percent(self) -> int:
        return _percent(self.descriptive_messages, self.total_commits)

    @property
    def no_merge_percent(self) -> int:
        return _percent(self.no_merge_commits, self.total_commits)

    def top_commit_types(self, limit: int = 10) -> list[tuple[str, int]]:
        """Commit types by descending count; equal counts keep first-seen order."""
        ranked = sorted(self.commit_types.items(), key=lambda item: item[1], reverse=True)
        return ranked[:limit]


@dataclass(frozen=True, slots=True)
class AnalysisReport:
    """Everything the presentation layer needs for one repository.

    ``summary`` is ``None`` when the repository has no commits; that is a
    valid outcome rather than an error.
    """

    repo: RepoInfo
    commits: tuple[CommitRecord, ...]
    summary: AnalysisSummary | None

    @property
    def is_empty(self) -> bool:
        return self.summary is None

    def recent_commits(self, limit: int = 20) -> list[RecentCommit]:
        """The newest *limit* commits, each trimmed to its first line."""
        return [
            RecentCommit(message=c.first_line, author=c.author_name, date=c.author_date)
            for c in self.commits[:limit]
        ]


def round_half_up(value: float) -> int:
    """Round like a browser's ``Math.round`` (halves go up, not to even)."""
    return math.floor(value + 0.5)


def _percent(count: int, total: int) -> int:
    if not total:
        return 0
    return round_half_up(count / total * 100)
