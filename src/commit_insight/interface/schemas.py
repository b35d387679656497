"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, SecretStr, field_validator

from commit_insight.domain.entities import AnalysisReport, AnalysisSummary


class AnalyzeRequest(BaseModel):
    """Request body for ``POST /analyze``."""

    repository: str
    token: SecretStr | None = None

    @field_validator("repository")
    @classmethod
    def _strip(cls, v: str) -> str:
        return v.strip()


class CredentialRequest(BaseModel):
    """Request body for ``PUT /credential``."""

    token: SecretStr


class CredentialStatus(BaseModel):
    """Whether a token is currently saved (the token itself is never returned)."""

    saved: bool


class RepositorySchema(BaseModel):
    full_name: str
    description: str | None = None


class SummarySchema(BaseModel):
    total_commits: int
    avg_length: int
    quality_score: int
    time_range: str
    conventional_format: int
    descriptive_messages: int
    merge_commits: int
    no_merge_commits: int
    commit_types: dict[str, int]
    common_words: list[tuple[str, int]]


class BreakdownSchema(BaseModel):
    """Percentages behind the quality score, each 0–100."""

    conventional: int
    descriptive: int
    no_merge: int


class CommitTypeSchema(BaseModel):
    type: str
    count: int


class RecentCommitSchema(BaseModel):
    message: str
    author: str
    date: datetime


class AnalyzeResponse(BaseModel):
    """Successful response from ``POST /analyze``.

    ``status`` is ``"empty"`` when the repository has no commits; the
    analysis fields are then omitted.
    """

    status: Literal["ok", "empty"] = "ok"
    repository: RepositorySchema
    summary: SummarySchema | None = None
    breakdown: BreakdownSchema | None = None
    commit_types: list[CommitTypeSchema] = []
    recent_commits: list[RecentCommitSchema] = []
    message: str | None = None

    @classmethod
    def from_report(cls, report: AnalysisReport, recent_limit: int = 20) -> AnalyzeResponse:
        repository = RepositorySchema(
            full_name=report.repo.full_name,
            description=report.repo.description,
        )
        if report.summary is None:
            return cls(
                status="empty",
                repository=repository,
                message="No commits found for this repository. It might be private or empty.",
            )

        summary = report.summary
        return cls(
            repository=repository,
            summary=_summary_schema(summary),
            breakdown=BreakdownSchema(
                conventional=summary.conventional_percent,
                descriptive=summary.descriptive_percent,
                no_merge=summary.no_merge_percent,
            ),
            commit_types=[
                CommitTypeSchema(type=kind, count=count)
                for kind, count in summary.top_commit_types()
            ],
            recent_commits=[
                RecentCommitSchema(message=c.message, author=c.author, date=c.date)
                for c in report.recent_commits(recent_limit)
            ],
        )


def _summary_schema(summary: AnalysisSummary) -> SummarySchema:
    return SummarySchema(
        total_commits=summary.total_commits,
        avg_length=summary.avg_length,
        quality_score=summary.quality_score,
        time_range=summary.time_range,
        conventional_format=summary.conventional_format,
        descriptive_messages=summary.descriptive_messages,
        merge_commits=summary.merge_commits,
        no_merge_commits=summary.no_merge_commits,
        commit_types=dict(summary.commit_types),
        common_words=list(summary.common_words),
    )


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
