"""Shared fixtures: commit builders and a fake GitHub API."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

import httpx
import pytest

from commit_insight.domain.entities import CommitRecord

BASE_DATE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_commit(
    message: str = "feat: add something useful",
    author: str = "Ada",
    date: datetime | None = None,
    sha: str = "abc123",
) -> CommitRecord:
    return CommitRecord(
        message=message,
        author_name=author,
        author_date=date or BASE_DATE,
        sha=sha,
    )


def raw_commit(index: int, message: str | None = None) -> dict:
    """A commit object shaped like GitHub's ``/commits`` payload."""
    date = BASE_DATE + timedelta(hours=index)
    return {
        "sha": f"{index:040x}",
        "commit": {
            "message": message or f"fix: change number {index}",
            "author": {
                "name": f"author-{index % 3}",
                "date": date.strftime("%Y-%m-%dT%H:%M:%SZ"),
            },
        },
    }


class FakeGitHub:
    """Serves ``/repos/{o}/{r}`` and paged ``/commits`` from an in-memory list."""

    def __init__(self, total_commits: int = 0, repo: dict | None = None) -> None:
        self.commits = [raw_commit(i) for i in range(total_commits)]
        self.repo = repo or {"full_name": "octo/demo", "description": "Demo repo"}
        self.requests: list[httpx.Request] = []
        self.overrides: dict[str, httpx.Response] = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        for prefix, response in self.overrides.items():
            if path.endswith(prefix):
                return response
        if path.endswith("/commits"):
            per_page = int(request.url.params["per_page"])
            page = int(request.url.params["page"])
            start = (page - 1) * per_page
            return httpx.Response(200, json=self.commits[start : start + per_page])
        return httpx.Response(200, json=self.repo)

    def commit_pages_requested(self) -> list[int]:
        return [
            int(r.url.params["page"]) for r in self.requests if r.url.path.endswith("/commits")
        ]


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def client_for() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    def _build(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _build
