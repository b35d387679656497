"""Tests for the analyze-repository use case."""

from __future__ import annotations

import asyncio
import threading

import pytest

from commit_insight.domain.entities import CommitRecord, RepoInfo
from commit_insight.domain.exceptions import (
    HttpStatusError,
    InvalidRepositoryReferenceError,
)
from commit_insight.domain.value_objects import RepoRef
from commit_insight.infrastructure.credential_store import InMemoryCredentialStore
from commit_insight.services.analyze_repo import AnalyzeRepoUseCase
from conftest import make_commit


class FakeSource:
    """In-memory CommitSource that records what it was asked for."""

    def __init__(
        self,
        commits: list[CommitRecord] | None = None,
        info_error: Exception | None = None,
    ) -> None:
        self.commits = commits or []
        self.info_error = info_error
        self.calls: list[tuple[str, RepoRef, str | None]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def _enter(self) -> None:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        await asyncio.sleep(0)

    async def fetch_repo_info(self, ref: RepoRef, token: str | None = None) -> RepoInfo:
        self.calls.append(("info", ref, token))
        await self._enter()
        self.in_flight -= 1
        if self.info_error:
            raise self.info_error
        return RepoInfo(full_name=ref.full_name, description="demo")

    async def fetch_commits(self, ref: RepoRef, token: str | None = None) -> list[CommitRecord]:
        self.calls.append(("commits", ref, token))
        await self._enter()
        self.in_flight -= 1
        return list(self.commits)


class CountingStore(InMemoryCredentialStore):
    def __init__(self, token: str | None = None) -> None:
        super().__init__(token)
        self.reads = 0
        self.read_threads: list[int] = []

    def get(self) -> str | None:
        self.reads += 1
        self.read_threads.append(threading.get_ident())
        return super().get()


@pytest.mark.asyncio
async def test_builds_report() -> None:
    source = FakeSource(commits=[make_commit("feat: add login"), make_commit("Merge x")])
    report = await AnalyzeRepoUseCase(source).execute("https://github.com/octo/demo.git")

    assert report.repo == RepoInfo(full_name="octo/demo", description="demo")
    assert not report.is_empty
    assert report.summary is not None
    assert report.summary.total_commits == 2
    assert len(report.commits) == 2


@pytest.mark.asyncio
async def test_fetches_run_concurrently() -> None:
    source = FakeSource(commits=[make_commit()])
    await AnalyzeRepoUseCase(source).execute("octo/demo")
    assert source.max_in_flight == 2


@pytest.mark.asyncio
async def test_invalid_input_never_reaches_network() -> None:
    source = FakeSource()
    with pytest.raises(InvalidRepositoryReferenceError):
        await AnalyzeRepoUseCase(source).execute("not a repo")
    assert source.calls == []


@pytest.mark.asyncio
async def test_no_commits_is_empty_report() -> None:
    report = await AnalyzeRepoUseCase(FakeSource()).execute("octo/demo")
    assert report.is_empty
    assert report.summary is None
    assert report.recent_commits() == []


@pytest.mark.asyncio
async def test_metadata_errors_propagate() -> None:
    source = FakeSource(commits=[make_commit()], info_error=HttpStatusError(404))
    with pytest.raises(HttpStatusError) as excinfo:
        await AnalyzeRepoUseCase(source).execute("octo/demo")
    assert excinfo.value.status_code == 404


@pytest.mark.asyncio
async def test_explicit_token_wins_and_store_is_not_read() -> None:
    source = FakeSource(commits=[make_commit()])
    store = CountingStore("stored")
    await AnalyzeRepoUseCase(source, store, default_token="env").execute("octo/demo", token="explicit")

    assert {token for _, _, token in source.calls} == {"explicit"}
    assert store.reads == 0


@pytest.mark.asyncio
async def test_stored_token_is_read_once() -> None:
    source = FakeSource(commits=[make_commit()])
    store = CountingStore("stored")
    await AnalyzeRepoUseCase(source, store, default_token="env").execute("octo/demo")

    assert {token for _, _, token in source.calls} == {"stored"}
    assert store.reads == 1


@pytest.mark.asyncio
async def test_falls_back_to_configured_token_then_anonymous() -> None:
    source = FakeSource(commits=[make_commit()])
    await AnalyzeRepoUseCase(source, CountingStore(), default_token="env").execute("octo/demo")
    assert {token for _, _, token in source.calls} == {"env"}

    source = FakeSource(commits=[make_commit()])
    await AnalyzeRepoUseCase(source, CountingStore()).execute("octo/demo")
    assert {token for _, _, token in source.calls} == {None}


@pytest.mark.asyncio
async def test_recent_commits_are_first_lines_newest_first() -> None:
    commits = [make_commit(f"fix: change {i}\n\nlong body", author=f"dev{i}") for i in range(25)]
    report = await AnalyzeRepoUseCase(FakeSource(commits=commits)).execute("octo/demo")

    recent = report.recent_commits()
    assert len(recent) == 20
    assert recent[0].message == "fix: change 0"
    assert recent[0].author == "dev0"
    assert recent[-1].message == "fix: change 19"


@pytest.mark.asyncio
async def test_store_is_read_off_the_event_loop_thread() -> None:
    store = CountingStore("stored")
    await AnalyzeRepoUseCase(FakeSource(commits=[make_commit()]), store).execute("octo/demo")

    assert store.read_threads
    assert threading.get_ident() not in store.read_threads
