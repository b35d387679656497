"""GitHub REST API adapter — implements the CommitSource port."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from urllib.parse import quote

import httpx

from commit_insight.domain.entities import CommitRecord, RepoInfo
from commit_insight.domain.exceptions import (
    HttpStatusError,
    RateLimitExceededError,
    TransportError,
    UnexpectedResponseError,
)
from commit_insight.domain.value_objects import RepoRef

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"

MAX_COMMITS = 300
COMMITS_PER_PAGE = 100


class PageState(str, Enum):
    """Where the commit pagination loop stands after inspecting a page."""

    FETCHING = "fetching"
    LAST_PAGE_REACHED = "last_page_reached"
    CAP_REACHED = "cap_reached"
    EMPTY = "empty"


class GitHubRestAdapter:
    """Concrete CommitSource backed by the GitHub v3 REST API.

    The token is passed per call rather than held by the adapter, so one
    instance can serve callers with different credentials.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_base: str = _GITHUB_API,
        max_commits: int = MAX_COMMITS,
        per_page: int = COMMITS_PER_PAGE,
    ) -> None:
        if max_commits < 1 or per_page < 1:
            raise ValueError("max_commits and per_page must be positive.")
        self._client = client
        self._api_base = api_base.rstrip("/")
        self._max_commits = max_commits
        self._per_page = per_page

    async def fetch_repo_info(self, ref: RepoRef, token: str | None = None) -> RepoInfo:
        """GET /repos/{owner}/{repo} → RepoInfo."""
        resp = await self._api_get(_repo_path(ref), token)
        data = resp.json()
        return RepoInfo(
            full_name=data.get("full_name") or ref.full_name,
            description=data.get("description"),
        )

    async def fetch_commits(
        self, ref: RepoRef, token: str | None = None
    ) -> list[CommitRecord]:
        """GET /repos/{owner}/{repo}/commits page by page → [CommitRecord].

        Pages are requested one at a time; each page is inspected before the
        next is asked for.  A 409 (empty repository) yields ``[]``.
        """
        commits: list[CommitRecord] = []
        page = 1
        state = PageState.FETCHING

        while state is PageState.FETCHING:
            batch = await self._fetch_commit_page(ref, page, token)
            if batch is None:
                logger.info("%s has no commits (HTTP 409)", ref.full_name)
                return []

            logger.debug("Fetched page %d of %s: %d commits", page, ref.full_name, len(batch))
            if not batch:
                state = PageState.EMPTY
                continue

            commits.extend(_to_commit(item) for item in batch)
            if len(commits) >= self._max_commits:
                state = PageState.CAP_REACHED
            elif len(batch) < self._per_page:
                state = PageState.LAST_PAGE_REACHED
            else:
                page += 1

        logger.info(
            "Fetched %d commits from %s (%s)",
            min(len(commits), self._max_commits),
            ref.full_name,
            state.value,
        )
        return commits[: self._max_commits]

    async def _fetch_commit_page(
        self, ref: RepoRef, page: int, token: str | None
    ) -> list[dict[str, Any]] | None:
        """Return one page of raw commit objects, or ``None`` for an empty repo."""
        resp = await self._api_get(
            f"{_repo_path(ref)}/commits",
            token,
            params={"per_page": str(self._per_page), "page": str(page)},
            empty_ok=True,
        )
        if resp.status_code == 409:
            return None
        data = resp.json()
        if not isinstance(data, list):
            raise UnexpectedResponseError(
                f"Expected a list of commits for {ref.full_name}, got {type(data).__name__}."
            )
        return data

    async def _api_get(
        self,
        endpoint: str,
        token: str | None,
        params: dict[str, str] | None = None,
        *,
        empty_ok: bool = False,
    ) -> httpx.Response:
        """Perform a GitHub API GET request with error translation."""
        url = f"{self._api_base}{endpoint}"
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "commit-insight/1.0",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            resp = await self._client.get(url, headers=headers, params=params)
        except httpx.HTTPError as exc:
            raise TransportError(f"Network error fetching {url}: {exc}") from exc

        if resp.is_success:
            return resp

        if resp.status_code == 409 and empty_ok:
            return resp

        if resp.status_code == 403 and resp.headers.get("x-ratelimit-remaining") == "0":
            raise RateLimitExceededError(
                limit=_int_header(resp, "x-ratelimit-limit"),
                reset_at=_reset_header(resp),
            )

        raise HttpStatusError(resp.status_code, authenticated=bool(token))


def _repo_path(ref: RepoRef) -> str:
    return f"/repos/{quote(ref.owner, safe='')}/{quote(ref.name, safe='')}"


def _to_commit(item: dict[str, Any]) -> CommitRecord:
    if not isinstance(item, dict):
        raise UnexpectedResponseError(f"Expected a commit object, got {type(item).__name__}.")
    commit = item.get("commit") or {}
    author = commit.get("author") or {}
    if not author.get("date"):
        raise UnexpectedResponseError(f"Commit {item.get('sha', '?')} has no author date.")
    return CommitRecord(
        message=commit.get("message") or "",
        author_name=author.get("name") or "unknown",
        author_date=_parse_timestamp(author["date"]),
        sha=item.get("sha", ""),
    )


def _parse_timestamp(raw: str) -> datetime:
    """Parse GitHub's ISO-8601 timestamps (``2024-01-01T00:00:00Z``)."""
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as exc:
        raise UnexpectedResponseError(f"Unparseable commit date {raw!r}.") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _int_header(resp: httpx.Response, name: str) -> int | None:
    try:
        return int(resp.headers.get(name, ""))
    except ValueError:
        return None


def _reset_header(resp: httpx.Response) -> datetime | None:
    epoch = _int_header(resp, "x-ratelimit-reset")
    if epoch is None:
        return None
    try:
        return datetime.fromtimestamp(epoch, tz=timezone.utc)
    except (OverflowError, OSError):
        return None
