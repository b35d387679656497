"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

_GITHUB_URL_RE = re.compile(r"github\.com/(?P<owner>[^/?#]+)/(?P<repo>[^/?#]+)")
_QUERY_OR_FRAGMENT_RE = re.compile(r"[?#].*$", re.DOTALL)


@dataclass(frozen=True, slots=True)
class RepoRef:
    """Normalized reference to a GitHub repository.

    Built from free-form input such as ``https://github.com/psf/requests.git``
    or ``psf/requests``.  Both fields are always non-empty.
    """

    owner: str
    name: str

    def __post_init__(self) -> None:
        if not self.owner or not self.name:
            raise ValueError("RepoRef needs a non-empty owner and name.")

    @classmethod
    def parse(cls, raw: str | None) -> RepoRef | None:
        """Locate a repository in *raw*; return ``None`` when nothing matches."""
        text = (raw or "").strip()
        if not text:
            return None

        match = _GITHUB_URL_RE.search(text)
        if match:
            repo = match["repo"]
            if repo.endswith(".git"):
                repo = repo[: -len(".git")]
            if not repo:
                return None
            return cls(owner=match["owner"], name=repo)

        parts = _QUERY_OR_FRAGMENT_RE.sub("", text).split("/")
        if len(parts) == 2 and all(parts):
            return cls(owner=parts[0], name=parts[1])
        return None

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"
