"""Port: credential store — holds the optional GitHub token between requests."""

from __future__ import annotations

from typing import Protocol

CREDENTIAL_KEY = "github_api_key"


class CredentialStore(Protocol):
    """Key-value storage for the GitHub token under :data:`CREDENTIAL_KEY`."""

    def get(self) -> str | None: ...

    def set(self, token: str) -> None: ...

    def clear(self) -> None: ...
