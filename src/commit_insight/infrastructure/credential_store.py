"""Credential stores — implement the CredentialStore port."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from commit_insight.domain.ports.credential_store import CREDENTIAL_KEY

logger = logging.getLogger(__name__)


class InMemoryCredentialStore:
    """Keeps the token for the lifetime of the process only."""

    def __init__(self, token: str | None = None) -> None:
        self._values: dict[str, str] = {}
        if token:
            self.set(token)

    def get(self) -> str | None:
        return self._values.get(CREDENTIAL_KEY)

    def set(self, token: str) -> None:
        token = token.strip()
        if not token:
            self.clear()
            return
        self._values[CREDENTIAL_KEY] = token

    def clear(self) -> None:
        self._values.pop(CREDENTIAL_KEY, None)


class FileCredentialStore:
    """Persists the token in a small JSON file so it survives restarts.

    The file holds a flat ``{key: value}`` object; other keys written by
    someone else are preserved.  A missing file means no token.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    def get(self) -> str | None:
        value = self._load().get(CREDENTIAL_KEY)
        return value or None

    def set(self, token: str) -> None:
        token = token.strip()
        if not token:
            self.clear()
            return
        data = self._load()
        data[CREDENTIAL_KEY] = token
        self._dump(data)
        logger.info("Saved GitHub token to %s", self._path)

    def clear(self) -> None:
        data = self._load()
        if data.pop(CREDENTIAL_KEY, None) is not None:
            self._dump(data)
            logger.info("Removed GitHub token from %s", self._path)

    def _load(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        data = json.loads(raw) if raw.strip() else {}
        if not isinstance(data, dict):
            raise ValueError(f"Credential file {self._path} must hold a JSON object.")
        return data

    def _dump(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        self._path.chmod(0o600)
