"""Tests for the credential stores."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from commit_insight.domain.ports.credential_store import CREDENTIAL_KEY
from commit_insight.infrastructure.credential_store import (
    FileCredentialStore,
    InMemoryCredentialStore,
)


def test_in_memory_roundtrip() -> None:
    store = InMemoryCredentialStore()
    assert store.get() is None
    store.set("  ghp_abc  ")
    assert store.get() == "ghp_abc"
    store.set("   ")
    assert store.get() is None


def test_in_memory_initial_token() -> None:
    store = InMemoryCredentialStore("ghp_x")
    assert store.get() == "ghp_x"
    store.clear()
    assert store.get() is None


def test_file_store_missing_file(tmp_path: Path) -> None:
    assert FileCredentialStore(tmp_path / "none.json").get() is None


def test_file_store_persists_under_fixed_key(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "credentials.json"
    FileCredentialStore(path).set("ghp_abc")

    assert json.loads(path.read_text()) == {CREDENTIAL_KEY: "ghp_abc"}
    assert FileCredentialStore(path).get() == "ghp_abc"


def test_file_store_clear_keeps_other_keys(tmp_path: Path) -> None:
    path = tmp_path / "credentials.json"
    path.write_text(json.dumps({"other": "value", CREDENTIAL_KEY: "ghp_abc"}))

    store = FileCredentialStore(path)
    store.clear()

    assert store.get() is None
    assert json.loads(path.read_text()) == {"other": "value"}


def test_file_store_rejects_non_object(tmp_path: Path) -> None:
    path = tmp_path / "credentials.json"
    path.write_text("[1, 2]")
    with pytest.raises(ValueError):
        FileCredentialStore(path).get()
