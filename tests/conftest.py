"""Shared pytest fixtures for test modules."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove all FANTASY__ env vars and point the snapshot store at tmp_path.

    Keeps tests isolated from .envrc and from a real draft database.
    """
    for key in list(os.environ):
        if key.startswith("FANTASY__"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("FANTASY__STORE__DB_PATH", str(tmp_path / "draft.db"))
