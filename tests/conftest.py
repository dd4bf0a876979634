"""Shared pytest fixtures for building working trees."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def schemas_root() -> Path:
    """Return the repository's JSON Schema directory."""
    return Path(__file__).resolve().parents[1] / "schemas"


@pytest.fixture()
def make_tree(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Return a factory that writes ``{relative path: content}`` under a fresh root."""
    root = tmp_path / "workspace"
    root.mkdir()

    def _make(files: dict[str, str]) -> Path:
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _make
