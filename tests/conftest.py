"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

RepoFactory = Callable[..., Path]


@pytest.fixture
def make_repo(tmp_path: Path) -> RepoFactory:
    """Factory creating a repository tree with go.mod manifests.

    Each module path gets a go.mod; optional extra files are created
    empty. "." places a manifest at the repository root.
    """

    def _make(*modules: str, files: tuple[str, ...] = (), manifest: str = "go.mod") -> Path:
        root = tmp_path / "repo"
        root.mkdir(exist_ok=True)
        for module in modules:
            module_dir = root if module == "." else root / module
            module_dir.mkdir(parents=True, exist_ok=True)
            (module_dir / manifest).write_text("module example.com/test\n")
        for name in files:
            file_path = root / name
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text("")
        return root

    return _make
