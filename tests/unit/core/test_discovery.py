"""Tests for module discovery."""

import os
from pathlib import Path

import pytest
from modctl.core.discovery import (
    DiscoveryError,
    apply_root_policy,
    discover_modules,
    normalize_module_path,
)


class TestNormalizeModulePath:
    """Tests for normalize_module_path."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("a", "a"),
            ("a/v2/", "a/v2"),
            ("./a/v2", "a/v2"),
            ("a//v2", "a/v2"),
            ("a\\v2", "a/v2"),
            ("", "."),
            (".", "."),
            ("./", "."),
        ],
    )
    def test_normalizes(self, raw: str, expected: str) -> None:
        """Paths are slash-separated without leading ./ or trailing slash."""
        assert normalize_module_path(raw) == expected


class TestDiscoverModules:
    """Tests for discover_modules."""

    def test_finds_nested_modules(self, make_repo) -> None:
        """Every directory holding a manifest is a module, at any depth."""
        root = make_repo("a", "a/v2", "a/v2/v3", "b", files=("c/README.md",))

        assert discover_modules(root) == {"a", "a/v2", "a/v2/v3", "b"}

    def test_root_manifest_is_dot(self, make_repo) -> None:
        """A manifest at the repository root yields the '.' module."""
        root = make_repo(".", "a")

        assert discover_modules(root) == {".", "a"}

    def test_empty_repository(self, make_repo) -> None:
        """No manifests is not an error."""
        root = make_repo(files=("src/main.go",))

        assert discover_modules(root) == set()

    def test_custom_manifest_pattern(self, make_repo) -> None:
        """The manifest may be a glob over file names."""
        root = make_repo("svc/api", manifest="api.csproj")

        assert discover_modules(root, "*.csproj") == {"svc/api"}

    def test_manifest_match_is_by_name_only(self, make_repo) -> None:
        """Files with a similar name are not manifests."""
        root = make_repo(files=("a/go.mod.bak", "b/go.sum"))

        assert discover_modules(root) == set()

    def test_skips_configured_dirs(self, make_repo) -> None:
        """Directories listed in skip_dirs are not descended into."""
        root = make_repo("a", "vendor/dep", ".git/modules/x")

        assert discover_modules(root, skip_dirs=(".git", "vendor")) == {"a"}

    def test_missing_root_raises(self, tmp_path: Path) -> None:
        """A nonexistent root is a DiscoveryError."""
        with pytest.raises(DiscoveryError, match="not found"):
            discover_modules(tmp_path / "missing")

    def test_file_root_raises(self, tmp_path: Path) -> None:
        """A root that is a file is a DiscoveryError."""
        file_path = tmp_path / "go.mod"
        file_path.write_text("")

        with pytest.raises(DiscoveryError, match="not a directory"):
            discover_modules(file_path)

    def test_symlinks_not_followed_by_default(self, make_repo, tmp_path: Path) -> None:
        """Linked directories are ignored unless follow_symlinks is set."""
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "go.mod").write_text("")
        root = make_repo("a")
        os.symlink(outside, root / "linked")

        assert discover_modules(root) == {"a"}
        assert discover_modules(root, follow_symlinks=True) == {"a", "linked"}

    def test_symlink_cycle_terminates(self, make_repo) -> None:
        """A link back to an ancestor does not loop forever."""
        root = make_repo("a")
        os.symlink(root, root / "a" / "loop")

        assert discover_modules(root, follow_symlinks=True) == {"a"}


class TestApplyRootPolicy:
    """Tests for apply_root_policy."""

    def test_include_keeps_root(self) -> None:
        """The include policy keeps the root module."""
        assert apply_root_policy({".", "a"}, "include") == {".", "a"}

    def test_ignore_drops_root(self) -> None:
        """The ignore policy drops only the root module."""
        assert apply_root_policy({".", "a"}, "ignore") == {"a"}

    def test_ignore_without_root(self) -> None:
        """The ignore policy is a no-op without a root module."""
        assert apply_root_policy({"a"}, "ignore") == {"a"}
