"""Module discovery.

Walks a repository tree and collects the directories that contain a
manifest file (e.g., go.mod). Each such directory is a module root,
reported as a normalized repository-relative module path.
"""

import fnmatch
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from modctl.models.module import ROOT_MODULE

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST = "go.mod"
DEFAULT_SKIP_DIRS: tuple[str, ...] = (".git",)


class DiscoveryError(Exception):
    """Raised when the repository root cannot be traversed."""


def normalize_module_path(path: str) -> str:
    """Normalize a repository-relative path into a module path.

    Converts backslashes to slashes, drops "." segments and empty
    segments (leading, trailing and duplicate slashes). An empty result
    denotes the repository root and becomes ".".

    Args:
        path: Raw relative path (e.g., "./a//v2/").

    Returns:
        Normalized module path (e.g., "a/v2").
    """
    parts = [part for part in path.replace("\\", "/").split("/") if part not in ("", ".")]
    if not parts:
        return ROOT_MODULE
    return "/".join(parts)


def discover_modules(
    root: Path,
    manifest: str = DEFAULT_MANIFEST,
    *,
    skip_dirs: Iterable[str] = DEFAULT_SKIP_DIRS,
    follow_symlinks: bool = False,
) -> set[str]:
    """Find all module roots below a repository root.

    Every file whose name matches the manifest pattern marks its
    containing directory as a module. Symbolic links to directories are
    only followed when follow_symlinks is set; in that case directories
    are tracked by their real path so that link cycles terminate.

    Args:
        root: Repository root directory.
        manifest: Manifest filename or fnmatch-style pattern.
        skip_dirs: Directory names that are never descended into.
        follow_symlinks: Whether to follow symbolic links to directories.

    Returns:
        Set of normalized module paths. Empty if no manifest was found.

    Raises:
        DiscoveryError: If root does not exist or cannot be listed.
    """
    if not root.exists():
        raise DiscoveryError(f"Repository root not found: {root}")
    if not root.is_dir():
        raise DiscoveryError(f"Repository root is not a directory: {root}")
    try:
        os.scandir(root).close()
    except OSError as e:
        raise DiscoveryError(f"Cannot read repository root {root}: {e}") from e

    skipped = frozenset(skip_dirs)
    visited: set[str] = set()
    modules: set[str] = set()

    def _on_error(error: OSError) -> None:
        logger.warning("Skipping unreadable directory: %s", error.filename)

    walker = os.walk(root, onerror=_on_error, followlinks=follow_symlinks)
    for dirpath, dirnames, filenames in walker:
        if follow_symlinks:
            real = os.path.realpath(dirpath)
            if real in visited:
                logger.debug("Skipping already visited directory: %s", dirpath)
                dirnames[:] = []
                continue
            visited.add(real)

        dirnames[:] = sorted(name for name in dirnames if name not in skipped)

        if any(fnmatch.fnmatchcase(name, manifest) for name in filenames):
            relative = os.path.relpath(dirpath, root)
            module = normalize_module_path(relative)
            logger.debug("Found module: %s", module)
            modules.add(module)

    logger.debug("Discovered %d module(s) below %s", len(modules), root)
    return modules


def apply_root_policy(modules: set[str], root_module: str) -> set[str]:
    """Apply the configured policy for a manifest at the repository root.

    Args:
        modules: Discovered module paths.
        root_module: "include" keeps the root module, "ignore" drops it.

    Returns:
        Module paths after applying the policy.
    """
    if root_module == "ignore" and ROOT_MODULE in modules:
        logger.info("Ignoring module at repository root")
        return modules - {ROOT_MODULE}
    return modules
