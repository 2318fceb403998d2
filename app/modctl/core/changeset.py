"""Changeset sources.

Provides the list of changed files fed to the changeset evaluator,
either from git or from a plain file list.
"""

import logging
import subprocess
from pathlib import Path

from modctl.utils.shell import command_exists, run_command

logger = logging.getLogger(__name__)


class ChangesetError(Exception):
    """Raised when the list of changed files cannot be obtained."""


def parse_file_list(text: str) -> list[str]:
    """Parse a newline separated list of file paths.

    Blank lines and lines starting with "#" are ignored.

    Args:
        text: File list content.

    Returns:
        Stripped file paths in input order.
    """
    files: list[str] = []
    for line in text.splitlines():
        entry = line.strip()
        if entry and not entry.startswith("#"):
            files.append(entry)
    return files


def read_changed_files(path: Path) -> list[str]:
    """Read changed file paths from a file.

    Args:
        path: File containing one path per line.

    Returns:
        List of changed file paths.

    Raises:
        ChangesetError: If the file cannot be read.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ChangesetError(f"Cannot read changed files from {path}: {e}") from e
    return parse_file_list(text)


def git_changed_files(base: str, head: str = "HEAD", *, cwd: Path | None = None) -> list[str]:
    """List files changed between two git revisions.

    Uses the three-dot form, i.e. changes on head since it diverged
    from base. Rename detection is disabled so that a moved file is
    reported under both its old and its new path. Output is restricted
    to cwd and paths are relative to it, so cwd should be the directory
    modules are discovered under, even below the repository top level.

    Args:
        base: Base revision (e.g., "origin/main").
        head: Head revision.
        cwd: Directory the paths are made relative to.

    Returns:
        Changed file paths relative to cwd, unquoted.

    Raises:
        ChangesetError: If git is unavailable or the diff fails.
    """
    if not command_exists("git"):
        raise ChangesetError("git executable not found in PATH")

    args = [
        "git",
        "-c",
        "core.quotePath=false",
        "diff",
        "--name-only",
        "--no-renames",
        "--relative",
        "-z",
        f"{base}...{head}",
    ]
    logger.debug("Running: %s", " ".join(args))
    try:
        result = run_command(args, cwd=str(cwd) if cwd is not None else None)
    except (OSError, subprocess.TimeoutExpired) as e:
        raise ChangesetError(f"git diff failed: {e}") from e

    if not result.success:
        raise ChangesetError(f"git diff {base}...{head} failed: {result.stderr.strip()}")

    # -z output is NUL-terminated and never quoted
    return [entry for entry in result.stdout.split("\0") if entry]
