"""Changed command implementation.

Runs the full pipeline and prints the changed modules as a JSON array,
suitable as a CI matrix input.
"""

import sys
from pathlib import Path
from typing import Annotated

import typer

from modctl.cli.types import get_root, require_config
from modctl.core.aggregate import EvaluatorMismatchError, format_module_list
from modctl.core.changeset import (
    ChangesetError,
    git_changed_files,
    parse_file_list,
    read_changed_files,
)
from modctl.core.discovery import DiscoveryError
from modctl.core.evaluator import ChangesetEvaluator
from modctl.core.hierarchy import AmbiguousHierarchyError
from modctl.core.pipeline import detect_changed_modules
from modctl.utils.formatting import print_error, print_info

app = typer.Typer(
    help="Print modules touched by a changeset.",
    invoke_without_command=True,
)


def _collect_changeset(
    ctx: typer.Context, base: str | None, head: str, files: str | None
) -> list[str]:
    """Obtain the changed files from git or from a file list.

    Raises:
        typer.Exit: If no or both sources are given, or reading fails.
    """
    if (base is None) == (files is None):
        print_error("Specify exactly one of --base or --files.")
        raise typer.Exit(code=1)

    try:
        if files == "-":
            return parse_file_list(sys.stdin.read())
        if files is not None:
            return read_changed_files(Path(files))
        return git_changed_files(base or "", head, cwd=get_root(ctx))
    except ChangesetError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


@app.callback(invoke_without_command=True)
def changed_modules(
    ctx: typer.Context,
    base: Annotated[
        str | None,
        typer.Option(
            "--base",
            "-b",
            help="Base git revision to diff against.",
        ),
    ] = None,
    head: Annotated[
        str,
        typer.Option(
            "--head",
            help="Head git revision.",
        ),
    ] = "HEAD",
    files: Annotated[
        str | None,
        typer.Option(
            "--files",
            help="File listing changed paths, one per line ('-' for stdin).",
        ),
    ] = None,
) -> None:
    """Detect which modules a changeset touches.

    A file belongs to the deepest module enclosing it, so changes inside
    a nested module never mark its parent as changed.

    Examples:
        modctl changed --base origin/main           # Diff against main
        git diff --name-only | modctl changed --files -
    """
    if ctx.invoked_subcommand is not None:
        return

    config = require_config(ctx)
    changed_files = _collect_changeset(ctx, base, head, files)

    evaluator = ChangesetEvaluator(changed_files)
    try:
        modules = detect_changed_modules(get_root(ctx), evaluator, config)
    except (DiscoveryError, AmbiguousHierarchyError, EvaluatorMismatchError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if (ctx.obj or {}).get("verbose"):
        print_info(
            f"{len(evaluator.changed_files)} changed file(s), {len(modules)} changed module(s)"
        )
        for module in modules:
            print_info(f"{module}: {', '.join(evaluator.matching_files(module))}")

    typer.echo(format_module_list(modules))
