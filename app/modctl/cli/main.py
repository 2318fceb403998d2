"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from modctl import __version__
from modctl.cli.commands import changed, filters, init, modules

# Create main Typer app
app = typer.Typer(
    name="modctl",
    help="Detect changed modules in repositories with nested modules.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"modctl version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool, quiet: bool) -> None:
    """Send log records to stderr at a level chosen by the global flags."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("modctl").setLevel(level)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    root: Annotated[
        Path,
        typer.Option(
            "--root",
            "-r",
            help="Repository root to scan.",
        ),
    ] = Path("."),
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Config file (default: <root>/modctl.toml).",
        ),
    ] = None,
) -> None:
    """modctl - find the modules a changeset touches.

    Discovers modules by their manifest file, resolves how they nest,
    and attributes every changed file to the deepest enclosing module.
    """
    _configure_logging(verbose, quiet)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["root"] = root
    ctx.obj["config"] = config


# Register commands
app.add_typer(modules.app, name="modules")
app.add_typer(filters.app, name="filters")
app.add_typer(changed.app, name="changed")
app.add_typer(init.app, name="init")


if __name__ == "__main__":
    app()
