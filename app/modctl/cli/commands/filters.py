"""Filters command implementation.

Prints the per-module include/exclude path filters in the format
consumed by a file-change evaluator.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from modctl.cli.types import OutputFormat, require_config, require_plan
from modctl.utils.formatting import console, create_filter_table, print_error, print_info

app = typer.Typer(
    help="Generate include/exclude path filters per module.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def generate_filters(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: json or table.",
            case_sensitive=False,
        ),
    ] = OutputFormat.JSON,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Also write the JSON filter spec to a file.",
        ),
    ] = None,
) -> None:
    """Generate one path filter per module.

    Each module includes its subtree and excludes the subtrees of its
    direct child modules. Exclusions are prefixed with "!".

    Examples:
        modctl filters                       # JSON on stdout
        modctl filters --format table        # Human readable
        modctl filters --export filters.json # Write to file as well
    """
    if ctx.invoked_subcommand is not None:
        return

    config = require_config(ctx)
    plan = require_plan(ctx, config)
    rendered = json.dumps(plan.filters, indent=2, sort_keys=True)

    if export_path is not None:
        export_path = export_path.resolve()
        if export_path.is_dir():
            print_error(f"Export path is a directory: {export_path}")
            raise typer.Exit(code=1)
        try:
            export_path.parent.mkdir(parents=True, exist_ok=True)
            export_path.write_text(rendered + "\n")
            print_info(f"Filters exported to {export_path}")
        except OSError as e:
            print_error(f"Failed to export: {e}")
            raise typer.Exit(code=1) from e

    if output_format == OutputFormat.JSON:
        typer.echo(rendered)
        return

    if not plan.rules:
        print_info(f"No modules found (manifest: {config.manifest}).")
        return

    console.print(create_filter_table(plan.rules))
