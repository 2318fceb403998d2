"""Modules command implementation.

Lists the modules discovered in the repository together with their
position in the nesting hierarchy.
"""

import json
from typing import Annotated

import typer

from modctl.cli.types import OutputFormat, require_config, require_plan
from modctl.utils.formatting import console, create_module_table, print_info

app = typer.Typer(
    help="List discovered modules and their hierarchy.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def list_modules(
    ctx: typer.Context,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: table or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Discover modules and show parent/children for each.

    Examples:
        modctl modules                  # Table of modules
        modctl modules --format json    # JSON for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    config = require_config(ctx)
    plan = require_plan(ctx, config)
    nodes = list(plan.hierarchy.values())

    if output_format == OutputFormat.JSON:
        data = [
            {"path": node.path, "parent": node.parent, "children": list(node.children)}
            for node in sorted(nodes, key=lambda n: n.path)
        ]
        typer.echo(json.dumps(data, indent=2))
        return

    if not nodes:
        print_info(f"No modules found (manifest: {config.manifest}).")
        return

    console.print(create_module_table(nodes))
    console.print(f"\n[muted]Found {len(nodes)} module(s)[/]")
