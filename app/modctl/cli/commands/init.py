"""Init command implementation.

Creates a modctl.toml file with default settings in the repository root.
"""

from typing import Annotated

import typer

from modctl.cli.types import get_root
from modctl.core.config import ConfigError, ModctlConfig, get_config_path, save_config
from modctl.utils.formatting import print_error, print_info, print_success

app = typer.Typer(
    help="Create a modctl.toml configuration file.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def init_config(
    ctx: typer.Context,
    manifest: Annotated[
        str | None,
        typer.Option(
            "--manifest",
            "-m",
            help="Manifest filename or glob marking a module root.",
        ),
    ] = None,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite an existing configuration file.",
        ),
    ] = False,
) -> None:
    """Write a default configuration file.

    Examples:
        modctl init                          # go.mod modules
        modctl init --manifest package.json  # npm packages
    """
    if ctx.invoked_subcommand is not None:
        return

    obj = ctx.obj or {}
    path = obj.get("config") or get_config_path(get_root(ctx))

    if path.exists() and not force:
        print_error(f"Config already exists: {path}")
        print_info("Use --force to overwrite.")
        raise typer.Exit(code=1)

    try:
        config = ModctlConfig(manifest=manifest) if manifest else ModctlConfig()
    except ValueError as e:
        print_error(f"Invalid manifest pattern: {manifest}")
        raise typer.Exit(code=1) from e

    try:
        saved = save_config(config, path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")
