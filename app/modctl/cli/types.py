"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path

import typer

from modctl.core.config import ConfigError, ModctlConfig, get_config_path, load_config
from modctl.core.discovery import DiscoveryError
from modctl.core.hierarchy import AmbiguousHierarchyError
from modctl.core.pipeline import FilterPlan, plan_filters
from modctl.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def get_root(ctx: typer.Context) -> Path:
    """Get the repository root selected by the global --root option."""
    obj = ctx.obj or {}
    return Path(obj.get("root") or ".")


def require_config(ctx: typer.Context) -> ModctlConfig:
    """Load the repository configuration or exit with an error message.

    Uses the global --config option if given, otherwise modctl.toml in
    the repository root.

    Args:
        ctx: Typer context carrying the global options.

    Returns:
        Loaded ModctlConfig (defaults if no config file exists).

    Raises:
        typer.Exit: If the configuration cannot be loaded.
    """
    obj = ctx.obj or {}
    config_path = obj.get("config") or get_config_path(get_root(ctx))
    try:
        return load_config(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def require_plan(ctx: typer.Context, config: ModctlConfig) -> FilterPlan:
    """Discover modules and build filter rules or exit with an error message.

    Args:
        ctx: Typer context carrying the global options.
        config: Repository configuration.

    Returns:
        FilterPlan for the repository.

    Raises:
        typer.Exit: If discovery or hierarchy resolution fails.
    """
    try:
        return plan_filters(get_root(ctx), config)
    except (DiscoveryError, AmbiguousHierarchyError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
