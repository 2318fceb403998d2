"""CLI commands for modctl.

This package contains all subcommand implementations.
"""

from modctl.cli.commands import changed, filters, init, modules

__all__ = ["changed", "filters", "init", "modules"]
