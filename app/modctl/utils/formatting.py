"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich. Machine
readable results go to stdout; messages, warnings and errors go to
stderr so they never mix with JSON output.
"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from modctl.core.theme import get_theme
from modctl.models.module import FilterRule, ModuleNode


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_module_table(nodes: list[ModuleNode], title: str = "Modules") -> Table:
    """Create a table listing modules with their parent and children.

    Args:
        nodes: Modules to display, in display order.
        title: Table title.

    Returns:
        Rich Table configured for module display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Module", no_wrap=True)
    table.add_column("Parent", style="muted")
    table.add_column("Children", style="text")

    for node in nodes:
        table.add_row(
            f"[module]{escape(node.path)}[/]",
            escape(node.parent or "-"),
            escape(", ".join(node.children) or "-"),
        )
    return table


def create_filter_table(rules: list[FilterRule], title: str = "Filter Rules") -> Table:
    """Create a table listing filter rules.

    Args:
        rules: Filter rules to display.
        title: Table title.

    Returns:
        Rich Table configured for filter display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Module", no_wrap=True)
    table.add_column("Include")
    table.add_column("Exclude")

    for rule in rules:
        table.add_row(
            f"[module]{escape(rule.id)}[/]",
            f"[include]{escape(' '.join(rule.include))}[/]",
            f"[exclude]{escape(' '.join(rule.excludes))}[/]" if rule.excludes else "[muted]-[/]",
        )
    return table


def print_info(message: str) -> None:
    """Print an info message."""
    err_console.print(f"[info]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    err_console.print(f"[success]{escape(message)}[/]")
