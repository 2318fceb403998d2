"""Color theme for modctl output.

Colors are hex codes. A user file at ~/.config/modctl/theme.toml may
override any of them in a [colors] table; anything it does not set, or
sets to an invalid value, keeps the built-in color.
"""

import logging
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints, ValidationError
from rich.theme import Theme

from modctl.core.paths import get_theme_path

logger = logging.getLogger(__name__)

HexColor = Annotated[
    str,
    StringConstraints(strip_whitespace=True, pattern=r"^#(?:[0-9a-fA-F]{3}){1,2}$"),
]

# Styles rendered in bold on top of their color
_BOLD_STYLES = frozenset({"error", "module"})


class ThemeColors(BaseModel):
    """Hex colors keyed by Rich style name."""

    model_config = ConfigDict(extra="forbid")

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#69B9A1"
    border: HexColor = "#29526d"
    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#0ec1c8"
    module: HexColor = "#69B9A1"
    include: HexColor = "#c1ff62"
    exclude: HexColor = "#f53263"


def _read_overrides(path: Path) -> dict[str, object]:
    """Read the [colors] table of a theme file.

    Returns an empty mapping when the file is absent or unusable.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring non-table 'colors' in %s", path)
        return {}
    return colors


def load_theme(path: Path | None = None) -> ThemeColors:
    """Load theme colors with user overrides applied.

    Each override is validated on its own, so one bad entry does not
    discard the others.

    Args:
        path: Theme file to read. Defaults to the user theme path.

    Returns:
        ThemeColors with valid overrides applied.
    """
    theme_path = path or get_theme_path()
    colors = ThemeColors()
    for name, value in _read_overrides(theme_path).items():
        try:
            colors = ThemeColors.model_validate({**colors.model_dump(), name: value})
        except ValidationError as e:
            logger.warning("Ignoring theme color %r: %s", name, e.errors()[0]["msg"])
    return colors


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme used by the shared consoles.

    Args:
        colors: Colors to use. Loaded from the user theme if None.

    Returns:
        Rich Theme with one style per color plus "bold_header".
    """
    colors = colors or load_theme()
    styles = {
        name: f"bold {color}" if name in _BOLD_STYLES else color
        for name, color in colors.model_dump().items()
    }
    styles["bold_header"] = f"bold {colors.header}"
    return Theme(styles)


@lru_cache(maxsize=1)
def get_theme() -> Theme:
    """Get the Rich theme, loading it on first use."""
    return get_rich_theme()
