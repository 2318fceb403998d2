"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

# pyright: reportPrivateUsage=false

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from modctl.core.paths import APP_NAME, get_config_dir, get_theme_path
from modctl.core.theme import ThemeColors, _read_overrides, get_rich_theme, load_theme
from pydantic import ValidationError
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has sensible defaults."""
        colors = ThemeColors()
        assert colors.text == "#ffffff"
        assert colors.header == "#69B9A1"
        assert colors.error == "#f53263"

    def test_short_hex_accepted(self) -> None:
        """ThemeColors accepts #RGB codes."""
        assert ThemeColors(module="#abc").module == "#abc"

    def test_invalid_hex_no_hash(self) -> None:
        """ThemeColors rejects colors without # prefix."""
        with pytest.raises(ValidationError, match="should match pattern"):
            ThemeColors(text="ffffff")

    def test_invalid_hex_chars(self) -> None:
        """ThemeColors rejects invalid hex characters."""
        with pytest.raises(ValidationError, match="should match pattern"):
            ThemeColors(text="#gggggg")


class TestLoadTheme:
    """Tests for theme file loading."""

    def test_missing_file_has_no_overrides(self, tmp_path: Path) -> None:
        """A missing theme file yields no overrides."""
        assert _read_overrides(tmp_path / "nonexistent.toml") == {}

    def test_malformed_file_has_no_overrides(self, tmp_path: Path) -> None:
        """Broken TOML is ignored rather than aborting the CLI."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text("[colors\n")

        assert _read_overrides(theme_file) == {}

    def test_user_overrides(self, tmp_path: Path) -> None:
        """User colors override defaults, other colors keep defaults."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\nmodule = "#ff0000"\n')

        colors = load_theme(theme_file)

        assert colors.module == "#ff0000"
        assert colors.text == "#ffffff"

    def test_invalid_override_falls_back(self, tmp_path: Path) -> None:
        """Invalid user colors fall back to defaults."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\nmodule = "red"\n')

        assert load_theme(theme_file) == ThemeColors()

    def test_bad_override_keeps_valid_ones(self, tmp_path: Path) -> None:
        """Only the invalid entry is dropped, other overrides still apply."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\nmodule = "red"\ninclude = " #00ff00 "\nbogus = "#000"\n')

        colors = load_theme(theme_file)

        assert colors.module == ThemeColors().module
        assert colors.include == "#00ff00"

    def test_default_path_from_xdg(self, tmp_path: Path) -> None:
        """The user theme lives in the XDG config directory."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_config_dir() == tmp_path / APP_NAME
            assert get_theme_path() == tmp_path / APP_NAME / "theme.toml"


class TestGetRichTheme:
    """Tests for get_rich_theme function."""

    def test_returns_rich_theme_with_styles(self) -> None:
        """Theme includes the styles used by the CLI."""
        theme = get_rich_theme(ThemeColors())

        assert isinstance(theme, Theme)
        for style in ("module", "include", "exclude", "error", "bold_header"):
            assert style in theme.styles

    def test_bold_styles(self) -> None:
        """Module names and errors are rendered in bold."""
        theme = get_rich_theme(ThemeColors())

        assert theme.styles["module"].bold is True
        assert not theme.styles["include"].bold
