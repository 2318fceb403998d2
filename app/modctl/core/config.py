"""Repository configuration.

This module provides the configuration model and I/O functions for the
per-repository settings that drive module discovery and result
aggregation.

Configuration is stored in modctl.toml at the repository root. Keys may
appear at the top level or under a [modctl] table.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from modctl.core.aggregate import MissingResultPolicy
from modctl.core.discovery import DEFAULT_MANIFEST, DEFAULT_SKIP_DIRS

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "modctl.toml"

# Policy for a manifest found at the repository root
RootModulePolicy = Literal["include", "ignore"]


class ModctlConfig(BaseModel):
    """Settings for module discovery and change aggregation.

    Attributes:
        manifest: Manifest filename or glob marking a module root.
        skip_dirs: Directory names never descended into.
        follow_symlinks: Follow symbolic links to directories.
        root_module: Keep ("include") or drop ("ignore") a module at the
            repository root.
        on_missing: Treat a missing evaluator result as "unchanged" or
            as an "error".
    """

    model_config = ConfigDict(extra="forbid")

    manifest: Annotated[
        str,
        Field(min_length=1, description="Manifest filename or glob"),
    ] = DEFAULT_MANIFEST
    skip_dirs: Annotated[
        list[str],
        Field(default_factory=lambda: list(DEFAULT_SKIP_DIRS), description="Directories to skip"),
    ]
    follow_symlinks: Annotated[
        bool,
        Field(description="Follow symbolic links to directories"),
    ] = False
    root_module: Annotated[
        RootModulePolicy,
        Field(description="Policy for a manifest at the repository root"),
    ] = "include"
    on_missing: Annotated[
        MissingResultPolicy,
        Field(description="Handling of modules missing from evaluator results"),
    ] = "unchanged"

    @field_validator("manifest")
    @classmethod
    def validate_manifest(cls, v: str) -> str:
        """Validate that the manifest pattern names a file, not a path."""
        if "/" in v:
            msg = f"manifest must be a filename pattern without '/', got {v!r}"
            raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""


def get_config_path(root: Path) -> Path:
    """Get the configuration file path for a repository root."""
    return root / CONFIG_FILENAME


def load_config(path: Path) -> ModctlConfig:
    """Load configuration from a TOML file.

    A missing file yields the default configuration.

    Args:
        path: Path to the config file.

    Returns:
        Validated ModctlConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or the content doesn't
            match the schema.
    """
    if not path.exists():
        logger.debug("No config at %s, using defaults", path)
        return ModctlConfig()

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    section = data.get("modctl", data)
    if section is not data and len(data) > 1:
        logger.warning("Ignoring keys outside [modctl] in %s", path)

    try:
        return ModctlConfig.model_validate(section)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {path}: {e}") from e


def save_config(config: ModctlConfig, path: Path) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.

    Args:
        config: The ModctlConfig to save.
        path: Path to save the config.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    data = {"modctl": config.model_dump()}

    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return path
