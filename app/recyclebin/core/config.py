"""Configuration file I/O.

This module provides the RecycleBinConfig model and functions for
loading and saving it as TOML with Pydantic validation.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from recyclebin.core.paths import get_config_path

BYTES_PER_MB = 1024 * 1024


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when config content is invalid."""


class RecycleBinConfig(BaseModel):
    """Recycle bin settings.

    Attributes:
        max_size_mb: Quarantine quota in megabytes. 0 disables the quota.
        retention_days: Age after which items count as expired. Reported
            by statistics, never enforced.
    """

    model_config = ConfigDict(extra="forbid")

    max_size_mb: Annotated[int, Field(ge=0, description="Quarantine quota in MB")] = 1024
    retention_days: Annotated[int, Field(ge=0, description="Retention window in days")] = 30

    @property
    def max_size_bytes(self) -> int | None:
        """Quota in bytes, or None when the quota is disabled."""
        if self.max_size_mb == 0:
            return None
        return self.max_size_mb * BYTES_PER_MB


def load_config(path: Path | None = None) -> RecycleBinConfig:
    """Load and validate the configuration.

    A missing file yields the defaults.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated RecycleBinConfig.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
        ConfigError: If the file cannot be read.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return RecycleBinConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return RecycleBinConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e


def save_config(config: RecycleBinConfig, path: Path | None = None) -> Path:
    """Save the configuration atomically.

    Args:
        config: The configuration to write.
        path: Target path. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def require_config(path: Path | None = None) -> RecycleBinConfig:
    """Load config or exit with a helpful error message.

    Raises:
        typer.Exit: If the config cannot be loaded.
    """
    import typer

    from recyclebin.utils.formatting import print_error

    try:
        return load_config(path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
