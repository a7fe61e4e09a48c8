"""Application configuration.

This module provides the configuration model and I/O functions for
debloatctl: which adb client and device to use, and where the
classification catalog lives.

Configuration is stored in ~/.config/debloatctl/config.toml
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from debloatctl.core.paths import get_config_path
from debloatctl.models.package import StateFilter

# Type alias for the state filter used when listing packages
DefaultStateType = Literal["all", "installed", "uninstalled"]


class AdbConfig(BaseModel):
    """Settings for talking to the device through adb.

    Attributes:
        path: adb executable name or absolute path.
        serial: Serial of the device to target (None = the only connected one).
        user: Android user id actions apply to.
        timeout_seconds: Timeout for each adb command.
    """

    model_config = ConfigDict(extra="forbid")

    path: Annotated[str, Field(min_length=1, description="adb executable")] = "adb"
    serial: Annotated[str | None, Field(description="Target device serial")] = None
    user: Annotated[int, Field(ge=0, description="Android user id")] = 0
    timeout_seconds: Annotated[
        int,
        Field(ge=1, le=600, description="Timeout per adb command (1-600)"),
    ] = 60


class DebloatConfig(BaseModel):
    """Top-level configuration.

    Attributes:
        adb: adb connection settings.
        catalog_path: Custom catalog JSON file (None = bundled catalog).
        default_state: State filter used by `list` when none is given.
    """

    model_config = ConfigDict(extra="forbid")

    adb: Annotated[AdbConfig, Field(default_factory=AdbConfig)]
    catalog_path: Annotated[Path | None, Field(description="Catalog JSON file")] = None
    default_state: Annotated[
        DefaultStateType,
        Field(description="Default state filter for listing"),
    ] = "installed"

    @property
    def default_state_filter(self) -> StateFilter:
        return StateFilter(self.default_state)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when config content is invalid."""


def load_config(path: Path | None = None) -> DebloatConfig:
    """Load configuration from a TOML file.

    A missing file is not an error: defaults are returned.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated DebloatConfig.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
        ConfigError: If the file cannot be read.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return DebloatConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return DebloatConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e


def config_to_dict(config: DebloatConfig) -> dict[str, Any]:
    """Convert a config to TOML-serializable data (None values dropped)."""
    return config.model_dump(mode="json", exclude_none=True)


def save_config(config: DebloatConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file atomically.

    Args:
        config: Configuration to save.
        path: Destination. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    tmp_path: Path | None = None

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config_to_dict(config), f)
        os.replace(tmp_path, config_path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
