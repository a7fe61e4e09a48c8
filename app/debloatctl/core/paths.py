"""XDG-compliant path management for debloatctl.

XDG defaults:
- Config: ~/.config/debloatctl/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "debloatctl"


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/debloatctl/ (or XDG_CONFIG_HOME/debloatctl/).
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/debloatctl/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/debloatctl/theme.toml.
    """
    return get_config_dir() / "theme.toml"

