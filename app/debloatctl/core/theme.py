"""Color theme for debloatctl output.

The bundled ``data/theme.toml`` defines every color. A partial
``~/.config/debloatctl/theme.toml`` may override any subset of them.
An override with invalid colors is ignored as a whole and the defaults
are used instead.
"""

import logging
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator
from rich.theme import Theme

from debloatctl.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

# Rich style name -> (ThemeColors field, extra style attributes)
_STYLES: dict[str, tuple[str, str]] = {
    "text": ("text", ""),
    "muted": ("muted", ""),
    "dim": ("muted", ""),
    "header": ("header", ""),
    "bold_header": ("header", "bold"),
    "border": ("border", ""),
    "success": ("success", ""),
    "warning": ("warning", ""),
    "error": ("error", "bold"),
    "info": ("info", ""),
    "installed": ("installed", "bold"),
    "uninstalled": ("uninstalled", ""),
    "unlisted": ("unlisted", ""),
    "pending": ("pending", "italic"),
}


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) of the named output styles."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Package states in tables
    installed: str = "#69B9A1"
    uninstalled: str = "#d44ebc"
    unlisted: str = "#226666"
    pending: str = "#faf870"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, value: object, info: ValidationInfo) -> str:
        """Accept only '#' followed by three or six hex digits."""
        if not isinstance(value, str):
            msg = f"{info.field_name}: color must be a string"
            raise ValueError(msg)

        color = value.strip()
        if not color.startswith("#"):
            msg = f"{info.field_name}: color must start with '#'"
            raise ValueError(msg)

        digits = color[1:]
        if len(digits) not in (3, 6):
            msg = f"{info.field_name}: color must be #RGB or #RRGGBB format"
            raise ValueError(msg)
        if not set(digits) <= _HEX_DIGITS:
            msg = f"{info.field_name}: invalid hex color '{color}'"
            raise ValueError(msg)
        return color


def get_bundled_theme_path() -> Path:
    """Path of the theme shipped in ``debloatctl.data``."""
    return resources.files("debloatctl.data").joinpath("theme.toml")  # type: ignore[return-value]


def read_theme_file(path: Path) -> dict[str, str] | None:
    """Read the ``[colors]`` table of a theme file.

    Non-string values are skipped.

    Args:
        path: Theme TOML file.

    Returns:
        Color name to value, or None if the file is missing or unusable.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return None
    return {name: value for name, value in colors.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Merge the bundled colors with the user's overrides."""
    colors = read_theme_file(Path(get_bundled_theme_path()))
    if colors is None:
        logger.error("Bundled theme is missing, falling back to built-in colors")
        colors = {}

    user_path = get_user_theme_path()
    overrides = read_theme_file(user_path)
    if overrides:
        logger.debug("Applying %d theme overrides from %s", len(overrides), user_path)
        colors.update(overrides)

    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for a color set (loaded from disk if None)."""
    if colors is None:
        colors = load_theme()

    styles = {
        style: f"{attributes} {getattr(colors, field)}".strip()
        for style, (field, attributes) in _STYLES.items()
    }
    return Theme(styles)


@cache
def get_theme() -> Theme:
    """Rich theme shared by all consoles, built on first use."""
    return get_rich_theme()
