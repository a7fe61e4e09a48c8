"""Consoles and Rich helpers shared by the CLI commands.

Package ids and descriptions come from the device and the catalog, so
they are always escaped before being embedded in markup.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from debloatctl.core.theme import get_theme

if TYPE_CHECKING:
    from debloatctl.models.package import PackageRecord

# Force truecolor on a tty; pipes and CliRunner get Rich's own detection.
_COLOR_SYSTEM = "truecolor" if sys.stdout.isatty() else None

console = Console(theme=get_theme(), color_system=_COLOR_SYSTEM)
err_console = Console(theme=get_theme(), stderr=True, color_system=_COLOR_SYSTEM)


def create_package_table(title: str = "Device Packages") -> Table:
    """Empty package table with the columns ``format_record_row`` fills."""
    table = Table(
        title=title,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    table.add_column("", width=2, justify="center")
    table.add_column("Package", no_wrap=True)
    table.add_column("State", width=11)
    table.add_column("List", style="info")
    table.add_column("Description", style="text", overflow="ellipsis")
    return table


def format_record_row(record: PackageRecord) -> tuple[str, str, str, str, str]:
    """Render a record as (icon, name, state, list, description) cells.

    The icon is an hourglass while an action on the package is running,
    otherwise a filled or empty circle for installed or uninstalled.
    """
    style = "installed" if record.is_installed else "uninstalled"
    if record.action_pending:
        icon = "[pending]⧗[/]"
    else:
        icon = f"[{style}]{'●' if record.is_installed else '○'}[/]"

    list_style = "unlisted" if record.is_unlisted else "info"
    return (
        icon,
        f"[{style}]{escape(record.name)}[/]",
        f"[{style}]{record.state.value}[/]",
        f"[{list_style}]{escape(record.list_name)}[/]",
        f"[text]{escape(record.description)}[/]",
    )


def print_info(message: str) -> None:
    console.print(f"[info]{escape(message)}[/]")


def print_success(message: str) -> None:
    console.print(f"[success]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Write ``Warning: message`` to stderr."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Write ``Error: message`` to stderr."""
    err_console.print(f"[error]Error:[/] {escape(message)}")
