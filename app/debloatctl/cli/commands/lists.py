"""Lists command implementation.

Shows the lists of the classification catalog with their entry counts.
"""

import typer
from rich.markup import escape
from rich.table import Table

from debloatctl.cli.types import get_config, require_catalog
from debloatctl.models.package import UNLISTED
from debloatctl.utils.formatting import console


def show_lists(ctx: typer.Context) -> None:
    """Show catalog lists usable with `debloatctl list --list`."""
    catalog = require_catalog(get_config(ctx))

    table = Table(
        title="Catalog Lists",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("List", no_wrap=True)
    table.add_column("Packages", justify="right", style="info")

    for list_name, count in catalog.count_by_list().items():
        table.add_row(escape(list_name), str(count))
    table.add_row(f"[unlisted]{UNLISTED}[/]", "[muted]-[/]")

    console.print(table)
    console.print(f"\n[dim]{len(catalog)} catalogued packages[/]")
