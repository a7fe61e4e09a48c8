"""List command implementation.

Lists device packages with their catalog classification, filtered by
search text, catalog list and install state.
"""

import json
from typing import Annotated

import typer

from debloatctl.cli.display import print_inventory_summary
from debloatctl.cli.types import (
    OutputFormat,
    get_config,
    open_session,
    require_inventory,
    resolve_list_name,
)
from debloatctl.core.filtering import summarize
from debloatctl.core.session import ListSelected, SearchChanged, StateSelected
from debloatctl.models.package import ALL_LISTS, PackageRecord, StateFilter
from debloatctl.utils.formatting import console, create_package_table, format_record_row


def _record_to_dict(record: PackageRecord) -> dict[str, str]:
    return {
        "name": record.name,
        "state": record.state.value,
        "list": record.list_name,
        "description": record.description,
    }


def _get_title(list_name: str, state: StateFilter) -> str:
    """Generate table title from the active filters."""
    prefix = "Device Packages"
    if state != StateFilter.ALL:
        prefix = f"{state.value.capitalize()} Packages"
    if list_name == ALL_LISTS:
        return prefix
    return f"{prefix} ({list_name})"


def list_packages(
    ctx: typer.Context,
    search: Annotated[
        str,
        typer.Option(
            "--search",
            "-s",
            help="Only show packages whose name contains this text (case-insensitive).",
        ),
    ] = "",
    list_name: Annotated[
        str,
        typer.Option(
            "--list",
            "-l",
            help="Catalog list to show (e.g. Google, Oem, Unlisted) or 'All'.",
        ),
    ] = ALL_LISTS,
    state: Annotated[
        StateFilter | None,
        typer.Option(
            "--state",
            "-S",
            help="Install state to show: all, installed or uninstalled.",
            case_sensitive=False,
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Print a table or JSON.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-n",
            help="Show at most N packages.",
        ),
    ] = None,
    count_only: Annotated[
        bool,
        typer.Option(
            "--count",
            "-c",
            help="Print counts by state and list instead of packages.",
        ),
    ] = False,
) -> None:
    """List packages on the connected device.

    Examples:
        debloatctl list                          # Installed packages
        debloatctl list --state all              # Everything, removed ones too
        debloatctl list --list google            # Only the Google list
        debloatctl list --search facebook        # Name contains 'facebook'
        debloatctl list --format json            # Output as JSON
    """
    if state is None:
        state = get_config(ctx).default_state_filter

    driver, catalog = open_session(ctx)
    with driver:
        require_inventory(driver)
        list_name = resolve_list_name(list_name, catalog)

        driver.send(SearchChanged(search))
        driver.send(ListSelected(list_name))
        session = driver.send(StateSelected(state))

    visible = list(session.visible)

    if count_only:
        print_inventory_summary(summarize(visible))
        return

    display_records = visible[:limit] if limit else visible

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([_record_to_dict(r) for r in display_records]))
        return

    table = create_package_table(_get_title(list_name, state))
    for record in display_records:
        table.add_row(*format_record_row(record))
    console.print(table)

    summary = summarize(visible)
    parts = [
        f"Showing {len(display_records)} of {len(session.baseline)} packages",
        f"({summary.installed} installed, {summary.uninstalled} uninstalled)",
    ]
    if limit and len(display_records) < len(visible):
        parts.append(f"(limited to {limit})")
    console.print(f"\n[dim]{' '.join(parts)}[/]")
