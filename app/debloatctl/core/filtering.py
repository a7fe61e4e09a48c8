"""Filtering of the baseline inventory.

Pure functions deriving the visible package list from the baseline
inventory and the current filter selection.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from debloatctl.models.package import (
    ALL_LISTS,
    PackageRecord,
    PackageState,
    record_sort_key,
)
from debloatctl.models.selection import FilterSelection


@dataclass(frozen=True, slots=True)
class InventorySummary:
    """Package counts of an inventory.

    Attributes:
        total: Number of packages.
        installed: Number of installed packages.
        uninstalled: Number of uninstalled packages.
        by_list: Number of packages per catalog list.
    """

    total: int = 0
    installed: int = 0
    uninstalled: int = 0
    by_list: dict[str, int] = field(default_factory=dict)


def matches(record: PackageRecord, selection: FilterSelection) -> bool:
    """Check whether a record passes every part of the selection.

    Search text matches anywhere in the package name, ignoring case.
    """
    if selection.search and selection.search.casefold() not in record.name.casefold():
        return False
    if not selection.state.matches(record.state):
        return False
    return selection.list_name == ALL_LISTS or record.list_name == selection.list_name


def filter_records(
    baseline: Iterable[PackageRecord],
    selection: FilterSelection,
) -> list[PackageRecord]:
    """Derive the visible records.

    Args:
        baseline: Full inventory (not modified).
        selection: Current search and filter choices.

    Returns:
        Matching records sorted by name ignoring case.
    """
    return sorted(
        (record for record in baseline if matches(record, selection)),
        key=record_sort_key,
    )


def summarize(records: Sequence[PackageRecord]) -> InventorySummary:
    """Count packages by state and by list."""
    by_list: dict[str, int] = {}
    installed = 0
    for record in records:
        by_list[record.list_name] = by_list.get(record.list_name, 0) + 1
        if record.state == PackageState.INSTALLED:
            installed += 1

    return InventorySummary(
        total=len(records),
        installed=installed,
        uninstalled=len(records) - installed,
        by_list=dict(sorted(by_list.items())),
    )
