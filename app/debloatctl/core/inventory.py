"""Inventory building from device enumerations and the catalog.

Merges the package lists reported by the device with the classification
catalog into one sorted record per package (the baseline inventory).
"""

import logging
from collections.abc import Collection, Iterable

from debloatctl.core.catalog import Catalog
from debloatctl.device.base import DeviceInventory
from debloatctl.models.package import (
    NO_DESCRIPTION,
    UNLISTED,
    PackageRecord,
    PackageState,
    record_sort_key,
)

logger = logging.getLogger(__name__)


def parse_package_listing(output: str) -> list[str]:
    """Split a newline-separated package listing into identifiers.

    Blank lines are skipped and repeated identifiers are kept once,
    in order of first appearance.

    Args:
        output: One package identifier per line.

    Returns:
        Distinct identifiers.
    """
    seen: set[str] = set()
    packages: list[str] = []
    for line in output.splitlines():
        name = line.strip()
        if not name or name in seen:
            continue
        seen.add(name)
        packages.append(name)
    return packages


def build_inventory(
    all_packages: Iterable[str],
    installed_packages: Collection[str],
    catalog: Catalog,
) -> list[PackageRecord]:
    """Build the baseline inventory.

    Args:
        all_packages: Every package identifier reported by the device.
        installed_packages: Identifiers currently installed for the user.
        catalog: Classification catalog (read only).

    Returns:
        One record per distinct identifier, sorted by name ignoring case.
    """
    records: dict[str, PackageRecord] = {}

    for name in all_packages:
        if name in records:
            continue

        description = NO_DESCRIPTION
        list_name = UNLISTED
        entry = catalog.lookup(name)
        if entry is not None:
            description = entry.description or NO_DESCRIPTION
            list_name = entry.list_name

        state = PackageState.INSTALLED if name in installed_packages else PackageState.UNINSTALLED
        records[name] = PackageRecord(
            name=name,
            state=state,
            description=description,
            list_name=list_name,
        )

    return sorted(records.values(), key=record_sort_key)


def scan_device(device: DeviceInventory, catalog: Catalog) -> list[PackageRecord]:
    """Enumerate the device and build its inventory.

    Args:
        device: Device backend to query.
        catalog: Classification catalog.

    Returns:
        Baseline inventory.

    Raises:
        DeviceError: If either enumeration fails.
    """
    all_packages = parse_package_listing(device.list_all_packages())
    installed = device.list_installed_packages()

    records = build_inventory(all_packages, installed, catalog)
    logger.debug(
        "Built inventory: %d packages, %d installed",
        len(records),
        sum(1 for r in records if r.is_installed),
    )
    return records
