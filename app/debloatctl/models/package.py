"""Package models for device inventory and classification.

This module defines the core data structures for representing
packages found on a connected device, merged with their catalog
classification.
"""

from dataclasses import dataclass, field, replace
from enum import Enum

# Sentinels used when the catalog has no entry for a package
NO_DESCRIPTION = "[No description]"
UNLISTED = "Unlisted"

# Pseudo list name that only exists as a filter selector
ALL_LISTS = "All"


class PackageState(str, Enum):
    """Install state of a package for the device user.

    Attributes:
        INSTALLED: Package is active for the user.
        UNINSTALLED: Package was removed for the user but is still
            present on the system partition and can be restored.
    """

    INSTALLED = "installed"
    UNINSTALLED = "uninstalled"


class StateFilter(str, Enum):
    """Install state selector used when filtering packages."""

    ALL = "all"
    INSTALLED = "installed"
    UNINSTALLED = "uninstalled"

    def matches(self, state: PackageState) -> bool:
        """Check if a package state passes this filter."""
        return self == StateFilter.ALL or self.value == state.value


@dataclass(frozen=True, slots=True)
class PackageRecord:
    """Represents one package of the device inventory.

    Records are immutable. State changes produce a new record that
    replaces the old one in the inventory.

    Attributes:
        name: Package identifier (e.g., 'com.google.android.youtube').
        state: Current install state as last confirmed by the device.
        description: Human-readable description from the catalog.
        list_name: Catalog list the package belongs to ('Unlisted' if unknown).
        action_pending: True while a remove/restore for this package is running.
    """

    name: str
    state: PackageState
    description: str = field(default=NO_DESCRIPTION)
    list_name: str = field(default=UNLISTED)
    action_pending: bool = field(default=False)

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.name:
            msg = "Package name cannot be empty"
            raise ValueError(msg)
        if not isinstance(self.state, PackageState):
            msg = f"Invalid package state: {self.state!r}"
            raise TypeError(msg)
        if self.list_name == ALL_LISTS:
            msg = f"'{ALL_LISTS}' is a filter value, not a package list"
            raise ValueError(msg)

    @property
    def is_installed(self) -> bool:
        """Check if the package is currently installed."""
        return self.state == PackageState.INSTALLED

    @property
    def is_unlisted(self) -> bool:
        """Check if the package is unknown to the catalog."""
        return self.list_name == UNLISTED

    def with_state(self, state: PackageState) -> "PackageRecord":
        """Return a copy with a confirmed new state and no pending action."""
        return replace(self, state=state, action_pending=False)

    def with_pending(self, pending: bool) -> "PackageRecord":
        """Return a copy with the pending flag set or cleared."""
        return replace(self, action_pending=pending)


def record_sort_key(record: PackageRecord) -> tuple[str, str]:
    """Sort key ordering records by name, ignoring case.

    The raw name breaks ties so the ordering stays total.
    """
    return (record.name.casefold(), record.name)
