"""Data models for debloatctl.

This module exports the core data structures used throughout the application.
"""

from debloatctl.models.action import (
    Action,
    ActionErrorKind,
    ActionResult,
    ActionType,
    create_action,
)
from debloatctl.models.catalog import CatalogEntry
from debloatctl.models.package import (
    ALL_LISTS,
    NO_DESCRIPTION,
    UNLISTED,
    PackageRecord,
    PackageState,
    StateFilter,
)
from debloatctl.models.selection import FilterSelection

__all__ = [
    "ALL_LISTS",
    "NO_DESCRIPTION",
    "UNLISTED",
    "Action",
    "ActionErrorKind",
    "ActionResult",
    "ActionType",
    "CatalogEntry",
    "FilterSelection",
    "PackageRecord",
    "PackageState",
    "StateFilter",
    "create_action",
]
