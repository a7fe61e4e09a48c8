"""Classification catalog loading and lookup.

The catalog is the curated list of known packages with their
description and removability list. It is loaded once from JSON,
validated with Pydantic, and shared read-only afterwards.
"""

import json
import logging
from collections.abc import Iterator, Mapping
from importlib import resources
from pathlib import Path
from types import MappingProxyType

from pydantic import TypeAdapter, ValidationError

from debloatctl.models.catalog import CatalogEntry

logger = logging.getLogger(__name__)

_ENTRIES_ADAPTER = TypeAdapter(list[CatalogEntry])


class CatalogError(Exception):
    """Base exception for catalog-related errors."""


class CatalogNotFoundError(CatalogError):
    """Raised when the catalog file is not found."""


class CatalogParseError(CatalogError):
    """Raised when the catalog file is not valid JSON."""


class CatalogValidationError(CatalogError):
    """Raised when catalog content does not match the schema."""


class Catalog(Mapping[str, CatalogEntry]):
    """Immutable mapping from package identifier to its classification.

    Example:
        >>> catalog = Catalog([CatalogEntry(id="com.a", list="Google")])
        >>> catalog.lookup("com.a").list_name
        'Google'
        >>> catalog.lookup("com.b") is None
        True
    """

    def __init__(self, entries: list[CatalogEntry] | None = None) -> None:
        table: dict[str, CatalogEntry] = {}
        for entry in entries or []:
            if entry.id in table:
                logger.warning("Duplicate catalog entry for %s, keeping the first", entry.id)
                continue
            table[entry.id] = entry
        self._entries = MappingProxyType(table)

    def __getitem__(self, name: str) -> CatalogEntry:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, name: str) -> CatalogEntry | None:
        """Return the entry for a package, or None if it is not catalogued."""
        return self._entries.get(name)

    @property
    def lists(self) -> tuple[str, ...]:
        """Distinct list names used by the catalog, sorted."""
        return tuple(sorted({entry.list_name for entry in self._entries.values()}))

    def count_by_list(self) -> dict[str, int]:
        """Count entries per list name."""
        counts: dict[str, int] = {}
        for entry in self._entries.values():
            counts[entry.list_name] = counts.get(entry.list_name, 0) + 1
        return dict(sorted(counts.items()))


def get_bundled_catalog_path() -> Path:
    """Get the catalog shipped with the package.

    Returns:
        Path to the bundled data/catalog.json
    """
    return resources.files("debloatctl.data").joinpath("catalog.json")  # type: ignore[return-value]


def parse_catalog(data: object) -> Catalog:
    """Validate decoded JSON data and build a catalog.

    Args:
        data: Decoded JSON, a list of entry objects.

    Returns:
        Catalog instance.

    Raises:
        CatalogValidationError: If the data doesn't match the schema.
    """
    try:
        entries = _ENTRIES_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise CatalogValidationError(f"Invalid catalog content: {e}") from e
    return Catalog(entries)


def load_catalog(path: Path | None = None) -> Catalog:
    """Load and validate a catalog from a JSON file.

    Args:
        path: Path to the catalog file. If None, uses the bundled catalog.

    Returns:
        Validated Catalog.

    Raises:
        CatalogNotFoundError: If the catalog file doesn't exist.
        CatalogParseError: If the JSON syntax is invalid.
        CatalogValidationError: If the content doesn't match the schema.
    """
    catalog_path = path or Path(get_bundled_catalog_path())

    if not catalog_path.exists():
        raise CatalogNotFoundError(f"Catalog not found: {catalog_path}")

    try:
        with open(catalog_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogParseError(f"Invalid JSON syntax: {e}") from e
    except OSError as e:
        raise CatalogError(f"Failed to read catalog: {e}") from e

    catalog = parse_catalog(data)
    logger.debug("Loaded %d catalog entries from %s", len(catalog), catalog_path)
    return catalog
