"""Unit tests for catalog loading.

Tests for Catalog lookup and JSON loading with validation.
"""

import json
from pathlib import Path

import pytest
from debloatctl.core.catalog import (
    Catalog,
    CatalogError,
    CatalogNotFoundError,
    CatalogParseError,
    CatalogValidationError,
    get_bundled_catalog_path,
    load_catalog,
    parse_catalog,
)
from debloatctl.models.catalog import CatalogEntry


class TestCatalog:
    """Tests for the Catalog mapping."""

    def test_lookup(self, sample_catalog: Catalog) -> None:
        """lookup returns entries by exact package id."""
        entry = sample_catalog.lookup("com.google.android.youtube")

        assert entry is not None
        assert entry.list_name == "Google"
        assert sample_catalog.lookup("com.google.android.YOUTUBE") is None
        assert sample_catalog.lookup("com.unknown") is None

    def test_mapping_protocol(self, sample_catalog: Catalog) -> None:
        """Catalog behaves like a read-only mapping."""
        assert len(sample_catalog) == 3
        assert "com.miui.analytics" in sample_catalog
        assert sample_catalog["com.miui.analytics"].list_name == "Oem"
        with pytest.raises(KeyError):
            sample_catalog["com.unknown"]

    def test_duplicate_ids_keep_first(self) -> None:
        """The first entry for an id wins."""
        catalog = Catalog(
            [
                CatalogEntry(id="com.a", list="Google", description="first"),
                CatalogEntry(id="com.a", list="Oem", description="second"),
            ]
        )

        assert len(catalog) == 1
        assert catalog["com.a"].description == "first"

    def test_lists_sorted_and_distinct(self, sample_catalog: Catalog) -> None:
        """lists returns each list name once."""
        assert sample_catalog.lists == ("Google", "Misc", "Oem")

    def test_count_by_list(self) -> None:
        """count_by_list counts entries per list."""
        catalog = Catalog(
            [
                CatalogEntry(id="com.a", list="Oem"),
                CatalogEntry(id="com.b", list="Oem"),
                CatalogEntry(id="com.c", list="Aosp"),
            ]
        )

        assert catalog.count_by_list() == {"Aosp": 1, "Oem": 2}

    def test_empty_catalog(self) -> None:
        """A catalog may be empty."""
        catalog = Catalog()

        assert len(catalog) == 0
        assert catalog.lists == ()


class TestParseCatalog:
    """Tests for parse_catalog."""

    def test_parses_entries(self) -> None:
        """Valid JSON data becomes a catalog."""
        catalog = parse_catalog([{"id": "com.a", "list": "Oem", "description": "A"}])

        assert catalog["com.a"].description == "A"

    def test_rejects_non_list(self) -> None:
        """Top-level JSON must be an array."""
        with pytest.raises(CatalogValidationError):
            parse_catalog({"id": "com.a"})

    def test_rejects_invalid_entry(self) -> None:
        """Entries missing required keys are rejected."""
        with pytest.raises(CatalogValidationError, match="Invalid catalog content"):
            parse_catalog([{"id": "com.a"}])


class TestLoadCatalog:
    """Tests for load_catalog."""

    def test_loads_bundled_catalog(self) -> None:
        """The bundled catalog loads and has entries."""
        catalog = load_catalog()

        assert len(catalog) > 0
        assert "com.google.android.youtube" in catalog
        assert Path(get_bundled_catalog_path()).name == "catalog.json"

    def test_loads_custom_file(self, tmp_path: Path) -> None:
        """A custom catalog file can be loaded."""
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([{"id": "com.a", "list": "Misc"}]))

        catalog = load_catalog(path)

        assert catalog.lists == ("Misc",)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing catalog raises CatalogNotFoundError."""
        with pytest.raises(CatalogNotFoundError, match="Catalog not found"):
            load_catalog(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Broken JSON raises CatalogParseError."""
        path = tmp_path / "catalog.json"
        path.write_text("[{not json")

        with pytest.raises(CatalogParseError, match="Invalid JSON"):
            load_catalog(path)

    def test_errors_share_base_class(self, tmp_path: Path) -> None:
        """All catalog failures can be caught as CatalogError."""
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps([{"id": "com.a", "list": "All"}]))

        with pytest.raises(CatalogError):
            load_catalog(path)
