"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from debloatctl.core.catalog import Catalog
from debloatctl.models.catalog import CatalogEntry
from fakes import FakeDevice


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory for every test."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def sample_catalog() -> Catalog:
    """Small catalog covering three lists, one entry without description."""
    return Catalog(
        [
            CatalogEntry(
                id="com.google.android.youtube",
                list="Google",
                description="YouTube app.",
            ),
            CatalogEntry(
                id="com.facebook.appmanager",
                list="Misc",
                description="Facebook app manager.",
            ),
            CatalogEntry(id="com.miui.analytics", list="Oem"),
        ]
    )


@pytest.fixture
def fake_device() -> FakeDevice:
    """Device with two catalogued installed packages, one removed, one unknown."""
    return FakeDevice(
        all_packages=[
            "com.google.android.youtube",
            "com.facebook.appmanager",
            "com.miui.analytics",
            "com.example.unknown",
        ],
        installed={
            "com.google.android.youtube",
            "com.facebook.appmanager",
            "com.example.unknown",
        },
    )


@pytest.fixture
def pm_list_all_output() -> str:
    """Sample `pm list packages -s -u` output."""
    return """package:com.google.android.youtube
package:com.facebook.appmanager
package:com.miui.analytics
package:com.android.systemui
"""


@pytest.fixture
def pm_list_installed_output() -> str:
    """Sample `pm list packages -s` output."""
    return """package:com.google.android.youtube
package:com.android.systemui
"""
