"""Shared types and helpers for CLI commands.

This module provides the enums and session helpers used by several
command modules: config access, device creation, catalog loading and
inventory loading with user-facing error handling.
"""

from enum import Enum
from pathlib import Path

import typer

from debloatctl.core.catalog import Catalog, CatalogError, load_catalog
from debloatctl.core.config import ConfigError, DebloatConfig, load_config
from debloatctl.core.driver import SessionDriver
from debloatctl.core.session import LoadRequested, SessionState
from debloatctl.device.adb import AdbDevice
from debloatctl.device.base import DeviceInventory
from debloatctl.models.package import ALL_LISTS, UNLISTED
from debloatctl.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def get_config(ctx: typer.Context) -> DebloatConfig:
    """Load the configuration selected by the global --config option.

    The loaded config is cached on the context object.

    Raises:
        typer.Exit: If the config file is invalid.
    """
    obj = ctx.ensure_object(dict)
    config = obj.get("config")
    if isinstance(config, DebloatConfig):
        return config

    config_path: Path | None = obj.get("config_path")
    try:
        config = load_config(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    obj["config"] = config
    return config


def require_catalog(config: DebloatConfig) -> Catalog:
    """Load the configured catalog or exit with an error message."""
    try:
        return load_catalog(config.catalog_path)
    except CatalogError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def create_device(config: DebloatConfig, dry_run: bool = False) -> DeviceInventory:
    """Create the adb device backend from configuration."""
    return AdbDevice(
        adb_path=config.adb.path,
        serial=config.adb.serial,
        user=config.adb.user,
        timeout=float(config.adb.timeout_seconds),
        dry_run=dry_run,
    )


def open_session(
    ctx: typer.Context,
    dry_run: bool = False,
) -> tuple[SessionDriver, Catalog]:
    """Create a session driver for the configured device.

    Returns:
        Tuple of (driver, catalog). The caller closes the driver.

    Raises:
        typer.Exit: If the catalog cannot be loaded or no device is connected.
    """
    config = get_config(ctx)
    catalog = require_catalog(config)
    device = create_device(config, dry_run=dry_run)

    if not device.is_available():
        print_error("No device connected. Check `adb devices` and USB debugging.")
        raise typer.Exit(code=1)

    return SessionDriver(device, catalog), catalog


def require_inventory(driver: SessionDriver) -> SessionState:
    """Load the device inventory and wait for it.

    Raises:
        typer.Exit: If the inventory cannot be loaded.
    """
    driver.send(LoadRequested())
    state = driver.wait_idle()
    if not state.ready:
        print_error(state.notice or "Failed to load packages from the device")
        raise typer.Exit(code=1)
    return state


def resolve_list_name(name: str, catalog: Catalog) -> str:
    """Match a user-supplied list name against known lists, ignoring case.

    Raises:
        typer.Exit: If the list is unknown.
    """
    choices = (ALL_LISTS, *catalog.lists, UNLISTED)
    for choice in choices:
        if choice.casefold() == name.casefold():
            return choice

    print_error(f"Unknown list '{name}'. Available: {', '.join(choices)}")
    raise typer.Exit(code=1)
