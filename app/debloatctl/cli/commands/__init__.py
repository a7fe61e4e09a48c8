"""CLI commands for debloatctl.

This package contains all subcommand implementations.
"""

from debloatctl.cli.commands import config, listing, lists, remove, restore

__all__ = ["config", "listing", "lists", "remove", "restore"]
