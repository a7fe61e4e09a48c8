"""Remove command implementation.

Uninstalls packages for the device user. APKs stay on the system
partition, so every removal can be undone with `debloatctl restore`.
"""

from typing import Annotated

import typer

from debloatctl.cli.actions import run_action_command
from debloatctl.models.action import ActionType


def remove_packages(
    ctx: typer.Context,
    packages: Annotated[
        list[str],
        typer.Argument(help="Package identifiers to remove."),
    ],
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be removed without removing."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Remove packages from the connected device.

    Examples:
        debloatctl remove com.facebook.appmanager
        debloatctl remove com.miui.analytics com.facebook.services --yes
        debloatctl remove com.google.android.youtube --dry-run
    """
    run_action_command(ctx, packages, ActionType.REMOVE, dry_run=dry_run, yes=yes)
