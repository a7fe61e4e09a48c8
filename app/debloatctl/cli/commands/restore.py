"""Restore command implementation.

Reinstalls packages previously removed for the device user.
"""

from typing import Annotated

import typer

from debloatctl.cli.actions import run_action_command
from debloatctl.models.action import ActionType


def restore_packages(
    ctx: typer.Context,
    packages: Annotated[
        list[str],
        typer.Argument(help="Package identifiers to restore."),
    ],
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be restored without restoring."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Restore previously removed packages on the connected device.

    Examples:
        debloatctl restore com.facebook.appmanager
        debloatctl restore com.miui.analytics --yes
    """
    run_action_command(ctx, packages, ActionType.RESTORE, dry_run=dry_run, yes=yes)
