"""Shared flow of the remove and restore commands.

Loads the inventory, plans the requested actions, asks for
confirmation, runs them through the session driver and reports.
"""

import typer

from debloatctl.cli.display import (
    create_actions_table,
    create_results_table,
    print_results_summary,
    print_skipped,
)
from debloatctl.cli.types import open_session, require_inventory
from debloatctl.core.executor import execute_actions, plan_actions
from debloatctl.models.action import ActionType
from debloatctl.utils.formatting import console, print_info


def run_action_command(
    ctx: typer.Context,
    packages: list[str],
    action_type: ActionType,
    dry_run: bool,
    yes: bool,
) -> None:
    """Apply one action type to the requested packages.

    Raises:
        typer.Exit: With code 1 if a package is unknown or an action failed.
    """
    driver, _ = open_session(ctx, dry_run=dry_run)
    with driver:
        state = require_inventory(driver)
        actions, skipped = plan_actions(state.baseline, packages, action_type)
        print_skipped(skipped)
        unknown = any(s.reason == "not found on device" for s in skipped)

        if not actions:
            print_info("No actions needed.")
            raise typer.Exit(code=1 if unknown else 0)

        console.print(create_actions_table(actions, dry_run=dry_run))

        if not dry_run and not yes:
            confirmed = typer.confirm(
                f"\nProceed with {action_type.value} of {len(actions)} package(s)?",
                default=False,
            )
            if not confirmed:
                print_info("Aborted.")
                raise typer.Exit(code=0)

        results = execute_actions(driver, actions)

    console.print(create_results_table(results))
    print_results_summary(results)

    if unknown or any(r.failed for r in results):
        raise typer.Exit(code=1)
