"""Tables and summaries for the remove and restore commands."""

from rich.markup import escape
from rich.table import Table

from debloatctl.core.executor import SkippedPackage
from debloatctl.core.filtering import InventorySummary
from debloatctl.models.action import Action, ActionResult, ActionType
from debloatctl.utils.formatting import console, print_success, print_warning

# ActionType -> (label, style of the resulting package state)
_ACTION_LABELS: dict[ActionType, tuple[str, str]] = {
    ActionType.REMOVE: ("-remove", "uninstalled"),
    ActionType.RESTORE: ("+restore", "installed"),
}


def _bordered_table(title: str) -> Table:
    return Table(title=title, show_header=True, header_style="bold_header", border_style="border")


def create_actions_table(actions: list[Action], dry_run: bool = False) -> Table:
    """Build the table of actions awaiting confirmation.

    Args:
        actions: Planned actions, in execution order.
        dry_run: Mark the title as a dry run.

    Returns:
        Table with one row per action.
    """
    table = _bordered_table("Planned Actions (Dry Run)" if dry_run else "Planned Actions")
    table.add_column("Action", width=9, justify="center")
    table.add_column("Package", no_wrap=True)
    table.add_column("Reason")

    for action in actions:
        label, style = _ACTION_LABELS[action.action_type]
        table.add_row(
            f"[{style}]{label}[/]",
            f"[{style}]{escape(action.package)}[/]",
            f"[muted]{escape(action.reason or '')}[/]",
        )
    return table


def create_results_table(results: list[ActionResult]) -> Table:
    """Build the table of finished actions, one OK or FAIL row each."""
    table = _bordered_table("Results")
    table.add_column("Status", width=8, justify="center")
    table.add_column("Action", width=8)
    table.add_column("Package", no_wrap=True)
    table.add_column("Message")

    for result in results:
        if result.failed:
            status, detail = "[error]FAIL[/]", result.error or "Unknown error"
        else:
            status, detail = "[success]OK[/]", result.message or ""
        table.add_row(
            status,
            result.action.action_type.value,
            escape(result.action.package),
            f"[muted]{escape(detail)}[/]",
        )
    return table


def print_skipped(skipped: list[SkippedPackage]) -> None:
    for item in skipped:
        print_warning(f"Skipping {item.package}: {item.reason}")


def print_results_summary(results: list[ActionResult]) -> None:
    """Report how many actions succeeded and, if any did, how many failed."""
    failed = sum(1 for r in results if r.failed)
    succeeded = len(results) - failed

    if failed:
        console.print(f"\n[success]{succeeded} succeeded[/], [error]{failed} failed[/]")
    else:
        print_success(f"All {succeeded} action(s) completed successfully.")


def print_inventory_summary(summary: InventorySummary) -> None:
    """Print package counts by state, then by catalog list."""
    lines = [
        f"[info]Total packages: {summary.total}[/]",
        f"  [installed]Installed:[/] {summary.installed}",
        f"  [uninstalled]Uninstalled:[/] {summary.uninstalled}",
    ]
    if summary.by_list:
        lines.append("\n[dim]By list:[/]")
        lines.extend(f"  {escape(name)}: {count}" for name, count in summary.by_list.items())

    for line in lines:
        console.print(line)
