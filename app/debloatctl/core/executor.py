"""Action planning and execution for batch commands.

Shared by the `remove` and `restore` CLI commands: turns requested
package names into actions against the loaded inventory, then runs
them through a session driver and collects their results.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from debloatctl.core.driver import SessionDriver
from debloatctl.core.session import Message, RemoveRequested, RestoreRequested
from debloatctl.models.action import Action, ActionResult, ActionType, create_action
from debloatctl.models.package import PackageRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SkippedPackage:
    """A requested package that will not be acted on.

    Attributes:
        package: Requested package name.
        reason: Why it was skipped.
    """

    package: str
    reason: str


def plan_actions(
    baseline: Iterable[PackageRecord],
    packages: Iterable[str],
    action_type: ActionType,
) -> tuple[list[Action], list[SkippedPackage]]:
    """Plan actions for requested packages.

    Packages missing from the inventory or already in the target state
    are skipped. Repeated names are planned once.

    Args:
        baseline: Loaded inventory.
        packages: Requested package names.
        action_type: Remove or restore.

    Returns:
        Tuple of (actions to run, skipped packages).
    """
    records = {record.name: record for record in baseline}
    actions: list[Action] = []
    skipped: list[SkippedPackage] = []
    seen: set[str] = set()

    for name in packages:
        if name in seen:
            continue
        seen.add(name)

        record = records.get(name)
        if record is None:
            skipped.append(SkippedPackage(name, "not found on device"))
            continue
        if record.state == action_type.target_state:
            skipped.append(SkippedPackage(name, f"already {record.state.value}"))
            continue

        reason = None if record.is_unlisted else f"{record.list_name}: {record.description}"
        actions.append(create_action(action_type, name, reason=reason))

    return actions, skipped


def _request(action: Action) -> Message:
    if action.is_remove:
        return RemoveRequested(action.package)
    return RestoreRequested(action.package)


def execute_actions(driver: SessionDriver, actions: list[Action]) -> list[ActionResult]:
    """Run actions through a driver and wait for all of them.

    The driver must have a loaded inventory. Actions on different
    packages run concurrently.

    Args:
        driver: Session driver with a loaded inventory.
        actions: Planned actions.

    Returns:
        ActionResult for each action, in the order of ``actions``.
    """
    for action in actions:
        driver.send(_request(action))
    state = driver.wait_idle()

    completed = {(r.action.package, r.action.action_type): r for r in state.results}
    results: list[ActionResult] = []
    for action in actions:
        result = completed.get((action.package, action.action_type))
        if result is None:
            logger.warning("No result for %s of %s", action.action_type.value, action.package)
            result = ActionResult(
                action=action,
                success=False,
                error=state.notice or "Action was not executed",
            )
        results.append(result)
    return results
