"""Action dispatch to the device.

Turns a remove/restore request on one package record into a device
call and reports the confirmed outcome as an ActionResult.
"""

import logging

from debloatctl.device.base import (
    CommandFailedError,
    DeviceInventory,
    DeviceUnavailableError,
)
from debloatctl.models.action import (
    Action,
    ActionErrorKind,
    ActionResult,
    ActionType,
    create_action,
)
from debloatctl.models.package import PackageRecord

logger = logging.getLogger(__name__)


class ActionDispatcher:
    """Execute single-package actions against a device.

    The dispatcher never modifies records. Callers write the returned
    state back into their inventory. Each call is a single attempt;
    failures are returned, not retried.

    Example:
        >>> dispatcher = ActionDispatcher(AdbDevice())
        >>> result = dispatcher.apply(record, ActionType.REMOVE)
        >>> if result.success:
        ...     record = record.with_state(result.state)
    """

    def __init__(self, device: DeviceInventory) -> None:
        self._device = device

    @property
    def device(self) -> DeviceInventory:
        return self._device

    def apply(self, record: PackageRecord, action_type: ActionType) -> ActionResult:
        """Apply an action to the package of a record.

        The record's current state is not checked; callers only offer
        the action that makes sense for it.

        Args:
            record: Package to act on.
            action_type: Remove or restore.

        Returns:
            ActionResult with the new state on success, error details on failure.
        """
        return self.execute(create_action(action_type, record.name))

    def execute(self, action: Action) -> ActionResult:
        """Execute a prepared action.

        Args:
            action: Action to run.

        Returns:
            ActionResult for the action.
        """
        try:
            if action.is_remove:
                self._device.remove(action.package)
            else:
                self._device.restore(action.package)
        except DeviceUnavailableError as e:
            logger.error(
                "Device unavailable during %s of %s: %s",
                action.action_type.value,
                action.package,
                e,
            )
            return ActionResult(
                action=action,
                success=False,
                error=str(e),
                error_kind=ActionErrorKind.DEVICE_UNAVAILABLE,
            )
        except CommandFailedError as e:
            logger.warning("%s of %s failed: %s", action.action_type.value, action.package, e)
            return ActionResult(
                action=action,
                success=False,
                error=str(e),
                error_kind=ActionErrorKind.COMMAND_FAILED,
            )

        dry_run = self._device.dry_run
        message = f"Dry-run: would {action.action_type.value}" if dry_run else "Operation completed"
        return ActionResult(
            action=action,
            success=True,
            state=action.action_type.target_state,
            message=message,
            dry_run=dry_run,
        )
