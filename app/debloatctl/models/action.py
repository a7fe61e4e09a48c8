"""Remove/restore requests and their outcomes."""

from dataclasses import dataclass
from enum import Enum

from debloatctl.models.package import PackageState


class ActionType(Enum):
    """What to do with a package.

    Attributes:
        REMOVE: ``pm uninstall -k --user N``; the APK and its data stay on
            the system partition.
        RESTORE: ``cmd package install-existing``; brings back a package
            removed for the user.
    """

    REMOVE = "remove"
    RESTORE = "restore"

    @property
    def target_state(self) -> PackageState:
        """State the package ends up in when the device accepts the action."""
        return PackageState.UNINSTALLED if self is ActionType.REMOVE else PackageState.INSTALLED


class ActionErrorKind(Enum):
    DEVICE_UNAVAILABLE = "device_unavailable"
    COMMAND_FAILED = "command_failed"


@dataclass(frozen=True, slots=True)
class Action:
    """One package operation, as planned or requested.

    Attributes:
        action_type: Remove or restore.
        package: Package id the action targets (exact, case-sensitive).
        reason: Text shown next to the action in tables, usually the
            catalog list and description.
    """

    action_type: ActionType
    package: str
    reason: str | None = None

    def __post_init__(self) -> None:
        if not self.package:
            msg = "Package name cannot be empty"
            raise ValueError(msg)

    @property
    def is_remove(self) -> bool:
        return self.action_type is ActionType.REMOVE

    @property
    def is_restore(self) -> bool:
        return self.action_type is ActionType.RESTORE


@dataclass(frozen=True, slots=True)
class ActionResult:
    """What the device answered for one action.

    A successful result always carries the ``state`` the action leads
    to; a failed one never does and explains itself through ``error``
    and ``error_kind`` instead. A ``dry_run`` result only says what
    would have happened: the device was not touched.

    Attributes:
        action: The action this result belongs to.
        success: True if the device confirmed the change.
        state: Package state the action leads to (success only).
        message: Device output on success, if any.
        error: Device or adb error text on failure.
        error_kind: Failure category on failure.
        dry_run: True if the device only logged the command.
    """

    action: Action
    success: bool
    state: PackageState | None = None
    message: str | None = None
    error: str | None = None
    error_kind: ActionErrorKind | None = None
    dry_run: bool = False

    def __post_init__(self) -> None:
        if self.success and self.state is None:
            msg = "Successful result requires the new package state"
            raise ValueError(msg)
        if not self.success and self.state is not None:
            msg = "Failed result cannot carry a new package state"
            raise ValueError(msg)

    @property
    def failed(self) -> bool:
        return not self.success


def create_action(
    action_type: ActionType,
    package: str,
    reason: str | None = None,
) -> Action:
    """Shorthand for ``Action(action_type, package, reason)``."""
    return Action(action_type=action_type, package=package, reason=reason)
