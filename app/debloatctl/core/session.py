"""Session state and update logic.

The session keeps the baseline inventory, the current filter selection
and the visible records derived from both. All changes go through
:func:`update`, a pure function that takes the current state and one
message and returns the new state plus the effects (device work) to run.
Effects are executed elsewhere (see ``core.driver``) and their outcome
comes back as new messages.

Messages from the user:
    LoadRequested, SearchChanged, ListSelected, StateSelected,
    RemoveRequested, RestoreRequested

Messages from finished effects:
    InventoryLoaded, InventoryLoadFailed, ActionCompleted
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace

from debloatctl.core.filtering import filter_records
from debloatctl.models.action import Action, ActionResult, ActionType, create_action
from debloatctl.models.package import PackageRecord, StateFilter
from debloatctl.models.selection import FilterSelection

logger = logging.getLogger(__name__)


# =============================================================================
# Messages
# =============================================================================


@dataclass(frozen=True, slots=True)
class LoadRequested:
    """(Re)load the inventory from the device."""


@dataclass(frozen=True, slots=True)
class SearchChanged:
    search: str


@dataclass(frozen=True, slots=True)
class ListSelected:
    list_name: str


@dataclass(frozen=True, slots=True)
class StateSelected:
    state: StateFilter


@dataclass(frozen=True, slots=True)
class RemoveRequested:
    package: str


@dataclass(frozen=True, slots=True)
class RestoreRequested:
    package: str


@dataclass(frozen=True, slots=True)
class InventoryLoaded:
    records: tuple[PackageRecord, ...]


@dataclass(frozen=True, slots=True)
class InventoryLoadFailed:
    error: str


@dataclass(frozen=True, slots=True)
class ActionCompleted:
    result: ActionResult


Message = (
    LoadRequested
    | SearchChanged
    | ListSelected
    | StateSelected
    | RemoveRequested
    | RestoreRequested
    | InventoryLoaded
    | InventoryLoadFailed
    | ActionCompleted
)


# =============================================================================
# Effects
# =============================================================================


@dataclass(frozen=True, slots=True)
class LoadInventory:
    """Enumerate the device and build a fresh inventory."""


@dataclass(frozen=True, slots=True)
class RunAction:
    """Run one remove/restore on the device."""

    action: Action


Effect = LoadInventory | RunAction


# =============================================================================
# State
# =============================================================================


@dataclass(frozen=True, slots=True)
class SessionState:
    """Snapshot of an inventory session.

    Attributes:
        baseline: Every package of the device, sorted by name.
        visible: Baseline records passing the current selection.
        selection: Current search text and filters.
        ready: True once an inventory has been loaded.
        loading: True while an inventory load is running.
        notice: Last error or rejection to show to the user.
        results: Outcomes of completed actions, oldest first.
        positions: Baseline index of each package name, rebuilt whenever
            a new inventory replaces the baseline.
    """

    baseline: tuple[PackageRecord, ...] = ()
    visible: tuple[PackageRecord, ...] = ()
    selection: FilterSelection = field(default_factory=FilterSelection)
    ready: bool = False
    loading: bool = False
    notice: str | None = None
    results: tuple[ActionResult, ...] = ()
    positions: Mapping[str, int] = field(default_factory=dict, repr=False, compare=False)

    @property
    def last_result(self) -> ActionResult | None:
        """Outcome of the most recently completed action."""
        return self.results[-1] if self.results else None

    @property
    def pending(self) -> tuple[str, ...]:
        """Names of packages with an action in progress."""
        return tuple(r.name for r in self.baseline if r.action_pending)

    def index_of(self, name: str) -> int | None:
        """Position of a package in the baseline, or None."""
        return self.positions.get(name)

    def get(self, name: str) -> PackageRecord | None:
        """Baseline record of a package, or None."""
        index = self.index_of(name)
        return None if index is None else self.baseline[index]


def _refilter(state: SessionState, **changes: object) -> SessionState:
    """Apply changes and derive the visible records again."""
    new_state = replace(state, **changes)
    visible = filter_records(new_state.baseline, new_state.selection)
    return replace(new_state, visible=tuple(visible))


def _replace_record(
    state: SessionState,
    index: int,
    record: PackageRecord,
) -> tuple[PackageRecord, ...]:
    baseline = list(state.baseline)
    baseline[index] = record
    return tuple(baseline)


def _request_action(
    state: SessionState,
    package: str,
    action_type: ActionType,
) -> tuple[SessionState, list[Effect]]:
    """Mark a package pending and emit the device action.

    Requests for unknown packages or packages with an action already in
    progress are rejected with a notice.
    """
    if not state.ready:
        return replace(state, notice="Inventory is not loaded yet"), []

    index = state.index_of(package)
    if index is None:
        return replace(state, notice=f"Unknown package: {package}"), []

    record = state.baseline[index]
    if record.action_pending:
        logger.debug("Rejected %s of %s: action pending", action_type.value, package)
        return replace(state, notice=f"An action is already running for {package}"), []

    baseline = _replace_record(state, index, record.with_pending(True))
    new_state = _refilter(state, baseline=baseline, notice=None)
    return new_state, [RunAction(create_action(action_type, package))]


def _complete_action(state: SessionState, result: ActionResult) -> SessionState:
    """Write a confirmed action outcome back into the baseline."""
    package = result.action.package
    index = state.index_of(package)
    if index is None:
        logger.warning("Dropping result for %s: not in inventory", package)
        return replace(state, results=(*state.results, result))

    record = state.baseline[index]
    if result.dry_run:
        # nothing changed on the device
        updated = record.with_pending(False)
        notice = None
    elif result.success and result.state is not None:
        updated = record.with_state(result.state)
        notice = None
    else:
        updated = record.with_pending(False)
        notice = result.error or f"Failed to {result.action.action_type.value} {package}"

    return _refilter(
        state,
        baseline=_replace_record(state, index, updated),
        results=(*state.results, result),
        notice=notice,
    )


def _load_inventory(state: SessionState, records: tuple[PackageRecord, ...]) -> SessionState:
    """Replace the baseline, keeping in-flight actions marked pending."""
    pending = set(state.pending)
    baseline = tuple(r.with_pending(True) if r.name in pending else r for r in records)
    positions = {r.name: i for i, r in enumerate(baseline)}
    return _refilter(
        state,
        baseline=baseline,
        positions=positions,
        ready=True,
        loading=False,
        notice=None,
    )


def update(state: SessionState, message: Message) -> tuple[SessionState, list[Effect]]:
    """Apply one message to the session.

    Args:
        state: Current session state.
        message: User intent or effect outcome.

    Returns:
        Tuple of (new state, effects to execute).

    Raises:
        TypeError: If the message type is unknown.
    """
    if isinstance(message, SearchChanged):
        return _refilter(state, selection=state.selection.with_search(message.search)), []

    if isinstance(message, ListSelected):
        return _refilter(state, selection=state.selection.with_list(message.list_name)), []

    if isinstance(message, StateSelected):
        return _refilter(state, selection=state.selection.with_state(message.state)), []

    if isinstance(message, RemoveRequested):
        return _request_action(state, message.package, ActionType.REMOVE)

    if isinstance(message, RestoreRequested):
        return _request_action(state, message.package, ActionType.RESTORE)

    if isinstance(message, ActionCompleted):
        return _complete_action(state, message.result), []

    if isinstance(message, LoadRequested):
        if state.loading:
            return state, []
        return replace(state, loading=True, notice=None), [LoadInventory()]

    if isinstance(message, InventoryLoaded):
        return _load_inventory(state, message.records), []

    if isinstance(message, InventoryLoadFailed):
        return replace(state, loading=False, notice=message.error), []

    msg = f"Unknown session message: {message!r}"
    raise TypeError(msg)
