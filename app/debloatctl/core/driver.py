"""Session driver running device effects off the caller's thread.

The driver owns a :class:`SessionState`. Messages sent by the caller
are applied immediately with :func:`update`; the effects they produce
run on a worker pool and report back through an event queue that the
caller drains with :meth:`SessionDriver.pump`. Only the caller's thread
ever changes the state, so filtering stays responsive while adb works.
"""

import logging
import queue
from concurrent.futures import Future, ThreadPoolExecutor, wait

from debloatctl.core.catalog import Catalog
from debloatctl.core.dispatcher import ActionDispatcher
from debloatctl.core.inventory import scan_device
from debloatctl.core.session import (
    ActionCompleted,
    Effect,
    InventoryLoaded,
    InventoryLoadFailed,
    LoadInventory,
    Message,
    RunAction,
    SessionState,
    update,
)
from debloatctl.device.base import DeviceError, DeviceInventory
from debloatctl.models.action import ActionResult

logger = logging.getLogger(__name__)


def _raised(future: Future[None]) -> bool:
    """Check if a finished effect ended with an unexpected exception."""
    return future.done() and not future.cancelled() and future.exception() is not None


def _failure_message(effect: Effect, error: Exception) -> Message:
    """Outcome event for an effect that crashed.

    The session treats it like any other failure: the action's package
    is released and a load can be requested again.
    """
    text = f"Unexpected error: {error}"
    if isinstance(effect, RunAction):
        return ActionCompleted(result=ActionResult(action=effect.action, success=False, error=text))
    return InventoryLoadFailed(error=text)


class SessionDriver:
    """Run a session against a device.

    Example:
        >>> with SessionDriver(AdbDevice(), load_catalog()) as driver:
        ...     driver.send(LoadRequested())
        ...     driver.wait_idle()
        ...     driver.send(SearchChanged("google"))
        ...     print(len(driver.state.visible))
    """

    def __init__(
        self,
        device: DeviceInventory,
        catalog: Catalog,
        max_workers: int = 4,
    ) -> None:
        self._device = device
        self._catalog = catalog
        self._dispatcher = ActionDispatcher(device)
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="debloatctl",
        )
        self._events: queue.Queue[Message] = queue.Queue()
        self._futures: set[Future[None]] = set()
        self._state = SessionState()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def busy(self) -> bool:
        """True while any effect is still running."""
        return any(not f.done() for f in self._futures)

    def send(self, message: Message) -> SessionState:
        """Apply a message and schedule the effects it produces.

        Args:
            message: User intent or effect outcome.

        Returns:
            The new session state.
        """
        self._state, effects = update(self._state, message)
        for effect in effects:
            self._schedule(effect)
        return self._state

    def pump(self, timeout: float | None = None) -> int:
        """Apply completion events delivered by workers.

        Args:
            timeout: Seconds to wait for the first event. None returns
                immediately if the queue is empty.

        Returns:
            Number of events applied.
        """
        # effects that raised stay tracked so wait_idle can re-raise
        self._futures = {f for f in self._futures if not f.done() or _raised(f)}
        applied = 0
        block = timeout is not None
        while True:
            try:
                message = self._events.get(block=block, timeout=timeout)
            except queue.Empty:
                return applied
            self.send(message)
            applied += 1
            block = False

    def wait_idle(self) -> SessionState:
        """Block until no effects are running and all their events are applied.

        Effects triggered by applied events are waited for too.

        Raises:
            Exception: The first unexpected error raised by an effect. Its
                failure event is applied before the error propagates.
        """
        while True:
            finished = list(self._futures)
            wait(finished)
            self._futures.difference_update(finished)
            self.pump()
            for future in finished:
                if _raised(future):
                    raise future.exception()  # type: ignore[misc]
            if not self._futures and self._events.empty():
                return self._state

    def run_effect(self, effect: Effect) -> Message:
        """Execute one effect synchronously and return its outcome message.

        Device errors are converted into failure messages.
        """
        if isinstance(effect, LoadInventory):
            try:
                records = scan_device(self._device, self._catalog)
            except DeviceError as e:
                logger.error("Failed to load inventory: %s", e)
                return InventoryLoadFailed(error=str(e))
            return InventoryLoaded(records=tuple(records))

        if isinstance(effect, RunAction):
            return ActionCompleted(result=self._dispatcher.execute(effect.action))

        msg = f"Unknown session effect: {effect!r}"
        raise TypeError(msg)

    def close(self) -> None:
        """Stop the worker pool, cancelling effects that have not started."""
        self._executor.shutdown(wait=True, cancel_futures=True)

    def __enter__(self) -> "SessionDriver":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _schedule(self, effect: Effect) -> None:
        self._futures.add(self._executor.submit(self._worker, effect))

    def _worker(self, effect: Effect) -> None:
        try:
            message = self.run_effect(effect)
        except Exception as e:
            # every effect ends with an event, even one that crashed
            self._events.put(_failure_message(effect, e))
            raise
        self._events.put(message)
