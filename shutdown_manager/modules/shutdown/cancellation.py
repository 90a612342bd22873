"""One-shot broadcast signal raised when shutdown begins."""

import asyncio
from typing import Callable, List, Optional

from ..logging import BaseLogger, NullLogger


class CancellationSignal:
    """Fire-once "shutdown requested" flag that observers can poll, await or subscribe to.

    There is deliberately no way to reset it.
    """

    def __init__(self, log: Optional[BaseLogger] = None):
        self.logger = log or NullLogger()
        self._aborted = False
        self._callbacks: List[Callable[[], None]] = []
        self._waiters: List[asyncio.Future] = []

    @property
    def aborted(self) -> bool:
        return self._aborted

    def is_set(self) -> bool:
        return self._aborted

    def abort(self) -> None:
        """Transition to the signaled state. Later calls are no-ops.

        A callback that raises is logged and does not stop the others.
        """
        if self._aborted:
            return
        self._aborted = True

        waiters, self._waiters = self._waiters, []
        for waiter in waiters:
            if not waiter.done():
                waiter.set_result(True)

        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            self._notify(callback)

    def add_callback(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` once the signal fires, or right away if it already has."""
        if self._aborted:
            self._notify(callback)
            return
        self._callbacks.append(callback)

    def _notify(self, callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception as error:
            self.logger.log_error("Cancellation callback failed", {"error": error})

    def remove_callback(self, callback: Callable[[], None]) -> None:
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    async def wait(self) -> bool:
        """Block until the signal fires."""
        if self._aborted:
            return True
        waiter: asyncio.Future = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        try:
            return await waiter
        finally:
            if waiter in self._waiters:
                self._waiters.remove(waiter)
