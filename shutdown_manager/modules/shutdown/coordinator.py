"""Shutdown coordinator for running cleanup hooks when the process is asked to stop."""

import asyncio
import inspect
import signal
from functools import partial
from typing import Any, Awaitable, Iterable, List, Optional, Set, Tuple

from ..logging import BaseLogger, NullLogger
from .cancellation import CancellationSignal
from .hooks import HookHandler, HookRegistry, ShutdownHook
from .outcomes import (
    GlobalDeadlineExceeded, HookFailed, HookOutcome, HookSucceeded, HookTimedOut
)
from .process import EXIT, UNCAUGHT_EXCEPTION, UNHANDLED_REJECTION, Listener, OsProcess, ProcessChannels
from .race import race

DEFAULT_SIGNALS: Tuple[str, ...] = tuple(
    name for name in ("SIGINT", "SIGTERM", "SIGABRT", "SIGUSR2") if hasattr(signal, name)
)

# Uncaught failures are processed as if this signal had been received
FAILURE_SIGNAL = "SIGUSR2"

DEFAULT_PER_HOOK_TIMEOUT = 5000
DEFAULT_SHUTDOWN_TIMEOUT = 10_000


class ShutdownCoordinator:
    """
    Coordinates graceful shutdown of application components.

    On the first termination signal, uncaught exception or unhandled task
    failure, every registered hook runs once, in registration order, bounded
    by a per-hook timeout and a global timeout. The process then exits with
    status 0 if every hook succeeded and 1 otherwise. Triggers arriving while
    the sequence runs are logged and ignored.

    Example:
        coordinator = ShutdownCoordinator(log=create_logger("plain"))
        coordinator.add_hook("database", db.close)
        coordinator.add_hook("queue", queue.flush)
    """

    def __init__(
        self,
        signals: Optional[Iterable[str]] = None,
        log: Optional[BaseLogger] = None,
        per_hook_timeout: int = DEFAULT_PER_HOOK_TIMEOUT,
        shutdown_timeout: int = DEFAULT_SHUTDOWN_TIMEOUT,
        process: Optional[ProcessChannels] = None,
    ):
        """
        Initialize the coordinator and subscribe to the process channels.

        Args:
            signals: Signal names to intercept (defaults to SIGINT, SIGTERM, SIGABRT, SIGUSR2)
            log: Logger for shutdown events; nothing is logged when omitted
            per_hook_timeout: Budget of a single hook, in milliseconds
            shutdown_timeout: Budget of the whole hook sequence, in milliseconds
            process: Process channels to bind to (defaults to the real process)

        Raises:
            ValueError: If a signal name is not known to the platform
        """
        self._signals: Tuple[str, ...] = tuple(signals) if signals is not None else DEFAULT_SIGNALS
        self.logger = log or NullLogger()
        self.per_hook_timeout = per_hook_timeout
        self.shutdown_timeout = shutdown_timeout
        self._process = process if process is not None else OsProcess()

        self._hooks = HookRegistry()
        self._cancellation = CancellationSignal(log=self.logger)
        self._is_shutting_down = False
        self._subscriptions: List[Tuple[str, Listener]] = []
        self._shutdown_task: Optional[asyncio.Task] = None
        self._background: Set[asyncio.Future] = set()
        self._finished = asyncio.Event()

        try:
            self._bind()
        except Exception:
            self.disconnect()
            raise

    @property
    def cancellation_signal(self) -> CancellationSignal:
        """Signal fired once shutdown starts."""
        return self._cancellation

    @property
    def hook_count(self) -> int:
        return len(self._hooks)

    @property
    def is_shutting_down(self) -> bool:
        """Check if shutdown is in progress."""
        return self._is_shutting_down

    @property
    def signals(self) -> Tuple[str, ...]:
        return self._signals

    def add_hook(self, name: str, handler: HookHandler) -> None:
        """
        Register a shutdown hook.

        Hooks run in registration order. Hooks added once shutdown has
        started do not take part in that run. Once the global timeout has
        passed, the remaining hooks are skipped without their handlers being
        called.

        Args:
            name: Name of the hook, used in log lines
            handler: Zero-argument callable, returning a value or an awaitable
        """
        self.logger.log_info(f'Registered "{name}" hook')
        self._hooks.append(ShutdownHook(name, handler))

    async def wait_for_shutdown(self) -> None:
        """Block until a shutdown sequence has started and run all its hooks."""
        await self._finished.wait()

    def disconnect(self) -> None:
        """Unsubscribe from every process channel. Safe to call repeatedly."""
        subscriptions, self._subscriptions = self._subscriptions, []
        for event, listener in reversed(subscriptions):
            self._process.off(event, listener)

    def _bind(self) -> None:
        self._subscribe(UNCAUGHT_EXCEPTION, self._process_error)
        self._subscribe(UNHANDLED_REJECTION, self._process_error)
        for sig in self._signals:
            self._subscribe(sig, partial(self._process_signal, sig))
        self._subscribe(EXIT, self._on_exit)

    def _subscribe(self, event: str, listener: Listener) -> None:
        self._process.on(event, listener)
        self._subscriptions.append((event, listener))

    def _on_exit(self, code: int) -> None:
        self.logger.log_info(f"Exiting with status code of {code}")

    def _process_error(self, error: Any) -> None:
        self.logger.log_error("Uncaught/Unhandled", {"error": error})
        self._process_signal(FAILURE_SIGNAL)

    def _process_signal(self, sig: str) -> None:
        """
        Start the shutdown sequence for ``sig`` unless one is already running.

        The latch is checked and set before anything is scheduled, so a
        second trigger can never start a second sequence.
        """
        if self._is_shutting_down:
            self.logger.log_warning(
                "Ignoring process exit signal as the app is shutting down",
                {"signal": sig}
            )
            return

        self.logger.log_info("Processing exit signal", {"signal": sig})
        self._is_shutting_down = True
        self._cancellation.abort()

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Outside the event loop (e.g. from sys.excepthook): run to completion here
            asyncio.run(self._run_hooks(sig))
            return

        # call_soon_threadsafe also wakes a loop blocked in select when the
        # trigger came from a plain signal.signal handler
        loop.call_soon_threadsafe(self._start_hooks, sig)

    def _start_hooks(self, sig: str) -> None:
        self._shutdown_task = asyncio.ensure_future(self._run_hooks(sig))

    async def _run_hooks(self, sig: str) -> None:
        with_error = False
        force_exit = False

        global_timeout = asyncio.ensure_future(
            asyncio.sleep(self.shutdown_timeout / 1000, result=GlobalDeadlineExceeded())
        )

        try:
            for hook in self._hooks:
                self.logger.log_info(f'Processing "{hook.name}" hook')

                outcome = await self._race_hook(hook, global_timeout)

                if isinstance(outcome, HookSucceeded):
                    self.logger.log_info(f'Successful "{hook.name}" hook')
                elif isinstance(outcome, HookTimedOut):
                    with_error = True
                    self.logger.log_info(f'Timed out "{hook.name}" hook')
                elif isinstance(outcome, GlobalDeadlineExceeded):
                    force_exit = True
                elif isinstance(outcome, HookFailed):
                    self.logger.log_error(f'Unsuccessful "{hook.name}" hook', {"error": outcome.error})
                    with_error = True
        except Exception as error:
            # Any failure here still ends in exit below
            self.logger.log_error("Hook sequence failed", {"error": error})
            with_error = True
        finally:
            global_timeout.cancel()

        self.logger.log_info("Exit signal process completed", {"signal": sig})

        if with_error:
            self.logger.log_warning(
                "Looks like some handlers were not able to be processed gracefully"
            )

        if force_exit:
            self.logger.log_warning("Looks like the global timeout was reached")

        try:
            self._process.exit(1 if with_error or force_exit else 0)
        finally:
            self._finished.set()

    async def _race_hook(self, hook: ShutdownHook, global_timeout: asyncio.Future) -> HookOutcome:
        """Race one hook against its own timer and the shared global timer."""
        if global_timeout.done():
            # The deadline already passed: the hook is not started at all
            return GlobalDeadlineExceeded()

        return await race(
            global_timeout,
            self._settle(hook),
            asyncio.sleep(self.per_hook_timeout / 1000, result=HookTimedOut()),
        )

    async def _settle(self, hook: ShutdownHook) -> HookOutcome:
        try:
            result = hook.handler()
        except (Exception, asyncio.CancelledError) as error:
            return HookFailed(error)

        if not inspect.isawaitable(result):
            return HookSucceeded()

        # asyncio.wait never cancels what it waits on, so losing the race
        # leaves the hook running in the background
        future = self._track(result)
        await asyncio.wait([future])

        if future.cancelled():
            return HookFailed(asyncio.CancelledError())
        error = future.exception()
        return HookFailed(error) if error is not None else HookSucceeded()

    def _track(self, awaitable: Awaitable[Any]) -> asyncio.Future:
        """Keep a reference to hook work that may outlive its race."""
        future = asyncio.ensure_future(awaitable)
        self._background.add(future)
        future.add_done_callback(self._forget)
        return future

    def _forget(self, future: asyncio.Future) -> None:
        self._background.discard(future)
        if not future.cancelled():
            # Mark the outcome as retrieved even when nobody waits for it any more
            future.exception()
