"""Process-level event channels the shutdown coordinator subscribes to."""

import asyncio
import atexit
import os
import signal
import sys
import types
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Union

UNCAUGHT_EXCEPTION = "uncaught_exception"
UNHANDLED_REJECTION = "unhandled_rejection"
EXIT = "exit"

Listener = Callable[..., Any]

# Type for signal handlers
SignalHandlerType = Union[Callable[[int, Optional[types.FrameType]], Any], int, None]

_UNCATCHABLE = {"SIGKILL", "SIGSTOP"}


def signal_number(name: str) -> int:
    """
    Resolve a signal name such as ``"SIGTERM"`` to its number.

    Raises:
        ValueError: If the platform does not define the signal or it cannot be caught
    """
    try:
        signum = signal.Signals[name]
    except KeyError:
        raise ValueError(f"Unknown signal: {name}")
    if signum.name in _UNCATCHABLE:
        raise ValueError(f"Signal {name} cannot be caught")
    return int(signum)


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class ProcessChannels(ABC):
    """
    Named event channels of the host process plus its exit primitive.

    Channels are signal names (``"SIGINT"``), ``uncaught_exception``,
    ``unhandled_rejection`` and ``exit``. The first listener on a channel
    installs the underlying hook and removing the last one uninstalls it.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = {}

    def on(self, event: str, listener: Listener) -> None:
        """Subscribe ``listener`` to ``event``."""
        listeners = self._listeners.get(event)
        if not listeners:
            self._install(event)
            listeners = self._listeners[event] = []
        listeners.append(listener)

    def off(self, event: str, listener: Listener) -> None:
        """Unsubscribe ``listener`` from ``event``. Unknown listeners are ignored."""
        listeners = self._listeners.get(event)
        if not listeners or listener not in listeners:
            return
        listeners.remove(listener)
        if not listeners:
            del self._listeners[event]
            self._uninstall(event)

    def emit(self, event: str, *args: Any) -> bool:
        """Call every listener of ``event``; returns whether there were any."""
        listeners = list(self._listeners.get(event, ()))
        for listener in listeners:
            listener(*args)
        return bool(listeners)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    def _install(self, event: str) -> None:
        """Attach the OS-level hook backing ``event``."""

    def _uninstall(self, event: str) -> None:
        """Detach the OS-level hook backing ``event``."""

    @abstractmethod
    def exit(self, code: int) -> None:
        """Terminate the process with ``code``."""


class OsProcess(ProcessChannels):
    """Channels backed by the running interpreter.

    Signals go through the running event loop when there is one and through
    ``signal.signal`` otherwise. Uncaught exceptions come from
    ``sys.excepthook``, unhandled task failures from the running loop's
    exception handler and the exit channel from ``atexit``.
    """

    def __init__(self):
        super().__init__()
        self._exit_code = 0
        self._signal_loops: Dict[str, asyncio.AbstractEventLoop] = {}
        self._signal_names: Dict[int, str] = {}
        self._original_signals: Dict[str, SignalHandlerType] = {}
        self._original_excepthook: Optional[Callable[..., Any]] = None
        self._exception_loop: Optional[asyncio.AbstractEventLoop] = None
        self._original_exception_handler: Optional[Callable[..., Any]] = None

    def exit(self, code: int) -> None:
        self._exit_code = code
        sys.exit(code)

    def _install(self, event: str) -> None:
        if event == UNCAUGHT_EXCEPTION:
            self._original_excepthook = sys.excepthook
            sys.excepthook = self._excepthook
        elif event == UNHANDLED_REJECTION:
            loop = _running_loop()
            if loop is None:
                # No loop yet, so no task can fail unobserved
                return
            self._exception_loop = loop
            self._original_exception_handler = loop.get_exception_handler()
            loop.set_exception_handler(self._exception_handler)
        elif event == EXIT:
            atexit.register(self._dispatch_exit)
        else:
            self._install_signal(event)

    def _uninstall(self, event: str) -> None:
        if event == UNCAUGHT_EXCEPTION:
            if sys.excepthook == self._excepthook:
                sys.excepthook = self._original_excepthook or sys.__excepthook__
            self._original_excepthook = None
        elif event == UNHANDLED_REJECTION:
            loop = self._exception_loop
            if loop is not None and not loop.is_closed():
                loop.set_exception_handler(self._original_exception_handler)
            self._exception_loop = None
            self._original_exception_handler = None
        elif event == EXIT:
            atexit.unregister(self._dispatch_exit)
        else:
            self._uninstall_signal(event)

    def _install_signal(self, name: str) -> None:
        signum = signal_number(name)
        self._signal_names[signum] = name

        loop = _running_loop()
        if loop is not None:
            try:
                loop.add_signal_handler(signum, self.emit, name)
                self._signal_loops[name] = loop
                return
            except (NotImplementedError, RuntimeError):
                # Windows loops and non-main threads have no add_signal_handler
                pass

        self._original_signals[name] = signal.signal(signum, self._signal_handler)

    def _uninstall_signal(self, name: str) -> None:
        signum = signal_number(name)
        self._signal_names.pop(signum, None)

        loop = self._signal_loops.pop(name, None)
        if loop is not None:
            if not loop.is_closed():
                loop.remove_signal_handler(signum)
            return

        if name in self._original_signals:
            original = self._original_signals.pop(name)
            signal.signal(signum, original if original is not None else signal.SIG_DFL)

    def _signal_handler(self, sig_num: int, frame: Optional[types.FrameType]) -> None:
        self.emit(self._signal_names.get(sig_num, signal.Signals(sig_num).name))

    def _exception_handler(self, loop: asyncio.AbstractEventLoop, context: Dict[str, Any]) -> None:
        if "exception" not in context:
            # Plain loop warnings are not failures: leave them to the previous handler
            if self._original_exception_handler is not None:
                self._original_exception_handler(loop, context)
            else:
                loop.default_exception_handler(context)
            return
        self.emit(UNHANDLED_REJECTION, context["exception"])

    def _excepthook(self, exc_type, exc, tb) -> None:
        try:
            self.emit(UNCAUGHT_EXCEPTION, exc)
        except SystemExit as exit_request:
            # The interpreter is already dying here and SystemExit can no
            # longer set its status, so finish the exit by hand.
            code = exit_request.code if isinstance(exit_request.code, int) else 1
            self._dispatch_exit()
            sys.stdout.flush()
            sys.stderr.flush()
            os._exit(code)

    def _dispatch_exit(self) -> None:
        self.emit(EXIT, self._exit_code)
