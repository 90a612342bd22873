"""Shutdown coordination module for running cleanup hooks on process termination."""

from .cancellation import CancellationSignal
from .coordinator import ShutdownCoordinator
from .hooks import ShutdownHook
from .process import OsProcess, ProcessChannels

__all__ = ['CancellationSignal', 'ShutdownCoordinator', 'ShutdownHook', 'OsProcess', 'ProcessChannels']
