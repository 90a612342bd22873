"""Graceful shutdown orchestration: run named cleanup hooks with bounded time budgets on process termination."""

from .modules.logging import BaseLogger, NullLogger, create_logger
from .modules.shutdown import (
    CancellationSignal, OsProcess, ProcessChannels, ShutdownCoordinator, ShutdownHook
)

__version__ = "0.1.0"

__all__ = [
    'BaseLogger', 'NullLogger', 'create_logger',
    'CancellationSignal', 'OsProcess', 'ProcessChannels', 'ShutdownCoordinator', 'ShutdownHook',
]
