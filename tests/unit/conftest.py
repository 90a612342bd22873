import asyncio
from typing import List
from unittest.mock import Mock

import pytest

from shutdown_manager.modules.shutdown.process import Listener, ProcessChannels


class FakeProcess(ProcessChannels):
    """In-memory process: records subscriptions and exit calls instead of touching the OS."""

    def __init__(self):
        super().__init__()
        self.subscriptions: List[str] = []
        self.exit_codes: List[int] = []
        self.exited = asyncio.Event()

    def on(self, event: str, listener: Listener) -> None:
        self.subscriptions.append(event)
        super().on(event, listener)

    def exit(self, code: int) -> None:
        self.exit_codes.append(code)
        self.exited.set()

    async def wait_for_exit(self, timeout: float = 2.0) -> None:
        await asyncio.wait_for(self.exited.wait(), timeout)


@pytest.fixture
def fake_process():
    """Create a fake process."""
    return FakeProcess()


@pytest.fixture
def mock_logger():
    """Create a mock logger."""
    logger = Mock()
    logger.log_info = Mock()
    logger.log_error = Mock()
    logger.log_warning = Mock()
    logger.log_debug = Mock()
    return logger
