"""Outcomes of a single hook race during a shutdown sequence."""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class HookSucceeded:
    """The hook settled normally before either timer."""


@dataclass(frozen=True)
class HookFailed:
    """The hook raised, or its awaitable completed with an exception."""
    error: Optional[BaseException] = None


@dataclass(frozen=True)
class HookTimedOut:
    """The per-hook timer fired before the hook settled."""


@dataclass(frozen=True)
class GlobalDeadlineExceeded:
    """The shared shutdown deadline fired."""


HookOutcome = Union[HookSucceeded, HookFailed, HookTimedOut, GlobalDeadlineExceeded]
