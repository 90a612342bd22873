"""Shutdown hooks and the ordered registry that holds them."""

from dataclasses import dataclass
from typing import Any, Callable, Iterator, List


HookHandler = Callable[[], Any]


@dataclass(frozen=True)
class ShutdownHook:
    """A named cleanup operation run during shutdown.

    The handler takes no arguments and returns either a plain value or an
    awaitable.
    """
    name: str
    handler: HookHandler


class HookRegistry:
    """Append-only, insertion-ordered collection of hooks."""

    def __init__(self):
        self._hooks: List[ShutdownHook] = []

    def append(self, hook: ShutdownHook) -> None:
        self._hooks.append(hook)

    def snapshot(self) -> List[ShutdownHook]:
        """Copy of the hooks in execution order."""
        return list(self._hooks)

    def __iter__(self) -> Iterator[ShutdownHook]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._hooks)
