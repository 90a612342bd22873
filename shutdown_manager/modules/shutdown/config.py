from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator

from .coordinator import DEFAULT_PER_HOOK_TIMEOUT, DEFAULT_SHUTDOWN_TIMEOUT, DEFAULT_SIGNALS
from .process import signal_number


class HookConfig(BaseModel):
    name: str = Field(min_length=1)
    command: str = Field(min_length=1)  # Shell command run when the hook fires


class ShutdownConfig(BaseModel):
    signals: List[str] = Field(default_factory=lambda: list(DEFAULT_SIGNALS))
    per_hook_timeout: int = Field(default=DEFAULT_PER_HOOK_TIMEOUT, gt=0)  # milliseconds
    shutdown_timeout: int = Field(default=DEFAULT_SHUTDOWN_TIMEOUT, gt=0)  # milliseconds
    hooks: List[HookConfig] = Field(default_factory=list)

    @field_validator('signals')
    @classmethod
    def validate_signals(cls, signals: List[str]) -> List[str]:
        """Validate that every signal exists on this platform and can be caught."""
        for name in signals:
            signal_number(name)
        return signals

    def coordinator_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for building a ShutdownCoordinator from this config."""
        return {
            "signals": self.signals,
            "per_hook_timeout": self.per_hook_timeout,
            "shutdown_timeout": self.shutdown_timeout,
        }
