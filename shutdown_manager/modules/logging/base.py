from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from loguru import logger


LogContext = Optional[Dict[str, Any]]


class BaseLogger(ABC):
    """Abstract base class for loggers.

    Every call is either ``(message)`` or ``(message, context)``. Lifecycle
    lines carry ``{"signal": name}`` and failure lines carry
    ``{"error": error}``.
    """
    
    def __init__(self, log_level: str = "INFO"):
        self.logger = logger
        self.log_level = log_level

    @abstractmethod
    def log_error(self, message: str, context: LogContext = None):
        """Log an error message."""
        pass

    @abstractmethod
    def log_warning(self, message: str, context: LogContext = None):
        """Log a warning message."""
        pass

    @abstractmethod
    def log_info(self, message: str, context: LogContext = None):
        """Log an info message."""
        pass

    @abstractmethod
    def log_debug(self, message: str, context: LogContext = None):
        """Log a debug message."""
        pass

    def _exception_of(self, context: LogContext) -> Optional[BaseException]:
        """Return the exception carried by a failure context, if any."""
        if not context:
            return None
        error = context.get("error")
        return error if isinstance(error, BaseException) else None

    @staticmethod
    def format_context(context: LogContext) -> str:
        """Render a context mapping as ``key=value`` pairs."""
        if not context:
            return ""
        return " ".join(f"{key}={value!r}" for key, value in context.items())
