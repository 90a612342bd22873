import sys
from typing import Any, Dict
from .base import BaseLogger, LogContext


class JsonLogger(BaseLogger):
    """Logger that outputs JSON for machine parsing."""
    
    def __init__(self, log_level: str = "INFO"):
        super().__init__(log_level)
        # Configure loguru for JSON output
        self.logger.configure(
            handlers=[{
                "sink": sys.stdout,
                "serialize": True,  # JSON output
                "format": "{time} | {level} | {message}",
                "level": log_level
            }]
        )

    def _extra(self, kind: str, context: LogContext) -> Dict[str, Any]:
        extra: Dict[str, Any] = {"type": kind}
        for key, value in (context or {}).items():
            # Exceptions are not JSON serializable; keep their repr
            extra[key] = repr(value) if isinstance(value, BaseException) else value
        return extra

    def log_error(self, message: str, context: LogContext = None):
        self.logger.opt(exception=self._exception_of(context)).bind(
            **self._extra("error", context)
        ).error(message)

    def log_warning(self, message: str, context: LogContext = None):
        self.logger.bind(**self._extra("warning", context)).warning(message)

    def log_info(self, message: str, context: LogContext = None):
        self.logger.bind(**self._extra("info", context)).info(message)

    def log_debug(self, message: str, context: LogContext = None):
        self.logger.bind(**self._extra("debug", context)).debug(message)
