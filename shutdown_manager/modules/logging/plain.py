import sys
from .base import BaseLogger, LogContext


class PlainLogger(BaseLogger):
    """Logger that outputs plain text, suitable for CI/file output."""
    
    def __init__(self, log_level: str = "INFO"):
        super().__init__(log_level)
        # Configure loguru for plain output
        self.logger.configure(
            handlers=[{
                "sink": sys.stdout,
                "format": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {message}",
                "colorize": False,
                "level": log_level
            }]
        )

    def _render(self, message: str, context: LogContext) -> str:
        rendered = self.format_context(context)
        return f"{message} {rendered}" if rendered else message

    def log_error(self, message: str, context: LogContext = None):
        self.logger.opt(exception=self._exception_of(context)).error(
            self._render(message, context)
        )

    def log_warning(self, message: str, context: LogContext = None):
        self.logger.warning(self._render(message, context))

    def log_info(self, message: str, context: LogContext = None):
        self.logger.info(self._render(message, context))

    def log_debug(self, message: str, context: LogContext = None):
        self.logger.debug(self._render(message, context))
