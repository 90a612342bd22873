import click
from .base import BaseLogger, LogContext
import sys


class ColorfulLogger(BaseLogger):
    """Logger that outputs colorful text for CLI usage."""
    
    def __init__(self, log_level: str = "INFO"):
        super().__init__(log_level)
        # Configure loguru for colored output
        self.logger.configure(
            handlers=[{
                "sink": sys.stdout,
                "colorize": True,
                "format": "<cyan>{time:YYYY-MM-DD HH:mm:ss.SSS}</cyan> | "
                         "<level>{level: <8}</level> | "
                         "<white>{message}</white>",
                "level": log_level
            }]
        )

    def _styled(self, message: str, context: LogContext, **style) -> str:
        text = click.style(message, **style)
        rendered = self.format_context(context)
        if rendered:
            text += " " + click.style(rendered, fg="cyan")
        return text

    def log_error(self, message: str, context: LogContext = None):
        self.logger.opt(exception=self._exception_of(context)).error(
            self._styled(message, context, fg="red", bold=True)
        )

    def log_warning(self, message: str, context: LogContext = None):
        self.logger.warning(self._styled(message, context, fg="yellow", bold=True))

    def log_info(self, message: str, context: LogContext = None):
        self.logger.info(self._styled(message, context, fg="white"))

    def log_debug(self, message: str, context: LogContext = None):
        self.logger.debug(self._styled(message, context, fg="blue"))
