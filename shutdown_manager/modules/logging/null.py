from .base import BaseLogger, LogContext


class NullLogger(BaseLogger):
    """Logger that discards everything."""

    def log_error(self, message: str, context: LogContext = None):
        pass

    def log_warning(self, message: str, context: LogContext = None):
        pass

    def log_info(self, message: str, context: LogContext = None):
        pass

    def log_debug(self, message: str, context: LogContext = None):
        pass
