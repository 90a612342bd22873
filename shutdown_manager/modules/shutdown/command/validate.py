import sys
from typing import Optional, TextIO

from ...logging import BaseLogger
from ..config import ShutdownConfig
from ..validator import ShutdownYamlValidator
from .run import read_config_content


class ValidateCommand:
    """Command class for checking a shutdown config without binding anything."""

    def __init__(self, logger: BaseLogger):
        self.logger = logger

    def describe(self, config: ShutdownConfig) -> None:
        self.logger.log_info(f"Signals: {', '.join(config.signals)}")
        self.logger.log_info(f"Per-hook timeout: {config.per_hook_timeout} ms")
        self.logger.log_info(f"Shutdown timeout: {config.shutdown_timeout} ms")
        if not config.hooks:
            self.logger.log_warning("No hooks configured")
        for index, hook in enumerate(config.hooks, start=1):
            self.logger.log_info(f"{index}. {hook.name}: {hook.command}")

    def run(self, config_file: Optional[TextIO]) -> None:
        try:
            config = ShutdownYamlValidator.validate_and_load(read_config_content(config_file))
        except ValueError as err:
            self.logger.log_error(f"Config error: {str(err)}")
            sys.exit(1)

        self.describe(config)
        self.logger.log_info("Config is valid")
