import asyncio
import sys
from typing import Optional, TextIO

from ...logging import BaseLogger
from ..config import HookConfig, ShutdownConfig
from ..coordinator import ShutdownCoordinator
from ..errors import HookCommandError
from ..hooks import HookHandler
from ..process import ProcessChannels
from ..validator import ShutdownYamlValidator


def read_config_content(config_file: Optional[TextIO]) -> str:
    """Read shutdown config content from file or stdin."""
    if config_file is None:
        if sys.stdin.isatty():
            raise ValueError("Please provide a config file or pipe YAML content")
        return sys.stdin.read()

    return config_file.read()


def command_hook(hook: HookConfig) -> HookHandler:
    """Build a hook handler that runs ``hook.command`` in a shell."""
    async def run_command() -> None:
        process = await asyncio.create_subprocess_shell(hook.command)
        return_code = await process.wait()
        if return_code != 0:
            raise HookCommandError(hook.command, return_code)

    return run_command


class RunCommand:
    """Command class for running shell hooks when the process is told to stop."""
    
    def __init__(self, logger: BaseLogger):
        """
        Initialize the run command.
        
        Args:
            logger: Logger instance
        """
        self.logger = logger

    def build_coordinator(
        self,
        config: ShutdownConfig,
        process: Optional[ProcessChannels] = None
    ) -> ShutdownCoordinator:
        """Create a coordinator bound to ``process`` with every configured hook registered."""
        coordinator = ShutdownCoordinator(
            log=self.logger,
            process=process,
            **config.coordinator_kwargs()
        )
        for hook in config.hooks:
            coordinator.add_hook(hook.name, command_hook(hook))
        return coordinator

    async def serve(self, config: ShutdownConfig, process: Optional[ProcessChannels] = None) -> None:
        """
        Bind a coordinator and wait until its shutdown sequence has run.

        With the real process the coordinator's exit ends the event loop, so
        this only returns when ``process`` does not terminate the interpreter.
        """
        # Built inside the running loop so signals and task failures go through it
        coordinator = self.build_coordinator(config, process)
        self.logger.log_info(
            f"Waiting for {', '.join(coordinator.signals)} "
            f"with {coordinator.hook_count} hook(s) registered"
        )
        await coordinator.wait_for_shutdown()

    def run(self, config_file: Optional[TextIO]):
        """
        Run the shutdown sidecar.
        
        Args:
            config_file: File containing the shutdown config YAML
        """
        try:
            config = ShutdownYamlValidator.validate_and_load(read_config_content(config_file))
        except ValueError as err:
            self.logger.log_error(f"Config error: {str(err)}")
            sys.exit(1)

        asyncio.run(self.serve(config))
