import click
from typing import Optional, TextIO
from .command.run import RunCommand
from .command.validate import ValidateCommand


def create_shutdown_commands() -> click.Command:
    """Create the shutdown command."""

    @click.group(name='shutdown')
    @click.pass_context
    def shutdown(ctx):
        """Run and check shutdown hooks."""
        pass

    @shutdown.command(name='run')
    @click.argument('config_file', type=click.File('r'), required=False)
    @click.pass_context
    def run(ctx, config_file: Optional[TextIO]):
        """Wait for a termination signal, then run the hooks of a YAML config.
        
        If no file is specified, reads from stdin. The process exits with
        status 0 when every hook succeeded and 1 otherwise.
        """
        command = RunCommand(logger=ctx.obj.logger)
        command.run(config_file)

    @shutdown.command(name='validate')
    @click.argument('config_file', type=click.File('r'), required=False)
    @click.pass_context
    def validate(ctx, config_file: Optional[TextIO]):
        """Validate a YAML shutdown config and list its hooks."""
        command = ValidateCommand(logger=ctx.obj.logger)
        command.run(config_file)

    return shutdown
