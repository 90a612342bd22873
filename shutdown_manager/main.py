import click
from .modules.shutdown.commands import create_shutdown_commands
from .modules.logging import create_logger


class ShutdownManagerContext:
    """Context object to store CLI state."""
    def __init__(self):
        self.logger = None

pass_context = click.make_pass_decorator(ShutdownManagerContext, ensure=True)

@click.group()
@click.option('--output', '-o',
              type=click.Choice(['colorful', 'plain', 'json']),
              default='colorful',
              help='Output format (colorful for CLI, plain for CI/file, json for machine parsing)',
              envvar='SHUTDOWN_MANAGER_OUTPUT')
@click.option('--log-level', '-l',
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
              default='INFO',
              help='Set the logging level',
              envvar='SHUTDOWN_MANAGER_LOG_LEVEL')
@pass_context
def cli(ctx, output, log_level):
    """Shutdown Manager CLI Tool: run cleanup hooks on process termination."""
    ctx.logger = create_logger(output, log_level)

# Add commands
cli.add_command(create_shutdown_commands())

def main():
    cli()

if __name__ == '__main__':
    main()
