"""Main CLI entry point with command groups"""

import click

from sshdscan.__version__ import __version__
from sshdscan.cli.analyze import analyze_command
from sshdscan.cli.lines import lines_command
from sshdscan.cli.parse import parse_command
from sshdscan.utils import setup_logging


class DefaultCommandGroup(click.Group):
    """Custom Click Group that allows a default command"""

    def parse_args(self, ctx, args):
        # During shell completion, don't redirect to default command
        if ctx.resilient_parsing:
            return super().parse_args(ctx, args)

        # If --help or --version is requested, show group help/version
        if args and args[0] in ('--help', '-h', '--version'):
            return super().parse_args(ctx, args)

        # Check if first arg is a known command
        if not args or args[0] in self.commands:
            return super().parse_args(ctx, args)

        # Otherwise, treat as analyze command (default)
        return super().parse_args(ctx, ['analyze'] + args)


@click.group(cls=DefaultCommandGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name='sshdscan')
@click.pass_context
def cli(ctx):
    """
    sshdscan - OpenSSH daemon log classifier and anomaly report.

    \b
    Commands:
      sshdscan <path>                  Anomaly report (default command)
      sshdscan analyze <path>          Anomaly report
      sshdscan parse <path>            List classified sshd events
      sshdscan lines <path> --pid N    Raw lines of the given sshd processes

    \b
    Environment:
      SSHDSCAN_LOG_LEVEL         Log level (default: WARNING)
      SSHDSCAN_MAX_FILE_SIZE_MB  Largest file accepted (default: 10)
      SSHDSCAN_COLOR             Colored output when on a terminal (default: true)
    """
    setup_logging()
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


cli.add_command(analyze_command, name='analyze')
cli.add_command(parse_command, name='parse')
cli.add_command(lines_command, name='lines')


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
