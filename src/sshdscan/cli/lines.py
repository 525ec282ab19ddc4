"""CLI command printing the raw log lines of selected sshd processes."""

import json

import click

from sshdscan.cli.common import fail, read_log_file, use_color
from sshdscan.models import PidLinesResponse
from sshdscan.pids import select_lines_for_pids


@click.command('lines')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--pid', 'pids', multiple=True, required=True, help='sshd process id (repeatable)')
@click.option('--json', 'json_output', is_flag=True, help='Output in JSON format')
@click.option('--no-color', is_flag=True, help='Disable colored output')
def lines_command(path: str, pids: tuple[str, ...], json_output: bool, no_color: bool):
    """Print every line logged by the given sshd PIDs.

    Use the PIDs listed for an anomaly to pull up the full conversation of
    the suspicious connections.

    \b
    Examples:
        sshdscan lines /var/log/auth.log --pid 24200
        sshdscan lines auth.log --pid 24200 --pid 24206 --json
    """
    for pid in pids:
        if not pid.isdigit():
            fail(f'Invalid pid: {pid}')

    content = read_log_file(path)
    matched = select_lines_for_pids(content, list(pids))
    if not matched:
        fail('no log lines found for provided PIDs')

    response = PidLinesResponse(path=path, pids=list(pids), lines=matched)
    if json_output:
        click.echo(json.dumps(response.model_dump(mode='json'), indent=2))
    else:
        click.echo(response.to_cli(colorize=use_color(no_color)))
