"""CLI command listing classified sshd events."""

import json
from time import time

import click

from sshdscan.cli.common import fail, read_log_file, use_color
from sshdscan.models import LogEntryModel, ParseResponse
from sshdscan.parser import EventKind, SSHDParser


@click.command('parse')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--json', 'json_output', is_flag=True, help='Output in JSON format')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.option('--unparsed', 'show_unparsed', is_flag=True, help='Also list sshd lines no rule recognized')
@click.option(
    '--kind',
    'kinds',
    multiple=True,
    type=click.Choice([k.value for k in EventKind]),
    help='Only show events of this kind (repeatable)',
)
@click.option('--limit', type=int, default=None, help='Show at most this many entries')
def parse_command(
    path: str,
    json_output: bool,
    no_color: bool,
    show_unparsed: bool,
    kinds: tuple[str, ...],
    limit: int | None,
):
    """Classify every sshd line of a log file.

    \b
    Examples:
        sshdscan parse /var/log/auth.log
        sshdscan parse auth.log --kind auth_failure --kind invalid_user
        sshdscan parse auth.log --unparsed --limit 20
        sshdscan parse auth.log --json
    """
    if limit is not None and limit < 0:
        fail('--limit must be non-negative')

    content = read_log_file(path)

    start_time = time()
    entries, unparsed = SSHDParser().parse_file(content)
    elapsed = time() - start_time

    if kinds:
        wanted = {EventKind(k) for k in kinds}
        entries = [e for e in entries if e.event_kind in wanted]
    if limit is not None:
        entries = entries[:limit]

    response = ParseResponse(
        path=path,
        time=elapsed,
        entries=[LogEntryModel.from_entry(e) for e in entries],
        unparsed=unparsed if show_unparsed or json_output else [],
    )
    if json_output:
        click.echo(json.dumps(response.model_dump(mode='json'), indent=2))
    else:
        click.echo(response.to_cli(colorize=use_color(no_color), show_unparsed=show_unparsed))
