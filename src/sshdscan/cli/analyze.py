"""CLI command for the sshd anomaly report."""

import json
from time import time

import click

from sshdscan import prometheus as prom
from sshdscan.analyzer import analyze
from sshdscan.cli.common import fail, read_log_file, use_color
from sshdscan.models import AnalysisResponse
from sshdscan.parser import SSHDParser


@click.command('analyze')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--json', 'json_output', is_flag=True, help='Output in JSON format')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.option('--min-count', type=int, default=0, help='Hide anomalies with fewer suspicious events than this')
@click.option(
    '--metrics-file',
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help='Write Prometheus metrics for this run to a textfile',
)
def analyze_command(path: str, json_output: bool, no_color: bool, min_count: int, metrics_file: str | None):
    """Summarize sshd events and report suspicious source IPs.

    \b
    Examples:
        sshdscan analyze /var/log/auth.log
        sshdscan /var/log/auth.log --json
        sshdscan analyze auth.log --min-count 5
        sshdscan analyze auth.log --metrics-file /var/lib/node_exporter/sshdscan.prom
    """
    if min_count < 0:
        fail('--min-count must be non-negative')

    content = read_log_file(path)

    start_time = time()
    scan = SSHDParser().scan(content)
    analysis = analyze(scan.entries)
    elapsed = time() - start_time

    if metrics_file:
        prom.record_scan(len(scan.entries), len(scan.unparsed), scan.skipped, len(content), elapsed)
        prom.record_analysis(analysis)
        prom.write_metrics(metrics_file)

    response = AnalysisResponse.from_analysis(analysis, path=path, time=elapsed, unparsed_lines=len(scan.unparsed))
    if json_output:
        click.echo(json.dumps(response.model_dump(mode='json'), indent=2))
    else:
        click.echo(response.to_cli(colorize=use_color(no_color), min_count=min_count))
