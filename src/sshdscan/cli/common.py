"""Helpers shared by the CLI commands."""

import logging
import os
import sys

import click

from sshdscan.utils import get_bool_env, get_max_file_size_bytes


logger = logging.getLogger(__name__)


def fail(message: str) -> None:
    """Print an error to stderr and exit with status 1."""
    click.echo(f'Error: {message}', err=True)
    sys.exit(1)


def read_log_file(path: str) -> bytes:
    """Read a log file, rejecting oversized or non-UTF-8 content.

    Exits the CLI with status 1 when the file cannot be used.
    """
    max_size = get_max_file_size_bytes()
    size = os.path.getsize(path)
    if size > max_size:
        fail(f'{path} is {size} bytes, larger than the {max_size // (1024 * 1024)}MB limit')

    try:
        with open(path, 'rb') as f:
            content = f.read()
    except OSError as e:
        fail(f'Cannot read {path}: {e}')

    try:
        content.decode('utf-8')
    except UnicodeDecodeError:
        fail(f'{path} is not a UTF-8 text file')

    logger.info(f'Loaded {path} ({size} bytes)')
    return content


def use_color(no_color: bool) -> bool:
    """Colorize only when allowed by flag and SSHDSCAN_COLOR, and stdout is a terminal."""
    return not no_color and get_bool_env('SSHDSCAN_COLOR', True) and sys.stdout.isatty()
