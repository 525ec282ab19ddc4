"""Selection of raw log lines by sshd process id."""

import logging


logger = logging.getLogger(__name__)


def select_lines_for_pids(content: bytes, pids: list[str]) -> list[str]:
    """Return the lines of `content` written by any of the given sshd processes.

    A line matches when it contains "sshd[<pid>]" for one of the PIDs. Lines
    are returned in file order, without their trailing newline.

    Args:
        content: Raw log file contents, expected to be UTF-8.
        pids: PIDs to look for.

    Returns:
        Matching lines.

    Raises:
        ValueError: If pids is empty.
    """
    if not pids:
        raise ValueError('pids list cannot be empty')

    markers = [f'sshd[{pid}]' for pid in dict.fromkeys(pids)]
    matched = []
    for line in content.decode('utf-8', errors='replace').split('\n'):
        if any(marker in line for marker in markers):
            matched.append(line.rstrip('\r'))

    logger.info(f'Selected {len(matched)} lines for {len(markers)} pids')
    return matched
