"""sshdscan - OpenSSH daemon log classifier and anomaly report.

This package provides:
- Classification of sshd syslog lines into typed events
- Per-source-IP aggregation of suspicious authentication activity
- Selection of raw log lines by sshd PID
"""

from .__version__ import __version__
from .analyzer import Analysis, Anomaly, analyze
from .parser import EventKind, LogEntry, ScanResult, SSHDParser
from .pids import select_lines_for_pids


__all__ = [
    '__version__',
    # Parsing
    'EventKind',
    'LogEntry',
    'ScanResult',
    'SSHDParser',
    # Analysis
    'Analysis',
    'Anomaly',
    'analyze',
    # Line selection
    'select_lines_for_pids',
]
