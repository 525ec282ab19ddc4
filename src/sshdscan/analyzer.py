"""Aggregation of classified sshd events into an anomaly report.

The analyzer makes a single forward pass over the parsed entries, counting
every event kind and grouping suspicious events by source IP. Entries with
no source IP are grouped under the empty string, which is kept as its own
anomaly bucket.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from sshdscan.parser import EventKind, LogEntry


logger = logging.getLogger(__name__)


SUSPICIOUS_KINDS = frozenset(
    {
        EventKind.DNS_WARNING,
        EventKind.INVALID_USER,
        EventKind.AUTH_FAILURE,
        EventKind.REPEATED_MESSAGE,
        EventKind.MAX_AUTH_FAILURES,
        EventKind.NO_IDENTIFICATION,
    }
)

# Analysis attribute holding the global counter for each kind
KIND_COUNTERS = {
    EventKind.DNS_WARNING: 'dns_warning_count',
    EventKind.INVALID_USER: 'invalid_user_count',
    EventKind.AUTH_REQUEST: 'auth_request_count',
    EventKind.PAM_MESSAGE: 'pam_message_count',
    EventKind.AUTH_FAILURE: 'auth_failures_count',
    EventKind.AUTH_SUCCESS: 'auth_success_count',
    EventKind.CONNECTION_CLOSED: 'connection_closed_count',
    EventKind.DISCONNECT: 'disconnect_count',
    EventKind.REPEATED_MESSAGE: 'repeated_message_count',
    EventKind.MAX_AUTH_FAILURES: 'max_auth_failures_count',
    EventKind.NO_IDENTIFICATION: 'no_identification_count',
    EventKind.ERROR_MESSAGE: 'error_message_count',
}

# Anomaly attribute holding the per-IP counter for each suspicious kind
ANOMALY_COUNTERS = {
    EventKind.DNS_WARNING: 'dns_warnings_count',
    EventKind.INVALID_USER: 'invalid_user_count',
    EventKind.AUTH_FAILURE: 'auth_failures_count',
    EventKind.REPEATED_MESSAGE: 'repeated_message_count',
    EventKind.MAX_AUTH_FAILURES: 'max_auth_failures_count',
    EventKind.NO_IDENTIFICATION: 'no_identification_count',
}


@dataclass
class Anomaly:
    """Suspicious activity attributed to one source IP.

    Tracks the PIDs seen for the IP so the matching log lines can be pulled
    out later for closer inspection.
    """

    ip: str
    pids: list[str] = field(default_factory=list)
    usernames: list[str] = field(default_factory=list)

    dns_warnings_count: int = 0
    invalid_user_count: int = 0
    auth_failures_count: int = 0
    repeated_message_count: int = 0
    max_auth_failures_count: int = 0
    no_identification_count: int = 0

    first_seen: datetime | None = None
    last_seen: datetime | None = None

    @property
    def total_count(self) -> int:
        return sum(getattr(self, attr) for attr in ANOMALY_COUNTERS.values())


@dataclass
class Analysis:
    """Summary of one parsed log file."""

    total_events: int = 0

    dns_warning_count: int = 0
    invalid_user_count: int = 0
    auth_request_count: int = 0
    pam_message_count: int = 0
    auth_failures_count: int = 0
    auth_success_count: int = 0
    connection_closed_count: int = 0
    disconnect_count: int = 0
    repeated_message_count: int = 0
    max_auth_failures_count: int = 0
    no_identification_count: int = 0
    error_message_count: int = 0

    unique_ips: int = 0
    time_range: str = ''

    anomalies: list[Anomaly] = field(default_factory=list)

    def count_for(self, kind: EventKind) -> int:
        """Return the global counter for an event kind."""
        return getattr(self, KIND_COUNTERS[kind])

    def sorted_anomalies(self) -> list[Anomaly]:
        """Anomalies ordered by IP; the unknown-IP bucket sorts first."""
        return sorted(self.anomalies, key=lambda a: a.ip)


def format_time(ts: datetime | None) -> str:
    """Format a timestamp as "Dec 10 06:55".

    A missing timestamp renders as the zero instant, "Jan 1 00:00".
    """
    if ts is None:
        return 'Jan 1 00:00'
    return f'{ts:%b} {ts.day} {ts:%H:%M}'


def _get_or_create(anomalies: dict[str, Anomaly], ip: str, first_seen: datetime | None) -> Anomaly:
    anomaly = anomalies.get(ip)
    if anomaly is None:
        anomaly = Anomaly(ip=ip, first_seen=first_seen)
        anomalies[ip] = anomaly
    return anomaly


def map_pids_to_ips(entries: list[LogEntry]) -> dict[str, str]:
    """Map each PID to the first non-empty source IP logged under it."""
    ips: dict[str, str] = {}
    for entry in entries:
        if entry.source_ip:
            ips.setdefault(entry.pid, entry.source_ip)
    return ips


def analyze(entries: list[LogEntry]) -> Analysis:
    """Build an Analysis from parsed entries.

    Args:
        entries: Parsed log entries in file order.

    Returns:
        Analysis with per-kind counters, the distinct source IP count, the
        time range of the file and the anomalies found.
    """
    analysis = Analysis()
    unique_ips: set[str] = set()
    anomalies: dict[str, Anomaly] = {}
    ips_by_pid = map_pids_to_ips(entries)

    for entry in entries:
        analysis.total_events += 1

        kind = entry.event_kind
        if kind in KIND_COUNTERS:
            counter = KIND_COUNTERS[kind]
            setattr(analysis, counter, getattr(analysis, counter) + 1)

        if entry.source_ip:
            unique_ips.add(entry.source_ip)

        if kind not in SUSPICIOUS_KINDS:
            continue

        anomaly = _get_or_create(anomalies, entry.source_ip, entry.timestamp)
        anomaly.last_seen = entry.timestamp
        if entry.pid not in anomaly.pids:
            anomaly.pids.append(entry.pid)
        if entry.username not in anomaly.usernames:
            anomaly.usernames.append(entry.username)

        counter = ANOMALY_COUNTERS[kind]
        setattr(anomaly, counter, getattr(anomaly, counter) + 1)

        if kind is EventKind.MAX_AUTH_FAILURES:
            # The "too many authentication failures" line carries no IP; credit
            # the IP that another line of the same sshd process reported.
            ip = ips_by_pid.get(entry.pid, '')
            if ip:
                resolved = _get_or_create(anomalies, ip, entry.timestamp)
                resolved.max_auth_failures_count += 1
                # Append only when absent: pid lists never hold duplicates.
                if entry.pid not in resolved.pids:
                    resolved.pids.append(entry.pid)
                logger.debug(f'Correlated max auth failures for pid {entry.pid} to {ip}')

    analysis.unique_ips = len(unique_ips)
    if entries:
        analysis.time_range = f'{format_time(entries[0].timestamp)} - {format_time(entries[-1].timestamp)}'
    analysis.anomalies = list(anomalies.values())

    logger.info(
        f'Analyzed {analysis.total_events} events: {analysis.unique_ips} unique IPs, '
        f'{len(analysis.anomalies)} anomalies'
    )
    return analysis
