"""Pydantic models for serialized parse and analysis results"""

from datetime import datetime

from pydantic import BaseModel, Field

from sshdscan.analyzer import KIND_COUNTERS, Analysis, Anomaly, format_time
from sshdscan.parser import EventKind, LogEntry


# ANSI color codes
GREY = '\033[90m'
CYAN = '\033[36m'
BOLD_CYAN = '\033[1;36m'
YELLOW = '\033[33m'
RED = '\033[31m'
BOLD_RED = '\033[1;31m'
GREEN = '\033[32m'
MAGENTA = '\033[35m'
RESET = '\033[0m'


def _paint(text: str, color: str, colorize: bool) -> str:
    return f'{color}{text}{RESET}' if colorize else text


class LogEntryModel(BaseModel):
    """A classified sshd log line"""

    timestamp: datetime | None = Field(None, description="Syslog timestamp (year is not recorded in syslog)")
    hostname: str = Field('', examples=["LabSZ"])
    pid: str = Field('', examples=["24200"])
    event_kind: EventKind | None = Field(None, examples=["invalid_user"])
    source_ip: str = Field('', examples=["173.234.31.186"])
    username: str = Field('', examples=["webmaster"])
    port: str = Field('', examples=["38926"])
    raw_message: str = Field(..., description="The original log line")

    @classmethod
    def from_entry(cls, entry: LogEntry) -> 'LogEntryModel':
        return cls(
            timestamp=entry.timestamp,
            hostname=entry.hostname,
            pid=entry.pid,
            event_kind=entry.event_kind,
            source_ip=entry.source_ip,
            username=entry.username,
            port=entry.port,
            raw_message=entry.raw_message,
        )


class AnomalyModel(BaseModel):
    """Suspicious activity for one source IP

    Attributes:
        ip: Source IP, or an empty string for events that carried no IP
        pids: Distinct sshd PIDs involved, in order of appearance
        usernames: Distinct usernames involved, in order of appearance
        total_count: Sum of the six suspicious-event counters
    """

    ip: str = Field(..., examples=["173.234.31.186"])
    pids: list[str] = Field(default_factory=list, examples=[["24200", "24206"]])
    usernames: list[str] = Field(default_factory=list, examples=[["webmaster", "test"]])

    dns_warnings_count: int = 0
    invalid_user_count: int = 0
    auth_failures_count: int = 0
    repeated_message_count: int = 0
    max_auth_failures_count: int = 0
    no_identification_count: int = 0
    total_count: int = 0

    first_seen: datetime | None = None
    last_seen: datetime | None = None

    @classmethod
    def from_anomaly(cls, anomaly: Anomaly) -> 'AnomalyModel':
        return cls(
            ip=anomaly.ip,
            pids=list(anomaly.pids),
            usernames=list(anomaly.usernames),
            dns_warnings_count=anomaly.dns_warnings_count,
            invalid_user_count=anomaly.invalid_user_count,
            auth_failures_count=anomaly.auth_failures_count,
            repeated_message_count=anomaly.repeated_message_count,
            max_auth_failures_count=anomaly.max_auth_failures_count,
            no_identification_count=anomaly.no_identification_count,
            total_count=anomaly.total_count,
            first_seen=anomaly.first_seen,
            last_seen=anomaly.last_seen,
        )


class AnalysisResponse(BaseModel):
    """Analysis of one sshd log file

    Anomalies are sorted by IP so the output is stable between runs.
    """

    path: str | None = Field(None, examples=["/var/log/auth.log"])
    time: float | None = Field(None, examples=[0.012], description="Scan and analysis duration in seconds")
    unparsed_lines: int | None = Field(None, description="Number of sshd lines no rule recognized")

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
    time_range: str = Field('', examples=["Dec 10 06:55 - Dec 10 11:04"])

    anomalies: list[AnomalyModel] = Field(default_factory=list)

    @classmethod
    def from_analysis(
        cls,
        analysis: Analysis,
        path: str | None = None,
        time: float | None = None,
        unparsed_lines: int | None = None,
    ) -> 'AnalysisResponse':
        counters = {attr: getattr(analysis, attr) for attr in KIND_COUNTERS.values()}
        return cls(
            path=path,
            time=time,
            unparsed_lines=unparsed_lines,
            total_events=analysis.total_events,
            unique_ips=analysis.unique_ips,
            time_range=analysis.time_range,
            anomalies=[AnomalyModel.from_anomaly(a) for a in analysis.sorted_anomalies()],
            **counters,
        )

    def to_cli(self, colorize: bool = False, min_count: int = 0) -> str:
        """Format response for CLI output (human-readable)"""
        lines = []

        if self.path:
            lines.append(f"{_paint('Path:', GREY, colorize)} {_paint(self.path, BOLD_CYAN, colorize)}")
        if self.time is not None:
            lines.append(f"{_paint('Time:', GREY, colorize)} {_paint(f'{self.time:.3f}s', YELLOW, colorize)}")
        if self.time_range:
            lines.append(f"{_paint('Time range:', GREY, colorize)} {self.time_range}")
        lines.append(f"{_paint('Total events:', GREY, colorize)} {_paint(str(self.total_events), GREEN, colorize)}")
        lines.append(f"{_paint('Unique IPs:', GREY, colorize)} {_paint(str(self.unique_ips), GREEN, colorize)}")
        if self.unparsed_lines:
            lines.append(f"{_paint('Unparsed lines:', GREY, colorize)} {self.unparsed_lines}")

        lines.append('')
        lines.append(_paint('Events by kind:', GREY, colorize))
        for kind, attr in KIND_COUNTERS.items():
            count = getattr(self, attr)
            if count:
                lines.append(f"  {_paint(kind.value, CYAN, colorize)}: {count}")

        shown = [a for a in self.anomalies if a.total_count >= min_count]
        lines.append('')
        if not shown:
            lines.append(_paint('No anomalies found', GREEN, colorize))
            return '\n'.join(lines)

        lines.append(_paint(f'Anomalies ({len(shown)}):', BOLD_RED, colorize))
        for anomaly in shown:
            ip_display = anomaly.ip or '(unknown ip)'
            lines.append(f"  {_paint(ip_display, RED, colorize)}  total={anomaly.total_count}")
            counts = [
                ('dns_warnings', anomaly.dns_warnings_count),
                ('invalid_user', anomaly.invalid_user_count),
                ('auth_failures', anomaly.auth_failures_count),
                ('repeated_message', anomaly.repeated_message_count),
                ('max_auth_failures', anomaly.max_auth_failures_count),
                ('no_identification', anomaly.no_identification_count),
            ]
            detail = ', '.join(f'{name}={count}' for name, count in counts if count)
            lines.append(f"    {_paint(detail, YELLOW, colorize)}")
            lines.append(f"    seen: {format_time(anomaly.first_seen)} - {format_time(anomaly.last_seen)}")
            if anomaly.pids:
                lines.append(f"    pids: {_paint(', '.join(anomaly.pids), MAGENTA, colorize)}")
            users = [u for u in anomaly.usernames if u]
            if users:
                lines.append(f"    users: {', '.join(users)}")

        return '\n'.join(lines)


class ParseResponse(BaseModel):
    """Classified entries and unrecognized lines of one sshd log file"""

    path: str = Field(..., examples=["/var/log/auth.log"])
    time: float = Field(..., examples=[0.004])
    entries: list[LogEntryModel] = Field(default_factory=list)
    unparsed: list[str] = Field(default_factory=list)

    def to_cli(self, colorize: bool = False, show_unparsed: bool = False) -> str:
        """Format response for CLI output (one line per entry)"""
        lines = [
            f"{_paint('Path:', GREY, colorize)} {_paint(self.path, BOLD_CYAN, colorize)}",
            f"{_paint('Time:', GREY, colorize)} {_paint(f'{self.time:.3f}s', YELLOW, colorize)}",
            f"{_paint('Entries:', GREY, colorize)} {len(self.entries)}",
            '',
        ]

        for entry in self.entries:
            kind = entry.event_kind.value if entry.event_kind else '-'
            fields = [
                f'{name}={value}'
                for name, value in (('ip', entry.source_ip), ('user', entry.username), ('port', entry.port))
                if value
            ]
            ts = format_time(entry.timestamp)
            pid = _paint(f'[{entry.pid}]', GREY, colorize)
            lines.append(f"{ts} {pid} {_paint(kind, CYAN, colorize)} {' '.join(fields)}".rstrip())

        if show_unparsed and self.unparsed:
            lines.append('')
            lines.append(_paint(f'Unparsed ({len(self.unparsed)}):', GREY, colorize))
            lines.extend(f'  {line}' for line in self.unparsed)

        return '\n'.join(lines)


class PidLinesResponse(BaseModel):
    """Raw log lines written by a set of sshd processes"""

    path: str = Field(..., examples=["/var/log/auth.log"])
    pids: list[str] = Field(..., examples=[["24200"]])
    lines: list[str] = Field(default_factory=list)

    def to_cli(self, colorize: bool = False) -> str:
        """Format response for CLI output (raw lines, PID markers highlighted)"""
        out = []
        for line in self.lines:
            if colorize:
                for pid in self.pids:
                    marker = f'sshd[{pid}]'
                    line = line.replace(marker, f'{MAGENTA}{marker}{RESET}')
            out.append(line)
        return '\n'.join(out)
