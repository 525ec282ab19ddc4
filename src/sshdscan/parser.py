"""Line classifier and file scanner for OpenSSH daemon syslog output.

A syslog line from sshd looks like:

    Dec 10 06:55:46 LabSZ sshd[24200]: Invalid user webmaster from 173.234.31.186

The parser pulls the timestamp, hostname and PID out of the syslog prefix and
then classifies the message body with an ordered list of rules. The first rule
that matches decides the event kind, so the order of the rule list matters:
several markers are substrings of messages that other rules also match.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


logger = logging.getLogger(__name__)


class EventKind(str, Enum):
    """Kind of a recognized sshd log line."""

    DNS_WARNING = 'dns_warning'
    INVALID_USER = 'invalid_user'
    AUTH_REQUEST = 'auth_request'
    PAM_MESSAGE = 'pam_message'
    AUTH_FAILURE = 'auth_failure'
    AUTH_SUCCESS = 'auth_success'
    CONNECTION_CLOSED = 'connection_closed'
    DISCONNECT = 'disconnect'
    REPEATED_MESSAGE = 'repeated_message'
    MAX_AUTH_FAILURES = 'max_auth_failures'
    NO_IDENTIFICATION = 'no_identification'
    ERROR_MESSAGE = 'error'


@dataclass(frozen=True)
class LogEntry:
    """One classified sshd log line.

    Optional fields are empty strings when the message does not carry them.
    The timestamp is None when the syslog prefix could not be parsed.
    """

    raw_message: str
    timestamp: datetime | None = None
    hostname: str = ''
    pid: str = ''
    event_kind: EventKind | None = None
    source_ip: str = ''
    username: str = ''
    port: str = ''


@dataclass(frozen=True)
class ClassificationRule:
    """A message-body rule: when `matches` is true, `extract` returns the entry fields."""

    name: str
    kind: EventKind
    matches: Callable[[str], bool]
    extract: Callable[[str], dict[str, str]]


@dataclass
class ScanResult:
    """Outcome of scanning one file.

    Attributes:
        entries: Recognized lines, in input order
        unparsed: sshd lines no rule matched
        skipped: Non-empty lines dropped because they do not mention sshd
    """

    entries: list[LogEntry] = field(default_factory=list)
    unparsed: list[str] = field(default_factory=list)
    skipped: int = 0


# Syslog timestamps carry no year. Parse against a leap year so "Feb 29" is valid.
SYSLOG_YEAR = 2000
TIMESTAMP_FORMAT = '%Y %b %d %H:%M:%S'

# Message body starts after the "sshd[pid]: " marker.
MESSAGE_MARKER = ']: '


def _token_after(tokens: list[str], word: str, first: bool = False) -> str:
    """Return the token following `word`.

    The last occurrence wins unless `first` is set.
    """
    value = ''
    for i, token in enumerate(tokens[:-1]):
        if token == word:
            value = tokens[i + 1]
            if first:
                break
    return value


class SSHDParser:
    """Classifies sshd syslog lines into LogEntry values.

    All regular expressions and the rule list are built once per instance and
    never changed afterwards, so a single parser can be shared freely.
    """

    def __init__(self):
        self._timestamp_re = re.compile(r'^(\w{3}\s+\d{1,2}\s+\d{2}:\d{2}:\d{2})')
        self._pid_re = re.compile(r'sshd\[(\d+)\]')
        self._ip_re = re.compile(r'\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}')
        self._port_re = re.compile(r'port (\d+)')
        self._rules = self._build_rules()

    @property
    def rule_names(self) -> list[str]:
        """Rule names in evaluation order."""
        return [rule.name for rule in self._rules]

    def _build_rules(self) -> tuple[ClassificationRule, ...]:
        return (
            ClassificationRule(
                'repeated_message',
                EventKind.REPEATED_MESSAGE,
                lambda msg: 'message repeated' in msg,
                lambda msg: {},
            ),
            ClassificationRule(
                'error_prefix',
                EventKind.ERROR_MESSAGE,
                lambda msg: msg.lower().startswith('error:'),
                self._extract_first_ip,
            ),
            ClassificationRule(
                'dns_warning',
                EventKind.DNS_WARNING,
                lambda msg: 'POSSIBLE BREAK-IN ATTEMPT' in msg or 'reverse mapping checking' in msg,
                self._extract_first_ip,
            ),
            ClassificationRule(
                'invalid_user',
                EventKind.INVALID_USER,
                lambda msg: 'Invalid user' in msg,
                self._extract_invalid_user,
            ),
            ClassificationRule(
                'auth_request',
                EventKind.AUTH_REQUEST,
                lambda msg: 'input_userauth_request' in msg,
                self._extract_auth_request,
            ),
            ClassificationRule(
                'pam_message',
                EventKind.PAM_MESSAGE,
                lambda msg: 'pam_unix' in msg or msg.startswith('PAM'),
                self._extract_pam,
            ),
            ClassificationRule(
                'auth_failure',
                EventKind.AUTH_FAILURE,
                lambda msg: 'Failed password' in msg or 'Failed none' in msg,
                self._extract_auth_failure,
            ),
            ClassificationRule(
                'auth_success',
                EventKind.AUTH_SUCCESS,
                lambda msg: 'Accepted password' in msg or 'Accepted publickey' in msg,
                self._extract_auth_success,
            ),
            ClassificationRule(
                'connection_closed',
                EventKind.CONNECTION_CLOSED,
                lambda msg: 'Connection closed' in msg,
                self._extract_first_ip,
            ),
            ClassificationRule(
                'disconnect',
                EventKind.DISCONNECT,
                lambda msg: 'Received disconnect' in msg,
                self._extract_first_ip,
            ),
            ClassificationRule(
                'max_auth_failures',
                EventKind.MAX_AUTH_FAILURES,
                lambda msg: 'too many authentication failures' in msg.lower(),
                lambda msg: {'username': _token_after(msg.split(), 'for')},
            ),
            ClassificationRule(
                'no_identification',
                EventKind.NO_IDENTIFICATION,
                lambda msg: 'Did not receive identification string' in msg,
                self._extract_first_ip,
            ),
        )

    # -------------------------------------------------------------------------
    # Field extractors
    # -------------------------------------------------------------------------

    def _extract_first_ip(self, message: str) -> dict[str, str]:
        match = self._ip_re.search(message)
        return {'source_ip': match.group(0)} if match else {}

    def _extract_port(self, message: str) -> str:
        match = self._port_re.search(message)
        return match.group(1) if match else ''

    def _extract_invalid_user(self, message: str) -> dict[str, str]:
        tokens = message.split()
        return {
            'username': _token_after(tokens, 'user'),
            'source_ip': _token_after(tokens, 'from'),
        }

    def _extract_auth_request(self, message: str) -> dict[str, str]:
        if 'invalid user' not in message:
            return {}
        return {'username': _token_after(message.split(), 'user', first=True)}

    def _extract_pam(self, message: str) -> dict[str, str]:
        fields = self._extract_first_ip(message)
        idx = message.find(' user=')
        if idx != -1:
            rest = message[idx + len(' user=') :].split()
            if rest:
                fields['username'] = rest[0].rstrip(' ')
        return fields

    def _extract_auth_failure(self, message: str) -> dict[str, str]:
        tokens = message.split()
        username = ''
        for i, token in enumerate(tokens[:-1]):
            if token == 'for':
                # "Failed password for invalid user <name> from ..."
                if tokens[i + 1] == 'invalid' and i + 3 < len(tokens):
                    username = tokens[i + 3]
                else:
                    username = tokens[i + 1]
        return {
            'username': username,
            'source_ip': _token_after(tokens, 'from'),
            'port': self._extract_port(message),
        }

    def _extract_auth_success(self, message: str) -> dict[str, str]:
        tokens = message.split()
        return {
            'username': _token_after(tokens, 'for'),
            'source_ip': _token_after(tokens, 'from'),
            'port': self._extract_port(message),
        }

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def parse_timestamp(self, line: str) -> datetime | None:
        """Parse the "Mon D HH:MM:SS" syslog prefix, or return None."""
        match = self._timestamp_re.match(line)
        if not match:
            return None
        try:
            stamp = ' '.join(match.group(1).split())
            return datetime.strptime(f'{SYSLOG_YEAR} {stamp}', TIMESTAMP_FORMAT)
        except ValueError:
            return None

    def classify_message(self, message: str) -> tuple[EventKind, dict[str, str]] | None:
        """Classify a message body.

        Returns:
            (event kind, extracted fields) for the first matching rule,
            or None if no rule matches.
        """
        for rule in self._rules:
            if rule.matches(message):
                return rule.kind, rule.extract(message)
        return None

    def parse_line(self, line: str) -> tuple[LogEntry, bool]:
        """Classify one raw syslog line.

        Never raises. An unrecognized line still comes back as a LogEntry with
        whatever prefix fields could be read, together with recognized=False.

        Args:
            line: Raw log line.

        Returns:
            Tuple of (entry, recognized).
        """
        parts = line.split()
        pid_match = self._pid_re.search(line)
        prefix = {
            'raw_message': line,
            'timestamp': self.parse_timestamp(line),
            'hostname': parts[3] if len(parts) >= 4 else '',
            'pid': pid_match.group(1) if pid_match else '',
        }

        msg_start = line.find(MESSAGE_MARKER)
        if msg_start == -1:
            return LogEntry(**prefix), False

        result = self.classify_message(line[msg_start + len(MESSAGE_MARKER) :])
        if result is None:
            return LogEntry(**prefix), False

        kind, fields = result
        return LogEntry(event_kind=kind, **prefix, **fields), True

    def scan(self, content: bytes) -> ScanResult:
        """Scan a whole log file.

        Lines without "sshd" are dropped before classification and counted as
        skipped. Recognized lines become entries, in input order; other sshd
        lines are kept verbatim (stripped) in the unparsed list.

        Args:
            content: Raw file contents, expected to be UTF-8.

        Returns:
            ScanResult with the entries, unparsed lines and skipped count.
        """
        result = ScanResult()

        for raw in content.decode('utf-8', errors='replace').split('\n'):
            line = raw.strip()
            if not line:
                continue
            if 'sshd' not in line:
                result.skipped += 1
                continue

            entry, recognized = self.parse_line(line)
            if recognized:
                result.entries.append(entry)
            else:
                logger.debug(f'Unrecognized sshd line: {line}')
                result.unparsed.append(line)

        logger.info(
            f'Scanned {len(content)} bytes: {len(result.entries)} parsed, '
            f'{len(result.unparsed)} unparsed, {result.skipped} skipped'
        )
        return result

    def parse_file(self, content: bytes) -> tuple[list[LogEntry], list[str]]:
        """Scan a whole log file, returning (parsed entries, unparsed lines)."""
        result = self.scan(content)
        return result.entries, result.unparsed
