"""Pytest configuration and shared fixtures for sshdscan tests.

The auto-use fixture keeps the caller's SSHDSCAN_* environment out of the
tests so configuration defaults are what the tests see.
"""

import os

import pytest


SAMPLE_LOG = """\
Dec 10 06:55:46 LabSZ sshd[24200]: reverse mapping checking getaddrinfo for ns.marryaldkfaczcz.com [173.234.31.186] failed - POSSIBLE BREAK-IN ATTEMPT!
Dec 10 06:55:46 LabSZ sshd[24200]: Invalid user webmaster from 173.234.31.186
Dec 10 06:55:46 LabSZ sshd[24200]: input_userauth_request: invalid user webmaster [preauth]
Dec 10 06:55:46 LabSZ sshd[24200]: pam_unix(sshd:auth): check pass; user unknown
Dec 10 06:55:46 LabSZ sshd[24200]: pam_unix(sshd:auth): authentication failure; logname= uid=0 euid=0 tty=ssh ruser= rhost=173.234.31.186
Dec 10 06:55:48 LabSZ sshd[24200]: Failed password for invalid user webmaster from 173.234.31.186 port 38926 ssh2
Dec 10 06:55:48 LabSZ sshd[24200]: Connection closed by 173.234.31.186 [preauth]
Dec 10 07:02:47 LabSZ sshd[24203]: Connection closed by 212.47.254.145 [preauth]
Dec 10 07:07:38 LabSZ sshd[24206]: Invalid user test9 from 52.80.34.196
Dec 10 07:07:38 LabSZ sshd[24206]: input_userauth_request: invalid user test9 [preauth]
Dec 10 07:07:45 LabSZ sshd[24206]: Failed password for invalid user test9 from 52.80.34.196 port 36060 ssh2
Dec 10 07:07:45 LabSZ sshd[24206]: Received disconnect from 52.80.34.196: 11: Bye Bye [preauth]
Dec 10 07:08:28 LabSZ sshd[24208]: reverse mapping checking getaddrinfo for ns.marryaldkfaczcz.com [173.234.31.186] failed - POSSIBLE BREAK-IN ATTEMPT!
Dec 10 07:11:42 LabSZ sshd[24224]: Failed password for root from 112.95.230.3 port 49216 ssh2
Dec 10 07:11:44 LabSZ sshd[24224]: message repeated 5 times: [ Failed password for root from 112.95.230.3 port 49216 ssh2]
Dec 10 07:11:44 LabSZ sshd[24224]: error: maximum authentication attempts exceeded for root from 112.95.230.3 port 49216 ssh2 [preauth]
Dec 10 07:11:44 LabSZ sshd[24224]: Disconnecting: Too many authentication failures for root [preauth]
Dec 10 07:11:44 LabSZ sshd[24224]: PAM 5 more authentication failures; logname= uid=0 euid=0 tty=ssh ruser= rhost=112.95.230.3  user=root
Dec 10 07:13:43 LabSZ sshd[24227]: Did not receive identification string from 5.36.59.76
Dec 10 07:27:55 LabSZ sshd[24232]: Accepted password for fztu from 119.137.62.142 port 49116 ssh2
Dec 10 07:27:55 LabSZ sshd[24232]: pam_unix(sshd:session): session opened for user fztu by (uid=0)
Dec 10 07:28:03 LabSZ sshd[24232]: Received disconnect from 119.137.62.142: 11: disconnected by user
Dec 10 07:28:03 LabSZ sshd[24232]: Server listening on 0.0.0.0 port 22.
Dec 10 07:30:01 LabSZ CRON[24240]: pam_unix(cron:session): session opened for user root by (uid=0)
Dec 10 07:30:02 LabSZ kernel[1234]: Some kernel message
"""


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Auto-use fixture that removes SSHDSCAN_* variables for each test."""
    for key in list(os.environ):
        if key.startswith('SSHDSCAN_'):
            monkeypatch.delenv(key, raising=False)
    yield


@pytest.fixture
def sample_log_content() -> bytes:
    """Contents of a small auth.log covering every event kind."""
    return SAMPLE_LOG.encode('utf-8')


@pytest.fixture
def sample_log_file(tmp_path, sample_log_content):
    """Path to a temporary auth.log with the sample content."""
    path = tmp_path / 'auth.log'
    path.write_bytes(sample_log_content)
    return str(path)
