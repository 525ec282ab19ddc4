"""Tests for the Prometheus metrics helpers"""

from sshdscan import prometheus as prom
from sshdscan.analyzer import analyze
from sshdscan.parser import SSHDParser


def sample(name: str, labels: dict | None = None) -> float:
    return prom.REGISTRY.get_sample_value(name, labels or {}) or 0


class TestRecordScan:
    def test_line_counters(self):
        before = {o: sample('sshdscan_lines_total', {'outcome': o}) for o in ('parsed', 'unparsed', 'skipped')}
        scans_before = sample('sshdscan_scan_duration_seconds_count')

        prom.record_scan(22, 1, 2, 2048, 0.01)

        assert sample('sshdscan_lines_total', {'outcome': 'parsed'}) - before['parsed'] == 22
        assert sample('sshdscan_lines_total', {'outcome': 'unparsed'}) - before['unparsed'] == 1
        assert sample('sshdscan_lines_total', {'outcome': 'skipped'}) - before['skipped'] == 2
        assert sample('sshdscan_scan_duration_seconds_count') - scans_before == 1


class TestRecordAnalysis:
    def test_kinds_and_anomalies(self, sample_log_content):
        entries, _ = SSHDParser().parse_file(sample_log_content)
        analysis = analyze(entries)

        pam_before = sample('sshdscan_events_total', {'kind': 'pam_message'})
        error_before = sample('sshdscan_events_total', {'kind': 'error'})
        anomalies_before = sample('sshdscan_anomalies_total')

        prom.record_analysis(analysis)

        assert sample('sshdscan_events_total', {'kind': 'pam_message'}) - pam_before == 4
        assert sample('sshdscan_events_total', {'kind': 'error'}) - error_before == 1
        assert sample('sshdscan_anomalies_total') - anomalies_before == 5


class TestWriteMetrics:
    def test_textfile(self, tmp_path):
        prom.record_scan(1, 0, 0, 100, 0.001)
        path = tmp_path / 'sshdscan.prom'

        prom.write_metrics(str(path))

        text = path.read_text()
        assert 'sshdscan_lines_total{outcome="parsed"}' in text
        assert 'sshdscan_scan_duration_seconds_bucket' in text
        assert 'sshdscan_anomalies_total' in text
