"""Prometheus metrics for sshdscan"""

from prometheus_client import CollectorRegistry, Counter, Histogram, write_to_textfile

from sshdscan.analyzer import Analysis
from sshdscan.parser import EventKind


# Dedicated registry, written out as a node_exporter textfile after a run
REGISTRY = CollectorRegistry()

# ============================================================================
# Scan Metrics
# ============================================================================

# Log lines by outcome
lines_total = Counter(
    'sshdscan_lines_total',
    'Total number of log lines seen by the scanner',
    ['outcome'],  # parsed, unparsed, skipped
    registry=REGISTRY,
)

scan_duration_seconds = Histogram(
    'sshdscan_scan_duration_seconds',
    'Time spent scanning and analyzing a log file',
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
    registry=REGISTRY,
)

file_size_bytes = Histogram(
    'sshdscan_file_size_bytes',
    'Size of log files being scanned',
    buckets=[
        1024,  # 1KB
        10_240,  # 10KB
        102_400,  # 100KB
        1_048_576,  # 1MB
        10_485_760,  # 10MB
        104_857_600,  # 100MB
    ],
    registry=REGISTRY,
)


# ============================================================================
# Analysis Metrics
# ============================================================================

events_total = Counter(
    'sshdscan_events_total',
    'Total number of classified sshd events by kind',
    ['kind'],
    registry=REGISTRY,
)

anomalies_total = Counter(
    'sshdscan_anomalies_total',
    'Total number of anomalies (suspicious source IPs) reported',
    registry=REGISTRY,
)


# ============================================================================
# Helper Functions
# ============================================================================


def record_scan(num_parsed: int, num_unparsed: int, num_skipped: int, size_bytes: int, duration: float):
    """
    Record metrics for one scanned file.

    Args:
        num_parsed: Lines classified into an event
        num_unparsed: sshd lines no rule matched
        num_skipped: Non-empty lines dropped by the "sshd" pre-filter
        size_bytes: File size in bytes
        duration: Scan duration in seconds
    """
    lines_total.labels(outcome='parsed').inc(num_parsed)
    lines_total.labels(outcome='unparsed').inc(num_unparsed)
    lines_total.labels(outcome='skipped').inc(num_skipped)
    file_size_bytes.observe(size_bytes)
    scan_duration_seconds.observe(duration)


def record_analysis(analysis: Analysis):
    """Record per-kind event counts and the number of anomalies."""
    for kind in EventKind:
        count = analysis.count_for(kind)
        if count:
            events_total.labels(kind=kind.value).inc(count)
    anomalies_total.inc(len(analysis.anomalies))


def write_metrics(path: str):
    """Write all sshdscan metrics to `path` in the Prometheus text format."""
    write_to_textfile(path, REGISTRY)
