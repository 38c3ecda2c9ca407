"""snapmetrics: counter, gauge and histogram with atomic snapshots.

Intended for applications that export metrics every 1-60 seconds: record
values, call ``snapshot(reset=True)`` once per interval, hand the result to
whatever ships metrics to Datadog, Prometheus and friends.

Example:
    from snapmetrics import Config, Counter, Histogram

    requests = Counter()
    latency = Histogram(Config(percentiles=[0.5, 0.99, 0.999]))

    requests.add()
    latency.record(0.0123)

    snap = latency.snapshot(reset=True)
    snap.count, snap.max, snap.percentiles[0.999]
"""

import logging

from snapmetrics.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_file_logging,
    enable_json_logging,
    enable_timed_file_logging,
    set_level,
    set_module_level,
)

logging.getLogger("snapmetrics").addHandler(logging.NullHandler())

from snapmetrics.analysis import snapshot_frame, snapshot_records
from snapmetrics.metrics import (
    DEFAULT_SAMPLE_SIZE,
    Config,
    Counter,
    Gauge,
    Histogram,
    Metric,
    Snapshot,
    new_counter,
    new_gauge,
    new_histogram,
)
from snapmetrics.sketching import ReservoirSampler, estimate_quantiles

__version__ = "0.1.0"

__all__ = [
    # Metrics
    "Config",
    "Counter",
    "DEFAULT_SAMPLE_SIZE",
    "Gauge",
    "Histogram",
    "Metric",
    "Snapshot",
    "new_counter",
    "new_gauge",
    "new_histogram",
    # Sketching
    "ReservoirSampler",
    "estimate_quantiles",
    # Reporting
    "snapshot_frame",
    "snapshot_records",
    # Logging
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_file_logging",
    "enable_json_logging",
    "enable_timed_file_logging",
    "set_level",
    "set_module_level",
]
