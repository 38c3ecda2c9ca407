"""Base metric types: counter, gauge and histogram.

These are meant for short reporting intervals (1-60 seconds): an exporter
calls ``snapshot(reset=True)`` on each metric every interval and ships the
result to a metrics backend. There are no sinks, registries or derived
types here.

Gauge and histogram sample with Algorithm R (reservoir of 2,000) and keep
the true maximum. Percentiles use nearest rank once the reservoir is full
and R8 interpolation before that.
"""

from snapmetrics.metrics.base import (
    DEFAULT_SAMPLE_SIZE,
    Config,
    Metric,
    Snapshot,
    finalize_snapshot,
)
from snapmetrics.metrics.counter import Counter, new_counter
from snapmetrics.metrics.gauge import Gauge, new_gauge
from snapmetrics.metrics.histogram import Histogram, new_histogram

__all__ = [
    "DEFAULT_SAMPLE_SIZE",
    "Config",
    "Counter",
    "Gauge",
    "Histogram",
    "Metric",
    "Snapshot",
    "finalize_snapshot",
    "new_counter",
    "new_gauge",
    "new_histogram",
]
