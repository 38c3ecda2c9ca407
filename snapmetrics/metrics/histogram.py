"""Histogram: summary of many values, e.g. request latency."""

from __future__ import annotations

import logging
import threading

from snapmetrics.metrics.base import Config, Metric, Snapshot, finalize_snapshot
from snapmetrics.sketching.base import RandomSource
from snapmetrics.sketching.reservoir import DEFAULT_SAMPLE_SIZE, ReservoirSampler

logger = logging.getLogger(__name__)


class Histogram(Metric):
    """Samples recorded values. Thread-safe.

    Same as Gauge without the last value: snapshots always report
    ``last == 0``.

    Args:
        config: Percentiles to estimate. Defaults to none.
        sample_size: Reservoir capacity.
        rng: Random source for the reservoir, for reproducible tests.
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        sample_size: int = DEFAULT_SAMPLE_SIZE,
        rng: RandomSource | None = None,
    ):
        config = config if config is not None else Config()
        self._percentiles = config.percentiles
        self._lock = threading.Lock()
        self._resv = ReservoirSampler(size=sample_size, rng=rng)
        logger.debug("Histogram created: percentiles=%s sample_size=%d", self._percentiles, sample_size)

    @property
    def percentiles(self) -> tuple[float, ...]:
        return self._percentiles

    def record(self, value: float) -> None:
        with self._lock:
            self._resv.add(value)

    def snapshot(self, reset: bool = False) -> Snapshot:
        with self._lock:
            return finalize_snapshot(self._resv, self._percentiles, reset)

    def __repr__(self) -> str:
        with self._lock:
            return f"Histogram(percentiles={self._percentiles}, reservoir={self._resv!r})"


def new_histogram(config: Config | None = None) -> Histogram:
    return Histogram(config)
