"""Gauge: a single value that moves up and down.

A gauge remembers its last value and samples every value it takes, so a
snapshot describes both where it ended the interval and how it got there.

Example:
    from snapmetrics import Config, Gauge

    connections = Gauge(Config(percentiles=[0.5, 0.99]))
    connections.add(3)      # last = 3
    connections.add(-1)     # last = 2
    connections.record(10)  # last = 10

    snap = connections.snapshot(reset=True)
    snap.last, snap.max, snap.percentiles[0.99]
"""

from __future__ import annotations

import logging
import operator
import threading

from snapmetrics.metrics.base import Config, Metric, Snapshot, finalize_snapshot
from snapmetrics.sketching.base import RandomSource
from snapmetrics.sketching.reservoir import DEFAULT_SAMPLE_SIZE, ReservoirSampler

logger = logging.getLogger(__name__)


class Gauge(Metric):
    """Samples values and tracks the most recent one. Thread-safe.

    Unlike Counter, add() moves the gauge relative to its own last value,
    and the new last value is what gets sampled. Given add(3), add(2),
    add(-1), add(1) the sampled values are 3, 5, 4, 5: min 3, max 5,
    sum 17, last 5.

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
        self._last = 0.0
        logger.debug("Gauge created: percentiles=%s sample_size=%d", self._percentiles, sample_size)

    @property
    def percentiles(self) -> tuple[float, ...]:
        return self._percentiles

    def record(self, value: float) -> None:
        """Set the gauge to ``value``."""
        with self._lock:
            self._last = value
            self._resv.add(value)

    def add(self, delta: int = 1) -> None:
        """Move the gauge by ``delta`` from its last value.

        Raises:
            TypeError: If ``delta`` is not an integer. Use record() for
                fractional values.
        """
        delta = operator.index(delta)
        with self._lock:
            self._last += delta
            self._resv.add(self._last)

    def last(self) -> float:
        """Most recent value; 0 until first set and after a reset."""
        with self._lock:
            return self._last

    def snapshot(self, reset: bool = False) -> Snapshot:
        with self._lock:
            snapshot = finalize_snapshot(self._resv, self._percentiles, reset, last=self._last)
            if reset:
                self._last = 0.0
        return snapshot

    def __repr__(self) -> str:
        with self._lock:
            return f"Gauge(last={self._last}, percentiles={self._percentiles}, reservoir={self._resv!r})"


def new_gauge(config: Config | None = None) -> Gauge:
    return Gauge(config)
