"""Shared types for counter, gauge and histogram.

A metric accumulates values between exports and produces a Snapshot when
asked. ``snapshot(reset=True)`` reads and clears the accumulator inside one
critical section, so nothing recorded concurrently is lost or counted twice.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from snapmetrics.sketching.quantiles import estimate_quantiles
from snapmetrics.sketching.reservoir import DEFAULT_SAMPLE_SIZE, ReservoirSampler

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_SAMPLE_SIZE",
    "Config",
    "Metric",
    "Snapshot",
    "finalize_snapshot",
]


@dataclass(frozen=True)
class Config:
    """Gauge and histogram configuration.

    Attributes:
        percentiles: Ranks to estimate in every snapshot, as fractions
            (0.99 is the 99th percentile). ``None`` or empty disables
            percentile computation.

    Raises:
        ValueError: If a percentile is NaN or outside [0, 1].
    """

    percentiles: tuple[float, ...] = ()

    def __post_init__(self) -> None:
        ranks = tuple(float(p) for p in (self.percentiles or ()))
        for p in ranks:
            if math.isnan(p) or not 0.0 <= p <= 1.0:
                raise ValueError(f"percentile must be in [0, 1], got {p}")
        object.__setattr__(self, "percentiles", ranks)


@dataclass(frozen=True)
class Snapshot:
    """Metric values at one point in time.

    Attributes:
        count: Number of values recorded. For Counter, the number of add()
            calls.
        sum: Exact sum of values. For Counter, the running count.
        min: Smallest value in the sample. Might not be the true minimum
            when the minimum was evicted. Always 0 for Counter.
        max: True maximum recorded. Always 0 for Counter.
        percentiles: Estimated value per configured rank, as a read-only
            mapping. Empty when no ranks are configured or nothing was
            recorded.
        last: Last value recorded or added. Gauge only; 0 otherwise.
    """

    count: int = 0
    sum: float = 0.0
    min: float = 0.0
    max: float = 0.0
    percentiles: Mapping[float, float] = field(default_factory=dict)
    last: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "percentiles", MappingProxyType(dict(self.percentiles)))

    def __hash__(self) -> int:
        return hash((
            self.count, self.sum, self.min, self.max,
            frozenset(self.percentiles.items()), self.last,
        ))

    @property
    def mean(self) -> float:
        """True average, sum / count. 0.0 when nothing was recorded."""
        if self.count == 0:
            return 0.0
        return self.sum / self.count

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "sum": self.sum,
            "min": self.min,
            "max": self.max,
            "mean": self.mean,
            "last": self.last,
            "percentiles": dict(self.percentiles),
        }


class Metric(ABC):
    """Anything that can produce a Snapshot of its current values."""

    @abstractmethod
    def snapshot(self, reset: bool = False) -> Snapshot:
        """Return current values. If reset, zero them in the same step."""


def finalize_snapshot(
    sampler: ReservoirSampler,
    percentiles: tuple[float, ...],
    reset: bool,
    last: float = 0.0,
) -> Snapshot:
    """Summarize a sampler into a Snapshot, clearing it if reset.

    Caller must hold the lock guarding ``sampler``.
    """
    if sampler.sample_size == 0:
        return Snapshot(last=last)

    count = sampler.item_count
    total = sampler.total
    max_value = sampler.max_value

    # The live buffer is discarded on reset, so it can be sorted in place.
    if reset:
        values = sampler.values
        values.sort()
    else:
        values = sorted(sampler.values)

    snapshot = Snapshot(
        count=count,
        sum=total,
        min=values[0],
        max=max_value,
        percentiles=estimate_quantiles(percentiles, values, sampler.capacity),
        last=last,
    )
    if reset:
        sampler.clear()
        logger.debug("Drained sampler: count=%d sample_size=%d", count, len(values))
    return snapshot
