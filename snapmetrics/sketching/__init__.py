"""Sampling and quantile estimation for interval metrics.

Quick Reference:
    ReservoirSampler: Fixed-size uniform sample plus exact count, sum and max
    estimate_quantiles: Nearest rank for saturated samples, R8 otherwise

Example:
    from snapmetrics.sketching import ReservoirSampler, estimate_quantiles

    sampler = ReservoirSampler(size=2000)
    for latency in latencies:
        sampler.add(latency)

    values = sorted(sampler.sample())
    estimate_quantiles([0.5, 0.99, 0.999], values, sampler.capacity)
"""

from snapmetrics.sketching.base import RandomSource, SamplingSketch
from snapmetrics.sketching.quantiles import (
    estimate_quantiles,
    interpolated_rank,
    nearest_rank,
)
from snapmetrics.sketching.reservoir import DEFAULT_SAMPLE_SIZE, ReservoirSampler

__all__ = [
    "DEFAULT_SAMPLE_SIZE",
    "RandomSource",
    "ReservoirSampler",
    "SamplingSketch",
    "estimate_quantiles",
    "interpolated_rank",
    "nearest_rank",
]
