"""Quantile estimation over a sorted sample.

Two estimators are used, chosen by how full the reservoir is:

- Nearest rank, once the sample holds at least ``capacity`` values. With
  thousands of points interpolation buys nothing and nearest rank is cheap.
- Hyndman-Fan definition 8 ("R8") for smaller samples. R8 interpolates
  linearly between order statistics and gives the best P99/P999 estimates
  on small-to-moderate samples of real latency data.

Both functions take ranks as fractions in [0, 1], so P99.9 is 0.999.

Reference:
    Hyndman, Fan. "Sample Quantiles in Statistical Packages" (1996)
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

_ONE_THIRD = 1.0 / 3.0


def nearest_rank(p: float, sorted_values: Sequence[float]) -> float:
    """Value at 1-based rank ceil(p * n).

    ``p == 0`` maps to the minimum.

    Args:
        p: Rank in [0, 1].
        sorted_values: Non-empty, ascending.
    """
    i = math.ceil(p * len(sorted_values))
    if i == 0:
        return sorted_values[0]
    return sorted_values[i - 1]


def interpolated_rank(p: float, sorted_values: Sequence[float]) -> float:
    """R8 estimate: linear interpolation at position p*(n + 1/3) + 1/3.

    Positions below 1 clamp to the minimum, positions at or above n clamp to
    the maximum, so a single-value sample returns that value for every p.

    Args:
        p: Rank in [0, 1].
        sorted_values: Non-empty, ascending.
    """
    n = len(sorted_values)
    pos = p * (n + _ONE_THIRD) + _ONE_THIRD
    if pos < 1.0:
        return sorted_values[0]
    if pos >= n:
        return sorted_values[n - 1]
    k = math.floor(pos)
    f = pos - k
    lower = sorted_values[k - 1]
    upper = sorted_values[k]
    return lower + f * (upper - lower)


def estimate_quantiles(
    ranks: Iterable[float],
    sorted_values: Sequence[float],
    capacity: int,
) -> dict[float, float]:
    """Estimate each requested rank from a sorted sample.

    Args:
        ranks: Requested ranks, each in [0, 1].
        sorted_values: The sample, ascending.
        capacity: Reservoir capacity. A sample this large or larger is
            treated as saturated and uses nearest rank; anything smaller
            uses R8.

    Returns:
        Mapping of rank to estimated value. Empty when the sample or the
        rank list is empty.
    """
    ranks = list(ranks)
    if not sorted_values or not ranks:
        return {}

    estimator = nearest_rank if len(sorted_values) >= capacity else interpolated_rank
    return {p: estimator(p, sorted_values) for p in ranks}
