"""Reservoir sampling with exact running aggregates.

Reservoir sampling maintains a uniform random sample of a fixed size from a
stream of unknown length. Every value seen since the last clear has the
same probability, capacity / count, of being in the sample.

On top of plain Algorithm R this sampler tracks three exact aggregates that
never depend on which values were kept:
- count: number of values recorded
- sum: arithmetic sum of all values
- max: true maximum, even when the maximum was evicted from the sample

Key properties:
- Space: O(capacity)
- Update: O(1)
- Clear: O(1), the sample list is replaced rather than emptied in place

Reference:
    Vitter. "Random Sampling with a Reservoir" (1985)
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from snapmetrics.sketching.base import RandomSource, SamplingSketch

if TYPE_CHECKING:
    from collections.abc import Iterator

DEFAULT_SAMPLE_SIZE = 2000


class ReservoirSampler(SamplingSketch):
    """Algorithm R sampler over floats with exact count, sum and max.

    Not thread-safe. Metrics wrap it with their own lock.

    Args:
        size: Maximum number of values kept in the sample.
        rng: Random source used for eviction. Defaults to a new
            ``random.Random(seed)``.
        seed: Seed for the default random source. Ignored when ``rng``
            is given.

    Example:
        sampler = ReservoirSampler(size=2000, seed=42)
        for latency in latencies:
            sampler.add(latency)

        sampler.item_count   # exact number of latencies
        sampler.max_value    # true worst case
        sorted(sampler.sample())
    """

    def __init__(
        self,
        size: int = DEFAULT_SAMPLE_SIZE,
        rng: RandomSource | None = None,
        seed: int | None = None,
    ):
        """Initialize the sampler.

        Raises:
            ValueError: If size <= 0.
        """
        if size <= 0:
            raise ValueError(f"size must be positive, got {size}")

        self._size = size
        self._rng: RandomSource = rng if rng is not None else random.Random(seed)
        self._values: list[float] = []
        self._count = 0
        self._sum = 0.0
        self._max = 0.0

    @property
    def capacity(self) -> int:
        """Maximum number of values in the sample."""
        return self._size

    def add(self, value: float) -> None:
        """Record one value.

        Aggregates are updated unconditionally. The value then either fills
        a free slot or, once the sample is full, replaces slot ``r`` where
        ``r`` is drawn uniformly from [0, count) and only when
        ``r < capacity``.
        """
        self._count += 1
        self._sum += value
        if value > self._max:
            self._max = value

        if len(self._values) < self._size:
            self._values.append(value)
        else:
            r = self._rng.randrange(self._count)
            if r < self._size:
                self._values[r] = value

    record = add

    def sample(self) -> list[float]:
        """Return a copy of the current sample.

        Returns:
            List of sampled values. Length is min(capacity, item_count).
        """
        return list(self._values)

    @property
    def values(self) -> list[float]:
        """The live sample list.

        Callers that mutate it (e.g. sort in place) must clear the sampler
        right after.
        """
        return self._values

    def __iter__(self) -> Iterator[float]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    @property
    def is_full(self) -> bool:
        """Whether the sample is at capacity."""
        return len(self._values) >= self._size

    @property
    def item_count(self) -> int:
        """Exact count of values recorded since the last clear."""
        return self._count

    @property
    def sample_size(self) -> int:
        """Current number of values in the sample."""
        return len(self._values)

    @property
    def total(self) -> float:
        """Exact sum of values recorded since the last clear."""
        return self._sum

    @property
    def max_value(self) -> float:
        """True maximum recorded since the last clear (0.0 when empty)."""
        return self._max

    def clear(self) -> None:
        """Zero the aggregates and start a new, empty sample."""
        self._count = 0
        self._sum = 0.0
        self._max = 0.0
        self._values = []

    reset = clear

    def __repr__(self) -> str:
        return (
            f"ReservoirSampler(capacity={self._size}, "
            f"sampled={len(self._values)}, "
            f"seen={self._count})"
        )
