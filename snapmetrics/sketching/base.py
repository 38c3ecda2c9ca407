"""Base protocols for bounded-memory sampling.

A sampling sketch keeps a fixed-size subset of an unbounded stream of
numeric observations together with whatever exact aggregates are cheap to
maintain alongside it. Metrics in snapmetrics own one sketch each and drain
it once per export interval.

This module defines:
- RandomSource: the narrow randomness interface a sketch draws from
- SamplingSketch: common operations (add, sample, clear) and read-only state
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import Protocol


class RandomSource(Protocol):
    """Source of uniformly distributed integers.

    ``random.Random`` satisfies this protocol. Tests inject a seeded
    instance (or a scripted fake) to make eviction decisions reproducible.
    """

    def randrange(self, stop: int) -> int:
        """Return a uniformly random integer in [0, stop)."""
        ...


class SamplingSketch(ABC):
    """Protocol for sketches that keep a uniform sample of a float stream.

    Implementations must keep ``item_count`` exact no matter how many values
    were evicted from the sample.
    """

    @abstractmethod
    def add(self, value: float) -> None:
        """Feed one observation to the sketch."""

    @abstractmethod
    def sample(self) -> list[float]:
        """Return a copy of the retained observations, in no particular order."""

    @abstractmethod
    def clear(self) -> None:
        """Reset the sketch to its initial empty state."""

    @abstractmethod
    def __iter__(self) -> Iterator[float]:
        """Iterate over retained observations."""

    @property
    @abstractmethod
    def capacity(self) -> int:
        """Maximum number of observations retained."""

    @property
    @abstractmethod
    def item_count(self) -> int:
        """Number of observations added since the last clear."""
