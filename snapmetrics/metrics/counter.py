"""Counter: exact event and delta accumulator.

Counters count things like queries served or clients connected. They keep
two exact numbers, the number of add() calls and the running sum of deltas,
and never sample.

Example:
    from snapmetrics import Counter

    queries = Counter()
    queries.add()          # +1
    queries.add(-1)        # decrements are allowed
    queries.count()        # running sum

    snap = queries.snapshot(reset=True)
    snap.count, snap.sum
"""

from __future__ import annotations

import logging
import operator
import threading

from snapmetrics.metrics.base import Metric, Snapshot

logger = logging.getLogger(__name__)


class Counter(Metric):
    """Counts events. Safe for use from multiple threads.

    add() and snapshot() share one lock so a reset never drops or doubles
    an add() that races with it.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._n = 0
        self._sum = 0

    def add(self, delta: int = 1) -> None:
        """Count one event and add ``delta`` to the running sum.

        ``delta`` must be an integer and may be zero or negative; the sum
        may go negative.

        Raises:
            TypeError: If ``delta`` is not an integer.
        """
        delta = operator.index(delta)
        with self._lock:
            self._n += 1
            self._sum += delta

    def count(self) -> int:
        """Current running sum."""
        with self._lock:
            return self._sum

    def snapshot(self, reset: bool = False) -> Snapshot:
        """Return ``count`` and ``sum``; other fields stay zero.

        Args:
            reset: Zero both values in the same critical section.
        """
        with self._lock:
            snapshot = Snapshot(count=self._n, sum=float(self._sum))
            if reset:
                self._n = 0
                self._sum = 0
        if reset:
            logger.debug("Counter reset after %d adds", snapshot.count)
        return snapshot

    def __repr__(self) -> str:
        with self._lock:
            return f"Counter(n={self._n}, sum={self._sum})"


def new_counter() -> Counter:
    return Counter()
