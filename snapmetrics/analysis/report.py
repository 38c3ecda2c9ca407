"""Tabular views of one interval's snapshots.

An exporter typically snapshots every metric it owns once per interval and
then formats the results for a backend or a log line. These helpers turn a
``{name: Snapshot}`` mapping into flat records or a pandas DataFrame with
one row per metric and one column per percentile.

Example:
    snapshots = {name: metric.snapshot(reset=True) for name, metric in metrics.items()}
    frame = snapshot_frame(snapshots)
    print(frame[["count", "mean", "p99", "max"]])
"""

from __future__ import annotations

import collections
from collections.abc import Mapping
from typing import Any

import pandas as pd

from snapmetrics.metrics.base import Snapshot

BASE_COLUMNS = ["count", "sum", "mean", "min", "max", "last"]


def percentile_label(q: float) -> str:
    """Column label for a rank: 0.5 -> 'p50', 0.999 -> 'p99.9'."""
    pct = round(q * 100, 6)
    return f"p{pct:g}"


def _rank_labels(snapshots: Mapping[str, Snapshot]) -> dict[float, str]:
    """Label every distinct rank, one label per rank.

    Ranks whose rounded labels clash (0.9999999 and 1.0 both round to
    p100) are labelled by their exact rank instead, e.g. 'q0.9999999'.
    """
    ranks = sorted({q for snap in snapshots.values() for q in snap.percentiles})
    labels = {q: percentile_label(q) for q in ranks}
    uses = collections.Counter(labels.values())
    for q in ranks:
        if uses[labels[q]] > 1:
            labels[q] = f"q{q!r}"
    return labels


def snapshot_records(snapshots: Mapping[str, Snapshot]) -> list[dict[str, Any]]:
    """Flatten snapshots into one dict per metric, in mapping order.

    Percentiles become ``p<label>`` keys. A metric without a given rank
    has no key for it.
    """
    labels = _rank_labels(snapshots)
    records = []
    for name, snap in snapshots.items():
        record: dict[str, Any] = {"name": name}
        record.update({col: getattr(snap, col) for col in BASE_COLUMNS})
        for q, value in snap.percentiles.items():
            record[labels[q]] = value
        records.append(record)
    return records


def snapshot_frame(snapshots: Mapping[str, Snapshot]) -> pd.DataFrame:
    """Build a DataFrame indexed by metric name.

    Columns are count, sum, mean, min, max, last, then one column per rank
    seen in any snapshot, in ascending rank order. Missing ranks are NaN.
    """
    labels = _rank_labels(snapshots)
    columns = BASE_COLUMNS + list(labels.values())
    frame = pd.DataFrame(snapshot_records(snapshots), columns=["name"] + columns)
    return frame.set_index("name")
