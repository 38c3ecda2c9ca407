"""Formatting helpers for snapshots taken at one export interval."""

from snapmetrics.analysis.report import (
    percentile_label,
    snapshot_frame,
    snapshot_records,
)

__all__ = [
    "percentile_label",
    "snapshot_frame",
    "snapshot_records",
]
