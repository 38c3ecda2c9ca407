"""Visual check of P99/P99.9 accuracy across interval sizes.

Records lognormal latencies into a Histogram at interval sizes on both
sides of the reservoir capacity and plots the estimates against exact
percentiles of the full stream. The plot makes the switch from R8 to
nearest rank at 2,000 values easy to eyeball.
"""

from __future__ import annotations

import random
from pathlib import Path

import numpy as np
import pytest

from snapmetrics import DEFAULT_SAMPLE_SIZE, Config, Histogram, snapshot_frame

SIZES = [100, 300, 1000, 1999, 2000, 4000, 10_000, 50_000]
RANKS = [0.99, 0.999]


def run_intervals(seed: int = 7) -> tuple[dict, dict]:
    data_rng = random.Random(seed)
    histogram = Histogram(Config(percentiles=RANKS), rng=random.Random(seed))
    estimates = {}
    exact = {}
    for size in SIZES:
        values = [data_rng.lognormvariate(0.0, 0.5) for _ in range(size)]
        for v in values:
            histogram.record(v)
        estimates[f"n={size}"] = histogram.snapshot(reset=True)
        exact[size] = {q: float(np.quantile(values, q, method="median_unbiased")) for q in RANKS}
    return estimates, exact


class TestPercentileAccuracyVisualization:

    def test_estimates_track_exact_percentiles(self, test_output_dir: Path):
        matplotlib = pytest.importorskip("matplotlib")
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        estimates, exact = run_intervals()
        frame = snapshot_frame(estimates)

        fig, axes = plt.subplots(1, len(RANKS), figsize=(12, 4.5))
        for ax, q in zip(axes, RANKS):
            label = "p99" if q == 0.99 else "p99.9"
            ax.plot(SIZES, [exact[n][q] for n in SIZES], "o-", label="exact (R8, full stream)")
            ax.plot(SIZES, list(frame[label]), "s--", label="snapshot estimate")
            ax.plot(SIZES, list(frame["max"]), ":", color="gray", label="true max")
            ax.axvline(DEFAULT_SAMPLE_SIZE, color="red", alpha=0.4, label="reservoir capacity")
            ax.set_xscale("log")
            ax.set_xlabel("values per interval")
            ax.set_ylabel("latency")
            ax.set_title(f"{label} estimate vs exact")
            ax.grid(True, alpha=0.3)
            ax.legend(fontsize=8)

        fig.tight_layout()
        fig.savefig(test_output_dir / "percentile_accuracy.png", dpi=150)
        plt.close(fig)
        frame.to_csv(test_output_dir / "percentile_accuracy.csv")

        assert (test_output_dir / "percentile_accuracy.png").exists()
        for size in SIZES:
            snap = estimates[f"n={size}"]
            assert snap.count == size
            if size < DEFAULT_SAMPLE_SIZE:
                # Whole stream is in the sample: estimate is exact R8
                assert snap.percentiles[0.99] == pytest.approx(exact[size][0.99], rel=1e-9)
            else:
                assert snap.percentiles[0.99] == pytest.approx(exact[size][0.99], rel=0.15)
            assert snap.percentiles[0.999] <= snap.max
