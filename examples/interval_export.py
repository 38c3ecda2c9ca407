"""Worker threads record request metrics; the main thread drains them every interval.

Run with SM_LOGGING=DEBUG to see the snapshot resets.
"""

import random
import threading
import time

import snapmetrics
from snapmetrics import Config, Counter, Gauge, Histogram, snapshot_frame

INTERVAL_SECONDS = 1.0
INTERVALS = 5
WORKERS = 4

snapmetrics.configure_from_env()

requests = Counter()
pool_size = Gauge(Config(percentiles=[0.5, 0.99]))
latency_ms = Histogram(Config(percentiles=[0.5, 0.99, 0.999]))

stop = threading.Event()


def worker(seed: int) -> None:
    rng = random.Random(seed)
    while not stop.is_set():
        # lognormal service time with a rare slow tail
        latency = rng.lognormvariate(1.0, 0.4) * (20 if rng.random() < 0.001 else 1)
        time.sleep(latency / 10_000)
        latency_ms.record(latency)
        requests.add()
        pool_size.record(rng.randint(8, 16))


threads = [threading.Thread(target=worker, args=(i,), daemon=True) for i in range(WORKERS)]
for t in threads:
    t.start()

for interval in range(INTERVALS):
    time.sleep(INTERVAL_SECONDS)
    frame = snapshot_frame({
        "requests": requests.snapshot(reset=True),
        "pool_size": pool_size.snapshot(reset=True),
        "latency_ms": latency_ms.snapshot(reset=True),
    })
    print(f"--- interval {interval + 1} ---")
    print(frame.round(3).to_string())

stop.set()
for t in threads:
    t.join()
