from __future__ import annotations

"""
Harness metrics for Prometheus.

- MICROBENCH_BRANCH_TOTAL      (Counter, label=branch): sequential runs per branch taken.
- MICROBENCH_RUN_SECONDS       (Histogram): wall-clock duration of a sequential run.
- MICROBENCH_LAST_TRACE        (Gauge): trace computed by the most recent run.
- MICROBENCH_POW_NONCES_TOTAL  (Counter): nonces hashed by proof-of-work searches.
- MICROBENCH_POW_SEARCHES_TOTAL(Counter, label=outcome): found / cancelled / exhausted.
- MICROBENCH_PRIMES_FOUND_TOTAL(Counter): primes produced by prime searches.
"""

import os
from typing import Optional

from prometheus_client import Counter, Gauge, Histogram, start_http_server

# --------------------------- Metric objects ---------------------------

MICROBENCH_BRANCH_TOTAL = Counter(
    "microbench_branch_total",
    "Sequential runs by branch taken (A=proof of work, B=primes).",
    ["branch"],
)

# Buckets span sub-millisecond toy runs up to multi-minute PoW searches.
MICROBENCH_RUN_SECONDS = Histogram(
    "microbench_run_seconds",
    "Wall-clock duration of a full sequential run.",
    buckets=(0.001, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0, 60.0, 300.0),
)

MICROBENCH_LAST_TRACE = Gauge(
    "microbench_last_trace",
    "Trace of the matrix product computed by the most recent run.",
)

MICROBENCH_POW_NONCES_TOTAL = Counter(
    "microbench_pow_nonces_total",
    "Total nonces hashed by proof-of-work searches.",
)

MICROBENCH_POW_SEARCHES_TOTAL = Counter(
    "microbench_pow_searches_total",
    "Proof-of-work searches by outcome.",
    ["outcome"],
)

MICROBENCH_PRIMES_FOUND_TOTAL = Counter(
    "microbench_primes_found_total",
    "Total primes produced by prime searches.",
)

__all__ = [
    "MICROBENCH_BRANCH_TOTAL",
    "MICROBENCH_RUN_SECONDS",
    "MICROBENCH_LAST_TRACE",
    "MICROBENCH_POW_NONCES_TOTAL",
    "MICROBENCH_POW_SEARCHES_TOTAL",
    "MICROBENCH_PRIMES_FOUND_TOTAL",
    "record_run",
    "record_search",
    "maybe_start_http_endpoint",
]


# --------------------------- Convenience helpers ---------------------------


def record_run(branch: str, elapsed: float, trace: int) -> None:
    """Account one finished sequential run."""
    MICROBENCH_BRANCH_TOTAL.labels(branch=branch).inc()
    MICROBENCH_RUN_SECONDS.observe(max(0.0, elapsed))
    MICROBENCH_LAST_TRACE.set(trace)


def record_search(outcome: str, tried: int) -> None:
    """Account one proof-of-work search ('found', 'cancelled' or 'exhausted')."""
    MICROBENCH_POW_SEARCHES_TOTAL.labels(outcome=outcome).inc()
    if tried > 0:
        MICROBENCH_POW_NONCES_TOTAL.inc(tried)


def maybe_start_http_endpoint(
    port: Optional[int] = None,
    addr: Optional[str] = None,
) -> bool:
    """
    Optionally start a standalone Prometheus scrape endpoint using
    prometheus_client's built-in HTTP server.

    Reads env only for arguments left as None:
      MICROBENCH_METRICS_PORT (e.g., 9107)
      MICROBENCH_METRICS_ADDR (default 0.0.0.0)

    Returns True when an endpoint was started. Bind failures (port in use)
    surface as OSError from prometheus_client.
    """
    if port is None:
        p = os.getenv("MICROBENCH_METRICS_PORT")
        if not p:
            return False  # disabled
        try:
            port = int(p, 10)
        except ValueError:
            return False

    if addr is None:
        addr = os.getenv("MICROBENCH_METRICS_ADDR") or "0.0.0.0"
    start_http_server(port, addr=addr)
    return True
