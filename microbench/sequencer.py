"""
sequencer.py
============

Sequential run: compute a matrix-product trace, compare it to a threshold and
run exactly one workload.

    Start ──► ComputedTrace ──(trace > threshold)──► BranchA (proof of work) ──► Done
                           └──(otherwise)──────────► BranchB (primes) ─────────► Done

A trace equal to the threshold takes branch B. The reported duration covers the
whole sequence, matrix work included, measured with `time.perf_counter`.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from . import metrics
from .matrix_trace import RandomSource, trace_of_product
from .pow import simulate_proof_of_work
from .primes import find_primes

log = logging.getLogger("microbench.sequencer")

BRANCH_POW = "A"
BRANCH_PRIMES = "B"


@dataclass(frozen=True)
class BranchOutcome:
    label: str
    elapsed: float  # seconds
    trace: int
    threshold: int

    def __iter__(self) -> Iterator[object]:
        # Unpacks as (label, elapsed).
        yield self.label
        yield self.elapsed

    def to_dict(self) -> dict:
        return {
            "branch": self.label,
            "elapsed_seconds": self.elapsed,
            "trace": self.trace,
            "threshold": self.threshold,
        }


def choose_branch(trace: int, threshold: int) -> str:
    """'A' when trace strictly exceeds threshold, else 'B'."""
    return BRANCH_POW if trace > threshold else BRANCH_PRIMES


def run_sequential(
    n: int,
    threshold: int,
    block_data: str,
    difficulty: int,
    max_primes: int,
    *,
    rng: Optional[RandomSource] = None,
    max_iterations: Optional[int] = None,
    should_stop: Optional[Callable[[], bool]] = None,
    echo: Optional[Callable[[str], None]] = print,
) -> BranchOutcome:
    """
    Run the trace → branch → workload sequence once and time it.

    Args:
        n: matrix dimension for the trace computation.
        threshold: branch A runs only when the trace is strictly greater.
        block_data, difficulty: proof-of-work inputs (branch A).
        max_primes: exclusive prime bound (branch B).
        rng: random source for the matrices.
        max_iterations, should_stop: proof-of-work brakes, see `pow.simulate_proof_of_work`.
        echo: sink for the one-line branch notice; None silences it.

    Errors raised by the workloads propagate unchanged.
    """
    start = time.perf_counter()
    trace = trace_of_product(n, rng=rng)
    label = choose_branch(trace, threshold)

    notice = f"Se ejecutará la rama {label}"
    log.info("trace=%d threshold=%d -> branch %s", trace, threshold, label)
    if echo is not None:
        echo(notice)

    # Runs whose workload raises are still counted and timed.
    try:
        if label == BRANCH_POW:
            res = simulate_proof_of_work(
                block_data,
                difficulty,
                max_iterations=max_iterations,
                should_stop=should_stop,
            )
            log.debug("branch A done: nonce=%d digest=%s", res.nonce, res.digest)
        else:
            primes = find_primes(max_primes)
            metrics.MICROBENCH_PRIMES_FOUND_TOTAL.inc(len(primes))
            log.debug("branch B done: %d primes below %d", len(primes), max_primes)
    finally:
        elapsed = time.perf_counter() - start
        metrics.record_run(label, elapsed, trace)
    return BranchOutcome(label=label, elapsed=elapsed, trace=trace, threshold=threshold)


__all__ = [
    "BRANCH_POW",
    "BRANCH_PRIMES",
    "BranchOutcome",
    "choose_branch",
    "run_sequential",
]
