"""
microbench
==========

Matrix-trace driven branch micro-benchmark.

A sequential run multiplies two random n×n matrices, takes the trace of the
product and compares it to a threshold. Above the threshold it runs a toy
proof-of-work hash search (branch A), otherwise a trial-division prime search
(branch B), and reports the branch and the elapsed wall-clock time.

Quick use
---------
    import random
    from microbench import run_sequential

    outcome = run_sequential(50, 10_000, "bloque", 3, 10_000, rng=random.Random(1))
    label, elapsed = outcome
"""

from __future__ import annotations

from .errors import (BenchError, ErrorCode, InvalidArgument, SearchCancelled,
                     SearchExhausted)
from .matrix_trace import trace_of_product
from .pow import ProofOfWorkResult, simulate_proof_of_work
from .primes import find_primes
from .sequencer import BranchOutcome, run_sequential
from .version import __version__

__all__ = [
    "__version__",
    "BenchError",
    "ErrorCode",
    "InvalidArgument",
    "SearchCancelled",
    "SearchExhausted",
    "trace_of_product",
    "ProofOfWorkResult",
    "simulate_proof_of_work",
    "find_primes",
    "BranchOutcome",
    "run_sequential",
]
