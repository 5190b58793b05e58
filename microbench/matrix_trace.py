"""
matrix_trace.py
===============

Trace of the product of two random n×n matrices: the workload whose result
decides which branch the sequential run takes.

The product is never materialised. For square M1, M2:

    tr(M1 · M2) = Σ_i Σ_k M1[i][k] * M2[k][i]

which needs O(n^3) multiply-adds and only the two input matrices in memory.

Randomness
----------
Entries are drawn from an explicitly passed generator (anything exposing
`randrange`, normally `random.Random(seed)`), so a fixed seed reproduces the
same matrices and the same trace. Cells are drawn in row-major order,
M1[i][j] then M2[i][j], for every (i, j).

Python integers do not overflow, so large n just yields a large trace.
"""

from __future__ import annotations

import logging
import random
from typing import List, Optional, Protocol, Tuple

from .errors import InvalidArgument, require_int

log = logging.getLogger("microbench.matrix_trace")

Matrix = List[List[int]]

# Entries are uniform over [0, ENTRY_BOUND).
ENTRY_BOUND = 10


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


def _check_dimension(n: int) -> int:
    require_int("n", n)
    if n < 0:
        raise InvalidArgument.negative("n", n)
    return n


def random_matrices(n: int, rng: RandomSource) -> Tuple[Matrix, Matrix]:
    """Draw two independent n×n matrices with entries in [0, 9]."""
    _check_dimension(n)
    m1: Matrix = [[0] * n for _ in range(n)]
    m2: Matrix = [[0] * n for _ in range(n)]
    for i in range(n):
        r1, r2 = m1[i], m2[i]
        for j in range(n):
            r1[j] = rng.randrange(ENTRY_BOUND)
            r2[j] = rng.randrange(ENTRY_BOUND)
    return m1, m2


def trace(matrix: Matrix) -> int:
    """Sum of the diagonal of a square matrix."""
    return sum(matrix[i][i] for i in range(len(matrix)))


def trace_of_matrix_product(m1: Matrix, m2: Matrix) -> int:
    """tr(m1 · m2) for square matrices of the same size, without building the product."""
    n = len(m1)
    if len(m2) != n:
        raise InvalidArgument(
            "matrices must have the same dimension",
            context={"left": n, "right": len(m2)},
        )
    total = 0
    for i in range(n):
        row = m1[i]
        acc = 0
        for k in range(n):
            acc += row[k] * m2[k][i]
        total += acc
    return total


def trace_of_product(n: int, *, rng: Optional[RandomSource] = None) -> int:
    """
    Build two random n×n matrices and return the trace of their product.

    Args:
        n: matrix dimension; 0 is valid and yields 0.
        rng: random source; a fresh unseeded `random.Random()` when omitted.

    Raises:
        InvalidArgument: n is negative or not an integer.
    """
    _check_dimension(n)
    if rng is None:
        rng = random.Random()
    m1, m2 = random_matrices(n, rng)
    result = trace_of_matrix_product(m1, m2)
    log.debug("trace of %dx%d product = %d", n, n, result)
    return result


__all__ = [
    "ENTRY_BOUND",
    "Matrix",
    "RandomSource",
    "random_matrices",
    "trace",
    "trace_of_matrix_product",
    "trace_of_product",
]
