"""
primes.py
=========

Trial-division prime search: the "cheap" branch of the sequential run.

For each candidate i in [2, bound) we test divisibility by every j with
2 <= j and j*j <= i. Cost grows roughly as O(n^1.5), a deliberately different
shape from the O(n^3) matrix workload.
"""

from __future__ import annotations

from typing import List

from .errors import require_int


def is_prime(i: int) -> bool:
    """Trial division; values below 2 are not prime."""
    if i < 2:
        return False
    j = 2
    while j * j <= i:
        if i % j == 0:
            return False
        j += 1
    return True


def find_primes(bound: int) -> List[int]:
    """
    Return every prime p with 2 <= p < bound, ascending.

    Any bound <= 2 (including negative ones) yields an empty list.
    """
    require_int("bound", bound)
    return [i for i in range(2, bound) if is_prime(i)]


__all__ = ["find_primes", "is_prime"]
