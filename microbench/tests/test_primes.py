from __future__ import annotations

import pytest

from microbench.errors import InvalidArgument
from microbench.primes import find_primes, is_prime


def test_primes_below_ten():
    assert find_primes(10) == [2, 3, 5, 7]


@pytest.mark.parametrize("bound", [2, 1, 0, -5])
def test_small_bounds_are_empty(bound):
    assert find_primes(bound) == []


def test_bound_is_exclusive():
    assert find_primes(3) == [2]
    assert find_primes(11)[-1] == 7
    assert find_primes(12)[-1] == 11


def test_known_count_below_one_thousand():
    primes = find_primes(1000)
    assert len(primes) == 168
    assert primes[-1] == 997


def test_strictly_increasing_and_all_prime():
    primes = find_primes(2000)
    assert all(a < b for a, b in zip(primes, primes[1:]))
    assert all(is_prime(p) for p in primes)
    # nothing prime was skipped
    assert set(primes) == {i for i in range(2000) if is_prime(i)}


def test_is_prime_edges():
    assert not is_prime(-7)
    assert not is_prime(0)
    assert not is_prime(1)
    assert is_prime(2)
    assert not is_prime(49)
    assert is_prime(7919)


def test_non_integer_bound_rejected():
    with pytest.raises(InvalidArgument) as ei:
        find_primes(10.5)  # type: ignore[arg-type]
    assert ei.value.name == "bound"
