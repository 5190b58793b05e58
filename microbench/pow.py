"""
pow.py
======

Toy proof-of-work search: the "expensive" branch of the sequential run.

For nonce = 0, 1, 2, ... hash `block_data + str(nonce)` with SHA-256 and stop at
the first lowercase hex digest that starts with `difficulty` '0' characters.
Expected work is ~16^difficulty hashes and there is no natural upper bound, so
the search takes two optional brakes:

- `should_stop`: zero-arg predicate (e.g. `threading.Event().is_set`) polled
  every `check_every` nonces, starting at nonce 0. Firing raises SearchCancelled.
- `max_iterations`: hard cap on nonces tried. Reaching it raises SearchExhausted.

With neither given the search runs until it succeeds.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from . import metrics
from .errors import InvalidArgument, SearchCancelled, SearchExhausted, require_int

log = logging.getLogger("microbench.pow")

# Hex characters in a SHA-256 digest; the largest meaningful difficulty.
DIGEST_HEX_LEN = 64


@dataclass(frozen=True)
class ProofOfWorkResult:
    digest: str
    nonce: int

    def __iter__(self) -> Iterator[object]:
        # Unpacks as (digest, nonce).
        yield self.digest
        yield self.nonce


def hash_attempt(block_data: str, nonce: int) -> str:
    """Lowercase hex SHA-256 of block_data followed by the decimal nonce."""
    return hashlib.sha256(f"{block_data}{nonce}".encode("utf-8")).hexdigest()


def _check_difficulty(difficulty: int) -> int:
    require_int("difficulty", difficulty)
    if difficulty < 0:
        raise InvalidArgument.negative("difficulty", difficulty)
    if difficulty > DIGEST_HEX_LEN:
        raise InvalidArgument(
            f"difficulty must be <= {DIGEST_HEX_LEN}, got {difficulty}",
            name="difficulty",
            value=difficulty,
        )
    return difficulty


def verify(block_data: str, result: ProofOfWorkResult, difficulty: int) -> bool:
    """True if `result` re-hashes to its digest and meets `difficulty`."""
    _check_difficulty(difficulty)
    digest = hash_attempt(block_data, result.nonce)
    return digest == result.digest and digest.startswith("0" * difficulty)


def simulate_proof_of_work(
    block_data: str,
    difficulty: int,
    *,
    max_iterations: Optional[int] = None,
    should_stop: Optional[Callable[[], bool]] = None,
    check_every: int = 1024,
) -> ProofOfWorkResult:
    """
    Search for the first nonce whose digest has `difficulty` leading zeros.

    Args:
        block_data: payload the nonce is appended to.
        difficulty: required leading '0' hex characters (0..64).
        max_iterations: optional cap on nonces tried (None = unbounded).
        should_stop: optional predicate; True aborts the search.
        check_every: poll interval for `should_stop`, in nonces.

    Raises:
        InvalidArgument: bad difficulty, cap or poll interval.
        SearchCancelled: `should_stop` returned True.
        SearchExhausted: `max_iterations` nonces tried without success.
    """
    _check_difficulty(difficulty)
    if max_iterations is not None:
        require_int("max_iterations", max_iterations)
        if max_iterations < 0:
            raise InvalidArgument.negative("max_iterations", max_iterations)
    require_int("check_every", check_every)
    if check_every < 1:
        raise InvalidArgument("check_every must be >= 1", name="check_every", value=check_every)

    prefix = "0" * difficulty
    # Locals for speed in the hot loop
    sha256 = hashlib.sha256
    data = block_data
    nonce = 0
    while True:
        if max_iterations is not None and nonce >= max_iterations:
            metrics.record_search("exhausted", nonce)
            log.info("pow search exhausted: difficulty=%d tried=%d", difficulty, nonce)
            raise SearchExhausted(tried=nonce, difficulty=difficulty)
        if should_stop is not None and nonce % check_every == 0 and should_stop():
            metrics.record_search("cancelled", nonce)
            log.info("pow search cancelled: difficulty=%d tried=%d", difficulty, nonce)
            raise SearchCancelled(tried=nonce, difficulty=difficulty)

        digest = sha256(f"{data}{nonce}".encode("utf-8")).hexdigest()
        if digest.startswith(prefix):
            metrics.record_search("found", nonce + 1)
            log.debug("pow hit: difficulty=%d nonce=%d digest=%s", difficulty, nonce, digest)
            return ProofOfWorkResult(digest=digest, nonce=nonce)
        nonce += 1


__all__ = [
    "DIGEST_HEX_LEN",
    "ProofOfWorkResult",
    "hash_attempt",
    "simulate_proof_of_work",
    "verify",
]
