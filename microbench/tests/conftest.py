from __future__ import annotations

import random
from typing import Iterator

import pytest


@pytest.fixture(scope="session", autouse=True)
def _deterministic_rng_session() -> Iterator[None]:
    """
    Session-wide deterministic seed for anything still touching the global
    generator. Library code never should; this only keeps failures reproducible.
    """
    random.seed(0xA11CE)
    yield


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "MICROBENCH_N",
        "MICROBENCH_THRESHOLD",
        "MICROBENCH_OUTPUT",
        "MICROBENCH_BLOCK_DATA",
        "MICROBENCH_DIFFICULTY",
        "MICROBENCH_MAX_PRIMES",
        "MICROBENCH_SEED",
        "MICROBENCH_MAX_ITERATIONS",
        "MICROBENCH_METRICS_PORT",
        "MICROBENCH_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
