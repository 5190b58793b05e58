from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from .errors import InvalidArgument
from .pow import DIGEST_HEX_LEN


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None and v != "" else default


def _env_int(name: str, default: int) -> int:
    v = _env(name)
    if v is None:
        return default
    try:
        return int(v, 10)
    except ValueError:
        return default


def _env_opt_int(name: str, base: int = 10) -> Optional[int]:
    v = _env(name)
    if v is None:
        return None
    try:
        return int(v, base)
    except ValueError:
        return None


@dataclass
class BenchConfig:
    """
    Runtime configuration for a sequential run.

    Environment variables (all optional, with sane defaults):

      MICROBENCH_N=int                  matrix dimension            (default: 100)
      MICROBENCH_THRESHOLD=int          branch threshold            (default: 10000)
      MICROBENCH_OUTPUT=path            output file, never written  (default: salida.txt)
      MICROBENCH_BLOCK_DATA=str         proof-of-work payload       (default: bloque)
      MICROBENCH_DIFFICULTY=int         leading zero hex digits     (default: 4)
      MICROBENCH_MAX_PRIMES=int         exclusive prime bound       (default: 100000)
      MICROBENCH_SEED=int|0xhex         matrix RNG seed             (optional)
      MICROBENCH_MAX_ITERATIONS=int     proof-of-work nonce cap     (optional; unbounded)
      MICROBENCH_METRICS_PORT=int       Prometheus scrape port      (optional; disabled)
      MICROBENCH_METRICS_ADDR=host      Prometheus bind address     (default: 0.0.0.0)
      MICROBENCH_LOG_LEVEL=level        logging level               (default: info)

    Notes
    - `output` is accepted and reported for compatibility but nothing is
      persisted to it.
    - Malformed numeric env values fall back to the default.
    """

    # Branch decision
    n: int = 100
    threshold: int = 10_000
    output: str = "salida.txt"

    # Branch A: proof of work
    block_data: str = "bloque"
    difficulty: int = 4
    max_iterations: Optional[int] = None

    # Branch B: primes
    max_primes: int = 100_000

    # Deterministic matrix generation (None = fresh entropy per run)
    seed: Optional[int] = None

    # Metrics
    metrics_port: Optional[int] = None

    log_level: str = "info"

    @classmethod
    def from_env(cls) -> "BenchConfig":
        cfg = cls(
            n=_env_int("MICROBENCH_N", 100),
            threshold=_env_int("MICROBENCH_THRESHOLD", 10_000),
            output=_env("MICROBENCH_OUTPUT", "salida.txt"),
            block_data=_env("MICROBENCH_BLOCK_DATA", "bloque"),
            difficulty=_env_int("MICROBENCH_DIFFICULTY", 4),
            max_iterations=_env_opt_int("MICROBENCH_MAX_ITERATIONS"),
            max_primes=_env_int("MICROBENCH_MAX_PRIMES", 100_000),
            seed=_env_opt_int("MICROBENCH_SEED", base=0),
            metrics_port=_env_opt_int("MICROBENCH_METRICS_PORT"),
            log_level=_env("MICROBENCH_LOG_LEVEL", "info"),
        )
        return cfg

    def validate(self) -> None:
        if self.n < 0:
            raise InvalidArgument.negative("n", self.n)
        if not (0 <= self.difficulty <= DIGEST_HEX_LEN):
            raise InvalidArgument(
                f"difficulty must be in [0, {DIGEST_HEX_LEN}]",
                name="difficulty",
                value=self.difficulty,
            )
        if self.max_iterations is not None and self.max_iterations < 0:
            raise InvalidArgument.negative("max_iterations", self.max_iterations)
        if self.metrics_port is not None and not (0 < self.metrics_port < 65536):
            raise InvalidArgument(
                "metrics_port must be a valid TCP port (1..65535)",
                name="metrics_port",
                value=self.metrics_port,
            )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["BenchConfig"]
