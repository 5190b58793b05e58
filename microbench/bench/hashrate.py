"""
hashrate.py
===========

Throughput probe for the proof-of-work inner loop.

What it measures
----------------
- Raw SHA-256 attempts/sec over `block_data || str(nonce)`, exactly the hash
  `microbench.pow` computes per nonce.
- For several difficulties d, how many digests carried d leading '0' hex
  characters, next to the expected count `total * 16^-d`.

Notes
-----
- Single-threaded on purpose; this is a *relative* probe across machines and
  interpreter versions.
- Time checks are batched to keep `perf_counter` off the critical path.

Usage
-----
    python -m microbench.bench.hashrate
    # or programmatically:
    from microbench.bench.hashrate import run
    stats = run(seconds=1.0, difficulties=[1, 2, 3, 4])

Return value (run)
------------------
A dict with keys:
- seconds, total_hashes, hashes_per_sec, block_data
- results: list of {difficulty, p_exp, observed, expected, expected_seconds_per_hit}
- env: {python, platform}
"""

from __future__ import annotations

import hashlib
import os
import sys
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..errors import InvalidArgument
from ..pow import DIGEST_HEX_LEN

_BATCH = 2048


@dataclass
class ProbeConfig:
    seconds: float = 1.0
    max_hashes: int = 20_000_000  # hard cap for very fast machines
    block_data: str = "bloque"
    difficulties: List[int] = field(default_factory=lambda: [1, 2, 3, 4, 5])

    def validate(self) -> None:
        if self.seconds <= 0:
            raise InvalidArgument("seconds must be > 0", name="seconds", value=self.seconds)
        if self.max_hashes < 1:
            raise InvalidArgument("max_hashes must be >= 1", name="max_hashes", value=self.max_hashes)
        for d in self.difficulties:
            if not (0 <= d <= DIGEST_HEX_LEN):
                raise InvalidArgument(
                    f"difficulty must be in [0, {DIGEST_HEX_LEN}]", name="difficulty", value=d
                )


def _leading_zeros(digest: str) -> int:
    return len(digest) - len(digest.lstrip("0"))


def _run_inner(cfg: ProbeConfig) -> dict:
    sha256 = hashlib.sha256
    data = cfg.block_data
    # histogram of leading-zero counts, index = count
    zeros = [0] * (DIGEST_HEX_LEN + 1)

    t0 = time.perf_counter()
    deadline = t0 + cfg.seconds
    total = 0
    nonce = 0

    while total < cfg.max_hashes:
        for _ in range(_BATCH):
            digest = sha256(f"{data}{nonce}".encode("utf-8")).hexdigest()
            zeros[_leading_zeros(digest)] += 1
            nonce += 1
            total += 1
            if total >= cfg.max_hashes:
                break
        if time.perf_counter() >= deadline:
            break

    dt = max(1e-9, time.perf_counter() - t0)
    hps = total / dt

    results = []
    for d in cfg.difficulties:
        p = 16.0 ** -d
        observed = sum(zeros[d:])
        results.append(
            {
                "difficulty": d,
                "p_exp": p,
                "observed": observed,
                "expected": total * p,
                "expected_seconds_per_hit": 1.0 / (hps * p),
            }
        )

    return {
        "seconds": dt,
        "total_hashes": total,
        "hashes_per_sec": hps,
        "block_data": data,
        "results": results,
        "env": {
            "python": sys.version.split()[0],
            "platform": sys.platform,
        },
    }


def run(
    seconds: float = 1.0,
    difficulties: Optional[Iterable[int]] = None,
    block_data: str = "bloque",
    max_hashes: int = 20_000_000,
) -> dict:
    """
    Run the probe.

    Args:
        seconds: target duration (best-effort).
        difficulties: leading-zero counts to report on.
        block_data: payload the nonce is appended to.
        max_hashes: hard cap to avoid very long runs on fast machines.
    """
    cfg = ProbeConfig(seconds=seconds, block_data=block_data, max_hashes=max_hashes)
    if difficulties is not None:
        cfg.difficulties = list(difficulties)
    cfg.validate()
    return _run_inner(cfg)


def fmt_rate(x: float) -> str:
    if x >= 1e9:
        return f"{x/1e9:.2f} G/s"
    if x >= 1e6:
        return f"{x/1e6:.2f} M/s"
    if x >= 1e3:
        return f"{x/1e3:.2f} k/s"
    return f"{x:.2f} /s"


def _main() -> int:
    # Tiny CLI: MICROBENCH_PROBE_SECONDS, MICROBENCH_PROBE_DIFFICULTIES envs
    seconds = float(os.getenv("MICROBENCH_PROBE_SECONDS", "1.0"))
    diffs_env = os.getenv("MICROBENCH_PROBE_DIFFICULTIES")
    diffs = None
    if diffs_env:
        try:
            diffs = [int(t.strip()) for t in diffs_env.split(",") if t.strip()]
        except ValueError:
            print(
                "Invalid MICROBENCH_PROBE_DIFFICULTIES; expected comma-separated integers.",
                file=sys.stderr,
            )
            return 2

    out = run(seconds=seconds, difficulties=diffs)
    print("microbench proof-of-work hashrate probe")
    print(
        f"  duration: {out['seconds']:.3f}s   total hashes: {out['total_hashes']:,}   "
        f"throughput: {fmt_rate(out['hashes_per_sec'])}"
    )
    print(f"  python: {out['env']['python']}   platform: {out['env']['platform']}")
    print()
    print(f"{'d':>3}  {'p(exp)':>10}  {'obs':>10}  {'exp':>12}  {'s/hit':>12}")
    for r in out["results"]:
        print(
            f"{r['difficulty']:3d}  "
            f"{r['p_exp']:10.3e}  "
            f"{r['observed']:10d}  "
            f"{r['expected']:12.2f}  "
            f"{r['expected_seconds_per_hit']:12.3e}"
        )
    return 0


if __name__ == "__main__":
    raise SystemExit(_main())
