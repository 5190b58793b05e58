#!/usr/bin/env python3
"""
microbench.cli.workloads
========================
Run one workload in isolation and report what it produced and how long it took.

Commands
--------
trace     : trace of the product of two random n×n matrices
pow       : proof-of-work nonce search at a given difficulty
primes    : trial-division primes below a bound
hashrate  : throughput probe for the proof-of-work inner loop

Examples
--------
python -m microbench.cli.workloads trace -n 200 --seed 7
python -m microbench.cli.workloads pow --data bloque --difficulty 5 --max-iterations 5000000
python -m microbench.cli.workloads primes --bound 100000 --json
"""

from __future__ import annotations

import json
import random
import time
from typing import Any, Dict, List, NoReturn, Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from ..bench import hashrate as hashrate_probe
from ..errors import BenchError, ErrorCode
from ..matrix_trace import trace_of_product
from ..pow import simulate_proof_of_work
from ..primes import find_primes
from ..version import __version__

app = typer.Typer(
    name="microbench-workloads",
    help="Run a single microbench workload and report the result",
    no_args_is_help=True,
    add_completion=False,
)


# ---------------- util helpers ----------------

def _emit(title: str, rows: Dict[str, Any], as_json: bool) -> None:
    if as_json:
        typer.echo(json.dumps(rows, sort_keys=True))
        return
    t = Table(title=title, box=box.SIMPLE)
    t.add_column("Field")
    t.add_column("Value", overflow="fold")
    for k, v in rows.items():
        t.add_row(k, str(v))
    Console().print(t)


def _fail(e: BenchError) -> NoReturn:
    typer.echo(f"error: {e.message}", err=True)
    raise typer.Exit(2 if e.code == ErrorCode.INVALID_ARGUMENT else 3)


# ---------------- CLI ----------------

def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"microbench {__version__}")
        raise typer.Exit(0)


@app.callback()
def _meta(
    version: bool = typer.Option(
        False, "--version", "-V", help="Print version and exit",
        callback=_version_callback, is_eager=True,
    ),
) -> None:
    pass


@app.command("trace")
def trace_cmd(
    n: int = typer.Option(100, "-n", help="Matrix dimension"),
    seed: Optional[int] = typer.Option(None, "--seed", help="RNG seed (omit for fresh entropy)"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
) -> None:
    """Trace of the product of two random n×n matrices."""
    t0 = time.perf_counter()
    try:
        value = trace_of_product(n, rng=random.Random(seed))
    except BenchError as e:
        _fail(e)
    _emit("Matrix trace", {"n": n, "seed": seed, "trace": value,
                           "elapsed_seconds": time.perf_counter() - t0}, as_json)


@app.command("pow")
def pow_cmd(
    data: str = typer.Option("bloque", "--data", "-d", help="Payload the nonce is appended to"),
    difficulty: int = typer.Option(4, "--difficulty", "-D", help="Leading zero hex digits"),
    max_iterations: Optional[int] = typer.Option(None, "--max-iterations", help="Cap on nonces tried"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
) -> None:
    """Search for the first nonce whose SHA-256 digest meets the difficulty."""
    t0 = time.perf_counter()
    try:
        res = simulate_proof_of_work(data, difficulty, max_iterations=max_iterations)
    except BenchError as e:
        _fail(e)
    _emit("Proof of work", {"data": data, "difficulty": difficulty, "nonce": res.nonce,
                            "digest": res.digest, "elapsed_seconds": time.perf_counter() - t0}, as_json)


@app.command("primes")
def primes_cmd(
    bound: int = typer.Option(100_000, "--bound", "-b", help="Exclusive upper bound"),
    show: int = typer.Option(10, "--show", help="How many of the largest primes to list"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
) -> None:
    """Trial-division primes below a bound."""
    t0 = time.perf_counter()
    try:
        primes: List[int] = find_primes(bound)
    except BenchError as e:
        _fail(e)
    tail = primes[-show:] if show > 0 else []
    _emit("Primes", {"bound": bound, "count": len(primes), "largest": tail,
                     "elapsed_seconds": time.perf_counter() - t0}, as_json)


@app.command("hashrate")
def hashrate_cmd(
    seconds: float = typer.Option(1.0, "--seconds", "-s", help="Target duration"),
    difficulty: List[int] = typer.Option([1, 2, 3, 4], "--difficulty", "-D", help="Difficulty to report (repeatable)"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
) -> None:
    """Measure SHA-256 attempts/sec of the proof-of-work inner loop."""
    try:
        out = hashrate_probe.run(seconds=seconds, difficulties=difficulty)
    except BenchError as e:
        _fail(e)
    if as_json:
        typer.echo(json.dumps(out, sort_keys=True))
        return
    console = Console()
    console.print(
        f"hashes: {out['total_hashes']:,} in {out['seconds']:.3f}s "
        f"({hashrate_probe.fmt_rate(out['hashes_per_sec'])})"
    )
    t = Table(title="Leading-zero hits", box=box.SIMPLE)
    for col in ("d", "p(exp)", "observed", "expected", "s/hit"):
        t.add_column(col, justify="right")
    for r in out["results"]:
        t.add_row(
            str(r["difficulty"]),
            f"{r['p_exp']:.3e}",
            str(r["observed"]),
            f"{r['expected']:.2f}",
            f"{r['expected_seconds_per_hit']:.3e}",
        )
    console.print(t)


def main() -> None:  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
