from __future__ import annotations

"""
microbench sequential run CLI

Usage:
  python -m microbench.cli.run [-n INT] [-umbral INT] [-archivo PATH]
                               [--block-data STR] [--difficulty INT]
                               [--max-primes INT] [--seed INT]
                               [--max-iterations INT] [--metrics :PORT]
                               [--log-level LEVEL] [--json] [--dry-run]

Prints the configuration, computes the matrix trace, announces the branch
(A = proof of work, B = primes), runs it and prints the elapsed time.

`-archivo` is accepted and shown in the summary; nothing is written to it.

Exit codes:
  0 on success, 2 on invalid arguments or an unbindable --metrics address,
  3 when the proof-of-work search was cancelled or hit --max-iterations,
  130 on Ctrl-C.
"""

import argparse
import json
import logging
import random
import sys
from typing import List, Optional, Tuple

from .. import metrics
from ..config import BenchConfig
from ..errors import InvalidArgument, SearchCancelled, SearchExhausted
from ..sequencer import run_sequential
from ..version import __version__, runtime_banner


def _parse_host_port(value: str) -> Tuple[str, int]:
    if ":" not in value:
        raise argparse.ArgumentTypeError("expected HOST:PORT or :PORT")
    host, port_str = value.rsplit(":", 1)
    try:
        return host or "0.0.0.0", int(port_str)
    except ValueError as e:
        raise argparse.ArgumentTypeError("invalid port") from e


def _setup_logging(level: str) -> None:
    lvl = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _build_arg_parser(defaults: BenchConfig) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="microbench",
        description="Matrix-trace driven branch micro-benchmark",
    )
    p.add_argument("-n", type=int, default=defaults.n,
                   help="matrix dimension (default: %(default)s)")
    p.add_argument("-umbral", "--threshold", dest="threshold", type=int, default=defaults.threshold,
                   help="branch threshold; trace > threshold runs branch A (default: %(default)s)")
    p.add_argument("-archivo", "--output", dest="output", type=str, default=defaults.output,
                   help="output file; reported only, never written (default: %(default)s)")
    p.add_argument("--block-data", type=str, default=defaults.block_data,
                   help="proof-of-work payload (default: %(default)r)")
    p.add_argument("--difficulty", type=int, default=defaults.difficulty,
                   help="leading zero hex digits required by branch A (default: %(default)s)")
    p.add_argument("--max-primes", type=int, default=defaults.max_primes,
                   help="exclusive prime bound for branch B (default: %(default)s)")
    p.add_argument("--seed", type=lambda s: int(s, 0), default=defaults.seed,
                   help="seed for matrix generation (default: fresh entropy)")
    p.add_argument("--max-iterations", type=int, default=defaults.max_iterations,
                   help="cap on proof-of-work nonces (default: unbounded)")
    p.add_argument("--metrics", type=_parse_host_port,
                   default=("0.0.0.0", defaults.metrics_port) if defaults.metrics_port else None,
                   help="Prometheus endpoint bind ':PORT' or 'HOST:PORT' (default: disabled)")
    p.add_argument("--log-level", type=str, default=defaults.log_level,
                   help="logging level (debug, info, warning, error)")
    p.add_argument("--json", action="store_true", help="print the outcome as JSON")
    p.add_argument("--dry-run", action="store_true", help="print config then exit")
    p.add_argument("--version", action="version", version=f"microbench {__version__}")
    return p


def _config_from_args(ns: argparse.Namespace) -> BenchConfig:
    return BenchConfig(
        n=ns.n,
        threshold=ns.threshold,
        output=ns.output,
        block_data=ns.block_data,
        difficulty=ns.difficulty,
        max_iterations=ns.max_iterations,
        max_primes=ns.max_primes,
        seed=ns.seed,
        metrics_port=ns.metrics[1] if ns.metrics else None,
        log_level=ns.log_level,
    )


def _print_summary(cfg: BenchConfig) -> None:
    print("Configuración de la simulación:")
    print(f"Dimensión de las matrices: {cfg.n}")
    print(f"Valor umbral: {cfg.threshold}")
    print(f"Archivo de salida: {cfg.output}")


def _main(argv: Optional[List[str]] = None) -> int:
    args = _build_arg_parser(BenchConfig.from_env()).parse_args(argv)
    _setup_logging(args.log_level)
    log = logging.getLogger("microbench.cli")

    cfg = _config_from_args(args)
    try:
        cfg.validate()
    except InvalidArgument as e:
        log.error("invalid configuration: %s", e.message)
        return 2

    if args.dry_run:
        print(json.dumps(cfg.to_dict(), indent=2, sort_keys=True))
        return 0

    _print_summary(cfg)
    log.debug("output file %s is reported only; results are not persisted", cfg.output)
    log.info("%s starting", runtime_banner())

    if args.metrics:
        host, port = args.metrics
        try:
            metrics.maybe_start_http_endpoint(port, addr=host)
        except OSError as e:
            log.error("cannot start metrics endpoint on %s:%d: %s", host, port, e)
            return 2
        log.info("metrics endpoint on %s:%d", host, port)

    try:
        outcome = run_sequential(
            cfg.n,
            cfg.threshold,
            cfg.block_data,
            cfg.difficulty,
            cfg.max_primes,
            rng=random.Random(cfg.seed),
            max_iterations=cfg.max_iterations,
        )
    except InvalidArgument as e:
        log.error("invalid argument: %s", e.message)
        return 2
    except (SearchCancelled, SearchExhausted) as e:
        log.error("proof-of-work search stopped: %s", e.message)
        return 3

    if args.json:
        print(json.dumps(outcome.to_dict(), sort_keys=True))
    else:
        print(f"Rama ejecutada: {outcome.label}  tiempo: {outcome.elapsed:.6f}s")
    return 0


def main() -> None:
    try:
        rc = _main(sys.argv[1:])
    except KeyboardInterrupt:  # pragma: no cover
        rc = 130
    sys.exit(rc)


if __name__ == "__main__":
    main()
