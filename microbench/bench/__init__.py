"""
microbench.bench
================

Standalone probes that complement the sequential run.

Each probe module exposes:

    def run(**kwargs) -> dict:

returning a dict of summary metrics (e.g., {"hashes_per_sec": ..., ...}).
"""

from __future__ import annotations

from importlib import import_module
from types import ModuleType
from typing import Dict

__all__ = [
    "get",
    "available",
    "DEFAULT_PROBES",
]

DEFAULT_PROBES = ("microbench.bench.hashrate",)


def available() -> Dict[str, ModuleType]:
    """Mapping of probe short-name → imported module."""
    return {fq.rsplit(".", 1)[-1]: import_module(fq) for fq in DEFAULT_PROBES}


def get(name: str) -> ModuleType:
    """
    Get a probe module by short-name ("hashrate") or fully-qualified name.
    Raises KeyError for unknown names.
    """
    for fq in DEFAULT_PROBES:
        if name == fq or fq.endswith("." + name):
            return import_module(fq)
    raise KeyError(f"unknown probe {name!r}")
