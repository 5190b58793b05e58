"""
Version for the microbench package.

It can be overridden at build time with the env var MICROBENCH_VERSION.
"""

from __future__ import annotations

import os
import sys

__version__ = os.getenv("MICROBENCH_VERSION", "0.1.0")


def runtime_banner(prefix: str = "microbench") -> str:
    """Short human-readable banner for logs, e.g. 'microbench 0.1.0 python=3.12.1'."""
    return f"{prefix} {__version__} python={sys.version.split()[0]}"


__all__ = ["__version__", "runtime_banner"]
