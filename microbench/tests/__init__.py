"""
Test package for microbench

- Keeps test logs quiet by default (individual tests can raise levels).
- Deterministic RNG seeding lives in conftest.py; tests that need their own
  randomness create a local random.Random(seed).
"""

from __future__ import annotations

import logging

logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
