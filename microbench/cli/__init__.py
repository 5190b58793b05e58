from __future__ import annotations

"""
microbench CLI package.

  - python -m microbench.cli.run          # sequential run (trace -> branch A/B)
  - python -m microbench.cli.workloads    # run one workload in isolation

Importing the package stays light; typer/rich are only pulled in by the
workloads module.
"""

from ..version import __version__

__all__ = ["__version__"]
