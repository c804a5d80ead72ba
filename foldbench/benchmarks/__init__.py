"""
Benchmark suites for CDSfold.

Each submodule focuses on one measurement path.
"""

from . import matrix
from . import micro

__all__ = [
    "matrix",
    "micro",
]
