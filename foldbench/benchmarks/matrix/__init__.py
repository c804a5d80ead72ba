"""
Matrix benchmarks - CDSfold latency across inputs and configurations.
"""

from .benchmark import FoldMatrixSuite

__all__ = [
    "FoldMatrixSuite",
]
