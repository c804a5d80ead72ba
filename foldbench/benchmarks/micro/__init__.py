"""
Micro-benchmarks - old vs new helper implementations.
"""

from .benchmark import (
    MicroBenchmarkSuite,
    MicroCase,
    default_cases,
    new_matrix_size,
    old_matrix_size,
)

__all__ = [
    "MicroBenchmarkSuite",
    "MicroCase",
    "default_cases",
    "new_matrix_size",
    "old_matrix_size",
]
