"""
foldbench - A benchmark harness for the CDSfold folding tool.

Drives the external executable across a matrix of synthetic inputs and
flag sets, and runs in-process old-vs-new micro-comparisons.

Key modules:
- benchmarks: Matrix and micro-benchmark suites
- instrumentation: Timing utilities and tracing integration
- harness: Process timing, aggregation, comparison and reporting
- scenarios: Synthetic corpus and configuration definitions
"""

__version__ = "0.1.0"

from . import benchmarks
from . import instrumentation
from . import harness
from . import scenarios

__all__ = [
    "benchmarks",
    "instrumentation",
    "harness",
    "scenarios",
]
