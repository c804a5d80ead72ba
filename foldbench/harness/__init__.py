"""
Benchmark harness for CDSfold experiments.

Provides process timing, matrix orchestration, aggregation,
micro-benchmark comparison and reporting.
"""

from .process import (
    ExecutableNotFoundError,
    HarnessError,
    Launcher,
    Outcome,
    ProcessRunner,
    Sample,
    SubprocessLauncher,
)

from .aggregator import (
    Aggregator,
    ConfigurationStats,
)

from .runner import (
    BenchmarkConfig,
    CellResult,
    MatrixRunResult,
    MatrixRunner,
)

from .micro import (
    ComparisonResult,
    MicroBenchmarkEngine,
    Sink,
)

from .reporter import (
    ChartReporter,
    ConsoleReporter,
    JSONReporter,
)

__all__ = [
    # Process
    "ExecutableNotFoundError",
    "HarnessError",
    "Launcher",
    "Outcome",
    "ProcessRunner",
    "Sample",
    "SubprocessLauncher",
    # Aggregation
    "Aggregator",
    "ConfigurationStats",
    # Runner
    "BenchmarkConfig",
    "CellResult",
    "MatrixRunResult",
    "MatrixRunner",
    # Micro
    "ComparisonResult",
    "MicroBenchmarkEngine",
    "Sink",
    # Reporter
    "ChartReporter",
    "ConsoleReporter",
    "JSONReporter",
]
