"""
Matrix orchestrator for fold benchmarking.

Sweeps every input case against every configuration, one synchronous
process at a time, and folds successful timings into an Aggregator.
"""

import json
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Sequence

from foldbench.instrumentation.traces import Tracer, TracingConfig
from foldbench.scenarios.corpus import InputCase
from foldbench.scenarios.definitions import (
    ConfigurationSpec,
    DEFAULT_CONFIGURATIONS,
    DEFAULT_LENGTHS,
    check_unique_labels,
)

from .aggregator import Aggregator, ConfigurationStats
from .process import Outcome, ProcessRunner, Sample


def _env_int_list(name: str, default: Sequence[int]) -> tuple[int, ...]:
    raw = os.getenv(name)
    if not raw:
        return tuple(default)
    return tuple(int(part) for part in raw.split(",") if part.strip())


def _env_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    return float(raw) if raw else None


@dataclass
class BenchmarkConfig:
    """Configuration for a benchmark run."""

    executable: str = "./src/CDSfold"
    lengths: tuple[int, ...] = DEFAULT_LENGTHS
    seed: int = 42
    workdir: Path = Path(".")
    configurations: list[ConfigurationSpec] = field(
        default_factory=lambda: list(DEFAULT_CONFIGURATIONS)
    )
    success_code: int = 0
    timeout_seconds: Optional[float] = None
    micro_iterations: int = 10_000
    warmup_iterations: int = 2
    keep_corpus: bool = False
    output_dir: Path = Path("results")

    def __post_init__(self):
        self.workdir = Path(self.workdir)
        self.output_dir = Path(self.output_dir)
        if any(length <= 0 for length in self.lengths):
            raise ValueError(f"lengths must be positive, got {self.lengths}")
        if self.micro_iterations <= 0:
            raise ValueError("micro_iterations must be positive")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        check_unique_labels(self.configurations)

    @classmethod
    def from_env(cls, **overrides) -> "BenchmarkConfig":
        """Build from FOLDBENCH_* environment variables, then apply overrides."""
        values = {
            "executable": os.getenv("FOLDBENCH_EXECUTABLE", "./src/CDSfold"),
            "lengths": _env_int_list("FOLDBENCH_LENGTHS", DEFAULT_LENGTHS),
            "seed": int(os.getenv("FOLDBENCH_SEED", "42")),
            "workdir": Path(os.getenv("FOLDBENCH_WORKDIR", ".")),
            "timeout_seconds": _env_float("FOLDBENCH_TIMEOUT"),
            "micro_iterations": int(os.getenv("FOLDBENCH_ITERATIONS", "10000")),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {
            "executable": self.executable,
            "lengths": list(self.lengths),
            "seed": self.seed,
            "workdir": str(self.workdir),
            "configurations": [c.to_dict() for c in self.configurations],
            "success_code": self.success_code,
            "timeout_seconds": self.timeout_seconds,
            "micro_iterations": self.micro_iterations,
            "warmup_iterations": self.warmup_iterations,
            "keep_corpus": self.keep_corpus,
        }


@dataclass(frozen=True)
class CellResult:
    """Outcome of one (input, configuration) cell."""

    case: InputCase
    configuration: ConfigurationSpec
    sample: Sample

    @property
    def throughput(self) -> Optional[float]:
        """Residues per second; None unless the run succeeded."""
        if not self.sample.authoritative or self.sample.elapsed_ms <= 0:
            return None
        return self.case.sequence_length * 1000 / self.sample.elapsed_ms

    def to_dict(self) -> dict:
        return {
            "source_label": self.case.source_label,
            "sequence_length": self.case.sequence_length,
            **self.sample.to_dict(),
            "throughput": self.throughput,
        }


@dataclass
class MatrixRunResult:
    """Results from one matrix sweep."""

    configurations: list[ConfigurationSpec]
    cells: list[CellResult]
    aggregator: Aggregator
    start_time: datetime
    end_time: datetime
    metadata: dict = field(default_factory=dict)

    @property
    def stats(self) -> dict[str, Optional[ConfigurationStats]]:
        """Per-configuration summaries in configuration order."""
        return self.aggregator.summaries(c.label for c in self.configurations)

    @property
    def failures(self) -> list[CellResult]:
        return [cell for cell in self.cells if not cell.sample.authoritative]

    @property
    def success_rate(self) -> float:
        """Fraction of cells that completed successfully."""
        if not self.cells:
            return 0.0
        return (len(self.cells) - len(self.failures)) / len(self.cells)

    def to_dict(self) -> dict:
        """Convert result to dictionary for serialization."""
        return {
            "configurations": [c.to_dict() for c in self.configurations],
            "cells": [cell.to_dict() for cell in self.cells],
            "stats": {
                label: (s.to_dict() if s is not None else None)
                for label, s in self.stats.items()
            },
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "duration_seconds": (self.end_time - self.start_time).total_seconds(),
            "success_rate": self.success_rate,
            "metadata": self.metadata,
        }

    def save(self, path: Path) -> None:
        """Save results to JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)


CellCallback = Callable[[CellResult], None]


class MatrixRunner:
    """Orchestrates the input x configuration sweep."""

    def __init__(
        self,
        process_runner: ProcessRunner,
        tracer: Optional[Tracer] = None,
        verbose: bool = True,
    ):
        self.process_runner = process_runner
        self.tracer = tracer or Tracer(TracingConfig(enabled=False))
        self.verbose = verbose

    def run_cell(self, case: InputCase, config: ConfigurationSpec) -> CellResult:
        """Run a single cell."""
        attributes = {"label": config.label, "source": case.source_label}
        with self.tracer.span("matrix_cell", attributes) as span:
            sample = self.process_runner.run(config, case)
            if span:
                span.set_attribute("outcome", sample.outcome.value)
                span.set_attribute("elapsed_ms", sample.elapsed_ms)
        return CellResult(case=case, configuration=config, sample=sample)

    def run_matrix(
        self,
        input_cases: Sequence[InputCase],
        configurations: Sequence[ConfigurationSpec],
        aggregator: Optional[Aggregator] = None,
        on_cell: Optional[CellCallback] = None,
    ) -> MatrixRunResult:
        """Run every configuration against every input, inputs outermost.

        Args:
            input_cases: Inputs in report order
            configurations: Configurations in report order
            aggregator: Accumulator for this run (a fresh one if omitted)
            on_cell: Optional callback invoked with each CellResult as it completes

        Raises:
            ExecutableNotFoundError: before any cell runs
            ValueError: on duplicate configuration labels
        """
        configurations = list(configurations)
        check_unique_labels(configurations)
        self.process_runner.preflight()

        aggregator = aggregator if aggregator is not None else Aggregator()
        for config in configurations:
            aggregator.register(config.label)

        if self.verbose:
            print(
                f"\nRunning matrix: {len(input_cases)} inputs x "
                f"{len(configurations)} configurations"
            )

        cells: list[CellResult] = []
        start_time = datetime.now()

        for case in input_cases:
            for config in configurations:
                cell = self.run_cell(case, config)
                if cell.sample.outcome is Outcome.SUCCESS:
                    aggregator.record(config.label, cell.sample.elapsed_ms)
                cells.append(cell)
                if on_cell:
                    on_cell(cell)

        return MatrixRunResult(
            configurations=configurations,
            cells=cells,
            aggregator=aggregator,
            start_time=start_time,
            end_time=datetime.now(),
            metadata={"executable": self.process_runner.executable},
        )
