"""
In-process A/B timing of two implementations of the same operation.

Each side runs back-to-back in its own timed block (never interleaved),
and every return value is pushed into a Sink that is read after the loop,
so the timed work always has an observable result.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from foldbench.instrumentation.timing import Clock, timed
from foldbench.instrumentation.traces import Tracer, TracingConfig

from .process import Outcome, Sample

Operation = Callable[[], Any]


class Sink:
    """Observable destination for operation results."""

    def __init__(self):
        self.count = 0
        self.last: Any = None

    def consume(self, value: Any) -> None:
        self.last = value
        self.count += 1


@dataclass(frozen=True)
class ComparisonResult:
    """Baseline vs candidate timing for one operation."""

    name: str
    iterations: int
    baseline_ms: float
    candidate_ms: float
    baseline_label: str = "baseline"
    candidate_label: str = "candidate"
    equivalent: bool = True
    baseline_observed: Any = None
    candidate_observed: Any = None

    @property
    def improvement_pct(self) -> Optional[float]:
        """Signed latency reduction of the candidate; None if the baseline read 0ms."""
        if self.baseline_ms <= 0:
            return None
        return (self.baseline_ms - self.candidate_ms) * 100 / self.baseline_ms

    @property
    def needs_more_iterations(self) -> bool:
        """True when clock granularity swallowed the baseline block."""
        return self.baseline_ms <= 0

    @property
    def samples(self) -> tuple[Sample, Sample]:
        """Each timed block as a Sample labelled by implementation."""
        return (
            Sample(self.baseline_label, self.baseline_ms, Outcome.SUCCESS, source_label=self.name),
            Sample(self.candidate_label, self.candidate_ms, Outcome.SUCCESS, source_label=self.name),
        )

    @property
    def baseline_ops_per_ms(self) -> Optional[float]:
        if self.baseline_ms <= 0:
            return None
        return self.iterations / self.baseline_ms

    @property
    def candidate_ops_per_ms(self) -> Optional[float]:
        if self.candidate_ms <= 0:
            return None
        return self.iterations / self.candidate_ms

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "baseline_label": self.baseline_label,
            "candidate_label": self.candidate_label,
            "iterations": self.iterations,
            "baseline_ms": self.baseline_ms,
            "candidate_ms": self.candidate_ms,
            "improvement_pct": self.improvement_pct,
            "needs_more_iterations": self.needs_more_iterations,
            "baseline_ops_per_ms": self.baseline_ops_per_ms,
            "candidate_ops_per_ms": self.candidate_ops_per_ms,
            "equivalent": self.equivalent,
        }


class MicroBenchmarkEngine:
    """Times repeated calls of zero-argument operations."""

    def __init__(
        self,
        warmup_iterations: int = 2,
        clock: Clock = time.perf_counter,
        tracer: Optional[Tracer] = None,
        verbose: bool = True,
    ):
        self.warmup_iterations = warmup_iterations
        self.clock = clock
        self.tracer = tracer or Tracer(TracingConfig(enabled=False))
        self.verbose = verbose

    def time_operation(
        self,
        operation: Operation,
        iterations: int,
        name: str = "operation",
    ) -> tuple[float, Sink]:
        """Run `operation` `iterations` times under one timer.

        Returns the elapsed milliseconds and the sink holding the results.
        """
        for _ in range(self.warmup_iterations):
            operation()

        sink = Sink()
        consume = sink.consume
        with timed(name, clock=self.clock) as timer:
            for _ in range(iterations):
                consume(operation())

        if sink.count != iterations:
            raise RuntimeError(
                f"{name}: sink observed {sink.count} results, expected {iterations}"
            )

        if self.verbose:
            elapsed = timer.elapsed_ms
            rate = f"{iterations / elapsed:8.1f} ops/ms" if elapsed > 0 else "     N/A ops/ms"
            print(f"{name:>25}: {elapsed:8.3f} ms ({rate})")

        return timer.elapsed_ms, sink

    def compare(
        self,
        baseline_operation: Operation,
        candidate_operation: Operation,
        iteration_count: int,
        name: str = "comparison",
        baseline_label: str = "baseline",
        candidate_label: str = "candidate",
    ) -> ComparisonResult:
        """Time baseline then candidate and report the signed improvement.

        Both operations should close over the same pre-generated data so
        that only the implementation differs.
        """
        if isinstance(iteration_count, bool) or not isinstance(iteration_count, int) or iteration_count <= 0:
            raise ValueError(f"iteration_count must be a positive integer, got {iteration_count!r}")

        # Cross-check once, outside the timed blocks
        equivalent = baseline_operation() == candidate_operation()

        with self.tracer.span("micro_compare", {"name": name, "iterations": iteration_count}) as span:
            baseline_ms, baseline_sink = self.time_operation(
                baseline_operation, iteration_count, baseline_label
            )
            candidate_ms, candidate_sink = self.time_operation(
                candidate_operation, iteration_count, candidate_label
            )
            result = ComparisonResult(
                name=name,
                iterations=iteration_count,
                baseline_ms=baseline_ms,
                candidate_ms=candidate_ms,
                baseline_label=baseline_label,
                candidate_label=candidate_label,
                equivalent=equivalent,
                baseline_observed=baseline_sink.last,
                candidate_observed=candidate_sink.last,
            )
            if span and result.improvement_pct is not None:
                span.set_attribute("improvement_pct", result.improvement_pct)

        return result
