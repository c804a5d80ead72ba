"""
Micro-benchmarks - old vs new implementations of small CDSfold helpers.

Each pair computes the same value two ways over shared, seeded input data.
The engine checks that both return equal results before timing them.
"""

import random
from dataclasses import dataclass
from typing import Optional

from foldbench.harness.micro import ComparisonResult, MicroBenchmarkEngine, Operation
from foldbench.harness.reporter import ConsoleReporter

NEG_INF = -999999
ARRAY_SIZE = 10000

MATRIX_PARAMS = [(100, 50), (200, 100), (500, 250), (1000, 500), (2000, 1000)]


# Min/max

def old_min2(a: int, b: int) -> int:
    return a if a < b else b


def old_max2(a: int, b: int) -> int:
    return a if a > b else b


# Banded matrix size

def old_matrix_size(length: int, window: int) -> int:
    """Cells in a band of width `window`, counted row by row."""
    size = 0
    for i in range(1, window + 1):
        size += length - (i - 1)
    return size


def new_matrix_size(length: int, window: int) -> int:
    """Closed form of old_matrix_size."""
    if window <= length:
        return window * length - (window * (window - 1)) // 2
    return (length * (length + 1)) // 2


# Array clearing

def old_clear_array(arr: list, size: int) -> list:
    for i in range(size):
        arr[i] = NEG_INF
    return arr


def new_clear_array(arr: list, size: int) -> list:
    arr[:size] = [NEG_INF] * size
    return arr


@dataclass
class MicroCase:
    """One old-vs-new pair over pre-generated data."""

    name: str
    baseline_label: str
    candidate_label: str
    baseline: Operation
    candidate: Operation
    # Fraction of the suite iteration count this pair runs
    iteration_scale: float = 1.0

    def iterations(self, base: int) -> int:
        return max(1, int(base * self.iteration_scale))


def min_max_case(seed: int = 42) -> MicroCase:
    rng = random.Random(seed)
    pairs = [(rng.randint(1, 1000), rng.randint(1, 1000)) for _ in range(1000)]

    def old():
        total = 0
        for a, b in pairs:
            total += old_min2(a, b)
            total += old_max2(a, b)
        return total

    def new():
        total = 0
        for a, b in pairs:
            total += min(a, b)
            total += max(a, b)
        return total

    return MicroCase(
        name="MIN/MAX Function",
        baseline_label="OLD: Conditional MIN/MAX",
        candidate_label="NEW: Builtin min/max",
        baseline=old,
        candidate=new,
        iteration_scale=0.1,
    )


def matrix_size_case() -> MicroCase:
    def old():
        return sum(old_matrix_size(n, w) for n, w in MATRIX_PARAMS)

    def new():
        return sum(new_matrix_size(n, w) for n, w in MATRIX_PARAMS)

    return MicroCase(
        name="Matrix Size Calculation",
        baseline_label="OLD: Loop-based",
        candidate_label="NEW: Formula-based",
        baseline=old,
        candidate=new,
    )


def array_clearing_case(seed: int = 42) -> MicroCase:
    rng = random.Random(seed)
    initial = [rng.randint(0, 1000) for _ in range(ARRAY_SIZE)]
    # Separate buffers with identical contents so results can be compared
    old_buf = list(initial)
    new_buf = list(initial)

    return MicroCase(
        name="Array Clearing",
        baseline_label="OLD: Manual loop",
        candidate_label="NEW: Slice assignment",
        baseline=lambda: old_clear_array(old_buf, ARRAY_SIZE),
        candidate=lambda: new_clear_array(new_buf, ARRAY_SIZE),
        iteration_scale=0.1,
    )


def data_access_case() -> MicroCase:
    values = list(range(100))
    frozen = tuple(values)

    def old():
        total = 0
        for i in range(100):
            total += values[i]
        return total

    def new():
        return sum(frozen)

    return MicroCase(
        name="Data Structure Access",
        baseline_label="OLD: Indexed list",
        candidate_label="NEW: sum() over tuple",
        baseline=old,
        candidate=new,
    )


def default_cases(seed: int = 42) -> list[MicroCase]:
    return [
        min_max_case(seed),
        matrix_size_case(),
        array_clearing_case(seed),
        data_access_case(),
    ]


class MicroBenchmarkSuite:
    """Runs every old-vs-new pair and prints the comparison."""

    def __init__(
        self,
        iterations: int = 10_000,
        engine: Optional[MicroBenchmarkEngine] = None,
        reporter: Optional[ConsoleReporter] = None,
        seed: int = 42,
    ):
        self.iterations = iterations
        self.engine = engine or MicroBenchmarkEngine()
        self.reporter = reporter or ConsoleReporter()
        self.seed = seed

    def run_case(self, case: MicroCase) -> ComparisonResult:
        print(self.reporter.banner(f"{case.name} Benchmark"))
        result = self.engine.compare(
            case.baseline,
            case.candidate,
            case.iterations(self.iterations),
            name=case.name,
            baseline_label=case.baseline_label,
            candidate_label=case.candidate_label,
        )
        print(self.reporter.comparison(result))
        return result

    def run_all(self, cases: Optional[list[MicroCase]] = None) -> list[ComparisonResult]:
        """Run all pairs sequentially."""
        print("CDSfold Micro-Benchmark Suite")
        print(self.reporter.system_info(self.iterations))

        if cases is None:
            cases = default_cases(self.seed)
        results = [self.run_case(case) for case in cases]

        print(self.reporter.comparison_table(results))
        return results
