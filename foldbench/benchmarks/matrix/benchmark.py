"""
Matrix benchmarks - CDSfold across sequence lengths and flag sets.

Generates the synthetic corpus, sweeps every configuration over every
input file, and prints per-cell rows followed by per-configuration
statistics.
"""

from typing import Optional

from foldbench.harness.aggregator import Aggregator
from foldbench.harness.process import Launcher, ProcessRunner
from foldbench.harness.reporter import ConsoleReporter
from foldbench.harness.runner import BenchmarkConfig, CellResult, MatrixRunner, MatrixRunResult
from foldbench.instrumentation.traces import Tracer
from foldbench.scenarios.corpus import build_corpus, cleanup_corpus, write_corpus


class FoldMatrixSuite:
    """End-to-end CDSfold matrix benchmark."""

    def __init__(
        self,
        config: BenchmarkConfig,
        launcher: Optional[Launcher] = None,
        reporter: Optional[ConsoleReporter] = None,
        tracer: Optional[Tracer] = None,
        verbose: bool = True,
    ):
        self.config = config
        self.reporter = reporter or ConsoleReporter()
        self.verbose = verbose
        self.process_runner = ProcessRunner(
            config.executable,
            launcher=launcher,
            success_code=config.success_code,
            timeout_seconds=config.timeout_seconds,
            verbose=verbose,
        )
        self.matrix_runner = MatrixRunner(self.process_runner, tracer=tracer, verbose=verbose)
        self._last_source: Optional[str] = None

    def _print_cell(self, cell: CellResult) -> None:
        if self._last_source is not None and cell.case.source_label != self._last_source:
            print("-" * sum(self.reporter.col_widths))
        print(self.reporter.cell_row(cell))
        self._last_source = cell.case.source_label

    def run(self) -> MatrixRunResult:
        """Run the full matrix.

        Raises ExecutableNotFoundError before any file is written if the
        executable is missing.
        """
        self.process_runner.preflight()

        cases = write_corpus(
            build_corpus(self.config.lengths, self.config.seed),
            self.config.workdir,
            verbose=self.verbose,
        )

        try:
            if self.verbose:
                print(self.reporter.cell_table_header())
            self._last_source = None
            result = self.matrix_runner.run_matrix(
                cases,
                self.config.configurations,
                aggregator=Aggregator(),
                on_cell=self._print_cell if self.verbose else None,
            )
            if self.verbose:
                print("-" * sum(self.reporter.col_widths))
                print(self.reporter.summary(result))
        finally:
            if not self.config.keep_corpus:
                cleanup_corpus(self.config.workdir)

        if self.config.keep_corpus and self.verbose:
            print(f"\nBenchmark complete! Clean up test files with: rm {self.config.workdir}/test_*.faa")

        result.metadata["config"] = self.config.to_dict()
        return result
