"""
Results reporting for fold benchmarks.

Provides CLI tables, JSON export and optional charts.
"""

import json
import platform
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from .aggregator import ConfigurationStats
from .micro import ComparisonResult
from .process import Outcome
from .runner import CellResult, MatrixRunResult

STATUS_TEXT = {
    Outcome.SUCCESS: "OK",
    Outcome.FAILURE: "FAILED",
    Outcome.TIMEOUT: "TIMEOUT",
}


class ConsoleReporter:
    """Generates console/CLI reports."""

    # File, config, time, throughput, status
    col_widths = (15, 16, 12, 15, 12)

    def __init__(self, use_color: bool = True):
        self.use_color = use_color

    def _color(self, text: str, color: str) -> str:
        """Apply ANSI color if enabled."""
        if not self.use_color:
            return text

        colors = {
            "green": "\033[92m",
            "red": "\033[91m",
            "yellow": "\033[93m",
            "blue": "\033[94m",
            "bold": "\033[1m",
            "reset": "\033[0m",
        }

        return f"{colors.get(color, '')}{text}{colors['reset']}"

    def banner(self, title: str, width: int = 60) -> str:
        return "\n".join([
            self._color(f"\n{'=' * width}", "blue"),
            self._color(title, "bold"),
            self._color("=" * width, "blue"),
        ])

    def format_improvement(self, pct: Optional[float]) -> str:
        """Format improvement percentage with color; regressions stay negative."""
        if pct is None:
            return self._color("undefined", "yellow")
        if pct > 0:
            return self._color(f"+{pct:.1f}%", "green")
        elif pct < 0:
            return self._color(f"{pct:.1f}%", "red")
        return f"{pct:.1f}%"

    def format_throughput(self, throughput: Optional[float]) -> str:
        if throughput is None:
            return "N/A"
        return f"{int(throughput)} aa/s"

    def format_status(self, outcome: Outcome) -> str:
        return STATUS_TEXT[outcome]

    def cell_table_header(self) -> str:
        w = self.col_widths
        lines = [self.banner("CDSfold Performance Benchmark Suite", sum(w))]
        header = (
            f"{'Test File':>{w[0]}}{'Config':>{w[1]}}{'Time (ms)':>{w[2]}}"
            f"{'Throughput':>{w[3]}}{'Status':>{w[4]}}"
        )
        lines.append(self._color(header, "bold"))
        lines.append("-" * sum(w))
        return "\n".join(lines)

    def cell_row(self, cell: CellResult) -> str:
        """One row per cell. Failed cells show their (non-authoritative) time."""
        w = self.col_widths
        status = self.format_status(cell.sample.outcome)
        row = (
            f"{cell.case.source_label:>{w[0]}}"
            f"{cell.configuration.label:>{w[1]}}"
            f"{cell.sample.elapsed_ms:>{w[2]}.2f}"
            f"{self.format_throughput(cell.throughput):>{w[3]}}"
        )
        color = "green" if cell.sample.authoritative else "red"
        # Pad before coloring so escape codes do not skew alignment
        return row + self._color(f"{status:>{w[4]}}", color)

    def cell_table(self, cells: Sequence[CellResult]) -> str:
        """Full per-cell table, with a rule between input files."""
        if not cells:
            return "No results to display"

        lines = [self.cell_table_header()]
        previous = None
        for cell in cells:
            if previous is not None and cell.case.source_label != previous:
                lines.append("-" * sum(self.col_widths))
            lines.append(self.cell_row(cell))
            previous = cell.case.source_label
        lines.append("-" * sum(self.col_widths))
        return "\n".join(lines)

    def stats_block(self, label: str, stats: Optional[ConfigurationStats]) -> str:
        lines = [f"Configuration: {label}"]
        if stats is None:
            lines.append(f"  {self._color('No data', 'yellow')} (no successful runs)")
            return "\n".join(lines)
        lines.append(f"  Average time: {stats.mean_ms:.2f} ms")
        lines.append(f"  Min time:     {stats.min_ms:.2f} ms")
        lines.append(f"  Max time:     {stats.max_ms:.2f} ms")
        lines.append(f"  p50 time:     {stats.p50_ms:.2f} ms")
        lines.append(f"  Tests run:    {stats.sample_count}")
        return "\n".join(lines)

    def summary(self, result: MatrixRunResult) -> str:
        """Per-configuration statistics in configuration order."""
        lines = [self.banner("Performance Analysis Summary")]
        for label, stats in result.stats.items():
            lines.append(self.stats_block(label, stats))
            lines.append("")

        failures = result.failures
        lines.append(f"Success rate: {result.success_rate * 100:.1f}%")
        if failures:
            lines.append(self._color(f"Failed cells: {len(failures)}", "red"))
            for cell in failures[:5]:
                lines.append(
                    f"  - {cell.case.source_label} [{cell.configuration.label}] "
                    f"{self.format_status(cell.sample.outcome)}"
                )
            if len(failures) > 5:
                lines.append(f"  ... and {len(failures) - 5} more")
        return "\n".join(lines)

    def comparison(self, result: ComparisonResult) -> str:
        """Improvement line for one A/B comparison."""
        lines = ["-" * 60]
        if result.needs_more_iterations:
            lines.append(
                f"Improvement: {self.format_improvement(None)} "
                f"(baseline measured 0 ms; raise the iteration count above {result.iterations})"
            )
        else:
            lines.append(f"Improvement: {self.format_improvement(result.improvement_pct)}")
        if not result.equivalent:
            lines.append(self._color(
                f"Warning: {result.baseline_label} and {result.candidate_label} "
                f"returned different results", "red"
            ))
        return "\n".join(lines)

    def comparison_table(self, results: Sequence[ComparisonResult]) -> str:
        """Generate a summary table for multiple comparisons."""
        if not results:
            return "No results to display"

        headers = ["Benchmark", "Baseline", "Candidate", "Improvement", "Match"]
        col_widths = [28, 14, 14, 14, 6]

        lines = [self.banner("Benchmark Summary", sum(col_widths))]
        header_row = ""
        for i, header in enumerate(headers):
            header_row += f"{header:<{col_widths[i]}}"
        lines.append(self._color(header_row, "bold"))
        lines.append("-" * sum(col_widths))

        for result in results:
            name = result.name[:25] + "..." if len(result.name) > 28 else result.name
            pct = result.improvement_pct
            pct_text = "undefined" if pct is None else f"{pct:+.1f}%"
            lines.append(
                f"{name:<{col_widths[0]}}"
                f"{result.baseline_ms:<{col_widths[1]}.3f}"
                f"{result.candidate_ms:<{col_widths[2]}.3f}"
                f"{pct_text:<{col_widths[3]}}"
                f"{'yes' if result.equivalent else 'NO':<{col_widths[4]}}"
            )
        return "\n".join(lines)

    def system_info(self, iterations: int) -> str:
        lines = [self.banner("System Information")]
        lines.append(f"Python: {platform.python_implementation()} {platform.python_version()}")
        lines.append(f"Platform: {platform.system()} {platform.release()}")
        lines.append(f"Architecture: {platform.machine()}")
        lines.append(f"Processor: {platform.processor() or 'Unknown'}")
        lines.append(f"Iterations per test: {iterations}")
        return "\n".join(lines)


class ChartReporter:
    """Generates visual charts using matplotlib."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = output_dir or Path("results/charts")
        self._matplotlib_available = False
        self._check_matplotlib()

    def _check_matplotlib(self):
        """Check if matplotlib is available."""
        try:
            import matplotlib
            matplotlib.use("Agg")  # Non-interactive backend
            self._matplotlib_available = True
        except ImportError:
            self._matplotlib_available = False

    def matrix_latency_chart(
        self,
        result: MatrixRunResult,
        filename: Optional[str] = None,
    ) -> Optional[Path]:
        """Bar chart of mean latency per configuration, with min/max whiskers."""
        if not self._matplotlib_available:
            print("Warning: matplotlib not available for charts", file=sys.stderr)
            return None

        import matplotlib.pyplot as plt
        import numpy as np

        measured = [(label, s) for label, s in result.stats.items() if s is not None]
        if not measured:
            return None

        names = [label for label, _ in measured]
        means = np.array([s.mean_ms for _, s in measured])
        lower = means - np.array([s.min_ms for _, s in measured])
        upper = np.array([s.max_ms for _, s in measured]) - means

        x = np.arange(len(names))

        fig, ax = plt.subplots(figsize=(12, 6))
        ax.bar(x, means, yerr=[lower, upper], capsize=4, color="steelblue")

        ax.set_xlabel("Configuration")
        ax.set_ylabel("Mean latency (ms)")
        ax.set_title("CDSfold Latency by Configuration")
        ax.set_xticks(x)
        ax.set_xticklabels(names, rotation=45, ha="right")

        fig.tight_layout()

        self.output_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.output_dir / (filename or "matrix_latency.png")
        fig.savefig(filepath, dpi=150, bbox_inches="tight")
        plt.close(fig)

        return filepath

    def improvement_chart(
        self,
        results: Sequence[ComparisonResult],
        filename: Optional[str] = None,
    ) -> Optional[Path]:
        """Horizontal bars of improvement per comparison; undefined ones are skipped."""
        if not self._matplotlib_available:
            print("Warning: matplotlib not available for charts", file=sys.stderr)
            return None

        import matplotlib.pyplot as plt
        import numpy as np

        defined = [r for r in results if r.improvement_pct is not None]
        if not defined:
            return None

        names = [r.name for r in defined]
        pcts = np.array([r.improvement_pct for r in defined])
        colors = ["seagreen" if p >= 0 else "coral" for p in pcts]

        fig, ax = plt.subplots(figsize=(10, 6))
        ax.barh(np.arange(len(names)), pcts, color=colors)
        ax.axvline(0, color="black", linewidth=0.8)

        ax.set_yticks(np.arange(len(names)))
        ax.set_yticklabels(names)
        ax.set_xlabel("Improvement (%)")
        ax.set_title("Candidate vs Baseline")

        fig.tight_layout()

        self.output_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.output_dir / (filename or "micro_improvement.png")
        fig.savefig(filepath, dpi=150, bbox_inches="tight")
        plt.close(fig)

        return filepath


class JSONReporter:
    """Exports results as JSON for further analysis."""

    def __init__(self, output_dir: Optional[Path] = None):
        self.output_dir = output_dir or Path("results")

    def save_run(self, result: MatrixRunResult, name: str = "matrix") -> Path:
        """Save a matrix run to JSON."""
        timestamp = result.start_time.strftime("%Y%m%d_%H%M%S")
        filepath = self.output_dir / f"{name}_{timestamp}.json"
        result.save(filepath)
        return filepath

    def save_comparisons(
        self,
        results: Sequence[ComparisonResult],
        name: str = "micro",
    ) -> Path:
        """Save micro-benchmark comparisons as one JSON document."""
        self.output_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = self.output_dir / f"{name}_{timestamp}.json"

        data = {
            "name": name,
            "timestamp": timestamp,
            "results": [r.to_dict() for r in results],
        }

        with open(filepath, "w") as f:
            json.dump(data, f, indent=2)

        return filepath

    def load_result(self, filepath: Path) -> dict:
        """Load a result from JSON."""
        with open(filepath) as f:
            return json.load(f)
