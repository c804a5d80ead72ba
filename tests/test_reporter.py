"""Tests for console, JSON and chart reporting."""

import json

import pytest
from helpers import FakeClock, ScriptedLauncher

from foldbench.harness.micro import ComparisonResult
from foldbench.harness.process import ProcessRunner
from foldbench.harness.reporter import ChartReporter, ConsoleReporter, JSONReporter
from foldbench.harness.runner import MatrixRunner
from foldbench.scenarios.corpus import build_corpus


@pytest.fixture
def reporter():
    return ConsoleReporter(use_color=False)


@pytest.fixture
def mixed_result(two_configs):
    clock = FakeClock()
    launcher = ScriptedLauncher(clock, failing={("test_10.faa", "-w")})
    runner = MatrixRunner(ProcessRunner("fold", launcher=launcher, clock=clock, verbose=False), verbose=False)
    return runner.run_matrix(build_corpus([10]), two_configs)


def test_cell_row_success(reporter, mixed_result):
    row = reporter.cell_row(mixed_result.cells[0])
    assert "test_10.faa" in row
    assert "default" in row
    assert "20.00" in row
    assert "500 aa/s" in row
    assert row.rstrip().endswith("OK")


def test_cell_row_failure_keeps_time(reporter, mixed_result):
    row = reporter.cell_row(mixed_result.cells[1])
    assert "20.00" in row
    assert "N/A" in row
    assert row.rstrip().endswith("FAILED")


def test_summary_shows_no_data(reporter, mixed_result):
    text = reporter.summary(mixed_result)
    assert "Configuration: default" in text
    assert "Tests run:    1" in text
    assert "Configuration: window_20" in text
    assert "No data" in text
    assert "Failed cells: 1" in text


def test_empty_table(reporter):
    assert reporter.cell_table([]) == "No results to display"


def test_format_improvement(reporter):
    assert reporter.format_improvement(25.0) == "+25.0%"
    assert reporter.format_improvement(-20.0) == "-20.0%"
    assert reporter.format_improvement(None) == "undefined"


def test_color_codes_only_when_enabled():
    assert "\033[" in ConsoleReporter(use_color=True).format_improvement(5.0)
    assert "\033[" not in ConsoleReporter(use_color=False).format_improvement(5.0)


def test_comparison_undefined_asks_for_more_iterations(reporter):
    text = reporter.comparison(ComparisonResult("x", iterations=10, baseline_ms=0.0, candidate_ms=0.0))
    assert "undefined" in text
    assert "raise the iteration count" in text


def test_comparison_mismatch_warning(reporter):
    result = ComparisonResult("x", iterations=10, baseline_ms=2.0, candidate_ms=1.0, equivalent=False)
    assert "different results" in reporter.comparison(result)


def test_comparison_table(reporter):
    results = [
        ComparisonResult("faster", iterations=10, baseline_ms=100.0, candidate_ms=75.0),
        ComparisonResult("slower", iterations=10, baseline_ms=100.0, candidate_ms=120.0),
        ComparisonResult("too fast", iterations=10, baseline_ms=0.0, candidate_ms=0.0),
    ]
    table = reporter.comparison_table(results)
    assert "+25.0%" in table
    assert "-20.0%" in table
    assert "undefined" in table


def test_system_info(reporter):
    assert "Iterations per test: 500" in reporter.system_info(500)


def test_json_run_export(tmp_path, mixed_result):
    path = JSONReporter(tmp_path).save_run(mixed_result)
    data = json.loads(path.read_text())
    assert len(data["cells"]) == 2
    failed = data["cells"][1]
    assert failed["outcome"] == "failure"
    assert failed["authoritative"] is False
    assert failed["throughput"] is None
    assert data["stats"]["window_20"] is None


def test_json_comparison_export(tmp_path):
    reporter = JSONReporter(tmp_path)
    path = reporter.save_comparisons([ComparisonResult("x", iterations=1, baseline_ms=4.0, candidate_ms=3.0)])
    data = reporter.load_result(path)
    assert data["results"][0]["improvement_pct"] == 25.0


def test_charts(tmp_path, mixed_result):
    pytest.importorskip("matplotlib")
    charts = ChartReporter(tmp_path)
    assert charts.matrix_latency_chart(mixed_result).exists()
    comparisons = [
        ComparisonResult("a", iterations=1, baseline_ms=4.0, candidate_ms=3.0),
        ComparisonResult("b", iterations=1, baseline_ms=0.0, candidate_ms=3.0),
    ]
    assert charts.improvement_chart(comparisons).exists()
    assert charts.improvement_chart(comparisons[1:]) is None
