#!/usr/bin/env python3
"""
foldbench - Main entry point for running CDSfold benchmarks.

Usage:
    python main.py [command] [options]

Commands:
    matrix      - Run CDSfold across the input x configuration matrix
    micro       - Run old vs new micro-benchmarks (no executable needed)
    all         - Run the matrix, then the micro-benchmarks
    corpus      - Write the synthetic test_<len>.faa files and exit
    clean       - Remove generated test_*.faa files
"""

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from foldbench.benchmarks.matrix import FoldMatrixSuite
from foldbench.benchmarks.micro import MicroBenchmarkSuite
from foldbench.harness import (
    BenchmarkConfig,
    ChartReporter,
    ConsoleReporter,
    HarnessError,
    JSONReporter,
    MicroBenchmarkEngine,
)
from foldbench.instrumentation import Tracer, TracingConfig
from foldbench.scenarios import (
    build_corpus,
    check_unique_labels,
    cleanup_corpus,
    merge_configurations,
    parse_configuration,
    write_corpus,
)


def build_config(args) -> BenchmarkConfig:
    """Environment first, command-line flags on top."""
    overrides = {
        "executable": args.executable,
        "lengths": tuple(args.lengths) if args.lengths else None,
        "seed": args.seed,
        "workdir": args.workdir,
        "timeout_seconds": args.timeout,
        "micro_iterations": args.iterations,
        "output_dir": args.output_dir,
        "keep_corpus": args.keep_corpus or None,
    }
    config = BenchmarkConfig.from_env(**overrides)
    if args.config:
        config.configurations = merge_configurations(
            config.configurations,
            [parse_configuration(text) for text in args.config],
        )
        check_unique_labels(config.configurations)
    return config


def run_matrix(args, config: BenchmarkConfig, reporter: ConsoleReporter, tracer: Tracer):
    """Run the CDSfold matrix and export results."""
    suite = FoldMatrixSuite(config, reporter=reporter, tracer=tracer, verbose=not args.quiet)
    result = suite.run()

    if args.quiet:
        print(reporter.cell_table(result.cells))
        print(reporter.summary(result))

    path = JSONReporter(config.output_dir).save_run(result)
    print(f"\nResults saved to {path}")

    if args.charts:
        chart = ChartReporter(config.output_dir / "charts").matrix_latency_chart(result)
        if chart:
            print(f"Chart saved to {chart}")
    return result


def run_micro(args, config: BenchmarkConfig, reporter: ConsoleReporter, tracer: Tracer):
    """Run the micro-benchmark suite and export results."""
    engine = MicroBenchmarkEngine(
        warmup_iterations=config.warmup_iterations,
        tracer=tracer,
        verbose=not args.quiet,
    )
    suite = MicroBenchmarkSuite(
        iterations=config.micro_iterations,
        engine=engine,
        reporter=reporter,
        seed=config.seed,
    )
    results = suite.run_all()

    path = JSONReporter(config.output_dir).save_comparisons(results)
    print(f"\nResults saved to {path}")

    if args.charts:
        chart = ChartReporter(config.output_dir / "charts").improvement_chart(results)
        if chart:
            print(f"Chart saved to {chart}")
    return results


def run_all(args, config, reporter, tracer):
    """Run the matrix, then the micro-benchmarks."""
    print("=" * 70)
    print("FOLDBENCH - FULL BENCHMARK SUITE")
    print("=" * 70)

    print("\n[1/2] MATRIX BENCHMARKS")
    run_matrix(args, config, reporter, tracer)

    print("\n[2/2] MICRO BENCHMARKS")
    run_micro(args, config, reporter, tracer)

    print("\n" + "=" * 70)
    print("ALL BENCHMARKS COMPLETE")
    print("=" * 70)


def run_corpus(args, config, reporter, tracer):
    """Write the synthetic corpus only."""
    cases = write_corpus(build_corpus(config.lengths, config.seed), config.workdir)
    print(f"\nWrote {len(cases)} files to {config.workdir}")


def run_clean(args, config, reporter, tracer):
    """Remove generated corpus files."""
    removed = cleanup_corpus(config.workdir)
    for path in removed:
        print(f"  Removed: {path}")
    print(f"Removed {len(removed)} files")


def main(argv=None):
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="foldbench - Benchmark CDSfold and compare implementations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python main.py matrix --executable ./src/CDSfold
    python main.py matrix --lengths 10 25 50 --config "window_20=-w 20"
    python main.py micro --iterations 50000
    python main.py clean
        """,
    )

    parser.add_argument(
        "command",
        choices=["matrix", "micro", "all", "corpus", "clean"],
        help="Benchmark suite to run",
    )
    parser.add_argument(
        "--executable",
        help="Path to the CDSfold executable (default: ./src/CDSfold or $FOLDBENCH_EXECUTABLE)",
    )
    parser.add_argument(
        "--lengths",
        type=int,
        nargs="+",
        help="Sequence lengths to generate (default: 10 25 50 100 200 500 1000)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the synthetic corpus (default: 42)",
    )
    parser.add_argument(
        "--config",
        action="append",
        metavar="LABEL=FLAGS",
        help="Add or replace a configuration, e.g. 'window_30=-w 30' (repeatable)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Kill a CDSfold run after this many seconds (default: wait forever)",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        help="Iterations per micro-benchmark (default: 10000)",
    )
    parser.add_argument(
        "--workdir",
        type=Path,
        help="Directory for generated input files (default: .)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        help="Directory to save results (default: results/)",
    )
    parser.add_argument(
        "--keep-corpus",
        action="store_true",
        help="Keep generated input files after the matrix run",
    )
    parser.add_argument(
        "--charts",
        action="store_true",
        help="Save matplotlib charts next to the JSON results",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Emit OpenTelemetry spans to the console",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Print only the final tables",
    )

    args = parser.parse_args(argv)

    commands = {
        "matrix": run_matrix,
        "micro": run_micro,
        "all": run_all,
        "corpus": run_corpus,
        "clean": run_clean,
    }

    reporter = ConsoleReporter(use_color=not args.no_color and sys.stdout.isatty())
    tracer = Tracer(TracingConfig(enabled=True if args.trace else None))

    try:
        config = build_config(args)
        commands[args.command](args, config, reporter, tracer)
    except HarnessError as e:
        print(f"\nError: {e}", file=sys.stderr)
        print("Please build CDSfold first with: make", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user")
        return 1
    finally:
        tracer.shutdown()

    return 0


if __name__ == "__main__":
    sys.exit(main())
