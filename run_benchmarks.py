#!/usr/bin/env python
"""
Benchmark suite orchestrator.

This script times alternative implementations of common numeric idioms
and reports, for every comparison, the distribution of per-call times
and the memory allocated by each candidate.

Usage:
    python run_benchmarks.py --quick           # Quick test (smallest inputs)
    python run_benchmarks.py --arithmetic      # Arithmetic factoring only
    python run_benchmarks.py --calls           # Function call overhead only
    python run_benchmarks.py --sequences       # Sequence construction only
    python run_benchmarks.py --polynomial      # Polynomial evaluation only
    python run_benchmarks.py --columns         # Column access only
    python run_benchmarks.py --ode             # ODE right-hand sides only
    python run_benchmarks.py --full            # Full benchmark suite
"""

import argparse
import logging
import sys
import warnings
from pathlib import Path

from benchmarks import (
    SECTION_NAMES, SIZE_GROUP_NAMES, BenchmarkRunner,
    count_errors, load_results_from_json, print_summary, save_all_results
)
from benchmarks.log_config import setup_logger
from mark_config import MarkConfig

logger = logging.getLogger(__name__)


def create_argument_parser():
    """Create command line argument parser."""
    parser = argparse.ArgumentParser(
        description="Benchmark alternative implementations of numeric idioms",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_benchmarks.py --quick                 # Quick test with smallest inputs
  python run_benchmarks.py --sequences --polynomial  # Two families, all input sizes
  python run_benchmarks.py --full                  # Every family and input size
  python run_benchmarks.py --regenerate            # Regenerate tables/figures from saved results
  python run_benchmarks.py --parallel --full       # One worker process per family
        """
    )

    parser.add_argument('--quick', action='store_true',
                        help='Quick test with the smallest inputs and short runs')
    parser.add_argument('--arithmetic', action='store_true',
                        help='Run arithmetic factoring benchmarks')
    parser.add_argument('--calls', action='store_true',
                        help='Run function call overhead benchmarks')
    parser.add_argument('--sequences', action='store_true',
                        help='Run sequence construction benchmarks')
    parser.add_argument('--polynomial', action='store_true',
                        help='Run polynomial evaluation benchmarks')
    parser.add_argument('--columns', action='store_true',
                        help='Run column access benchmarks')
    parser.add_argument('--ode', action='store_true',
                        help='Run ODE right-hand side benchmarks')
    parser.add_argument('--full', action='store_true',
                        help='Run every benchmark family on every input size')
    parser.add_argument('--regenerate', action='store_true',
                        help='Regenerate tables and figures from existing results')
    parser.add_argument('--parallel', action='store_true',
                        help='Enable parallel execution with multiprocessing')
    parser.add_argument('--max-workers', type=int,
                        help='Maximum number of worker processes (default: auto-detect)')
    parser.add_argument('--output', type=str, default='benchmark_results',
                        help='Output directory for results (or input for --regenerate)')
    parser.add_argument('--input', type=str,
                        help='Input directory for --regenerate (defaults to --output)')
    parser.add_argument('--log-file', type=str,
                        help='Write detailed diagnostics to this file')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Show debug diagnostics on the console')

    return parser


def determine_benchmark_scope(args):
    """Determine what benchmarks to run, on which size groups, with which settings."""
    selected = [section for section in SECTION_NAMES if getattr(args, section)]

    if args.quick:
        return selected or list(SECTION_NAMES), ['very_small'], MarkConfig.quick()
    elif args.full:
        return list(SECTION_NAMES), list(SIZE_GROUP_NAMES), MarkConfig.full()
    elif selected:
        return selected, list(SIZE_GROUP_NAMES), MarkConfig.full()
    else:
        return None, None, None


def handle_regenerate(args):
    """Handle regeneration of tables and figures from existing results."""
    input_dir = Path(args.input) if args.input else Path(args.output)
    output_dir = Path(args.output)

    print("Regenerating tables and figures from existing results...")
    print(f"Input directory: {input_dir}")
    print(f"Output directory: {output_dir}")

    try:
        results = load_results_from_json(input_dir)
    except (OSError, ValueError, KeyError) as e:
        logger.error("Could not load results from %s: %s", input_dir, e)
        return 1

    if not any(results.values()):
        logger.error("No valid results found in %s", input_dir)
        print("Expected files: " + ", ".join(f"{s}_results.json" for s in SECTION_NAMES))
        return 1

    result_counts = {k: len(v) for k, v in results.items() if v}
    print(f"Loaded results: {result_counts}")

    # Regenerate outputs without running benchmarks (don't resave JSON files)
    save_all_results(results, output_dir, save_raw_data=False)
    print_summary(results)
    print("\nTables and figures regenerated successfully!")
    return 0


def main(argv=None):
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logger(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=Path(args.log_file) if args.log_file else None
    )

    if args.regenerate:
        return handle_regenerate(args)

    benchmark_types, size_groups, mark_config = determine_benchmark_scope(args)
    if benchmark_types is None:
        parser.print_help()
        return 1

    # numpy overflow/underflow warnings in candidate code are not results
    warnings.filterwarnings('ignore', category=RuntimeWarning)

    runner = BenchmarkRunner(
        parallel=args.parallel,
        n_workers=args.max_workers,
        mark_config=mark_config
    )
    results = runner.run_benchmarks(benchmark_types, size_groups)

    # Save results and generate outputs
    save_all_results(results, Path(args.output))
    print_summary(results)

    n_errors = count_errors(results) + len(runner.failed_sections)
    if n_errors:
        logger.error("%d benchmark failure(s)", n_errors)
        return 1

    print("\nBenchmarking complete!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
