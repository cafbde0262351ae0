#!/usr/bin/env python
"""
Benchmark runner - sequential or parallel execution.
"""

import logging
import os
import sys
from multiprocessing import Pool
from typing import Dict, List, Optional

import psutil

from benchmarks.arithmetic import run_arithmetic_benchmarks
from benchmarks.benchmark_utils import (
    SECTION_NAMES, SectionResult, create_benchmark_config, print_system_info
)
from benchmarks.calls import run_call_benchmarks
from benchmarks.columns import run_column_benchmarks
from benchmarks.ode import run_ode_benchmarks
from benchmarks.polynomial import run_polynomial_benchmarks
from benchmarks.sequences import run_sequence_benchmarks
from mark_config import MarkConfig

logger = logging.getLogger(__name__)

SECTION_RUNNERS = {
    'arithmetic': run_arithmetic_benchmarks,
    'calls': run_call_benchmarks,
    'sequences': run_sequence_benchmarks,
    'polynomial': run_polynomial_benchmarks,
    'columns': run_column_benchmarks,
    'ode': run_ode_benchmarks,
}


def physical_cores() -> int:
    # psutil returns None when the physical count cannot be determined
    return psutil.cpu_count(logical=False) or psutil.cpu_count(logical=True) or 1


def setup_worker_environment(n_workers: int, total_cores: Optional[int] = None):
    """Configure worker process threading."""
    if total_cores is None:
        total_cores = physical_cores()
    threads_per_worker = max(1, total_cores // n_workers)

    os.environ['OMP_NUM_THREADS'] = str(threads_per_worker)
    os.environ['OPENBLAS_NUM_THREADS'] = str(threads_per_worker)
    os.environ['MKL_NUM_THREADS'] = str(threads_per_worker)
    os.environ['NUMEXPR_NUM_THREADS'] = str(threads_per_worker)

    # Suppress worker output to avoid console clutter
    sys.stdout = open(os.devnull, 'w')
    sys.stderr = open(os.devnull, 'w')


def execute_benchmark_task(args):
    """Execute a single benchmark task."""
    section, size_groups, config, mark_config, verbose = args

    try:
        if section not in SECTION_RUNNERS:
            raise ValueError(f"Unknown benchmark type: {section}")
        return SECTION_RUNNERS[section](size_groups, config, mark_config, verbose=verbose)

    except Exception as e:
        return f"ERROR in {section}: {e}"


class BenchmarkRunner:
    def __init__(self, parallel: bool = False, n_workers: Optional[int] = None,
                 total_cores: Optional[int] = None, mark_config: Optional[MarkConfig] = None,
                 show_system_info: bool = True):
        self.parallel = parallel
        # Auto-detect total cores if not specified
        if total_cores is None:
            total_cores = physical_cores()
        self.total_cores = total_cores

        # Use all physical cores by default in parallel mode
        if parallel and n_workers is None:
            self.n_workers = total_cores
        else:
            self.n_workers = n_workers or 1

        self.config = create_benchmark_config()
        self.mark_config = mark_config or MarkConfig()
        self.failed_sections = []

        if show_system_info:
            print_system_info()
            if parallel:
                print(f"Parallel mode: {self.n_workers} workers, "
                      f"{max(1, total_cores // self.n_workers)} threads each")
            else:
                print("Sequential mode")

    def run_benchmarks(self, benchmark_types: List[str], size_groups: List[str]) -> Dict[str, List[SectionResult]]:
        print(f"Running {len(benchmark_types)} benchmark types on {len(size_groups)} size groups")

        # Filter valid size groups
        valid_size_groups = [sg for sg in size_groups if sg in self.config.input_sizes]
        unknown = sorted(set(size_groups) - set(valid_size_groups))
        if unknown:
            logger.warning("Ignoring unknown size groups: %s", ", ".join(unknown))

        if self.parallel:
            return self._run_parallel(benchmark_types, valid_size_groups)
        else:
            return self._run_sequential(benchmark_types, valid_size_groups)

    def _run_sequential(self, benchmark_types: List[str], size_groups: List[str]) -> Dict[str, List[SectionResult]]:
        all_results = {section: [] for section in SECTION_NAMES}

        for section in benchmark_types:
            results = execute_benchmark_task((
                section, size_groups, self.config, self.mark_config, True
            ))

            if isinstance(results, str) and results.startswith("ERROR"):
                self.failed_sections.append(section)
                logger.error(results)
            else:
                all_results[section].extend(results)

        return all_results

    def _run_parallel(self, benchmark_types: List[str], size_groups: List[str]) -> Dict[str, List[SectionResult]]:
        # One task per benchmark family
        task_args = [
            (section, size_groups, self.config, self.mark_config, False)
            for section in benchmark_types
        ]

        all_results = {section: [] for section in SECTION_NAMES}

        with Pool(processes=self.n_workers,
                  initializer=setup_worker_environment,
                  initargs=(self.n_workers, self.total_cores)) as pool:

            for i, (section, results) in enumerate(zip(benchmark_types, pool.map(execute_benchmark_task, task_args)), 1):
                if isinstance(results, str) and results.startswith("ERROR"):
                    print(f"[{i}/{len(benchmark_types)}] ✗ {section} - {results}")
                    self.failed_sections.append(section)
                    logger.error(results)
                else:
                    print(f"[{i}/{len(benchmark_types)}] ✓ {section}")
                    all_results[section].extend(results)

        return all_results
