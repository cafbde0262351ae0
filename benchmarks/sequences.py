#!/usr/bin/env python
"""
Benchmark for sequence construction.
"""

from functools import partial
from typing import Any, List, Tuple

from .benchmark_utils import SectionResult, run_sized_cases
from mark_config import MarkConfig
from sequence_builders import get_builders


def get_sequence_cases(n: int) -> List[Tuple[str, Any]]:
    """Get the sequence construction comparison for length n."""
    candidates = {name: partial(builder, n) for name, builder in get_builders(n).items()}
    return [('integers', candidates)]


def run_sequence_benchmarks(size_groups: List[str], config, mark_config: MarkConfig,
                            verbose: bool = True) -> List[SectionResult]:
    """Run sequence construction benchmarks for specified size groups."""
    return run_sized_cases(
        'sequences', "Sequence Construction Benchmarks", get_sequence_cases,
        size_groups, config.input_sizes, mark_config, verbose=verbose
    )
