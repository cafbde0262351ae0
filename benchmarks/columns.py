#!/usr/bin/env python
"""
Benchmark for tabular column access.
"""

from typing import Any, List, Tuple

from .benchmark_utils import SectionResult, run_sized_cases
from frame_access import COLUMN_ACCESSORS, ELEMENT_ACCESSORS, make_frame
from mark_config import MarkConfig

COLUMN = 'b'


def get_column_cases(n: int) -> List[Tuple[str, Any]]:
    """Get column and element access comparisons on an n-row frame."""
    df = make_frame(n)
    row = n // 2

    column_candidates = {
        name: (lambda accessor=accessor: accessor(df, COLUMN))
        for name, accessor in COLUMN_ACCESSORS.items()
    }
    element_candidates = {
        name: (lambda accessor=accessor: accessor(df, row, COLUMN))
        for name, accessor in ELEMENT_ACCESSORS.items()
    }
    return [
        ('column', column_candidates),
        ('element', element_candidates),
    ]


def run_column_benchmarks(size_groups: List[str], config, mark_config: MarkConfig,
                          verbose: bool = True) -> List[SectionResult]:
    """Run column access benchmarks for specified size groups."""
    return run_sized_cases(
        'columns', "Column Access Benchmarks", get_column_cases,
        size_groups, config.input_sizes, mark_config, verbose=verbose
    )
