#!/usr/bin/env python
"""
Benchmark for function-call overhead.
"""

from typing import Any, List, Tuple

from .benchmark_utils import SectionResult, run_sized_cases
from call_overhead import (
    square_inline, square_via_function, square_via_lambda,
    square_via_map, square_via_wrappers,
    add_chain_inline, add_chain_calls
)
from mark_config import MarkConfig


def get_call_cases(n: int) -> List[Tuple[str, Any]]:
    """Get the call overhead comparisons for n elements."""
    values = list(range(n))

    return [
        ('square', {
            'inline': lambda: square_inline(values),
            'function': lambda: square_via_function(values),
            'lambda': lambda: square_via_lambda(values),
            'map': lambda: square_via_map(values),
            'nested_wrappers': lambda: square_via_wrappers(values),
        }),
        ('add_chain', {
            'inline': lambda: add_chain_inline(values),
            'calls': lambda: add_chain_calls(values),
        }),
    ]


def run_call_benchmarks(size_groups: List[str], config, mark_config: MarkConfig,
                        verbose: bool = True) -> List[SectionResult]:
    """Run function-call overhead benchmarks for specified size groups."""
    return run_sized_cases(
        'calls', "Function Call Overhead Benchmarks", get_call_cases,
        size_groups, config.input_sizes, mark_config, verbose=verbose
    )
