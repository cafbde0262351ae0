#!/usr/bin/env python
"""
Benchmark for arithmetic factoring.
"""

from typing import Any, List, Tuple

from .benchmark_utils import SectionResult, run_sized_cases
from factoring import (
    expanded_sum_product, factored_sum_product,
    square_power, square_multiply,
    divide_by_constant, multiply_by_reciprocal,
    mean_of_squares_explicit, mean_of_squares_numpy,
    example_vectors
)
from mark_config import MarkConfig

# Rewritten expressions differ in rounding; values near zero need an absolute floor.
ARITHMETIC_ATOL = 1e-12


def get_arithmetic_cases(n: int) -> List[Tuple[str, Any]]:
    """Get the factoring comparisons for vectors of length n."""
    a, b, c = example_vectors(n)
    k = 3.7

    return [
        ('sum_product', {
            'a*b + a*c': lambda: expanded_sum_product(a, b, c),
            'a*(b + c)': lambda: factored_sum_product(a, b, c),
        }),
        ('square', {
            'x**2': lambda: square_power(a),
            'x*x': lambda: square_multiply(a),
        }),
        ('division', {
            'x / k': lambda: divide_by_constant(a, k),
            'x * (1/k)': lambda: multiply_by_reciprocal(a, k),
        }),
        ('mean_of_squares', {
            'sum(x*x) / n': lambda: mean_of_squares_explicit(a),
            'mean(square(x))': lambda: mean_of_squares_numpy(a),
        }),
    ]


def run_arithmetic_benchmarks(size_groups: List[str], config, mark_config: MarkConfig,
                              verbose: bool = True) -> List[SectionResult]:
    """Run arithmetic factoring benchmarks for specified size groups."""
    mark_config = mark_config.with_tolerance(mark_config.rtol, ARITHMETIC_ATOL)
    return run_sized_cases(
        'arithmetic', "Arithmetic Factoring Benchmarks", get_arithmetic_cases,
        size_groups, config.input_sizes, mark_config, verbose=verbose
    )
