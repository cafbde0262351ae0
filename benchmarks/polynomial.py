#!/usr/bin/env python
"""
Benchmark for polynomial evaluation.
"""

from typing import Any, List, Tuple

from .benchmark_utils import SectionResult, run_sized_cases
from mark_config import MarkConfig
from polynomials import (
    naive_polynomial, running_power_polynomial, horner,
    power_matrix_polynomial, numpy_polyval,
    example_coefficients, example_points
)

DEGREES = [3, 10]

POLYNOMIAL_ATOL = 1e-12


def get_polynomial_cases(n: int) -> List[Tuple[str, Any]]:
    """Get polynomial evaluation comparisons at n points, one per degree."""
    x = example_points(n)
    cases = []
    for degree in DEGREES:
        coeffs = example_coefficients(degree)
        cases.append((f'degree_{degree}', {
            'naive': lambda coeffs=coeffs: naive_polynomial(x, coeffs),
            'running_power': lambda coeffs=coeffs: running_power_polynomial(x, coeffs),
            'horner': lambda coeffs=coeffs: horner(x, coeffs),
            'power_matrix': lambda coeffs=coeffs: power_matrix_polynomial(x, coeffs),
            'polyval': lambda coeffs=coeffs: numpy_polyval(x, coeffs),
        }))
    return cases


def run_polynomial_benchmarks(size_groups: List[str], config, mark_config: MarkConfig,
                              verbose: bool = True) -> List[SectionResult]:
    """Run polynomial evaluation benchmarks for specified size groups."""
    mark_config = mark_config.with_tolerance(mark_config.rtol, POLYNOMIAL_ATOL)
    return run_sized_cases(
        'polynomial', "Polynomial Evaluation Benchmarks", get_polynomial_cases,
        size_groups, config.input_sizes, mark_config, verbose=verbose
    )
