#!/usr/bin/env python
"""
Benchmark for ODE right-hand side variants.

Unlike the other families, cells are keyed by example parameter vector
rather than input size; every variant integrates the same system.
"""

from functools import partial
from typing import Any, Dict, List, Tuple

from .benchmark_utils import SectionResult, print_header, print_case_line, run_case
from mark_config import MarkConfig
from ode_models import RHS_VARIANTS, solve

# Different arithmetic changes adaptive step choices; trajectories agree to solver accuracy.
ODE_RTOL = 1e-5
ODE_ATOL = 1e-6


def get_ode_cases(parameter_sets: Dict[str, Dict[str, float]]) -> List[Tuple[str, Any]]:
    """Get one comparison of all right-hand side variants per parameter set."""
    return [
        (name, {variant: partial(solve, variant, params) for variant in RHS_VARIANTS})
        for name, params in parameter_sets.items()
    ]


def run_ode_benchmarks(size_groups: List[str], config, mark_config: MarkConfig,
                       verbose: bool = True) -> List[SectionResult]:
    """Run ODE right-hand side benchmarks for every example parameter set."""
    if verbose:
        print_header("ODE Right-Hand Side Benchmarks")
        print(f"Settings: {mark_config}")

    mark_config = mark_config.with_tolerance(ODE_RTOL, ODE_ATOL)

    results = []
    for case, candidates in get_ode_cases(config.ode_parameters):
        if verbose:
            print(f"  {case}...", end=' ', flush=True)
        result = run_case('ode', case, 'parameters', dict(config.ode_parameters[case]),
                          candidates, mark_config)
        if verbose:
            print_case_line(result)
        results.append(result)

    return results
