"""
Benchmark cells comparing alternative implementations of numeric idioms.
"""

from .arithmetic import get_arithmetic_cases, run_arithmetic_benchmarks
from .calls import get_call_cases, run_call_benchmarks
from .sequences import get_sequence_cases, run_sequence_benchmarks
from .polynomial import get_polynomial_cases, run_polynomial_benchmarks
from .columns import get_column_cases, run_column_benchmarks
from .ode import get_ode_cases, run_ode_benchmarks
from .benchmark_utils import (
    BenchmarkConfig, SectionResult, SECTION_NAMES, SIZE_GROUP_NAMES,
    create_benchmark_config, print_size_group_subheader, print_system_info, get_system_info
)
from .benchmark_output import save_all_results, print_summary, load_results_from_json, count_errors
from .benchmark_runner import BenchmarkRunner

__all__ = [
    'get_arithmetic_cases', 'run_arithmetic_benchmarks',
    'get_call_cases', 'run_call_benchmarks',
    'get_sequence_cases', 'run_sequence_benchmarks',
    'get_polynomial_cases', 'run_polynomial_benchmarks',
    'get_column_cases', 'run_column_benchmarks',
    'get_ode_cases', 'run_ode_benchmarks',
    'BenchmarkConfig', 'SectionResult', 'SECTION_NAMES', 'SIZE_GROUP_NAMES',
    'create_benchmark_config', 'print_size_group_subheader', 'print_system_info', 'get_system_info',
    'save_all_results', 'print_summary', 'load_results_from_json', 'count_errors',
    'BenchmarkRunner'
]
