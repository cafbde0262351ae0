#!/usr/bin/env python
"""
Shared utilities for benchmark modules.
"""

import logging
import platform
import sys
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import psutil

from harness import MarkResult, mark, normalize_candidates
from mark_config import MarkConfig

logger = logging.getLogger(__name__)

SECTION_NAMES = ['arithmetic', 'calls', 'sequences', 'polynomial', 'columns', 'ode']

SIZE_GROUP_NAMES = ['very_small', 'small', 'medium', 'large', 'very_large']


@dataclass
class BenchmarkConfig:
    """Centralized benchmark configuration."""
    input_sizes: Dict[str, List[int]]
    ode_parameters: Dict[str, Dict[str, float]]
    output_formats: List[str] = None

    def __post_init__(self):
        if self.output_formats is None:
            self.output_formats = ['json', 'latex', 'png', 'pdf']


@dataclass
class SectionResult:
    """Result of one benchmark cell: a comparison of candidate expressions."""
    section: str
    case: str
    size_group: str
    params: Dict[str, Any]
    mark: MarkResult
    error: Optional[str] = None

    @property
    def size(self) -> Optional[int]:
        return self.params.get('n')

    def to_dict(self) -> dict:
        return {
            'section': self.section,
            'case': self.case,
            'size_group': self.size_group,
            'params': self.params,
            'error': self.error,
            'candidates': self.mark.to_dict()['candidates'],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'SectionResult':
        return cls(
            section=data['section'],
            case=data['case'],
            size_group=data['size_group'],
            params=dict(data.get('params', {})),
            mark=MarkResult.from_dict({'candidates': data.get('candidates', [])}),
            error=data.get('error'),
        )


def get_input_sizes() -> Dict[str, List[int]]:
    """Get input sizes (vector lengths, sequence lengths, rows) per size group."""
    return {
        'very_small': [10, 100],
        'small': [1_000],
        'medium': [10_000],
        'large': [100_000],
        'very_large': [1_000_000],
    }


def get_ode_parameters() -> Dict[str, Dict[str, float]]:
    """Get the example parameter vectors for the ODE benchmarks."""
    from ode_models import EXAMPLE_PARAMETERS
    return {name: dict(params) for name, params in EXAMPLE_PARAMETERS.items()}


def run_case(section: str, case: str, size_group: str, params: Dict[str, Any],
             candidates, mark_config: MarkConfig, check=True) -> SectionResult:
    """
    Run a single benchmark cell.

    Any exception, including a failed equivalence check, is recorded on
    the returned result instead of being raised.
    """
    names = []
    try:
        names = [name for name, _ in normalize_candidates(candidates)]
        result = mark(candidates, config=mark_config, check=check)
        # Values are only needed for the equivalence check
        for candidate in result:
            candidate.value = None
        return SectionResult(section, case, size_group, dict(params), result)
    except Exception as e:
        logger.debug("%s/%s %s failed", section, case, params, exc_info=True)
        return SectionResult(section, case, size_group, dict(params),
                             MarkResult.zeros(names), error=f"{type(e).__name__}: {e}")


def run_sized_cases(
    section: str,
    title: str,
    get_cases: Callable[[int], Iterable[Tuple[str, Any]]],
    size_groups: List[str],
    input_sizes: Dict[str, List[int]],
    mark_config: MarkConfig,
    check=True,
    verbose: bool = True
) -> List[SectionResult]:
    """
    Run every case returned by `get_cases(n)` for each input size n.

    Used by the families whose cells are parameterized only by input size.
    """
    if verbose:
        print_header(title)
        print(f"Settings: {mark_config}")

    results = []
    for size_group in size_groups:
        if size_group not in input_sizes:
            continue

        if verbose:
            print_size_group_subheader(size_group)

        for n in input_sizes[size_group]:
            if verbose:
                print(f"\nInput size: n = {n:,}")

            for case, candidates in get_cases(n):
                if verbose:
                    print(f"  {case}...", end=' ', flush=True)
                result = run_case(section, case, size_group, {'n': n}, candidates, mark_config, check)
                if verbose:
                    print_case_line(result)
                results.append(result)

    return results


def print_case_line(result: SectionResult):
    """Print the outcome of one cell on the current line."""
    if result.error:
        print(f"ERROR: {result.error}")
        return
    fastest = result.mark.fastest()
    slowest = max(result.mark.candidates, key=lambda c: c.timing.median)
    ratio = result.mark.relative()[slowest.name]
    print(f"fastest {fastest.name} ({format_seconds(fastest.timing.median)}), "
          f"slowest {slowest.name} ({ratio:.1f}x)")


def format_seconds(seconds: float) -> str:
    """Format a duration with a unit that keeps 3 significant digits."""
    # The unit is chosen after rounding so 999.7ns prints as 1µs
    for scale, unit in [(1, 's'), (1e3, 'ms'), (1e6, 'µs')]:
        value = float(f"{seconds * scale:.3g}")
        if value >= 1:
            return f"{value:.3g}{unit}"
    return f"{seconds * 1e9:.3g}ns"


def format_bytes(n_bytes: float) -> str:
    for unit in ['B', 'KB', 'MB', 'GB']:
        if abs(n_bytes) < 1024 or unit == 'GB':
            return f"{n_bytes:.0f}{unit}" if unit == 'B' else f"{n_bytes:.2f}{unit}"
        n_bytes /= 1024


def print_header(title: str, char: str = "="):
    """Print formatted header."""
    print(f"\n{title}")
    print(char * len(title))


def print_size_group_subheader(size_group: str):
    """Print formatted header for an input size group."""
    title = size_group.replace('_', ' ').title()
    print_header(title, char='-')


def get_system_info() -> dict:
    """Get comprehensive system information for benchmark results."""
    try:
        # Basic system info
        info = {
            'platform': platform.platform(),
            'system': platform.system(),
            'release': platform.release(),
            'version': platform.version(),
            'machine': platform.machine(),
            'processor': platform.processor(),
            'python_version': sys.version,
            'python_implementation': platform.python_implementation(),
        }

        # CPU information
        info['cpu_count_logical'] = psutil.cpu_count(logical=True)
        info['cpu_count_physical'] = psutil.cpu_count(logical=False)

        # Memory information
        memory = psutil.virtual_memory()
        info['total_memory_gb'] = round(memory.total / (1024**3), 1)
        info['available_memory_gb'] = round(memory.available / (1024**3), 1)

        # cpu_freq is unavailable on some platforms and containers
        try:
            freq = psutil.cpu_freq()
            info['cpu_freq_max'] = round(freq.max / 1000, 2) if freq and freq.max else None
        except (OSError, NotImplementedError, AttributeError):
            info['cpu_freq_max'] = None

        info['library_versions'] = get_library_versions()
        return info
    except Exception as e:
        return {'error': f"Could not gather system info: {e}"}


def get_library_versions() -> Dict[str, str]:
    """Versions of the libraries whose code is being timed."""
    import numpy
    import pandas
    import scipy
    return {
        'numpy': numpy.__version__,
        'scipy': scipy.__version__,
        'pandas': pandas.__version__,
    }


def print_system_info():
    """Print formatted system information."""
    print_header("System Information")

    info = get_system_info()

    if 'error' in info:
        print(f"Warning: {info['error']}")
        return

    print(f"Platform: {info['system']} {info['release']} ({info['machine']})")
    print(f"Processor: {info['processor']}")
    print(f"CPU Cores: {info['cpu_count_physical']} physical, {info['cpu_count_logical']} logical")
    if info['cpu_freq_max']:
        print(f"CPU Max Frequency: {info['cpu_freq_max']} GHz")
    print(f"Memory: {info['total_memory_gb']} GB total, {info['available_memory_gb']} GB available")
    print(f"Python: {info['python_implementation']} {platform.python_version()}")
    labels = {'numpy': 'NumPy', 'scipy': 'SciPy', 'pandas': 'pandas'}
    for name, version in info['library_versions'].items():
        print(f"{labels.get(name, name)}: {version}")


def create_benchmark_config() -> BenchmarkConfig:
    """Create standard benchmark configuration."""
    return BenchmarkConfig(
        input_sizes=get_input_sizes(),
        ode_parameters=get_ode_parameters()
    )
