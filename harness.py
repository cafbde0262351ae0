"""
Timing harness for comparing equivalent candidate expressions.

Each candidate is a zero-argument callable.  `mark` runs every candidate
repeatedly, records per-invocation wall-clock time, traces the memory
allocated by one extra call, counts garbage collections during the timed
loop, and checks that all candidates computed the same value.
"""

import gc
import itertools
import logging
import time
import tracemalloc
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from mark_config import MarkConfig

logger = logging.getLogger(__name__)


class BenchmarkError(Exception):
    """Base class for harness errors."""


class ResultMismatchError(BenchmarkError):
    """Raised when two candidates compute different values."""

    def __init__(self, reference: str, candidate: str):
        self.reference = reference
        self.candidate = candidate
        super().__init__(f"Candidate '{candidate}' does not match '{reference}'")


@dataclass
class TimingStats:
    """Statistics from multiple timing runs."""
    times: List[float]
    mean: float
    median: float
    std: float
    min: float
    max: float
    n_runs: int

    @classmethod
    def from_times(cls, times: Sequence[float]) -> 'TimingStats':
        """Summarize a list of per-invocation times in seconds."""
        times = [float(t) for t in times]
        if not times:
            return cls.zeros(0)
        times_array = np.array(times)
        return cls(
            times=times,
            mean=float(np.mean(times_array)),
            median=float(np.median(times_array)),
            std=float(np.std(times_array, ddof=1) if len(times) > 1 else 0.0),
            min=float(np.min(times_array)),
            max=float(np.max(times_array)),
            n_runs=len(times)
        )

    @classmethod
    def zeros(cls, n_runs: int = 0) -> 'TimingStats':
        """Zero-filled stats, recorded for candidates of a failed case."""
        return cls(times=[0.0] * n_runs, mean=0.0, median=0.0, std=0.0,
                   min=0.0, max=0.0, n_runs=n_runs)

    @property
    def total(self) -> float:
        return float(sum(self.times))

    @property
    def itr_per_sec(self) -> float:
        total = self.total
        return self.n_runs / total if total > 0 else 0.0

    def to_dict(self, prefix: str = "") -> dict:
        return {
            f"{prefix}times": self.times,
            f"{prefix}mean": self.mean,
            f"{prefix}median": self.median,
            f"{prefix}std": self.std,
            f"{prefix}min": self.min,
            f"{prefix}max": self.max,
            f"{prefix}n_runs": self.n_runs
        }

    @classmethod
    def from_dict(cls, data: dict, prefix: str = "") -> 'TimingStats':
        return cls(
            times=list(data[f"{prefix}times"]),
            mean=data[f"{prefix}mean"],
            median=data[f"{prefix}median"],
            std=data[f"{prefix}std"],
            min=data[f"{prefix}min"],
            max=data[f"{prefix}max"],
            n_runs=data[f"{prefix}n_runs"]
        )


@dataclass
class CandidateResult:
    """Measurements for one candidate expression."""
    name: str
    timing: TimingStats
    mem_alloc: int = 0   # bytes allocated by one traced call
    n_alloc: int = 0     # memory blocks allocated by one traced call
    n_gc: int = 0        # collections during the timed loop
    value: Any = field(default=None, repr=False, compare=False)

    def to_dict(self) -> dict:
        result = {
            'name': self.name,
            'mem_alloc': self.mem_alloc,
            'n_alloc': self.n_alloc,
            'n_gc': self.n_gc,
        }
        result.update(self.timing.to_dict("timing_"))
        return result

    @classmethod
    def from_dict(cls, data: dict) -> 'CandidateResult':
        return cls(
            name=data['name'],
            timing=TimingStats.from_dict(data, "timing_"),
            mem_alloc=data.get('mem_alloc', 0),
            n_alloc=data.get('n_alloc', 0),
            n_gc=data.get('n_gc', 0),
        )


@dataclass
class MarkResult:
    """Ordered results of one comparison of candidate expressions."""
    candidates: List[CandidateResult]

    def __len__(self):
        return len(self.candidates)

    def __iter__(self):
        return iter(self.candidates)

    def __getitem__(self, name: str) -> CandidateResult:
        for candidate in self.candidates:
            if candidate.name == name:
                return candidate
        raise KeyError(name)

    @classmethod
    def zeros(cls, names: Sequence[str]) -> 'MarkResult':
        """Zero-filled result for each named candidate of a case that failed."""
        return cls(candidates=[CandidateResult(name, TimingStats.zeros()) for name in names])

    @property
    def names(self) -> List[str]:
        return [c.name for c in self.candidates]

    def fastest(self) -> CandidateResult:
        """Candidate with the smallest median time (first one on ties)."""
        return min(self.candidates, key=lambda c: c.timing.median)

    def relative(self) -> Dict[str, float]:
        """Median time of each candidate relative to the fastest."""
        best = self.fastest().timing.median
        return {
            c.name: (c.timing.median / best if best > 0 else 1.0)
            for c in self.candidates
        }

    def to_frame(self) -> pd.DataFrame:
        """One row per candidate, in the order the candidates were given."""
        relative = self.relative() if self.candidates else {}
        rows = []
        for c in self.candidates:
            rows.append({
                'expression': c.name,
                'min': c.timing.min,
                'median': c.timing.median,
                'max': c.timing.max,
                'itr/sec': c.timing.itr_per_sec,
                'mem_alloc': c.mem_alloc,
                'n_alloc': c.n_alloc,
                'n_gc': c.n_gc,
                'n_itr': c.timing.n_runs,
                'total_time': c.timing.total,
                'relative': relative[c.name],
            })
        return pd.DataFrame(rows, columns=[
            'expression', 'min', 'median', 'max', 'itr/sec', 'mem_alloc',
            'n_alloc', 'n_gc', 'n_itr', 'total_time', 'relative'
        ])

    def to_dict(self) -> dict:
        return {'candidates': [c.to_dict() for c in self.candidates]}

    @classmethod
    def from_dict(cls, data: dict) -> 'MarkResult':
        return cls(candidates=[CandidateResult.from_dict(c) for c in data['candidates']])


class _GcCounter:
    """Count garbage collector runs while active."""

    def __init__(self):
        self.count = 0

    def _callback(self, phase, info):
        if phase == 'start':
            self.count += 1

    def __enter__(self):
        gc.callbacks.append(self._callback)
        return self

    def __exit__(self, *exc):
        gc.callbacks.remove(self._callback)
        return False


def time_operation(func, n_runs: int = 1, *args, **kwargs):
    """
    Time a function call with multiple runs and return statistics.

    Parameters
    ----------
    func : callable
        Function to time
    n_runs : int
        Number of runs to perform (default: 1)
    *args, **kwargs
        Arguments passed to func

    Returns
    -------
    result : any
        Result from the last function call
    stats : TimingStats
        Timing statistics from all runs
    """
    if n_runs < 1:
        raise ValueError(f"n_runs must be at least 1, got {n_runs}")

    times = []
    result = None

    for _ in range(n_runs):
        start_time = time.perf_counter()
        result = func(*args, **kwargs)
        times.append(time.perf_counter() - start_time)

    return result, TimingStats.from_times(times)


def time_candidate(func: Callable[[], Any], min_time: float = 0.5,
                   min_iterations: int = 1, max_iterations: int = 10000):
    """
    Time a zero-argument callable until enough evidence is collected.

    Runs stop once both `min_iterations` calls have been made and their
    accumulated time reaches `min_time`, or when `max_iterations` is hit.

    Returns
    -------
    result : any
        Result from the last call
    stats : TimingStats
        Per-invocation timing statistics
    n_gc : int
        Garbage collections triggered during the loop
    """
    times = []
    total = 0.0
    result = None

    with _GcCounter() as counter:
        while len(times) < max_iterations:
            start_time = time.perf_counter()
            result = func()
            elapsed = time.perf_counter() - start_time
            times.append(elapsed)
            total += elapsed
            if len(times) >= min_iterations and total >= min_time:
                break

    return result, TimingStats.from_times(times), counter.count


def profile_memory(func: Callable[[], Any]) -> Tuple[int, int]:
    """
    Trace one call of `func` and report what it allocated.

    Returns
    -------
    mem_alloc : int
        Bytes allocated by the call and not released before it returned
        (sum of positive size differences between snapshots)
    n_alloc : int
        Number of memory blocks allocated by the call
    """
    was_tracing = tracemalloc.is_tracing()
    if not was_tracing:
        tracemalloc.start()
    try:
        before = tracemalloc.take_snapshot()
        value = func()
        after = tracemalloc.take_snapshot()
    finally:
        if not was_tracing:
            tracemalloc.stop()

    trace_filter = [tracemalloc.Filter(False, tracemalloc.__file__)]
    diff = after.filter_traces(trace_filter).compare_to(
        before.filter_traces(trace_filter), 'lineno')
    mem_alloc = sum(stat.size_diff for stat in diff if stat.size_diff > 0)
    n_alloc = sum(stat.count_diff for stat in diff if stat.count_diff > 0)
    del value
    return int(mem_alloc), int(n_alloc)


def _as_array(value):
    if isinstance(value, (pd.Series, pd.DataFrame, pd.Index)):
        return value.to_numpy()
    if isinstance(value, (range, list, tuple, np.ndarray)):
        return np.asarray(value)
    return None


def results_equal(a, b, rtol: float = 1.5e-8, atol: float = 0.0) -> bool:
    """
    Check that two candidate values are numerically equivalent.

    Arrays, sequences and pandas objects are compared element-wise after
    conversion to numpy; shapes must agree.  Floating values are compared
    with `allclose`, everything else must be exactly equal.
    """
    arr_a, arr_b = _as_array(a), _as_array(b)
    if arr_a is None and arr_b is None:
        if isinstance(a, (int, float, complex, np.number)) and isinstance(b, (int, float, complex, np.number)):
            return bool(np.isclose(a, b, rtol=rtol, atol=atol))
        return a == b
    if arr_a is None:
        arr_a = np.asarray(a)
    if arr_b is None:
        arr_b = np.asarray(b)

    if arr_a.shape != arr_b.shape:
        return False
    numeric = (np.issubdtype(arr_a.dtype, np.number) and np.issubdtype(arr_b.dtype, np.number))
    if numeric:
        return bool(np.allclose(arr_a, arr_b, rtol=rtol, atol=atol, equal_nan=True))
    return bool(np.array_equal(arr_a, arr_b))


def normalize_candidates(candidates) -> List[Tuple[str, Callable[[], Any]]]:
    """Return `(name, func)` pairs, validating names and callables."""
    if isinstance(candidates, Mapping):
        items = list(candidates.items())
    else:
        items = [(getattr(func, '__name__', repr(func)), func) for func in candidates]

    if not items:
        raise ValueError("At least one candidate expression is required")

    names = [name for name, _ in items]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ValueError(f"Duplicate candidate names: {', '.join(duplicates)}")

    for name, func in items:
        if not callable(func):
            raise ValueError(f"Candidate '{name}' is not callable")
    return items


def mark(candidates: Union[Mapping[str, Callable[[], Any]], Sequence[Callable[[], Any]]],
         *,
         config: Optional[MarkConfig] = None,
         check: Union[bool, Callable[[Any, Any], bool]] = True) -> MarkResult:
    """
    Measure and compare the execution time and memory of candidate expressions.

    Parameters
    ----------
    candidates : mapping or sequence
        Zero-argument callables, keyed by display name.  A plain sequence
        is named by each callable's `__name__`.
    config : MarkConfig, optional
        Measurement settings (defaults to `MarkConfig()`)
    check : bool or callable
        True compares every value against the first candidate with
        `results_equal`; a callable `check(reference, value)` replaces it;
        False disables the check.

    Returns
    -------
    result : MarkResult
        Per-candidate statistics in the order given

    Raises
    ------
    ResultMismatchError
        If a candidate's value differs from the first candidate's
    """
    config = config or MarkConfig()
    config.validate()
    items = normalize_candidates(candidates)

    if check is True:
        def compare(a, b):
            return results_equal(a, b, rtol=config.rtol, atol=config.atol)
    elif check:
        compare = check
    else:
        compare = None

    results = []
    for name, func in items:
        value, stats, n_gc = time_candidate(
            func, config.min_time, config.min_iterations, config.max_iterations)
        logger.debug("%s: %d iterations, median %.3gs", name, stats.n_runs, stats.median)

        mem_alloc, n_alloc = profile_memory(func) if config.memory else (0, 0)

        results.append(CandidateResult(
            name=name,
            timing=stats,
            mem_alloc=mem_alloc,
            n_alloc=n_alloc,
            n_gc=n_gc,
            value=value
        ))

    if compare is not None:
        reference = results[0]
        for other in results[1:]:
            if not compare(reference.value, other.value):
                raise ResultMismatchError(reference.name, other.name)

    return MarkResult(candidates=results)


def press(factory: Callable[..., Any], grid: Mapping[str, Sequence[Any]],
          *,
          config: Optional[MarkConfig] = None,
          check: Union[bool, Callable[[Any, Any], bool]] = True) -> List[Tuple[dict, MarkResult]]:
    """
    Run `mark` over every point of a parameter grid.

    `factory(**params)` must return the candidates for one grid point.
    Points are visited in Cartesian-product order of `grid`.
    """
    keys = list(grid.keys())
    results = []
    for values in itertools.product(*(grid[k] for k in keys)):
        params = dict(zip(keys, values))
        logger.debug("press point %s", params)
        results.append((params, mark(factory(**params), config=config, check=check)))
    return results
