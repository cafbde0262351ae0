#!/usr/bin/env python3
"""
Unit tests for the timing harness: mark, press, memory tracing and the
equivalence check.
"""

import gc
import json

import pytest
import numpy as np
import pandas as pd

from harness import (
    BenchmarkError, CandidateResult, MarkResult, ResultMismatchError, TimingStats,
    mark, press, profile_memory, results_equal, time_candidate, time_operation
)
from mark_config import MarkConfig


def test_timing_stats_from_times():
    """Test summary statistics of a known sample."""
    stats = TimingStats.from_times([1.0, 2.0, 3.0])
    assert stats.n_runs == 3
    assert stats.mean == 2.0
    assert stats.median == 2.0
    assert stats.std == pytest.approx(1.0)
    assert stats.min == 1.0
    assert stats.max == 3.0
    assert stats.total == 6.0
    assert stats.itr_per_sec == pytest.approx(0.5)


def test_timing_stats_single_run_has_zero_std():
    stats = TimingStats.from_times([0.25])
    assert stats.std == 0.0
    assert stats.median == 0.25


def test_timing_stats_zeros():
    stats = TimingStats.zeros(4)
    assert stats.times == [0.0] * 4
    assert stats.itr_per_sec == 0.0


def test_time_operation_runs_requested_count():
    calls = []
    result, stats = time_operation(lambda x: calls.append(x) or x * 2, 3, 21)
    assert result == 42
    assert len(calls) == 3
    assert stats.n_runs == 3
    assert all(t >= 0 for t in stats.times)


def test_time_operation_rejects_zero_runs():
    with pytest.raises(ValueError):
        time_operation(lambda: None, 0)


def test_time_candidate_respects_max_iterations():
    """With an unreachable minimum time the loop stops at max_iterations."""
    _, stats, _ = time_candidate(lambda: None, min_time=1e6, min_iterations=1, max_iterations=5)
    assert stats.n_runs == 5


def test_time_candidate_respects_min_iterations():
    _, stats, _ = time_candidate(lambda: None, min_time=0.0, min_iterations=4, max_iterations=100)
    assert stats.n_runs == 4


def test_time_candidate_counts_collections():
    _, stats, n_gc = time_candidate(gc.collect, min_time=0.0, min_iterations=2, max_iterations=2)
    assert stats.n_runs == 2
    assert n_gc >= 2


def test_mark_preserves_candidate_order(fast_config):
    """Test results come back in the order candidates were given."""
    result = mark({
        'third': lambda: 3 - 0,
        'first': lambda: 1 + 2,
        'second': lambda: 6 // 2,
    }, config=fast_config)

    assert result.names == ['third', 'first', 'second']
    for candidate in result:
        assert fast_config.min_iterations <= candidate.timing.n_runs <= fast_config.max_iterations
        assert candidate.value == 3


def test_mark_names_sequence_candidates(fast_config):
    def build_list():
        return [1, 2, 3]

    def build_array():
        return np.array([1, 2, 3])

    result = mark([build_list, build_array], config=fast_config)
    assert result.names == ['build_list', 'build_array']


def test_mark_relative_fastest_is_one(fast_config):
    result = mark({'a': lambda: sum(range(100)), 'b': lambda: 4950}, config=fast_config)
    relative = result.relative()
    assert relative[result.fastest().name] == 1.0
    assert all(r >= 1.0 for r in relative.values())


def test_mark_rejects_empty_candidates(fast_config):
    with pytest.raises(ValueError):
        mark({}, config=fast_config)


def test_mark_rejects_duplicate_names(fast_config):
    def f():
        return 1

    with pytest.raises(ValueError, match="Duplicate"):
        mark([f, f], config=fast_config)


def test_mark_rejects_non_callable(fast_config):
    with pytest.raises(ValueError, match="not callable"):
        mark({'a': 1}, config=fast_config)


def test_mark_validates_config():
    with pytest.raises(ValueError):
        mark({'a': lambda: 1}, config=MarkConfig(min_iterations=0))


def test_mark_detects_mismatch(fast_config):
    """Test a candidate computing a different value is reported by name."""
    with pytest.raises(ResultMismatchError) as excinfo:
        mark({
            'range': lambda: list(range(5)),
            'off_by_one': lambda: list(range(1, 6)),
        }, config=fast_config)

    assert excinfo.value.reference == 'range'
    assert excinfo.value.candidate == 'off_by_one'
    assert isinstance(excinfo.value, BenchmarkError)


def test_mark_check_disabled(fast_config):
    result = mark({'a': lambda: 1, 'b': lambda: 2}, config=fast_config, check=False)
    assert len(result) == 2


def test_mark_custom_check(fast_config):
    """Test a user-supplied comparison replaces the default check."""
    same_length = lambda a, b: len(a) == len(b)  # noqa: E731
    result = mark({'a': lambda: 'abc', 'b': lambda: 'xyz'}, config=fast_config, check=same_length)
    assert result.names == ['a', 'b']

    with pytest.raises(ResultMismatchError):
        mark({'a': lambda: 'abc', 'b': lambda: 'xy'}, config=fast_config, check=same_length)


def test_mark_propagates_candidate_errors(fast_config):
    with pytest.raises(ZeroDivisionError):
        mark({'ok': lambda: 1.0, 'bad': lambda: 1 / 0}, config=fast_config)


def test_mark_uses_config_tolerance(fast_config):
    loose = fast_config.with_tolerance(1e-3)
    mark({'a': lambda: 1.0, 'b': lambda: 1.0001}, config=loose)

    with pytest.raises(ResultMismatchError):
        mark({'a': lambda: 1.0, 'b': lambda: 1.0001}, config=fast_config)


def test_mark_memory_disabled(fast_config):
    config = fast_config.copy()
    config.memory = False
    result = mark({'a': lambda: [0] * 1000}, config=config)
    assert result['a'].mem_alloc == 0
    assert result['a'].n_alloc == 0


def test_profile_memory_sees_allocation():
    """Test a large list allocation is attributed to the call."""
    mem_alloc, n_alloc = profile_memory(lambda: [0] * 100_000)
    # 100,000 pointers, at least 4 bytes each
    assert mem_alloc >= 400_000
    assert n_alloc >= 1


def test_profile_memory_small_call():
    mem_alloc, _ = profile_memory(lambda: None)
    big_alloc, _ = profile_memory(lambda: [0] * 100_000)
    assert mem_alloc < big_alloc


def test_press_grid_order(fast_config):
    """Test press visits the Cartesian product in grid order."""
    def factory(n, k):
        return {'mul': lambda: n * k, 'add': lambda: sum([n] * k)}

    results = press(factory, {'n': [1, 2], 'k': [3, 4]}, config=fast_config)
    assert [params for params, _ in results] == [
        {'n': 1, 'k': 3}, {'n': 1, 'k': 4},
        {'n': 2, 'k': 3}, {'n': 2, 'k': 4},
    ]
    for params, result in results:
        assert result['mul'].value == params['n'] * params['k']


def test_settings_are_keyword_only(fast_config):
    with pytest.raises(TypeError):
        mark({'a': lambda: 1}, fast_config)
    with pytest.raises(TypeError):
        press(lambda n: {'a': lambda: n}, {'n': [1]}, fast_config)


def test_zero_filled_mark():
    result = MarkResult.zeros(['a', 'b'])
    assert result.names == ['a', 'b']
    assert all(c.timing == TimingStats.zeros() and c.mem_alloc == 0 for c in result)
    assert result.relative() == {'a': 1.0, 'b': 1.0}


def test_results_equal_sequences():
    assert results_equal(range(5), np.arange(5))
    assert results_equal([0, 1, 2], (0, 1, 2))
    assert not results_equal(range(5), np.arange(6))
    assert not results_equal([0, 1, 2], [0, 1, 3])


def test_results_equal_pandas():
    series = pd.Series([1.0, 2.0, 3.0], name='b')
    assert results_equal(series, np.array([1.0, 2.0, 3.0]))
    assert results_equal(series, series.rename('other'))
    frame = pd.DataFrame({'a': [1.0, 2.0]})
    assert results_equal(frame, np.array([[1.0], [2.0]]))


def test_results_equal_tolerance():
    assert results_equal(1.0, 1.0 + 1e-12)
    assert not results_equal(1.0, 1.1)
    assert results_equal(np.array([0.0]), np.array([1e-13]), atol=1e-12)
    assert not results_equal(np.array([0.0]), np.array([1e-13]))


def test_results_equal_non_numeric():
    assert results_equal(['a', 'b'], ['a', 'b'])
    assert not results_equal(['a', 'b'], ['a', 'c'])
    assert results_equal('abc', 'abc')
    assert results_equal(None, None)


def test_mark_result_frame(fast_config):
    result = mark({'a': lambda: 1, 'b': lambda: 1}, config=fast_config)
    frame = result.to_frame()
    assert list(frame['expression']) == ['a', 'b']
    for column in ['min', 'median', 'max', 'itr/sec', 'mem_alloc', 'n_alloc', 'n_gc', 'n_itr', 'relative']:
        assert column in frame.columns
    assert frame['relative'].min() == 1.0


def test_mark_result_round_trip(fast_config):
    """Test serialization drops values but keeps measurements."""
    result = mark({'a': lambda: [1, 2], 'b': lambda: (1, 2)}, config=fast_config)
    data = json.loads(json.dumps(result.to_dict()))
    restored = MarkResult.from_dict(data)

    assert restored.names == result.names
    for original, loaded in zip(result, restored):
        assert loaded.timing == original.timing
        assert loaded.mem_alloc == original.mem_alloc
        assert loaded.value is None


def test_mark_result_lookup_unknown_name():
    result = MarkResult(candidates=[CandidateResult('a', TimingStats.from_times([1.0]))])
    with pytest.raises(KeyError):
        result['missing']
