"""
Sequence construction variants.

Each builder returns the integers 0, 1, ..., n-1.
"""

import numpy as np

# Concatenation is quadratic; larger inputs take minutes per call.
CONCATENATE_MAX_N = 10_000


def _check_length(n):
    if n < 0:
        raise ValueError(f"Sequence length must be non-negative, got {n}")


def range_list(n):
    _check_length(n)
    return list(range(n))


def comprehension(n):
    _check_length(n)
    return [i for i in range(n)]


def append_loop(n):
    _check_length(n)
    seq = []
    for i in range(n):
        seq.append(i)
    return seq


def append_loop_bound(n):
    """Append loop with the bound method looked up once."""
    _check_length(n)
    seq = []
    append = seq.append
    for i in range(n):
        append(i)
    return seq


def preallocated(n):
    _check_length(n)
    seq = [0] * n
    for i in range(n):
        seq[i] = i
    return seq


def concatenate_loop(n):
    """Grow by building a new list on every step."""
    _check_length(n)
    seq = []
    for i in range(n):
        seq = seq + [i]
    return seq


def numpy_arange(n):
    _check_length(n)
    return np.arange(n)


def get_builders(n):
    """
    Builders suitable for a sequence of length n.

    The quadratic concatenation loop is only offered up to
    `CONCATENATE_MAX_N`.
    """
    builders = {
        'range_list': range_list,
        'comprehension': comprehension,
        'append_loop': append_loop,
        'append_loop_bound': append_loop_bound,
        'preallocated': preallocated,
        'numpy_arange': numpy_arange,
    }
    if n <= CONCATENATE_MAX_N:
        builders['concatenate_loop'] = concatenate_loop
    return builders
