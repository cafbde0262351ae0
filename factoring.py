"""
Arithmetic factoring variants.

Pairs of expressions that compute the same quantity with a different
number of arithmetic operations.  All functions work element-wise on
numpy arrays and on plain floats.
"""

import numpy as np


def expanded_sum_product(a, b, c):
    """a*b + a*c: two multiplications and one addition."""
    return a * b + a * c


def factored_sum_product(a, b, c):
    """a*(b + c): one multiplication and one addition."""
    return a * (b + c)


def square_power(x):
    return x ** 2


def square_multiply(x):
    return x * x


def divide_by_constant(x, k):
    return x / k


def multiply_by_reciprocal(x, k):
    """Division rewritten as a single reciprocal and a multiplication."""
    if k == 0:
        raise ZeroDivisionError("division by zero")
    inv_k = 1.0 / k
    return x * inv_k


def mean_of_squares_explicit(x):
    """Mean of squares as sum / length."""
    x = np.asarray(x, dtype=float)
    if x.size == 0:
        raise ValueError("mean of an empty array")
    return float(np.sum(x * x) / x.size)


def mean_of_squares_numpy(x):
    x = np.asarray(x, dtype=float)
    if x.size == 0:
        raise ValueError("mean of an empty array")
    return float(np.mean(np.square(x)))


def example_vectors(n, seed=1234):
    """
    Random vectors for the factoring benchmarks.

    Parameters
    ----------
    n : int
        Vector length
    seed : int
        Seed for numpy's default generator

    Returns
    -------
    a, b, c : numpy.ndarray
        Three independent standard normal vectors
    """
    if n < 1:
        raise ValueError(f"n must be positive, got {n}")
    rng = np.random.default_rng(seed)
    return rng.standard_normal(n), rng.standard_normal(n), rng.standard_normal(n)
