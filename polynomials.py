"""
Polynomial evaluation variants.

Coefficients are ordered lowest degree first, so `coeffs = [c0, c1, c2]`
is c0 + c1*x + c2*x**2.  Every function accepts a scalar or an array `x`.
"""

import numpy as np
from numpy.polynomial import polynomial as P


def _check_coeffs(coeffs):
    coeffs = np.asarray(coeffs, dtype=float)
    if coeffs.ndim != 1 or coeffs.size == 0:
        raise ValueError("coeffs must be a non-empty one-dimensional sequence")
    return coeffs


def naive_polynomial(x, coeffs):
    """Sum of c_i * x**i, computing every power from scratch."""
    coeffs = _check_coeffs(coeffs)
    x = np.asarray(x, dtype=float)
    total = np.zeros_like(x)
    for i, c in enumerate(coeffs):
        total = total + c * x ** i
    return total


def running_power_polynomial(x, coeffs):
    """Sum of c_i * x**i, carrying x**i forward by one multiplication."""
    coeffs = _check_coeffs(coeffs)
    x = np.asarray(x, dtype=float)
    total = np.zeros_like(x)
    power = np.ones_like(x)
    for c in coeffs:
        total = total + c * power
        power = power * x
    return total


def horner(x, coeffs):
    """
    Horner's rule.

    Evaluates (...((c_n x + c_{n-1}) x + c_{n-2}) ...) x + c_0 with
    n multiplications and n additions.
    """
    coeffs = _check_coeffs(coeffs)
    x = np.asarray(x, dtype=float)
    result = np.full_like(x, coeffs[-1])
    for c in coeffs[-2::-1]:
        result = result * x + c
    return result


def power_matrix_polynomial(x, coeffs):
    """Vandermonde matrix times coefficient vector."""
    coeffs = _check_coeffs(coeffs)
    x = np.asarray(x, dtype=float)
    powers = np.power.outer(x, np.arange(coeffs.size))
    return powers @ coeffs


def numpy_polyval(x, coeffs):
    coeffs = _check_coeffs(coeffs)
    return P.polyval(np.asarray(x, dtype=float), coeffs)


def example_coefficients(degree, seed=42):
    """Random coefficients in [-1, 1] for a polynomial of the given degree."""
    if degree < 0:
        raise ValueError(f"degree must be non-negative, got {degree}")
    rng = np.random.default_rng(seed)
    return rng.uniform(-1.0, 1.0, degree + 1)


def example_points(n, seed=7):
    """Evaluation points in [-1, 1]; keeps high powers well scaled."""
    if n < 1:
        raise ValueError(f"n must be positive, got {n}")
    rng = np.random.default_rng(seed)
    return rng.uniform(-1.0, 1.0, n)
