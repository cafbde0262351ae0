"""
Lotka-Volterra right-hand sides written in different styles.

    dx/dt = alpha*x - beta*x*y
    dy/dt = delta*x*y - gamma*y

All variants describe the same system; they differ in how parameters
reach the function and how the arithmetic is arranged.  Integration is
delegated to `scipy.integrate.solve_ivp`.
"""

import numpy as np
from scipy.integrate import solve_ivp

from harness import BenchmarkError


PARAM_KEYS = ['alpha', 'beta', 'delta', 'gamma']

# Example parameter vectors
EXAMPLE_PARAMETERS = {
    'classic': {'alpha': 1.1, 'beta': 0.4, 'delta': 0.1, 'gamma': 0.4},
    'fast_prey': {'alpha': 2.0, 'beta': 0.6, 'delta': 0.2, 'gamma': 0.8},
    'slow_cycle': {'alpha': 0.5, 'beta': 0.02, 'delta': 0.01, 'gamma': 0.3},
}

DEFAULT_Y0 = (10.0, 5.0)
DEFAULT_T_SPAN = (0.0, 50.0)
DEFAULT_N_POINTS = 501


def lotka_volterra_dict(t, y, params):
    """Parameters looked up by name on every call."""
    x, z = y
    return [
        params['alpha'] * x - params['beta'] * x * z,
        params['delta'] * x * z - params['gamma'] * z,
    ]


def lotka_volterra_positional(t, y, alpha, beta, delta, gamma):
    x, z = y
    return [
        alpha * x - beta * x * z,
        delta * x * z - gamma * z,
    ]


def lotka_volterra_factored(t, y, alpha, beta, delta, gamma):
    """Common factors pulled out: x*(alpha - beta*y), y*(delta*x - gamma)."""
    x, z = y
    return [
        x * (alpha - beta * z),
        z * (delta * x - gamma),
    ]


def lotka_volterra_vector(t, y, p):
    """Parameters as a numpy vector in PARAM_KEYS order; returns an array."""
    xz = y[0] * y[1]
    return np.array([
        p[0] * y[0] - p[1] * xz,
        p[2] * xz - p[3] * y[1],
    ])


RHS_VARIANTS = {
    'dict': lotka_volterra_dict,
    'positional': lotka_volterra_positional,
    'factored': lotka_volterra_factored,
    'vector': lotka_volterra_vector,
}


def rhs_args(variant, params):
    """
    Pack a parameter dict the way a right-hand side variant expects it.

    Parameters
    ----------
    variant : str
        One of RHS_VARIANTS
    params : dict
        Parameter values keyed by PARAM_KEYS

    Returns
    -------
    args : tuple
        Extra arguments for `solve_ivp`
    """
    missing = [k for k in PARAM_KEYS if k not in params]
    if missing:
        raise KeyError(f"Missing parameters: {', '.join(missing)}")

    if variant == 'dict':
        return (dict(params),)
    elif variant in ('positional', 'factored'):
        return tuple(params[k] for k in PARAM_KEYS)
    elif variant == 'vector':
        return (np.array([params[k] for k in PARAM_KEYS], dtype=float),)
    else:
        raise ValueError(f"Unknown right-hand side variant: {variant}")


def solve(variant, params, y0=DEFAULT_Y0, t_span=DEFAULT_T_SPAN,
          n_points=DEFAULT_N_POINTS, rtol=1e-8, atol=1e-10):
    """
    Integrate the system with one right-hand side variant.

    Returns
    -------
    trajectory : numpy.ndarray
        Array of shape (2, n_points) with prey and predator values at
        equally spaced times over t_span
    """
    if variant not in RHS_VARIANTS:
        raise ValueError(f"Unknown right-hand side variant: {variant}")
    if n_points < 2:
        raise ValueError(f"n_points must be at least 2, got {n_points}")

    t_eval = np.linspace(t_span[0], t_span[1], n_points)
    sol = solve_ivp(
        RHS_VARIANTS[variant], t_span, list(y0),
        method='RK45', t_eval=t_eval, args=rhs_args(variant, params),
        rtol=rtol, atol=atol
    )
    if not sol.success:
        raise BenchmarkError(f"Integration with '{variant}' failed: {sol.message}")
    return sol.y
