#!/usr/bin/env python3
"""
Tests of the Lotka-Volterra right-hand side variants.
"""

from types import SimpleNamespace

import pytest
import numpy as np

import ode_models
from harness import BenchmarkError
from ode_models import EXAMPLE_PARAMETERS, RHS_VARIANTS, rhs_args, solve


def lotka_volterra_invariant(trajectory, params):
    """delta*x - gamma*ln(x) + beta*y - alpha*ln(y), constant along orbits."""
    x, y = trajectory
    return (params['delta'] * x - params['gamma'] * np.log(x)
            + params['beta'] * y - params['alpha'] * np.log(y))


@pytest.mark.parametrize("variant", list(RHS_VARIANTS))
def test_rhs_variants_agree_pointwise(variant):
    """Test every variant returns the same derivative at a sample state."""
    params = EXAMPLE_PARAMETERS['classic']
    y = np.array([10.0, 5.0])
    expected = ode_models.lotka_volterra_dict(0.0, y, params)
    result = RHS_VARIANTS[variant](0.0, y, *rhs_args(variant, params))
    np.testing.assert_allclose(result, expected, rtol=1e-14)


@pytest.mark.parametrize("name", list(EXAMPLE_PARAMETERS))
def test_trajectories_agree(name, tolerances):
    """Test all variants yield the same trajectory for each parameter set."""
    params = EXAMPLE_PARAMETERS[name]
    reference = solve('dict', params, n_points=101)
    assert reference.shape == (2, 101)
    for variant in RHS_VARIANTS:
        np.testing.assert_allclose(solve(variant, params, n_points=101), reference,
                                   rtol=tolerances['trajectory'], atol=1e-6, err_msg=variant)


def test_dict_and_positional_identical():
    """Same arithmetic in the same order gives a bit-identical trajectory."""
    params = EXAMPLE_PARAMETERS['fast_prey']
    np.testing.assert_array_equal(solve('dict', params), solve('positional', params))


def test_trajectory_conserves_invariant():
    params = EXAMPLE_PARAMETERS['classic']
    trajectory = solve('factored', params)
    invariant = lotka_volterra_invariant(trajectory, params)
    np.testing.assert_allclose(invariant, invariant[0], rtol=1e-5)


def test_trajectory_starts_at_initial_state():
    trajectory = solve('vector', EXAMPLE_PARAMETERS['slow_cycle'], y0=(3.0, 2.0))
    np.testing.assert_allclose(trajectory[:, 0], [3.0, 2.0])


def test_rhs_args_missing_parameter():
    with pytest.raises(KeyError, match="gamma"):
        rhs_args('positional', {'alpha': 1.0, 'beta': 1.0, 'delta': 1.0})


def test_unknown_variant():
    with pytest.raises(ValueError):
        rhs_args('symbolic', EXAMPLE_PARAMETERS['classic'])
    with pytest.raises(ValueError):
        solve('symbolic', EXAMPLE_PARAMETERS['classic'])


def test_too_few_points():
    with pytest.raises(ValueError):
        solve('dict', EXAMPLE_PARAMETERS['classic'], n_points=1)


def test_failed_integration_raises(monkeypatch):
    monkeypatch.setattr(ode_models, 'solve_ivp',
                        lambda *args, **kwargs: SimpleNamespace(success=False, message='step size too small'))
    with pytest.raises(BenchmarkError, match="step size too small"):
        solve('dict', EXAMPLE_PARAMETERS['classic'])
