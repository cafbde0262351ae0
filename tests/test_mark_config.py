"""
Unit tests for MarkConfig.
"""

import pytest

from mark_config import MarkConfig


def test_default_config():
    """Test default measurement settings."""
    config = MarkConfig()
    assert config.min_time == 0.5
    assert config.min_iterations == 1
    assert config.max_iterations == 10000
    assert config.memory is True
    assert config.rtol == 1.5e-8
    assert config.atol == 0.0


def test_full_config():
    assert MarkConfig.full() == MarkConfig()


def test_quick_config():
    config = MarkConfig.quick()
    assert config.min_time == 0.05
    assert config.max_iterations == 1000
    config.validate()


def test_copy_method():
    """Test copy() creates independent copy."""
    config1 = MarkConfig(min_time=0.1, memory=False)
    config2 = config1.copy()

    assert config2 == config1

    config2.memory = True
    assert config1.memory is False


def test_with_tolerance():
    config = MarkConfig()
    loose = config.with_tolerance(1e-5, 1e-6)
    assert loose.rtol == 1e-5
    assert loose.atol == 1e-6
    assert config.rtol == 1.5e-8
    assert loose.min_time == config.min_time


@pytest.mark.parametrize("kwargs", [
    {'min_iterations': 0},
    {'max_iterations': 0},
    {'min_iterations': 10, 'max_iterations': 5},
    {'min_time': -1.0},
    {'rtol': -1e-8},
    {'atol': -1.0},
])
def test_validate_rejects(kwargs):
    with pytest.raises(ValueError):
        MarkConfig(**kwargs).validate()


def test_string_representation():
    assert 'memory=off' in str(MarkConfig(memory=False))
