"""
Shared pytest fixtures and configuration for the idiom benchmark tests.
"""

import logging

import pytest

from frame_access import make_frame
from mark_config import MarkConfig


@pytest.fixture
def fast_config():
    """Measurement settings that keep every mark call to a few iterations."""
    return MarkConfig(min_time=0.0, min_iterations=2, max_iterations=3, memory=True)


@pytest.fixture(scope='session')
def tolerances():
    """Define tolerance levels for different equivalence tests."""
    return {
        'arithmetic': 1e-12,
        'polynomial': 1e-12,
        'trajectory': 1e-5,
    }


@pytest.fixture(scope='session')
def example_frame():
    """Small synthetic frame shared by column access tests."""
    return make_frame(50, n_cols=4, seed=3)


@pytest.fixture
def tiny_benchmark_config():
    """Benchmark configuration restricted to tiny inputs."""
    from benchmarks.benchmark_utils import create_benchmark_config
    config = create_benchmark_config()
    config.input_sizes = {'very_small': [5, 20]}
    config.ode_parameters = {'classic': config.ode_parameters['classic']}
    return config


@pytest.fixture
def restore_root_logger():
    """Undo the handler and level changes setup_logger makes on the root logger."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
