"""
Pytest configuration and shared fixtures for fdhmc tests.
"""

import pytest
import jax
import jax.numpy as jnp

import fdhmc  # noqa: F401  enables 64-bit floats
from fdhmc.datatypes import SamplerConfig
from fdhmc.target import gen_gaussian, make_log_density


def box_log_posterior(q):
    """Standard normal restricted to [-1, 1]^d, -inf outside"""
    inside = jnp.all(jnp.abs(q) <= 1.0)
    return jnp.where(inside, -0.5 * jnp.dot(q, q), -jnp.inf)


@pytest.fixture
def key():
    """Default random key for reproducible tests."""
    return jax.random.PRNGKey(42)


@pytest.fixture
def std_gaussian_2d():
    """Zero mean, identity covariance log density in 2-D."""
    return gen_gaussian(dim=2)


@pytest.fixture
def box_density():
    """Log density that is -inf outside [-1, 1]."""
    return make_log_density(box_log_posterior)


@pytest.fixture
def small_config():
    """Short run for shape and bookkeeping tests."""
    return SamplerConfig(num_iterations=60, num_warmup=20, step_size=0.1, num_steps=5)
