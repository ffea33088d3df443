"""
Tests for the central difference gradient.
"""

import jax
import jax.numpy as jnp
import numpy as np

from fdhmc.gradient import central_difference
from fdhmc.target import gen_gaussian, gen_linear_regression


def test_quadratic_form():
    """f(x) = -0.5 x.x has gradient -x"""
    grad = central_difference(gen_gaussian(dim=3))
    x = jnp.array([0.3, -1.2, 2.0])

    np.testing.assert_allclose(grad(x), -x, atol=1e-6)


def test_second_order_error():
    """For f = x³ the central difference error is exactly e²"""
    fd_step = 1e-2
    grad = central_difference(lambda q: jnp.sum(q**3), fd_step)
    x = jnp.array([1.5])

    error = grad(x)[0] - 3 * x[0]**2
    np.testing.assert_allclose(error, fd_step**2, atol=1e-8)


def test_matches_autodiff_on_regression():
    """Finite differences agree with jax.grad on a non-quadratic posterior"""
    rng = np.random.default_rng(0)
    x = rng.normal(size=30)
    X = np.column_stack([np.ones(30), x])
    y = 1.0 + 2.0 * x + 0.5 * rng.normal(size=30)
    log_density = gen_linear_regression(X, y)
    q = jnp.array([0.8, 1.7, 0.6])

    np.testing.assert_allclose(
        central_difference(log_density)(q), jax.grad(log_density)(q), rtol=1e-5, atol=1e-4
    )


def test_vmappable():
    """Gradient can be batched over chains"""
    grad = jax.vmap(central_difference(gen_gaussian(dim=2)))
    X = jnp.array([[1.0, 2.0], [-0.5, 0.0]])

    np.testing.assert_allclose(grad(X), -X, atol=1e-6)


def test_nonfinite_propagates(box_density):
    """-inf on both sides gives NaN, no exception"""
    grad = central_difference(box_density)

    assert np.all(np.isnan(grad(jnp.array([5.0]))))
    assert np.all(np.isfinite(grad(jnp.array([0.5]))))
