"""
Description:
    Finite difference gradients of a log density.
    USE THE CORRECT ENVIRONMENT:  fdhmc

Author: John Gallagher
Created: 2026-10-19
Last Modified: 2026-10-19
Version: 0.1
"""
import jax
import jax.numpy as jnp
from .datatypes import LogDensity, GradientFn

def central_difference(
        log_density: LogDensity,
        fd_step: float = 1e-5
) -> GradientFn:
    """
    Gradient of log_density by symmetric finite differences.

        grad_k = (f(q + e u_k) - f(q - e u_k)) / (2e)

    Error is O(e^2). Costs 2*dim evaluations of log_density, vmapped over
    the shifted points. Non-finite evaluations propagate into the result.

    Args:
        log_density: Pure, traceable function q -> scalar
        fd_step: Fixed perturbation e

    Returns:
        grad(q) -> (dim,) array
    """
    batched = jax.vmap(log_density)

    def grad(q: jnp.ndarray) -> jnp.ndarray:
        shifts = fd_step * jnp.eye(q.shape[0], dtype=q.dtype)
        f_plus = batched(q[None, :] + shifts)
        f_minus = batched(q[None, :] - shifts)
        return (f_plus - f_minus) / (2.0 * fd_step)

    return grad
