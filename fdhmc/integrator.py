"""
Description:
    Leapfrog integrator for Hamiltonian dynamics.
    USE THE CORRECT ENVIRONMENT:  fdhmc

Author: John Gallagher
Created: 2026-10-19
Last Modified: 2026-10-19
Version: 0.1
"""
import jax
import jax.numpy as jnp
from .datatypes import QP, GradientFn, MassVector

def leapfrog(
        qp: QP,
        grad_log_density: GradientFn,
        mass: MassVector,
        step_size: float,
        num_steps: int
) -> QP:
    """
    LF integration, p-first, with momentum flip.

    Works on the log density side, so momentum moves along +∇ log π(q).
    The last momentum update of the loop is a half step, which makes the
    trajectory time-symmetric. Negating p at the end makes the map its own
    inverse: leapfrog(leapfrog(qp)) == qp up to rounding.

    num_steps may be a traced value (e.g. drawn per iteration).

    Args:
        qp: Initial state
        grad_log_density: ∇ log π(q)
        mass: Diagonal mass vector
        step_size: Step size
        num_steps: Number of position updates

    Returns:
        (q_L, -p_L)
    """
    inv_mass = 1.0 / mass

    # Half step momentum
    p = qp.p + 0.5 * step_size * grad_log_density(qp.q)

    def body_fn(i, state):
        q, p = state
        # Full step position
        q = q + step_size * inv_mass * p
        # Full step momentum, half step on the last pass
        scale = jnp.where(i == num_steps - 1, 0.5, 1.0)
        p = p + scale * step_size * grad_log_density(q)
        return q, p

    q, p = jax.lax.fori_loop(0, num_steps, body_fn, (qp.q, p))

    return QP(q=q, p=-p)
