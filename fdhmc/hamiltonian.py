"""
Description:
    Hamiltonian structures for HMC with a diagonal mass matrix.
    USE THE CORRECT ENVIRONMENT:  fdhmc

Author: John Gallagher
Created: 2026-10-19
Last Modified: 2026-10-19
Version: 0.1
"""
from typing import NamedTuple, Optional
import jax.numpy as jnp
from .datatypes import QP, LogDensity, GradientFn, MassVector
from .gradient import central_difference

class Hamiltonian(NamedTuple):
    """
    H(q,p) = U(q) + K(p)
    For standard HMC with diagonal mass M:
        U(q) = -log π(q)
        K(p) = 0.5 * Σ p² / M
    Everything is kept on the log density side, so the joint log density
    log π(q) - K(p) = -H(q,p) is what the sampler compares.
    """
    log_density: LogDensity # log π(q)
    grad_log_density: GradientFn # ∇ log π(q)
    mass: MassVector # diagonal of M

    @property
    def inv_mass(self) -> jnp.ndarray:
        return 1.0 / self.mass

    def kinetic(self, p: jnp.ndarray) -> float:
        """K(p) = 0.5 * Σ p² / M"""
        return 0.5 * jnp.sum(p**2 * self.inv_mass)

    def joint_log_density(self, qp: QP) -> float:
        """log π(q) - K(p)"""
        return self.log_density(qp.q) - self.kinetic(qp.p)

    def energy(self, qp: QP) -> float:
        """total energy H(q,p) = U(q) + K(p)"""
        return -self.joint_log_density(qp)

# Hamiltonian constructors

def standard_hamiltonian(
    log_density: LogDensity,
    mass: Optional[MassVector] = None,
    dim: Optional[int] = None,
    grad_log_density: Optional[GradientFn] = None,
    fd_step: float = 1e-5
) -> Hamiltonian:
    """
    Build a Hamiltonian, defaulting to unit mass and a central difference
    gradient.

    Pass grad_log_density to swap in an analytic or autodiff gradient
    without touching the integrator or the sampler.
    """
    if mass is None:
        if dim is None:
            raise ValueError("Supply either mass or dim")
        mass = jnp.ones(dim)
    mass = jnp.asarray(mass, dtype=float)
    if grad_log_density is None:
        grad_log_density = central_difference(log_density, fd_step)
    return Hamiltonian(
        log_density=log_density,
        grad_log_density=grad_log_density,
        mass=mass
    )
