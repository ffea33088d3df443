"""
Description:
    Core data structures for fdhmc.
    USE THE CORRECT ENVIRONMENT:  fdhmc

Author: John Gallagher
Created: 2026-10-19
Last Modified: 2026-10-19
Version: 0.1

All modules import from here to ensure type consistency and avoid indexing bugs.
"""
from typing import NamedTuple, Callable
import jax.numpy as jnp

class QP(NamedTuple):
    """Phase space state(q,p)"""
    q: jnp.ndarray # position
    p: jnp.ndarray # momentum

    @property
    def dim(self) -> int:
        """Dimension of configuration space"""
        return self.q.shape[0]

class TransitionInfo(NamedTuple):
    """Bookkeeping for a single HMC transition"""
    accept_prob: jnp.ndarray # min(1, exp(deltaH)), NaN mapped to 0
    accepted: jnp.ndarray # bool
    deltaH: jnp.ndarray # logP_new - logP_old
    divergent: jnp.ndarray # bool
    step_size: jnp.ndarray
    num_steps: jnp.ndarray

class ChainOutput(NamedTuple):
    """Output of one chain"""
    samples: jnp.ndarray # (n_iter, dim), warmup included
    info: TransitionInfo # each field (n_iter,)
    accept_rate: jnp.ndarray # mean post-warmup accept_prob

class SamplerOutput(NamedTuple):
    """Multi-chain output, iteration-major"""
    samples: jnp.ndarray # (n_iter, n_chains, dim)
    accept_prob: jnp.ndarray # (n_iter, n_chains)
    accepted: jnp.ndarray # (n_iter, n_chains)
    deltaH: jnp.ndarray # (n_iter, n_chains)
    divergent: jnp.ndarray # (n_iter, n_chains)
    step_size: jnp.ndarray # (n_iter, n_chains)
    num_steps: jnp.ndarray # (n_iter, n_chains)
    accept_rate: jnp.ndarray # (n_chains,) mean post-warmup accept_prob

class SamplerConfig(NamedTuple):
    """Configuration for an HMC run"""
    num_iterations: int # total iterations per chain, warmup included
    num_warmup: int # leading iterations excluded from accept_rate
    step_size: float # baseline leapfrog step size
    num_steps: int # baseline number of leapfrog steps
    fd_step: float = 1e-5 # central difference step
    max_energy_error: float = 1000.0 # |deltaH| above this is flagged divergent

# Type aliases for clarity
LogDensity = Callable[[jnp.ndarray], float]
GradientFn = Callable[[jnp.ndarray], jnp.ndarray]
StepPolicy = Callable[[jnp.ndarray], tuple[jnp.ndarray, jnp.ndarray]]
MassVector = jnp.ndarray
PrecisionMatrix = jnp.ndarray
