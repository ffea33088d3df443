"""
Description:
    Step size / step count policies for the leapfrog integrator.
    USE THE CORRECT ENVIRONMENT:  fdhmc

Author: John Gallagher
Created: 2026-10-19
Last Modified: 2026-10-19
Version: 0.1

A policy is called once per iteration with its own random key and returns
(step_size, num_steps). The sampler never looks inside it.
"""
from typing import NamedTuple, Tuple
import jax
import jax.numpy as jnp
import jax.random as jr

class JitteredSteps(NamedTuple):
    """
    Randomized around fixed baselines:
        step_size ~ U(0, 2 * step_size)
        num_steps = ceil(U(0, 1) * 2 * num_steps), at least 1
    Jitter breaks the periodic trajectories a fixed length can lock into.
    """
    step_size: float
    num_steps: int

    def __call__(self, key: jax.random.PRNGKey) -> Tuple[jnp.ndarray, jnp.ndarray]:
        key_eps, key_n = jr.split(key)
        step_size = jr.uniform(key_eps, shape=(), minval=0.0, maxval=2.0 * self.step_size)
        num_steps = jnp.ceil(jr.uniform(key_n, shape=()) * 2 * self.num_steps).astype(int)
        return step_size, jnp.maximum(num_steps, 1)

class FixedSteps(NamedTuple):
    """Constant step size and step count every iteration"""
    step_size: float
    num_steps: int

    def __call__(self, key: jax.random.PRNGKey) -> Tuple[jnp.ndarray, jnp.ndarray]:
        return jnp.asarray(self.step_size, dtype=float), jnp.asarray(self.num_steps, dtype=int)
