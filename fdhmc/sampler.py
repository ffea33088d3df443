"""
Description:
    HMC sampler: transition kernel, single chain driver and multi-chain runner.
    USE THE CORRECT ENVIRONMENT:  fdhmc

Author: John Gallagher
Created: 2026-10-19
Last Modified: 2026-10-19
Version: 0.1
"""

import logging
import time
from datetime import timedelta
from functools import partial
from typing import Callable, Optional, Tuple

import jax
import jax.numpy as jnp
import jax.random as jr
import numpy as np

from .datatypes import (QP, TransitionInfo, ChainOutput, SamplerOutput, SamplerConfig,
                        LogDensity, GradientFn, MassVector, StepPolicy)
from .error_handling import validate_config, validate_chain_inputs
from .hamiltonian import Hamiltonian, standard_hamiltonian
from .integrator import leapfrog
from .metrics import post_warmup_accept_rate, divergence_count
from .tuning import JitteredSteps

logger = logging.getLogger('fdhmc')

def draw_momentum(q: jnp.ndarray, mass: MassVector, key: jax.random.PRNGKey) -> QP:
    """
    Resample momentum p ~ N(0, diag(mass)), keeping position q.

    Args:
        q: Current position
        mass: Diagonal mass vector
        key: JAX random key

    Returns:
        QP with fresh momentum
    """
    p_new = jnp.sqrt(mass) * jr.normal(key, shape=q.shape, dtype=q.dtype)
    return QP(q=q, p=p_new)

def accept_reject(deltaH: float, key: jax.random.PRNGKey) -> Tuple[jnp.ndarray, jnp.ndarray]:
    """
    Metropolis-Hastings accept/reject step.

    Accept probability: min(1, exp(deltaH)), with a NaN ratio treated as 0.
    NaN shows up when both joint log densities are -inf or the trajectory
    blew up, and always means reject.

    Args:
        deltaH: logP_proposed - logP_current
        key: Random key

    Returns:
        (accept_prob, accepted)
    """
    ratio = jnp.exp(deltaH)
    ratio = jnp.where(jnp.isnan(ratio), 0.0, ratio)
    accept_prob = jnp.minimum(ratio, 1.0)
    u = jr.uniform(key, shape=())
    return accept_prob, u < accept_prob

def hmc_transition(
    key: jax.random.PRNGKey,
    q: jnp.ndarray,
    hamiltonian: Hamiltonian,
    step_size: float,
    num_steps: int,
    max_energy_error: float = 1000.0
) -> Tuple[jnp.ndarray, TransitionInfo]:
    """
    Single HMC step.

    Args:
        key: Random key, split into momentum and acceptance draws
        q: Current position
        hamiltonian: Log density, gradient and mass
        step_size: Leapfrog step size
        num_steps: Number of leapfrog steps
        max_energy_error: Energy loss above which the step is flagged divergent

    Returns:
        (q_next, info); q_next is q itself on rejection

    Raises:
        ConfigurationError: If q and the mass vector disagree in shape, or a
            concrete step_size / num_steps is not positive
    """
    validate_chain_inputs(jnp.shape(q), jnp.shape(hamiltonian.mass),
                          step_size=step_size, num_steps=num_steps)
    key_p, key_u = jr.split(key)

    # Resample momentum
    qp0 = draw_momentum(q, hamiltonian.mass, key_p)
    logp_old = hamiltonian.joint_log_density(qp0)

    # Integrate
    qp_star = leapfrog(qp0, hamiltonian.grad_log_density, hamiltonian.mass,
                       step_size, num_steps)
    logp_new = hamiltonian.joint_log_density(qp_star)

    # Accept/reject
    deltaH = logp_new - logp_old
    accept_prob, is_accepted = accept_reject(deltaH, key_u)
    q_out = jnp.where(is_accepted, qp_star.q, q)

    info = TransitionInfo(
        accept_prob=accept_prob,
        accepted=is_accepted,
        deltaH=deltaH,
        divergent=jnp.isnan(deltaH) | (deltaH < -max_energy_error),
        step_size=jnp.asarray(step_size),
        num_steps=jnp.asarray(num_steps)
    )
    return q_out, info

def gen_hmc_kernel(
    hamiltonian: Hamiltonian,
    policy: StepPolicy,
    max_energy_error: float = 1000.0
) -> Callable:
    """
    Generate HMC kernel with per-iteration step size and step count.

    Returns:
        HMC kernel function for lax.scan
    """
    def hmc_kernel(q, key):
        """
        Args:
            q: Current position (scan carry)
            key: Random key for this iteration

        Returns:
            (q_out, (q_out, info)) for scan
        """
        key_policy, key_transition = jr.split(key)
        step_size, num_steps = policy(key_policy)
        q_out, info = hmc_transition(key_transition, q, hamiltonian,
                                     step_size, num_steps, max_energy_error)
        return q_out, (q_out, info)

    return hmc_kernel

def run_chain(
    key: jax.random.PRNGKey,
    initial_position: jnp.ndarray,
    hamiltonian: Hamiltonian,
    policy: StepPolicy,
    num_iterations: int,
    num_warmup: int = 0,
    max_energy_error: float = 1000.0
) -> ChainOutput:
    """
    Run one HMC chain.

    Every iteration is recorded, warmup included; num_warmup only decides
    which iterations go into accept_rate.

    Args:
        key: Random key owned by this chain
        initial_position: Starting point (dim,)
        hamiltonian: Log density, gradient and mass
        policy: Supplies (step_size, num_steps) each iteration
        num_iterations: Total iterations
        num_warmup: Leading iterations excluded from accept_rate
        max_energy_error: Divergence threshold

    Returns:
        ChainOutput with samples (num_iterations, dim)

    Raises:
        ConfigurationError: Before the scan starts, on shape mismatch, bad
            iteration counts or a non-positive policy baseline
    """
    validate_chain_inputs(
        jnp.shape(initial_position),
        jnp.shape(hamiltonian.mass),
        num_iterations=num_iterations,
        num_warmup=num_warmup,
        step_size=getattr(policy, "step_size", None),
        num_steps=getattr(policy, "num_steps", None)
    )
    hmc_kernel = gen_hmc_kernel(hamiltonian, policy, max_energy_error)
    keys = jr.split(key, num_iterations)
    q0 = jnp.asarray(initial_position, dtype=float)
    _, (samples, info) = jax.lax.scan(hmc_kernel, q0, xs=keys)
    return ChainOutput(
        samples=samples,
        info=info,
        accept_rate=post_warmup_accept_rate(info.accept_prob, num_warmup)
    )

def hmc_sampler(
    log_density: LogDensity,
    initial_positions: jnp.ndarray,
    config: SamplerConfig,
    key: jax.random.PRNGKey,
    mass: Optional[MassVector] = None,
    grad_log_density: Optional[GradientFn] = None,
    policy: Optional[StepPolicy] = None,
    chain_method: str = "vectorized"
) -> SamplerOutput:
    """
    Run independent HMC chains, one per row of initial_positions.

    Args:
        log_density: Pure, traceable log posterior q -> scalar
        initial_positions: Starting matrix (n_chains, dim)
        config: Iterations, warmup and step baselines
        key: Random key (or integer seed), split into one key per chain
        mass: Diagonal mass vector (dim,), default ones
        grad_log_density: Gradient override, default central differences
        policy: Step policy, default JitteredSteps around the config baselines
        chain_method: "vectorized" (vmap) or "sequential" (lax.map)

    Returns:
        SamplerOutput, iteration-major

    Raises:
        ConfigurationError: Before any sampling, if the configuration is invalid
    """
    validate_config(config, initial_positions, mass, chain_method)

    if isinstance(key, (int, np.integer)):
        key = jr.PRNGKey(key)
    initial_positions = jnp.asarray(initial_positions, dtype=float)
    n_chains, dim = initial_positions.shape

    hamiltonian = standard_hamiltonian(
        log_density,
        mass=mass,
        dim=dim,
        grad_log_density=grad_log_density,
        fd_step=config.fd_step
    )
    if policy is None:
        policy = JitteredSteps(step_size=config.step_size, num_steps=config.num_steps)

    chain_fn = partial(
        run_chain,
        hamiltonian=hamiltonian,
        policy=policy,
        num_iterations=int(config.num_iterations),
        num_warmup=int(config.num_warmup),
        max_energy_error=float(config.max_energy_error)
    )
    if chain_method == "vectorized":
        run_all = jax.jit(jax.vmap(chain_fn))
    else:
        run_all = jax.jit(lambda keys, init: jax.lax.map(lambda args: chain_fn(*args), (keys, init)))

    logger.info("\n--- HMC RUN ---")
    logger.info(f"  Chains: {n_chains}, dimension: {dim}, chain_method: {chain_method}")
    logger.info(f"  Iterations: {config.num_iterations} (warmup {config.num_warmup})")

    start = time.perf_counter()
    chain_keys = jr.split(key, n_chains)
    chains = jax.block_until_ready(run_all(chain_keys, initial_positions))
    wall_time = time.perf_counter() - start
    logger.info(f"  Total Wall Time: {timedelta(seconds=int(wall_time))} ({wall_time:.2f}s)")

    info = chains.info
    output = SamplerOutput(
        samples=jnp.swapaxes(chains.samples, 0, 1),
        accept_prob=info.accept_prob.T,
        accepted=info.accepted.T,
        deltaH=info.deltaH.T,
        divergent=info.divergent.T,
        step_size=info.step_size.T,
        num_steps=info.num_steps.T,
        accept_rate=chains.accept_rate
    )

    accept_rate = np.asarray(output.accept_rate)
    n_divergent = divergence_count(output.divergent, int(config.num_warmup))
    for chain, rate in enumerate(accept_rate):
        logger.info(f"  Chain {chain}: post-warmup acceptance {rate:.3f}")
    if np.any(n_divergent > 0):
        logger.warning(
            f"Divergent post-warmup transitions per chain: {n_divergent.tolist()} "
            f"(energy error above {config.max_energy_error} or NaN)"
        )

    return output
