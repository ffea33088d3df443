"""
fdhmc - Hamiltonian Monte Carlo with finite difference gradients

Public API:
    hmc_sampler - Run independent chains from a (n_chains, dim) starting matrix
    run_chain - Run a single chain
    hmc_transition - One Metropolis-corrected HMC update
    leapfrog - Leapfrog integrator with momentum flip
    central_difference - Finite difference gradient of a log density
    make_log_density - Bind data into a log posterior and guard its domain
    SamplerConfig - Run configuration
    JitteredSteps, FixedSteps - Step size / step count policies
    ConfigurationError - Raised before sampling on invalid configuration

Example:
    import jax
    from fdhmc import hmc_sampler, SamplerConfig, gen_normal

    config = SamplerConfig(num_iterations=2000, num_warmup=500,
                           step_size=0.1, num_steps=10)
    out = hmc_sampler(gen_normal(5.0, 2.0), [[0.0], [1.0]], config,
                      jax.random.PRNGKey(0))
    out.samples  # (2000, 2, 1)
"""
# Import jax_config FIRST so 64-bit floats are on before any array is built
from . import jax_config  # noqa: F401

from .datatypes import QP, TransitionInfo, ChainOutput, SamplerOutput, SamplerConfig
from .error_handling import ConfigurationError, validate_config, validate_chain_inputs
from .target import (make_log_density, gen_gaussian, gen_normal,
                     gen_linear_regression, gen_perturb_precision)
from .gradient import central_difference
from .hamiltonian import Hamiltonian, standard_hamiltonian
from .integrator import leapfrog
from .tuning import JitteredSteps, FixedSteps
from .sampler import hmc_transition, run_chain, hmc_sampler
from .metrics import post_warmup_accept_rate, drop_warmup, pool_chains, divergence_count

__all__ = [
    'QP', 'TransitionInfo', 'ChainOutput', 'SamplerOutput', 'SamplerConfig',
    'ConfigurationError', 'validate_config', 'validate_chain_inputs',
    'make_log_density', 'gen_gaussian', 'gen_normal', 'gen_linear_regression',
    'gen_perturb_precision',
    'central_difference', 'Hamiltonian', 'standard_hamiltonian', 'leapfrog',
    'JitteredSteps', 'FixedSteps',
    'hmc_transition', 'run_chain', 'hmc_sampler',
    'post_warmup_accept_rate', 'drop_warmup', 'pool_chains', 'divergence_count',
]
