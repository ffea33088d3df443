"""
Description:
    Configuration validation.
    USE THE CORRECT ENVIRONMENT:  fdhmc

Author: John Gallagher
Created: 2026-10-19
Last Modified: 2026-10-19
Version: 0.1

Structural problems with a run are caller errors and are raised before any
chain is traced. Numeric trouble during sampling (infeasible regions, NaN
energies) never reaches this module; it is turned into rejections inside the
transition.
"""
from typing import Optional

import numpy as np

from .datatypes import SamplerConfig

CHAIN_METHODS = ("vectorized", "sequential")


class ConfigurationError(ValueError):
    """Invalid sampler configuration detected before sampling starts."""


def _is_int_at_least(value, minimum: int) -> bool:
    """True for an integral number >= minimum; False for anything else"""
    try:
        return int(value) == value and value >= minimum
    except (TypeError, ValueError, OverflowError):
        return False


def _is_positive(value) -> bool:
    try:
        return bool(value > 0)
    except TypeError:
        return False


def _is_positive_finite(value) -> bool:
    try:
        return bool(np.isfinite(value)) and bool(value > 0)
    except TypeError:
        return False


def _check_run_length(num_iterations, num_warmup) -> list:
    errors = []
    if not _is_int_at_least(num_iterations, 1):
        errors.append(f"num_iterations must be an integer >= 1, got {num_iterations}")
    if not _is_int_at_least(num_warmup, 0):
        errors.append(f"num_warmup must be an integer >= 0, got {num_warmup}")
    elif _is_int_at_least(num_iterations, 1) and num_warmup >= num_iterations:
        errors.append(
            f"num_warmup ({num_warmup}) must be less than "
            f"num_iterations ({num_iterations})"
        )
    return errors


def validate_chain_inputs(
    position_shape: tuple,
    mass_shape: tuple,
    num_iterations: Optional[int] = None,
    num_warmup: Optional[int] = None,
    step_size=None,
    num_steps=None,
) -> None:
    """
    Static checks for a single chain or a single transition.

    Only shapes and concrete Python/NumPy scalars are checked, so this is safe
    to call while tracing: a traced step size (e.g. drawn by a policy) is
    skipped.

    Args:
        position_shape: Shape of the chain position, must be (dim,)
        mass_shape: Shape of the mass vector, must equal position_shape
        num_iterations: Total iterations, if running a chain
        num_warmup: Warmup iterations, if running a chain
        step_size: Leapfrog step size, checked when concrete
        num_steps: Leapfrog step count, checked when concrete

    Raises:
        ConfigurationError: If anything is invalid
    """
    errors = []

    if len(position_shape) != 1 or position_shape[0] < 1:
        errors.append(f"position must have shape (dim,), got {position_shape}")
    elif tuple(mass_shape) != tuple(position_shape):
        errors.append(
            f"mass must have shape {tuple(position_shape)} to match the position, "
            f"got {tuple(mass_shape)}"
        )
    if num_iterations is not None:
        errors.extend(_check_run_length(num_iterations, 0 if num_warmup is None else num_warmup))
    if isinstance(step_size, (int, float, np.number)) and not _is_positive_finite(step_size):
        errors.append(f"step_size must be positive, got {step_size}")
    if isinstance(num_steps, (int, float, np.number)) and not _is_int_at_least(num_steps, 1):
        errors.append(f"num_steps must be an integer >= 1, got {num_steps}")

    if errors:
        raise ConfigurationError("Invalid HMC configuration:\n  " + "\n  ".join(errors))


def validate_config(
    config: SamplerConfig,
    initial_positions,
    mass: Optional[np.ndarray] = None,
    chain_method: str = "vectorized",
) -> None:
    """
    Check a run configuration and collect every problem found.

    Args:
        config: Sampler configuration
        initial_positions: Starting matrix (n_chains, dim)
        mass: Diagonal mass vector (dim,), or None for unit mass
        chain_method: How chains are executed

    Raises:
        ConfigurationError: If anything is invalid
    """
    errors = _check_run_length(config.num_iterations, config.num_warmup)

    if not _is_positive_finite(config.step_size):
        errors.append(f"step_size must be positive, got {config.step_size}")
    if not _is_int_at_least(config.num_steps, 1):
        errors.append(f"num_steps must be an integer >= 1, got {config.num_steps}")
    if not _is_positive_finite(config.fd_step):
        errors.append(f"fd_step must be positive, got {config.fd_step}")
    if not _is_positive(config.max_energy_error):
        errors.append(f"max_energy_error must be positive, got {config.max_energy_error}")
    if chain_method not in CHAIN_METHODS:
        errors.append(f"chain_method must be one of {CHAIN_METHODS}, got '{chain_method}'")

    init = np.asarray(initial_positions, dtype=float)
    if init.ndim != 2 or init.shape[0] < 1 or init.shape[1] < 1:
        errors.append(
            f"initial_positions must have shape (n_chains, dim), got {init.shape}"
        )
    elif not np.all(np.isfinite(init)):
        errors.append("initial_positions contains NaN or Inf values")

    if mass is not None:
        mass = np.asarray(mass, dtype=float)
        dim = init.shape[1] if init.ndim == 2 else None
        if mass.ndim != 1 or (dim is not None and mass.shape[0] != dim):
            errors.append(
                f"mass must have shape ({dim},) to match initial_positions, got {mass.shape}"
            )
        elif not np.all(np.isfinite(mass)) or np.any(mass <= 0):
            errors.append("mass must be strictly positive and finite")

    if errors:
        raise ConfigurationError("Invalid HMC configuration:\n  " + "\n  ".join(errors))
