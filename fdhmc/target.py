"""
Description:
    Log density wrappers and target distribution generators.
    USE THE CORRECT ENVIRONMENT:  fdhmc

Author: John Gallagher
Created: 2026-10-19
Last Modified: 2026-10-19
Version: 0.1

Every generator returns a log density. Outside the support the value is -inf,
which the Metropolis step turns into a rejection.
"""
from typing import Callable, Sequence
import jax.numpy as jnp
from jax.scipy import stats
from .datatypes import LogDensity, PrecisionMatrix

def make_log_density(
        log_posterior: Callable[..., float],
        data: Sequence = (),
        positive: Sequence[int] = ()
) -> LogDensity:
    """
    Bind data into a log posterior and guard its domain.

    Args:
        log_posterior: f(q, *data) -> unnormalized log posterior
        data: Extra arguments bound into the closure (e.g. X, y)
        positive: Indices of q that must be strictly positive

    Returns:
        log_density(q), equal to -inf wherever a positive index is <= 0
        or the value is not finite
    """
    data = tuple(data)
    positive = jnp.asarray(positive, dtype=int)

    def log_density(q: jnp.ndarray) -> float:
        value = log_posterior(q, *data)
        feasible = jnp.isfinite(value)
        if positive.size > 0:
            feasible = feasible & jnp.all(q[positive] > 0)
        return jnp.where(feasible, value, -jnp.inf)

    return log_density

def gen_gaussian(
        dim: int = 2,
        precision_matrix: PrecisionMatrix = None,
        cov: jnp.ndarray = None
) -> LogDensity:
    if precision_matrix is not None and cov is not None:
        raise ValueError(
            "Please supply either a precision_matrix or a cov, not both"
        )

    if precision_matrix is None and cov is not None:
        precision_matrix = jnp.linalg.inv(cov)

    if precision_matrix is None and cov is None:
        precision_matrix = jnp.eye(dim)

    def log_posterior(q: jnp.ndarray) -> float:
        """Gaussian log density (unnormalized)"""
        return -0.5 * jnp.dot(q, precision_matrix @ q)

    return make_log_density(log_posterior)

def gen_normal(mean: float = 0.0, sd: float = 1.0) -> LogDensity:
    """Normal(mean, sd) over a 1-D parameter vector"""
    def log_posterior(q: jnp.ndarray) -> float:
        return stats.norm.logpdf(q[0], loc=mean, scale=sd)

    return make_log_density(log_posterior)

def gen_linear_regression(
        X: jnp.ndarray,
        y: jnp.ndarray,
        coef_scale: float = 10.0,
        sigma_scale: float = 5.0
) -> LogDensity:
    """
    Gaussian linear regression y ~ Normal(X @ beta, sigma).

    Parameter vector is (beta_1, ..., beta_k, sigma) with
        beta_j ~ Normal(0, coef_scale)
        sigma ~ HalfCauchy(sigma_scale)

    Args:
        X: Design matrix (n, k)
        y: Response vector (n,)
        coef_scale: Prior scale of the coefficients
        sigma_scale: Prior scale of the noise standard deviation

    Returns:
        log_density(q) with q of length k + 1
    """
    X = jnp.asarray(X, dtype=float)
    y = jnp.asarray(y, dtype=float)
    if X.ndim != 2 or y.shape != (X.shape[0],):
        raise ValueError(
            f"X must be (n, k) and y must be (n,), got {X.shape} and {y.shape}"
        )
    k = X.shape[1]

    def log_posterior(q: jnp.ndarray, X: jnp.ndarray, y: jnp.ndarray) -> float:
        beta, sigma = q[:k], q[k]
        log_prior = jnp.sum(stats.norm.logpdf(beta, loc=0.0, scale=coef_scale))
        log_prior += jnp.log(2.0) + stats.cauchy.logpdf(sigma, loc=0.0, scale=sigma_scale)
        log_like = jnp.sum(stats.norm.logpdf(y, loc=X @ beta, scale=sigma))
        return log_prior + log_like

    return make_log_density(log_posterior, data=(X, y), positive=(k,))

def gen_perturb_precision(
        dim: int = 2,
        perturbation: float = 0.05
) -> PrecisionMatrix:
    prec = jnp.diag(jnp.ones(dim))
    prec += perturbation * jnp.diag(jnp.ones(dim-1), k=-1 )
    prec += perturbation * jnp.diag(jnp.ones(dim-1), k=1 )
    return prec
