"""
Description:
    MCMC summaries and metrics.
    USE THE CORRECT ENVIRONMENT:  fdhmc

Author: John Gallagher
Created: 2026-10-19
Last Modified: 2026-10-19
Version: 0.1

Arrays are iteration-major: (n_iter, ...) for one chain or
(n_iter, n_chains, ...) for a multi-chain run.
"""
import jax.numpy as jnp
import numpy as np

def post_warmup_accept_rate(accept_prob: jnp.ndarray, num_warmup: int) -> jnp.ndarray:
    """Mean acceptance probability over iterations num_warmup onwards"""
    return jnp.mean(accept_prob[num_warmup:], axis=0)

def drop_warmup(samples, num_warmup: int):
    """Discard the warmup prefix along the iteration axis"""
    return samples[num_warmup:]

def pool_chains(samples):
    """(n_iter, n_chains, dim) -> (n_iter * n_chains, dim)"""
    return samples.reshape(-1, samples.shape[-1])

def divergence_count(divergent, num_warmup: int = 0) -> np.ndarray:
    """Number of divergent transitions per chain after warmup"""
    return np.sum(np.asarray(divergent)[num_warmup:], axis=0)

def cov(X):
    Xμ = jnp.mean(X, axis = 0)
    n=X.shape[0]
    return (X - Xμ).T@(X-Xμ)/(n-1)

def maxdiagdiff(X,Y):
    x = np.diag(X)
    y = np.diag(Y)
    return np.max(np.abs(x-y))
