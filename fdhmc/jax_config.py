"""
Description:
    JAX runtime configuration. Imported first by the package so that every
    array created afterwards uses 64-bit floats.
    USE THE CORRECT ENVIRONMENT:  fdhmc

Author: John Gallagher
Created: 2026-10-19
Last Modified: 2026-10-19
Version: 0.1

Central differences with a step of 1e-5 lose almost all of their digits in
32-bit arithmetic, so double precision is required rather than optional.
"""
import jax

jax.config.update("jax_enable_x64", True)
