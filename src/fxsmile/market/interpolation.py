"""Interpolation primitives for smile slices and the smile term structure.

Provides the two one-dimensional rules the surface is built on:
- Linear interpolation in strike with flat extrapolation
- Linear interpolation in total implied variance across expiry
"""
from __future__ import annotations

import jax.numpy as jnp
from jax import jit


@jit
def linear_interpolation(x: jnp.ndarray, y: jnp.ndarray, x_new: float) -> float:
    """Linear interpolation.

    Parameters
    ----------
    x : Array
        Known x-coordinates (must be sorted)
    y : Array
        Known y-coordinates
    x_new : float
        Point at which to interpolate

    Returns
    -------
    float
        Interpolated value at x_new

    Notes
    -----
    For points outside the range, uses flat extrapolation (returns boundary value).

    Examples
    --------
    >>> x = jnp.array([0.0, 1.0, 2.0])
    >>> y = jnp.array([0.0, 1.0, 4.0])
    >>> linear_interpolation(x, y, 1.5)
    2.5
    """
    # Handle extrapolation
    x_new = jnp.clip(x_new, x[0], x[-1])

    # Find the interval
    i = jnp.searchsorted(x, x_new) - 1
    i = jnp.clip(i, 0, len(x) - 2)

    x0, x1 = x[i], x[i + 1]
    y0, y1 = y[i], y[i + 1]

    # Handle division by zero
    dx = x1 - x0
    slope = jnp.where(dx > 0.0, (y1 - y0) / jnp.where(dx > 0.0, dx, 1.0), 0.0)

    return y0 + slope * (x_new - x0)


@jit
def total_variance_interpolation(
    t: float,
    t_lower: float,
    t_upper: float,
    vols_lower: jnp.ndarray,
    vols_upper: jnp.ndarray,
) -> jnp.ndarray:
    """Interpolate volatilities between two expiries, linearly in total variance.

    Parameters
    ----------
    t : float
        Target time, with ``t_lower < t < t_upper``
    t_lower, t_upper : float
        Bracketing pillar times
    vols_lower, vols_upper : Array
        Volatilities at the bracketing pillars, position by position

    Returns
    -------
    Array
        Volatilities at ``t``

    Notes
    -----
    Total variance ``w = sigma^2 * t`` is linear in time between the
    pillars; the result is ``sqrt(w(t) / t)``.

    Examples
    --------
    >>> total_variance_interpolation(1.5, 1.0, 2.0, jnp.array([0.2]), jnp.array([0.2]))
    Array([0.2], dtype=float64)
    """
    var_lower = vols_lower**2 * t_lower
    var_upper = vols_upper**2 * t_upper
    weight = (t - t_lower) / (t_upper - t_lower)
    variance = var_lower + weight * (var_upper - var_lower)
    return jnp.sqrt(variance / t)


__all__ = ["linear_interpolation", "total_variance_interpolation"]
