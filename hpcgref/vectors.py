"""Dense vector kernels: dot products and scaled vector sums."""

from __future__ import annotations

import numpy as np


def _as_values(name: str, v, n: int) -> np.ndarray:
    values = np.asarray(v, dtype=np.float64)
    if values.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional, got shape {values.shape}")
    if n < 0:
        raise ValueError(f"vector length {n} is negative")
    if len(values) < n:
        raise ValueError(f"{name} has {len(values)} entries, at least {n} are required")
    return values


def dot_product(n: int, x, y) -> float:
    """Return the dot product of the first ``n`` entries of ``x`` and ``y``."""
    xv = _as_values("x", x, n)[:n]
    if y is x:
        return float(np.dot(xv, xv))
    yv = _as_values("y", y, n)[:n]
    return float(np.dot(xv, yv))


def waxpby(n: int, alpha: float, x, beta: float, y, w: np.ndarray) -> np.ndarray:
    """Store ``alpha*x + beta*y`` into the first ``n`` entries of ``w`` and return ``w``.

    ``w`` may be the same array as ``x`` or ``y``.
    """
    xv = _as_values("x", x, n)[:n]
    yv = _as_values("y", y, n)[:n]
    if not isinstance(w, np.ndarray):
        raise TypeError("w must be a numpy array that receives the result")
    _as_values("w", w, n)
    if alpha == 1.0:
        result = xv + beta * yv
    elif beta == 1.0:
        result = alpha * xv + yv
    else:
        result = alpha * xv + beta * yv
    w[:n] = result
    return w


def fused_waxpby_dot(n: int, alpha: float, x, y: np.ndarray) -> float:
    """Update ``y += alpha*x`` over the first ``n`` entries and return the squared norm of the result."""
    xv = _as_values("x", x, n)[:n]
    if not isinstance(y, np.ndarray):
        raise TypeError("y must be a numpy array that is updated in place")
    _as_values("y", y, n)
    y[:n] = alpha * xv + y[:n]
    updated = y[:n]
    return float(np.dot(updated, updated))