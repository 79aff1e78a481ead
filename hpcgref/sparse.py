"""Sparse matrix-vector product and the inf-norm difference of two vectors."""

from __future__ import annotations

import numpy as np

from .problem import SparseMatrix


def spmv(matrix: SparseMatrix, x, y: np.ndarray) -> np.ndarray:
    """Store ``matrix @ x`` into the first local rows of ``y`` and return ``y``."""
    xv = np.asarray(x, dtype=np.float64)
    if len(xv) < matrix.local_number_of_columns:
        raise ValueError(
            f"x has {len(xv)} entries, at least {matrix.local_number_of_columns} are required"
        )
    if not isinstance(y, np.ndarray):
        raise TypeError("y must be a numpy array that receives the result")
    if len(y) < matrix.local_number_of_rows:
        raise ValueError(
            f"y has {len(y)} entries, at least {matrix.local_number_of_rows} are required"
        )
    rows = zip(matrix.matrix_values, matrix.mtx_ind_l, matrix.nonzeros_in_row)
    y[: matrix.local_number_of_rows] = [
        float(np.dot(values[:count], xv[indices[:count]])) for values, indices, count in rows
    ]
    return y


def residual_norm(n: int, v1, v2) -> float:
    """Return the largest absolute difference over the first ``n`` entries of two vectors."""
    if n < 0:
        raise ValueError(f"vector length {n} is negative")
    a = np.asarray(v1, dtype=np.float64)
    b = np.asarray(v2, dtype=np.float64)
    if len(a) < n or len(b) < n:
        raise ValueError(f"vectors of lengths {len(a)} and {len(b)} are shorter than {n}")
    if n == 0:
        return 0.0
    return float(np.max(np.abs(a[:n] - b[:n])))