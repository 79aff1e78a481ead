"""Symmetric Gauss-Seidel smoothing of the local block of a sparse matrix."""

from __future__ import annotations

import numpy as np

from .problem import SparseMatrix


def _check_vectors(matrix: SparseMatrix, r, x) -> np.ndarray:
    if not isinstance(x, np.ndarray):
        raise TypeError("x must be a numpy array that is updated in place")
    if x.ndim != 1 or len(x) != matrix.local_number_of_columns:
        raise ValueError(
            f"x has shape {x.shape}, exactly {matrix.local_number_of_columns} entries are required"
        )
    rv = np.asarray(r, dtype=np.float64)
    if rv.ndim != 1 or len(rv) < matrix.local_number_of_rows:
        raise ValueError(
            f"r has shape {rv.shape}, at least {matrix.local_number_of_rows} entries are required"
        )
    return rv


def _relax_row(matrix: SparseMatrix, rv: np.ndarray, x: np.ndarray, row: int) -> None:
    count = int(matrix.nonzeros_in_row[row])
    values = matrix.matrix_values[row][:count]
    indices = matrix.mtx_ind_l[row][:count]
    diagonal = float(matrix.matrix_values[row][int(matrix.matrix_diagonal[row])])
    total = rv[row] - float(np.dot(values, x[indices]))
    # The loop above also subtracted the diagonal term; put it back.
    total += x[row] * diagonal
    x[row] = total / diagonal


def _sweeps(matrix: SparseMatrix, rv: np.ndarray, x: np.ndarray) -> None:
    nrow = matrix.local_number_of_rows
    for row in range(nrow):
        _relax_row(matrix, rv, x, row)
    for row in reversed(range(nrow)):
        _relax_row(matrix, rv, x, row)


def symgs(matrix: SparseMatrix, r, x: np.ndarray) -> np.ndarray:
    """Apply one forward and one backward Gauss-Seidel sweep to ``x`` with right-hand side ``r``.

    ``x`` holds the local rows followed by the halo columns; halo values are
    used as they stand. ``x`` is updated in place and returned.
    """
    rv = _check_vectors(matrix, r, x)
    _sweeps(matrix, rv, x)
    return x


def symgs_zero_guess(matrix: SparseMatrix, r, x: np.ndarray) -> np.ndarray:
    """Apply one symmetric Gauss-Seidel step starting from a zero guess.

    The previous local contents of ``x`` and all halo values are ignored;
    only the local rows of ``x`` are written. ``x`` is returned.
    """
    rv = _check_vectors(matrix, r, x)
    work = np.zeros(matrix.local_number_of_columns, dtype=np.float64)
    _sweeps(matrix, rv, work)
    nrow = matrix.local_number_of_rows
    x[:nrow] = work[:nrow]
    return x