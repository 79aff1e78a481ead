"""The 27-point stencil problem and its consistency check."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from itertools import product
from typing import Any

import numpy as np

from .geometry import Geometry

DIAGONAL_VALUE = 26.0
OFF_DIAGONAL_VALUE = -1.0


class ProblemCheckError(AssertionError):
    """Raised when a generated problem does not match the expected stencil."""


@dataclass(eq=False)
class SparseMatrix:
    """Row-wise sparse matrix of the local block of the stencil problem.

    ``matrix_diagonal[i]`` is the position of the diagonal entry within row ``i``.
    Column indices in ``mtx_ind_l`` refer to local rows first, then to external
    (halo) columns numbered from ``local_number_of_rows`` upwards.
    """

    geom: Geometry
    total_number_of_rows: int
    total_number_of_nonzeros: int
    local_number_of_rows: int
    local_number_of_columns: int
    local_number_of_nonzeros: int
    nonzeros_in_row: np.ndarray
    mtx_ind_g: list[np.ndarray]
    mtx_ind_l: list[np.ndarray]
    matrix_values: list[np.ndarray]
    matrix_diagonal: np.ndarray
    local_to_global_map: np.ndarray
    global_to_local_map: dict[int, int]
    external_to_global: dict[int, int] = field(default_factory=dict)
    coarse: SparseMatrix | None = None
    mg_data: Any = None


def _stencil_columns(geom: Geometry, gix: int, giy: int, giz: int) -> list[int]:
    row = giz * geom.gnx * geom.gny + giy * geom.gnx + gix
    columns = []
    for sz, sy, sx in product((-1, 0, 1), repeat=3):
        if 0 <= giz + sz < geom.gnz and 0 <= giy + sy < geom.gny and 0 <= gix + sx < geom.gnx:
            columns.append(row + sz * geom.gnx * geom.gny + sy * geom.gnx + sx)
    return columns


def _local_cells(geom: Geometry):
    for iz, iy, ix in product(range(geom.nz), range(geom.ny), range(geom.nx)):
        yield geom.gix0 + ix, geom.giy0 + iy, geom.giz0 + iz


def build_stencil_problem(
    geom: Geometry,
) -> tuple[SparseMatrix, np.ndarray, np.ndarray, np.ndarray]:
    """Build the local 27-point stencil matrix with right-hand side, start and exact vectors.

    Returns ``(matrix, b, x, xexact)`` where ``x`` is zero and ``xexact`` is one
    everywhere, and ``b`` is the row sum of the matrix.
    """
    nrow = geom.nx * geom.ny * geom.nz
    if nrow <= 0:
        raise ValueError(f"local grid {geom.nx}x{geom.ny}x{geom.nz} has no rows")

    local_to_global = np.array(
        [giz * geom.gnx * geom.gny + giy * geom.gnx + gix for gix, giy, giz in _local_cells(geom)],
        dtype=np.int64,
    )
    global_to_local = {int(g): i for i, g in enumerate(local_to_global)}
    external: dict[int, int] = {}

    values: list[np.ndarray] = []
    ind_g: list[np.ndarray] = []
    ind_l: list[np.ndarray] = []
    diagonal = np.empty(nrow, dtype=np.int64)
    counts = np.empty(nrow, dtype=np.int64)
    b = np.empty(nrow, dtype=np.float64)

    for row, (gix, giy, giz) in enumerate(_local_cells(geom)):
        global_row = int(local_to_global[row])
        columns = _stencil_columns(geom, gix, giy, giz)
        row_values = np.full(len(columns), OFF_DIAGONAL_VALUE)
        diag_pos = columns.index(global_row)
        row_values[diag_pos] = DIAGONAL_VALUE
        local_columns = []
        for col in columns:
            local = global_to_local.get(col)
            if local is None:
                local = external.setdefault(col, nrow + len(external))
            local_columns.append(local)

        values.append(row_values)
        ind_g.append(np.array(columns, dtype=np.int64))
        ind_l.append(np.array(local_columns, dtype=np.int64))
        diagonal[row] = diag_pos
        counts[row] = len(columns)
        b[row] = DIAGONAL_VALUE - (len(columns) - 1)

    total_nonzeros = math.prod(3 * g - 2 for g in (geom.gnx, geom.gny, geom.gnz))
    matrix = SparseMatrix(
        geom=geom,
        total_number_of_rows=geom.gnx * geom.gny * geom.gnz,
        total_number_of_nonzeros=total_nonzeros,
        local_number_of_rows=nrow,
        local_number_of_columns=nrow + len(external),
        local_number_of_nonzeros=int(counts.sum()),
        nonzeros_in_row=counts,
        mtx_ind_g=ind_g,
        mtx_ind_l=ind_l,
        matrix_values=values,
        matrix_diagonal=diagonal,
        local_to_global_map=local_to_global,
        global_to_local_map=global_to_local,
        external_to_global={local: g for g, local in external.items()},
    )
    x = np.zeros(nrow)
    xexact = np.ones(nrow)
    return matrix, b, x, xexact


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ProblemCheckError(message)


def check_problem(
    matrix: SparseMatrix,
    b: np.ndarray | None = None,
    x: np.ndarray | None = None,
    xexact: np.ndarray | None = None,
) -> int:
    """Verify the matrix (and any given vectors) against the stencil definition.

    Returns the number of local nonzeros counted; raises
    :class:`ProblemCheckError` on the first mismatch.
    """
    geom = matrix.geom
    local_nonzeros = 0

    for row, (gix, giy, giz) in enumerate(_local_cells(geom)):
        global_row = giz * geom.gnx * geom.gny + giy * geom.gnx + gix
        _require(
            int(matrix.local_to_global_map[row]) == global_row,
            f"row {row}: local-to-global map gives {matrix.local_to_global_map[row]}, expected {global_row}",
        )
        columns = _stencil_columns(geom, gix, giy, giz)
        row_values = matrix.matrix_values[row]
        row_indices = matrix.mtx_ind_g[row]
        _require(
            len(row_values) >= len(columns) and len(row_indices) >= len(columns),
            f"row {row}: fewer stored entries than the {len(columns)} expected",
        )
        for pos, col in enumerate(columns):
            if col == global_row:
                _require(
                    int(matrix.matrix_diagonal[row]) == pos,
                    f"row {row}: diagonal recorded at {matrix.matrix_diagonal[row]}, found at {pos}",
                )
                _require(
                    row_values[pos] == DIAGONAL_VALUE,
                    f"row {row}: diagonal value {row_values[pos]}",
                )
            else:
                _require(
                    row_values[pos] == OFF_DIAGONAL_VALUE,
                    f"row {row}, entry {pos}: off-diagonal value {row_values[pos]}",
                )
            _require(
                int(row_indices[pos]) == col,
                f"row {row}, entry {pos}: column {row_indices[pos]}, expected {col}",
            )
        count = len(columns)
        _require(
            int(matrix.nonzeros_in_row[row]) == count,
            f"row {row}: {matrix.nonzeros_in_row[row]} nonzeros recorded, {count} expected",
        )
        local_nonzeros += count
        if b is not None:
            _require(
                b[row] == DIAGONAL_VALUE - (count - 1),
                f"b[{row}] = {b[row]}",
            )
        if x is not None:
            _require(x[row] == 0.0, f"x[{row}] = {x[row]}")
        if xexact is not None:
            _require(xexact[row] == 1.0, f"xexact[{row}] = {xexact[row]}")

    total_rows = geom.gnx * geom.gny * geom.gnz
    total_nonzeros = math.prod(3 * g - 2 for g in (geom.gnx, geom.gny, geom.gnz))
    local_rows = geom.nx * geom.ny * geom.nz
    _require(
        matrix.total_number_of_rows == total_rows,
        f"total rows {matrix.total_number_of_rows}, expected {total_rows}",
    )
    _require(
        matrix.total_number_of_nonzeros == total_nonzeros,
        f"total nonzeros {matrix.total_number_of_nonzeros}, expected {total_nonzeros}",
    )
    _require(
        matrix.local_number_of_rows == local_rows,
        f"local rows {matrix.local_number_of_rows}, expected {local_rows}",
    )
    _require(
        matrix.local_number_of_nonzeros == local_nonzeros,
        f"local nonzeros {matrix.local_number_of_nonzeros}, expected {local_nonzeros}",
    )
    return local_nonzeros