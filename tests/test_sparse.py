import numpy as np
import pytest

from hpcgref.geometry import generate_geometry
from hpcgref.problem import build_stencil_problem
from hpcgref.sparse import residual_norm, spmv
from hpcgref.vectors import dot_product


def _problem(nx, ny, nz):
    geom = generate_geometry(1, 0, 1, 0, 0, 0, nx, ny, nz, 1, 1, 1)
    return build_stencil_problem(geom)


def test_spmv_of_exact_solution_gives_rhs():
    matrix, b, _, xexact = _problem(4, 4, 4)
    y = np.zeros(matrix.local_number_of_rows)
    out = spmv(matrix, xexact, y)
    assert out is y
    np.testing.assert_array_equal(y, b)


def test_spmv_of_zero_is_zero():
    matrix, _, x, _ = _problem(3, 2, 2)
    y = np.full(matrix.local_number_of_rows, 5.0)
    spmv(matrix, x, y)
    np.testing.assert_array_equal(y, np.zeros(matrix.local_number_of_rows))


def test_spmv_single_cell_is_diagonal_only():
    matrix, _, _, _ = _problem(1, 1, 1)
    y = np.zeros(1)
    spmv(matrix, np.array([2.0]), y)
    assert y[0] == 52.0


def test_spmv_is_symmetric_operator():
    matrix, _, _, _ = _problem(3, 4, 2)
    n = matrix.local_number_of_rows
    rng = np.random.default_rng(5)
    u = rng.standard_normal(n)
    v = rng.standard_normal(n)
    au = spmv(matrix, u, np.zeros(n))
    av = spmv(matrix, v, np.zeros(n))
    assert dot_product(n, u, av) == pytest.approx(dot_product(n, v, au))


def test_spmv_is_linear_in_scaling():
    matrix, _, _, _ = _problem(2, 3, 4)
    n = matrix.local_number_of_rows
    v = np.random.default_rng(6).standard_normal(n)
    once = spmv(matrix, v, np.zeros(n))
    doubled = spmv(matrix, 2.0 * v, np.zeros(n))
    np.testing.assert_array_equal(doubled, 2.0 * once)


def test_spmv_rejects_short_input():
    matrix, _, _, _ = _problem(2, 2, 2)
    with pytest.raises(ValueError):
        spmv(matrix, np.ones(matrix.local_number_of_rows - 1), np.zeros(matrix.local_number_of_rows))


def test_spmv_rejects_short_output():
    matrix, _, _, xexact = _problem(2, 2, 2)
    with pytest.raises(ValueError):
        spmv(matrix, xexact, np.zeros(matrix.local_number_of_rows - 1))


def test_residual_norm_of_equal_vectors_is_zero():
    v = np.array([1.0, -2.0, 3.0])
    assert residual_norm(3, v, v.copy()) == 0.0


def test_residual_norm_takes_largest_difference():
    assert residual_norm(3, [1.0, 5.0, 2.0], [1.0, 2.0, 3.0]) == 3.0


def test_residual_norm_ignores_entries_past_n():
    assert residual_norm(2, [1.0, 2.0, 100.0], [1.0, 2.0, 0.0]) == 0.0


def test_residual_norm_between_spmv_and_rhs():
    matrix, b, _, xexact = _problem(3, 3, 3)
    y = spmv(matrix, xexact, np.zeros(matrix.local_number_of_rows))
    assert residual_norm(matrix.local_number_of_rows, y, b) == 0.0


def test_residual_norm_rejects_short_vectors():
    with pytest.raises(ValueError):
        residual_norm(4, np.ones(4), np.ones(3))