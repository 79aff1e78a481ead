# hpcgref

Building blocks for the symmetric 27-point stencil problem on a regular 3D
grid: splitting a process count into a near-cubic process grid, describing a
process's local block, generating and checking the local sparse matrix, dense
vector kernels, a sparse matrix-vector product and a symmetric Gauss-Seidel
smoother. Vectors are NumPy arrays.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `hpcgref.shape`
  - `prime_factors(n)` returns an ascending `{prime: count}` dict
    (`1` gives `{1: 1}`).
  - `compute_optimal_shape(xyz)` splits `xyz` into three factors whose box
    has the smallest surface area.
  - `cubic_radical_search(n)` finds the factorization that maximises
    min/max of the three factors.
  - `check_aspect_ratio(smallest_ratio, x, y, z, what)` returns
    min(x,y,z)/max(x,y,z) and raises `AspectRatioError` (a `ValueError`) when
    it is below `smallest_ratio`.
- `hpcgref.geometry`
  - `generate_geometry(size, rank, num_threads, pz, zl, zu, nx, ny, nz, npx, npy, npz)`
    returns a frozen `Geometry` dataclass with the local sizes, the process
    grid, this rank's position in it, the global sizes `gnx`, `gny`, `gnz`
    and the global offsets `gix0`, `giy0`, `giz0`. If `npx*npy*npz` is not
    positive or exceeds `size`, the process grid is computed with
    `compute_optimal_shape`. A non-zero `pz` gives z-processes below `pz`
    `zl` local z-points and the rest `zu`. An inconsistent z partitioning
    raises `ValueError`.
- `hpcgref.problem`
  - `build_stencil_problem(geom)` returns `(matrix, b, x, xexact)`: the local
    `SparseMatrix` (diagonal 26, off-diagonals -1), the right-hand side (the
    row sums), a zero start vector and a vector of ones.
  - `check_problem(matrix, b=None, x=None, xexact=None)` checks the matrix and
    any given vectors against the stencil, returns the number of local
    nonzeros and raises `ProblemCheckError` (an `AssertionError`) at the
    first mismatch.
- `hpcgref.vectors`
  - `dot_product(n, x, y)` over the first `n` entries.
  - `waxpby(n, alpha, x, beta, y, w)` stores `alpha*x + beta*y` into `w` and
    returns it; `w` may be `x` or `y`.
  - `fused_waxpby_dot(n, alpha, x, y)` updates `y += alpha*x` in place and
    returns the squared norm of the result.
- `hpcgref.sparse`
  - `spmv(matrix, x, y)` stores the product of the matrix with `x` into the
    local rows of `y` and returns `y`.
  - `residual_norm(n, v1, v2)` is the largest absolute difference over the
    first `n` entries.
- `hpcgref.smoother`
  - `symgs(matrix, r, x)` applies one forward and one backward Gauss-Seidel
    sweep to `x` in place.
  - `symgs_zero_guess(matrix, r, x)` does the same starting from zero,
    ignoring what `x` held.

Length mismatches raise `ValueError`; output arrays that are not NumPy arrays
raise `TypeError`.

## Example

```python
import numpy as np

from hpcgref.geometry import generate_geometry
from hpcgref.problem import build_stencil_problem, check_problem
from hpcgref.sparse import residual_norm, spmv
from hpcgref.smoother import symgs

geom = generate_geometry(1, 0, 1, 0, 0, 0, 8, 8, 8, 1, 1, 1)
matrix, b, x, xexact = build_stencil_problem(geom)
print(check_problem(matrix, b, x, xexact))  # local nonzeros

n = matrix.local_number_of_rows
y = np.zeros(n)
spmv(matrix, xexact, y)
print(residual_norm(n, y, b))  # 0.0: b is the row sum

for _ in range(20):
    symgs(matrix, b, x)
print(residual_norm(n, x, xexact))
```

## What it does not do

- There is no conjugate gradient solver and no multigrid V-cycle: no coarse
  levels are built and there is no restriction or prolongation between grids.
  Gauss-Seidel sweeps are the only iterative method provided.
- Nothing is exchanged between processes. A `Geometry` describes one rank's
  block; halo columns of a matrix are numbered after the local rows, and the
  smoother and `spmv` use whatever values the caller has placed there.
- There is no command-line program and no timing or reporting of runs.