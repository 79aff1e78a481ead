import pytest

from hpcgref.geometry import generate_geometry
from hpcgref.shape import compute_optimal_shape


def test_single_process():
    geom = generate_geometry(1, 0, 1, 0, 0, 0, 16, 16, 16, 0, 0, 0)
    assert (geom.npx, geom.npy, geom.npz) == (1, 1, 1)
    assert (geom.gnx, geom.gny, geom.gnz) == (16, 16, 16)
    assert (geom.gix0, geom.giy0, geom.giz0) == (0, 0, 0)
    assert geom.npartz == 1
    assert geom.partz_ids == (1,)
    assert geom.partz_nz == (16,)


def test_requested_grid_is_kept_when_valid():
    geom = generate_geometry(8, 0, 1, 0, 0, 0, 4, 4, 4, 8, 1, 1)
    assert (geom.npx, geom.npy, geom.npz) == (8, 1, 1)
    assert geom.gnx == 32


def test_oversized_grid_is_replaced():
    geom = generate_geometry(12, 0, 1, 0, 0, 0, 4, 4, 4, 4, 4, 4)
    assert (geom.npx, geom.npy, geom.npz) == compute_optimal_shape(12)


@pytest.mark.parametrize("size", [1, 2, 6, 8, 12, 27])
def test_ranks_cover_process_grid(size):
    geoms = [generate_geometry(size, r, 1, 0, 0, 0, 3, 5, 7, 0, 0, 0) for r in range(size)]
    positions = {(g.ipx, g.ipy, g.ipz) for g in geoms}
    assert len(positions) == size
    for g in geoms:
        assert 0 <= g.ipx < g.npx
        assert 0 <= g.ipy < g.npy
        assert 0 <= g.ipz < g.npz
        assert g.gix0 == g.ipx * 3
        assert g.giy0 == g.ipy * 5
        assert g.giz0 == g.ipz * 7
        assert g.gnx == g.npx * 3
        assert g.gny == g.npy * 5
        assert g.gnz == g.npz * 7
        assert g.gix0 + g.nx <= g.gnx


def test_last_rank_offsets():
    geom = generate_geometry(8, 7, 1, 0, 0, 0, 4, 6, 8, 0, 0, 0)
    assert (geom.ipx, geom.ipy, geom.ipz) == (1, 1, 1)
    assert (geom.gix0, geom.giy0, geom.giz0) == (4, 6, 8)


def test_variable_z_partition():
    lower = generate_geometry(8, 0, 1, 1, 4, 8, 4, 4, 4, 2, 2, 2)
    upper = generate_geometry(8, 4, 1, 1, 4, 8, 4, 4, 4, 2, 2, 2)
    assert lower.npartz == 2
    assert lower.partz_ids == (1, 2)
    assert lower.partz_nz == (4, 8)
    assert lower.gnz == 4 + 8
    assert lower.giz0 == 0
    assert upper.ipz == 1
    assert upper.giz0 == 4


def test_inconsistent_z_partition_raises():
    with pytest.raises(ValueError):
        generate_geometry(8, 0, 1, 2, 4, 8, 4, 4, 4, 2, 2, 2)