"""Domain decomposition of the global grid across a 3D process grid."""

from __future__ import annotations

from dataclasses import dataclass

from .shape import compute_optimal_shape


@dataclass(frozen=True)
class Geometry:
    """Local grid sizes, process-grid layout and this process's place in it."""

    size: int
    rank: int
    num_threads: int
    nx: int
    ny: int
    nz: int
    npx: int
    npy: int
    npz: int
    pz: int
    npartz: int
    partz_ids: tuple[int, ...]
    partz_nz: tuple[int, ...]
    ipx: int
    ipy: int
    ipz: int
    gnx: int
    gny: int
    gnz: int
    gix0: int
    giy0: int
    giz0: int


def generate_geometry(
    size: int,
    rank: int,
    num_threads: int,
    pz: int,
    zl: int,
    zu: int,
    nx: int,
    ny: int,
    nz: int,
    npx: int,
    npy: int,
    npz: int,
) -> Geometry:
    """Describe the local block of process ``rank`` out of ``size`` processes.

    If the requested process grid ``npx*npy*npz`` is not positive or exceeds
    ``size``, a near-cubic grid is computed from ``size``. When ``pz`` is
    non-zero, z-processes below ``pz`` use ``zl`` local z-points and the rest
    use ``zu``.
    """
    if npx * npy * npz <= 0 or npx * npy * npz > size:
        npx, npy, npz = compute_optimal_shape(size)

    if pz == 0:
        partz_ids: tuple[int, ...] = (npz,)
        partz_nz: tuple[int, ...] = (nz,)
    else:
        partz_ids = (pz, npz)
        partz_nz = (zl, zu)

    previous = 0
    for part_id in partz_ids:
        if not previous < part_id:
            raise ValueError(
                f"z partitioning {partz_ids} is inconsistent with npz={npz}"
            )
        previous = part_id

    ipz = rank // (npx * npy)
    ipy = (rank - ipz * npx * npy) // npx
    ipx = rank % npx

    gnx = npx * nx
    gny = npy * ny

    gnz = 0
    span = 0
    for part_id, part_nz in zip(partz_ids, partz_nz):
        span = part_id - span
        gnz += part_nz * span

    giz0 = 0
    reached = 0
    for part_id, part_nz in zip(partz_ids, partz_nz):
        if ipz < part_id:
            giz0 += (ipz - reached) * part_nz
            break
        reached = part_id
        giz0 += reached * part_nz

    return Geometry(
        size=size,
        rank=rank,
        num_threads=num_threads,
        nx=nx,
        ny=ny,
        nz=nz,
        npx=npx,
        npy=npy,
        npz=npz,
        pz=pz,
        npartz=len(partz_ids),
        partz_ids=partz_ids,
        partz_nz=partz_nz,
        ipx=ipx,
        ipy=ipy,
        ipz=ipz,
        gnx=gnx,
        gny=gny,
        gnz=gnz,
        gix0=ipx * nx,
        giy0=ipy * ny,
        giz0=giz0,
    )