"""
Projection step: new velocities from F, G and the updated pressure.

    u_{i,j} = F_{i,j} - dt/dx * (p_{i+1,j} - p_{i,j})    i = 1..imax-1, j = 1..jmax
    v_{i,j} = G_{i,j} - dt/dy * (p_{i,j+1} - p_{i,j})    i = 1..imax,   j = 1..jmax-1

Only edges between two fluid cells are updated; edges touching an
obstacle keep their value (no penetration).
"""

from typing import Tuple

import numpy as np
import numpy.typing as npt
from numba import njit, prange

from ..constants import Direction
from ..grid.fields import Grid, check_fields
from ..grid.flags import CellFlags
from ..params import check_dt

NDArrayFloat = npt.NDArray[np.floating]


@njit(cache=True, parallel=True)
def _correct_u_numba(U, F, P, fluid_edge, imax, jmax, dt_dx):
    for i in prange(1, imax):
        for j in range(1, jmax + 1):
            if fluid_edge[i, j]:
                U[i, j] = F[i, j] - dt_dx * (P[i + 1, j] - P[i, j])


@njit(cache=True, parallel=True)
def _correct_v_numba(V, G, P, fluid_edge, imax, jmax, dt_dy):
    for i in prange(1, imax + 1):
        for j in range(1, jmax):
            if fluid_edge[i, j]:
                V[i, j] = G[i, j] - dt_dy * (P[i, j + 1] - P[i, j])


def correct_velocity(U: NDArrayFloat, V: NDArrayFloat,
                     F: NDArrayFloat, G: NDArrayFloat, P: NDArrayFloat,
                     flags: CellFlags, grid: Grid,
                     dt: float) -> Tuple[NDArrayFloat, NDArrayFloat]:
    """Update U and V in place with the pressure gradient correction."""
    check_fields(grid, U=U, V=V, F=F, G=G, P=P)
    if flags.shape != grid.shape:
        raise ValueError(f"Flags have shape {flags.shape}, expected {grid.shape}")
    check_dt(dt)

    _correct_u_numba(U, F, P, flags.fluid_edges(Direction.RIGHT),
                     grid.imax, grid.jmax, float(dt / grid.dx))
    _correct_v_numba(V, G, P, flags.fluid_edges(Direction.TOP),
                     grid.imax, grid.jmax, float(dt / grid.dy))
    return U, V
