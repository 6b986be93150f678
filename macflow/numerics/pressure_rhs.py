"""
Right-hand side of the pressure Poisson equation.

    rs_{i,j} = ( (F_{i,j} - F_{i-1,j})/dx + (G_{i,j} - G_{i,j-1})/dy ) / dt

for fluid cells i = 1..imax, j = 1..jmax. Obstacle cells are left untouched.
"""

from typing import Optional

import numpy as np
import numpy.typing as npt
from numba import njit, prange

from ..grid.fields import Grid, check_fields
from ..grid.flags import CellFlags
from ..params import check_dt

NDArrayFloat = npt.NDArray[np.floating]


@njit(cache=True, parallel=True)
def _compute_rhs_numba(F, G, RS, fluid, imax, jmax, dx, dy, dt):
    for i in prange(1, imax + 1):
        for j in range(1, jmax + 1):
            if fluid[i, j]:
                RS[i, j] = ((F[i, j] - F[i - 1, j]) / dx
                            + (G[i, j] - G[i, j - 1]) / dy) / dt


def compute_rhs(F: NDArrayFloat, G: NDArrayFloat, flags: CellFlags,
                grid: Grid, dt: float,
                RS: Optional[NDArrayFloat] = None) -> NDArrayFloat:
    """
    Assemble the divergence source term of the pressure equation.

    Parameters
    ----------
    F, G : ndarray, shape (imax+2, jmax+2)
        Intermediate velocities.
    flags : CellFlags
        Only fluid cells are written.
    grid : Grid
        Extents and spacings.
    dt : float
        Timestep.
    RS : ndarray, optional
        Output buffer, written in place. Zero-initialized if omitted.

    Returns
    -------
    RS : ndarray
    """
    if RS is None:
        RS = np.zeros_like(F)

    check_fields(grid, F=F, G=G, RS=RS)
    if flags.shape != grid.shape:
        raise ValueError(f"Flags have shape {flags.shape}, expected {grid.shape}")
    check_dt(dt)

    _compute_rhs_numba(F, G, RS, flags.is_fluid(), grid.imax, grid.jmax,
                       float(grid.dx), float(grid.dy), float(dt))
    return RS
