"""
Intermediate velocities F, G from the discrete momentum equations.

    F_{i,j} = u_{i,j} + dt * ( (d2u/dx2 + d2u/dy2)/Re - d(u^2)/dx - d(uv)/dy
                               + (1 - beta*T_{i,j}) * gx )
        i = 1..imax-1, j = 1..jmax

    G_{i,j} = v_{i,j} + dt * ( (d2v/dx2 + d2v/dy2)/Re - d(uv)/dx - d(v^2)/dy
                               + (1 - beta*T_{i,j}) * gy )
        i = 1..imax, j = 1..jmax-1

F and G are only evaluated on edges between two fluid cells. On the outer
domain edges and on edges touching an obstacle they copy the velocity
(zero pressure gradient across the edge).
"""

from typing import Optional, Tuple

import numpy as np
import numpy.typing as npt
from numba import njit, prange

from ..constants import Direction
from ..grid.fields import Grid, check_fields
from ..grid.flags import CellFlags
from ..params import FlowParams, check_params, check_dt
from .stencils import (
    second_derivative_x, second_derivative_y,
    product_derivative_x, product_derivative_y,
    square_derivative_x, square_derivative_y,
)

NDArrayFloat = npt.NDArray[np.floating]


@njit(cache=True, parallel=True)
def _compute_f_numba(U, V, T, F, fluid_edge, imax, jmax, dx, dy, dt,
                     reynolds, gx, alpha, beta):
    """F on all U-points; fluid_edge[i, j] marks cell and right neighbor fluid."""
    NJ = U.shape[1]

    # Outer domain edges: copy u
    for j in range(NJ):
        F[0, j] = U[0, j]
        F[imax, j] = U[imax, j]

    for i in prange(1, imax):
        for j in range(1, jmax + 1):
            if not fluid_edge[i, j]:
                F[i, j] = U[i, j]
                continue

            diffusion = second_derivative_x(U, i, j, dx) + second_derivative_y(U, i, j, dy)
            convection = (square_derivative_x(U, i, j, dx, alpha)
                          + product_derivative_y(U, V, i, j, dy, alpha))
            buoyancy = (1.0 - beta * T[i, j]) * gx

            F[i, j] = U[i, j] + dt * (diffusion / reynolds - convection + buoyancy)


@njit(cache=True, parallel=True)
def _compute_g_numba(U, V, T, G, fluid_edge, imax, jmax, dx, dy, dt,
                     reynolds, gy, alpha, beta):
    """G on all V-points; fluid_edge[i, j] marks cell and top neighbor fluid."""
    NI = V.shape[0]

    # Outer domain edges: copy v
    for i in range(NI):
        G[i, 0] = V[i, 0]
        G[i, jmax] = V[i, jmax]

    for i in prange(1, imax + 1):
        for j in range(1, jmax):
            if not fluid_edge[i, j]:
                G[i, j] = V[i, j]
                continue

            diffusion = second_derivative_x(V, i, j, dx) + second_derivative_y(V, i, j, dy)
            convection = (product_derivative_x(U, V, i, j, dx, alpha)
                          + square_derivative_y(V, i, j, dy, alpha))
            buoyancy = (1.0 - beta * T[i, j]) * gy

            G[i, j] = V[i, j] + dt * (diffusion / reynolds - convection + buoyancy)


def compute_fg(U: NDArrayFloat, V: NDArrayFloat, T: NDArrayFloat,
               flags: CellFlags, grid: Grid, params: FlowParams, dt: float,
               F: Optional[NDArrayFloat] = None,
               G: Optional[NDArrayFloat] = None) -> Tuple[NDArrayFloat, NDArrayFloat]:
    """
    Compute the intermediate velocities F and G.

    Parameters
    ----------
    U, V : ndarray, shape (imax+2, jmax+2)
        Velocity components on east/north faces.
    T : ndarray, shape (imax+2, jmax+2)
        Temperature at cell centers (Boussinesq buoyancy).
    flags : CellFlags
        Fluid/obstacle classification.
    grid : Grid
        Extents and spacings.
    params : FlowParams
        Re, gx, gy, alpha, beta are used.
    dt : float
        Timestep.
    F, G : ndarray, optional
        Output buffers, written in place. Allocated if omitted.

    Returns
    -------
    F, G : ndarray
        Intermediate velocities (the output buffers).
    """
    if F is None:
        F = U.copy()
    if G is None:
        G = V.copy()

    check_fields(grid, U=U, V=V, T=T, F=F, G=G)
    if flags.shape != grid.shape:
        raise ValueError(f"Flags have shape {flags.shape}, expected {grid.shape}")
    check_params(params)
    check_dt(dt)

    # Entries the kernels do not evaluate carry the current velocity
    np.copyto(F, U)
    np.copyto(G, V)

    edge_x = flags.fluid_edges(Direction.RIGHT)
    edge_y = flags.fluid_edges(Direction.TOP)

    _compute_f_numba(U, V, T, F, edge_x, grid.imax, grid.jmax,
                     float(grid.dx), float(grid.dy), float(dt),
                     float(params.reynolds), float(params.gx),
                     float(params.alpha), float(params.beta))
    _compute_g_numba(U, V, T, G, edge_y, grid.imax, grid.jmax,
                     float(grid.dx), float(grid.dy), float(dt),
                     float(params.reynolds), float(params.gy),
                     float(params.alpha), float(params.beta))

    return F, G
