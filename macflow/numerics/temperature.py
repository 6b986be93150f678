"""
Explicit advection-diffusion update of the temperature field.

    T^{n+1} = T^n + dt * ( -d(uT)/dx - d(vT)/dy + (d2T/dx2 + d2T/dy2)/(Re*Pr) )

with the convective terms in donor-cell blended form:

    d(uT)/dx = [ u_{i,j}(T_{i,j}+T_{i+1,j})/2 - u_{i-1,j}(T_{i-1,j}+T_{i,j})/2 ] / dx
             + alpha [ |u_{i,j}|(T_{i,j}-T_{i+1,j})/2 - |u_{i-1,j}|(T_{i-1,j}-T_{i,j})/2 ] / dx

and analogously in y. Applied on i = 0..imax, j = 0..jmax.

The update is double-buffered: every cell reads the old field only, so the
result does not depend on sweep order. Row/column 0 reads one cell past the
boundary layer; those reads use zero-gradient extrapolation.

Obstacle cells are updated like fluid cells unless ``mask_obstacles`` is set.
"""

import numpy as np
import numpy.typing as npt
from numba import njit, prange

from ..grid.fields import Grid, check_fields
from ..grid.flags import CellFlags
from ..params import FlowParams, check_params, check_dt

NDArrayFloat = npt.NDArray[np.floating]


@njit(cache=True, parallel=True)
def _temperature_numba(Tp, Up, Vp, T_new, update, imax, jmax, dx, dy, dt,
                       alpha, diffusivity):
    """
    Tp, Up, Vp carry one extra padding layer, so cell (i, j) of the
    field is (i+1, j+1) of the padded arrays.
    """
    for i in prange(0, imax + 1):
        for j in range(0, jmax + 1):
            if not update[i, j]:
                continue

            a = i + 1
            b = j + 1

            t_c = Tp[a, b]
            t_e = Tp[a + 1, b]
            t_w = Tp[a - 1, b]
            t_n = Tp[a, b + 1]
            t_s = Tp[a, b - 1]

            u_e = Up[a, b]
            u_w = Up[a - 1, b]
            v_n = Vp[a, b]
            v_s = Vp[a, b - 1]

            adv_x = (u_e * 0.5 * (t_c + t_e) - u_w * 0.5 * (t_w + t_c)) / dx
            upw_x = (abs(u_e) * 0.5 * (t_c - t_e) - abs(u_w) * 0.5 * (t_w - t_c)) / dx

            adv_y = (v_n * 0.5 * (t_c + t_n) - v_s * 0.5 * (t_s + t_c)) / dy
            upw_y = (abs(v_n) * 0.5 * (t_c - t_n) - abs(v_s) * 0.5 * (t_s - t_c)) / dy

            diffusion = ((t_w - 2.0 * t_c + t_e) / (dx * dx)
                         + (t_s - 2.0 * t_c + t_n) / (dy * dy))

            T_new[i, j] = t_c + dt * (
                - adv_x - alpha * upw_x
                - adv_y - alpha * upw_y
                + diffusivity * diffusion
            )


def compute_temperature(T: NDArrayFloat, U: NDArrayFloat, V: NDArrayFloat,
                        flags: CellFlags, grid: Grid, params: FlowParams,
                        dt: float, mask_obstacles: bool = False) -> NDArrayFloat:
    """
    Advance the temperature by one explicit step.

    Parameters
    ----------
    T : ndarray, shape (imax+2, jmax+2)
        Temperature at the current step. Not modified.
    U, V : ndarray, shape (imax+2, jmax+2)
        Transporting velocities.
    flags : CellFlags
        Only consulted when ``mask_obstacles`` is True.
    grid : Grid
        Extents and spacings.
    params : FlowParams
        Re, Pr and alpha are used.
    dt : float
        Timestep.
    mask_obstacles : bool
        Keep obstacle-cell temperatures fixed instead of updating them.

    Returns
    -------
    T_new : ndarray
        Fresh buffer holding the next temperature field. Entries outside
        i = 0..imax, j = 0..jmax are copied from T.
    """
    check_fields(grid, T=T, U=U, V=V)
    if flags.shape != grid.shape:
        raise ValueError(f"Flags have shape {flags.shape}, expected {grid.shape}")
    check_params(params)
    check_dt(dt)

    Tp = np.pad(T, 1, mode='edge')
    Up = np.pad(U, 1, mode='edge')
    Vp = np.pad(V, 1, mode='edge')

    if mask_obstacles:
        update = flags.is_fluid()
    else:
        update = np.ones(grid.shape, dtype=np.bool_)

    T_new = T.copy()
    _temperature_numba(Tp, Up, Vp, T_new, update, grid.imax, grid.jmax,
                       float(grid.dx), float(grid.dy), float(dt),
                       float(params.alpha),
                       float(1.0 / (params.reynolds * params.prandtl)))
    return T_new
