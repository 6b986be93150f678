"""Diagnostic quantities for monitoring a running simulation."""

from typing import NamedTuple, Dict, Any, Optional

import numpy as np
import numpy.typing as npt

from ..constants import get_interior_slice
from ..grid.fields import Grid, FlowFields
from ..grid.flags import CellFlags

NDArrayFloat = npt.NDArray[np.floating]


class VelocityMaxima(NamedTuple):
    """Largest absolute velocity components."""
    u_max: float
    v_max: float


def compute_velocity_maxima(U: NDArrayFloat, V: NDArrayFloat,
                            grid: Grid) -> VelocityMaxima:
    """
    Max |u| and |v| over i = 0..imax, j = 0..jmax.

    The last boundary row/column is not scanned.
    """
    imax, jmax = grid.imax, grid.jmax
    u_max: float = float(np.max(np.abs(U[:imax + 1, :jmax + 1])))
    v_max: float = float(np.max(np.abs(V[:imax + 1, :jmax + 1])))
    return VelocityMaxima(u_max=u_max, v_max=v_max)


def compute_divergence(U: NDArrayFloat, V: NDArrayFloat, grid: Grid,
                       flags: Optional[CellFlags] = None) -> NDArrayFloat:
    """
    Discrete divergence du/dx + dv/dy at interior cell centers.

    Returns
    -------
    div : ndarray, shape (imax, jmax)
        Zero on obstacle cells when `flags` is given.
    """
    interior = get_interior_slice()
    div: NDArrayFloat = ((U[interior] - U[:-2, 1:-1]) / grid.dx
                         + (V[interior] - V[1:-1, :-2]) / grid.dy)
    if flags is not None:
        div = np.where(flags.is_fluid()[interior], div, 0.0)
    return div


def compute_field_bounds(fields: FlowFields) -> Dict[str, Any]:
    """Check all fields for NaN/inf and report their ranges."""
    bounds: Dict[str, Any] = {'has_nan': False, 'has_inf': False}
    for name, arr in fields.as_dict().items():
        has_nan = bool(np.any(np.isnan(arr)))
        has_inf = bool(np.any(np.isinf(arr)))
        bounds['has_nan'] |= has_nan
        bounds['has_inf'] |= has_inf
        finite = arr[np.isfinite(arr)]
        bounds[f'{name}_min'] = float(finite.min()) if finite.size else float('nan')
        bounds[f'{name}_max'] = float(finite.max()) if finite.size else float('nan')
    return bounds
