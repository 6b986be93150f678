"""
Adaptive time step for the explicit scheme.

Δt = τ · min( Re·Pr/2 · (1/Δx² + 1/Δy²)⁻¹,  Δx/|u|max,  Δy/|v|max )

A zero velocity maximum removes the corresponding convective bound.

Reference: Griebel, Dornseifer, Neunhoeffer (1998), ch. 3.
"""

import math
from dataclasses import dataclass
from typing import NamedTuple, Optional

import numpy as np
import numpy.typing as npt
from loguru import logger

from ..grid.fields import Grid, check_fields
from ..numerics.diagnostics import compute_velocity_maxima
from ..params import FlowParams, check_params

NDArrayFloat = npt.NDArray[np.floating]


@dataclass
class TimeStepConfig:
    """Configuration for time step selection."""
    adaptive: bool = True
    dt: float = 0.05            # Fixed step when adaptive is off (also the initial step)
    min_dt: float = 0.0
    max_dt: float = math.inf


class StabilityBounds(NamedTuple):
    """Candidate time steps before the safety factor is applied."""
    diffusive: float
    convective_x: float
    convective_y: float

    def limiting(self) -> str:
        """Name of the bound that sets the time step."""
        return min(self._fields, key=lambda name: getattr(self, name))


def compute_stability_bounds(U: NDArrayFloat, V: NDArrayFloat, grid: Grid,
                             params: FlowParams) -> StabilityBounds:
    """Diffusive and convective time step limits."""
    u_max, v_max = compute_velocity_maxima(U, V, grid)
    if not (math.isfinite(u_max) and math.isfinite(v_max)):
        raise FloatingPointError(
            f"Non-finite velocity maxima (u_max={u_max}, v_max={v_max})"
        )

    diffusive: float = (params.reynolds * params.prandtl / 2.0
                        / (1.0 / grid.dx**2 + 1.0 / grid.dy**2))
    convective_x: float = grid.dx / u_max if u_max > 0.0 else math.inf
    convective_y: float = grid.dy / v_max if v_max > 0.0 else math.inf

    return StabilityBounds(diffusive=diffusive,
                           convective_x=convective_x,
                           convective_y=convective_y)


def compute_timestep(U: NDArrayFloat, V: NDArrayFloat, grid: Grid,
                     params: FlowParams,
                     cfg: Optional[TimeStepConfig] = None) -> float:
    """
    Select the time step for the next iteration.

    Parameters
    ----------
    U, V : ndarray, shape (imax+2, jmax+2)
        Current velocities.
    grid : Grid
        Extents and spacings.
    params : FlowParams
        Re, Pr and tau are used.
    cfg : TimeStepConfig, optional
        Fixed-step mode and clipping.

    Returns
    -------
    dt : float
    """
    if cfg is None:
        cfg = TimeStepConfig()

    check_fields(grid, U=U, V=V)
    check_params(params)

    if not cfg.adaptive:
        return float(cfg.dt)

    bounds = compute_stability_bounds(U, V, grid, params)
    dt: float = params.tau * min(bounds)
    dt = float(np.clip(dt, cfg.min_dt, cfg.max_dt))

    logger.debug(f"dt={dt:.6e} limited by {bounds.limiting()} "
                 f"(diff={bounds.diffusive:.3e}, x={bounds.convective_x:.3e}, "
                 f"y={bounds.convective_y:.3e})")
    return dt
