"""
Explicit time integration of the Boussinesq Navier-Stokes system.

One step, in order:

    1. dt from the stability bounds
    2. boundary conditions            (caller-supplied)
    3. F, G from the momentum equations
    4. right-hand side of the pressure equation
    5. pressure solve                 (caller-supplied)
    6. velocity correction
    7. temperature update
    8. boundary conditions            (caller-supplied)

The stepper owns no boundary-condition or pressure-solver logic; both
are passed in as callables.
"""

from dataclasses import dataclass
from typing import Callable, NamedTuple, Optional

import numpy as np
from loguru import logger

from ..grid.fields import Grid, FlowFields
from ..grid.flags import CellFlags
from ..numerics.diagnostics import (
    compute_divergence, compute_field_bounds, compute_velocity_maxima,
)
from ..numerics.momentum import compute_fg
from ..numerics.pressure_rhs import compute_rhs
from ..numerics.temperature import compute_temperature
from ..numerics.velocity import correct_velocity
from ..params import FlowParams, check_params
from .time_stepping import TimeStepConfig, compute_timestep

# apply_bc(fields, grid, flags): set boundary values of U, V, T in place
BoundaryConditionFn = Callable[[FlowFields, Grid, CellFlags], None]

# solve_pressure(fields, grid, flags, dt): update fields.P in place from fields.RS
PressureSolverFn = Callable[[FlowFields, Grid, CellFlags, float], None]


@dataclass
class SimulationState:
    """Everything that changes (or is needed) from one step to the next."""
    fields: FlowFields
    flags: CellFlags
    grid: Grid
    params: FlowParams
    t: float = 0.0
    dt: float = 0.0
    iteration: int = 0

    @classmethod
    def create(cls, grid: Grid, params: FlowParams,
               flags: Optional[CellFlags] = None,
               u_init: float = 0.0, v_init: float = 0.0,
               p_init: float = 0.0, t_init: float = 0.0) -> 'SimulationState':
        """Allocate fields; an empty cavity is used when no flags are given."""
        if flags is None:
            flags = CellFlags.cavity(grid.imax, grid.jmax)
        fields = FlowFields.allocate(grid, u_init=u_init, v_init=v_init,
                                     p_init=p_init, t_init=t_init)
        fields.check(grid)
        if flags.shape != grid.shape:
            raise ValueError(f"Flags have shape {flags.shape}, expected {grid.shape}")
        check_params(params)
        return cls(fields=fields, flags=flags, grid=grid, params=params)


class StepInfo(NamedTuple):
    """Summary of one completed step."""
    iteration: int
    t: float
    dt: float
    u_max: float
    v_max: float
    div_max: float


class ExplicitStepper:
    """Explicit Euler projection method with adaptive time stepping."""

    apply_bc: BoundaryConditionFn
    solve_pressure: PressureSolverFn
    cfg: TimeStepConfig
    mask_obstacle_temperature: bool
    print_freq: int

    def __init__(self, apply_bc: BoundaryConditionFn,
                 solve_pressure: PressureSolverFn,
                 cfg: Optional[TimeStepConfig] = None,
                 mask_obstacle_temperature: bool = False,
                 print_freq: int = 10) -> None:
        self.apply_bc = apply_bc
        self.solve_pressure = solve_pressure
        self.cfg = cfg if cfg is not None else TimeStepConfig()
        self.mask_obstacle_temperature = mask_obstacle_temperature
        self.print_freq = print_freq

    def step(self, state: SimulationState) -> StepInfo:
        """Advance `state` by one time step in place."""
        fields, grid, flags, params = state.fields, state.grid, state.flags, state.params

        dt = compute_timestep(fields.U, fields.V, grid, params, self.cfg)
        state.dt = dt

        self.apply_bc(fields, grid, flags)

        compute_fg(fields.U, fields.V, fields.T, flags, grid, params, dt,
                   F=fields.F, G=fields.G)
        compute_rhs(fields.F, fields.G, flags, grid, dt, RS=fields.RS)

        self.solve_pressure(fields, grid, flags, dt)

        correct_velocity(fields.U, fields.V, fields.F, fields.G, fields.P,
                         flags, grid, dt)
        fields.T = compute_temperature(fields.T, fields.U, fields.V, flags, grid,
                                       params, dt,
                                       mask_obstacles=self.mask_obstacle_temperature)

        self.apply_bc(fields, grid, flags)

        state.t += dt
        state.iteration += 1

        bounds = compute_field_bounds(fields)
        if bounds['has_nan'] or bounds['has_inf']:
            raise FloatingPointError(
                f"Solution diverged at iteration {state.iteration} (t={state.t:.6e}, dt={dt:.3e})"
            )

        u_max, v_max = compute_velocity_maxima(fields.U, fields.V, grid)
        div = compute_divergence(fields.U, fields.V, grid, flags)
        return StepInfo(iteration=state.iteration, t=state.t, dt=dt,
                        u_max=u_max, v_max=v_max,
                        div_max=float(np.max(np.abs(div))))

    def run(self, state: SimulationState, t_end: float,
            max_iter: Optional[int] = None) -> SimulationState:
        """Step until `t_end` is reached or `max_iter` steps were taken."""
        grid = state.grid
        logger.info(f"{'='*60}")
        logger.info("Starting Time Integration")
        logger.info(f"{'='*60}")
        logger.info(f"Grid size: {grid.imax} x {grid.jmax} cells "
                    f"(dx={grid.dx:.4e}, dy={grid.dy:.4e})")
        logger.info(f"Fluid cells: {state.flags.count_fluid()}")
        logger.info(f"Reynolds: {state.params.reynolds:.3e}, Prandtl: {state.params.prandtl:.3e}")
        logger.info(f"End time: {t_end}")
        logger.info(f"{'Iter':>8} {'t':>12} {'dt':>12} {'|u|max':>10} {'|v|max':>10} {'|div|max':>10}")
        logger.info(f"{'-'*68}")

        n_steps = 0
        info = None
        while state.t < t_end:
            if max_iter is not None and n_steps >= max_iter:
                logger.warning(f"Stopped after max_iter={max_iter} steps at t={state.t:.6e}")
                break

            info = self.step(state)
            n_steps += 1

            if info.iteration % self.print_freq == 0 or info.iteration == 1:
                logger.info(f"{info.iteration:>8d} {info.t:>12.5e} {info.dt:>12.5e} "
                            f"{info.u_max:>10.4f} {info.v_max:>10.4f} {info.div_max:>10.3e}")

        logger.info(f"{'='*60}")
        logger.info(f"Finished at iteration {state.iteration}, t={state.t:.6e}")
        if info is not None:
            logger.info(f"Final dt={info.dt:.4e}, |div|max={info.div_max:.3e}")
        logger.info(f"{'='*60}")
        return state
