"""
Configuration schema for the staggered-grid solver.

Dataclass-based configuration that can be loaded from YAML or constructed programmatically.
"""

import math
from dataclasses import dataclass, field, asdict


@dataclass
class GridConfig:
    """Uniform grid configuration."""

    imax: int = 50             # Interior cells in x
    jmax: int = 50             # Interior cells in y
    xlength: float = 1.0       # Domain length in x
    ylength: float = 1.0       # Domain length in y


@dataclass
class FlowConfig:
    """Physical parameters and initial state."""

    reynolds: float = 1000.0
    prandtl: float = 7.0

    # Body force (gravity) components
    gx: float = 0.0
    gy: float = 0.0

    # Boussinesq thermal expansion coefficient
    beta: float = 0.0

    # Uniform initial values
    u_init: float = 0.0
    v_init: float = 0.0
    p_init: float = 0.0
    t_init: float = 0.0


@dataclass
class NumericsConfig:
    """Numerical scheme configuration."""

    alpha: float = 0.9         # Donor-cell blending (0 = central, 1 = full upwind)
    tau: float = 0.5           # CFL safety factor in (0, 1]

    # Time step selection
    adaptive: bool = True      # False: use fixed dt below
    dt: float = 0.05
    min_dt: float = 0.0
    max_dt: float = math.inf

    # Keep temperature fixed inside obstacles
    mask_obstacle_temperature: bool = False


@dataclass
class SolverSettings:
    """Time loop settings."""

    t_end: float = 10.0
    max_iter: int = 100000
    print_freq: int = 100


@dataclass
class SimulationConfig:
    """Complete simulation configuration."""

    grid: GridConfig = field(default_factory=GridConfig)
    flow: FlowConfig = field(default_factory=FlowConfig)
    numerics: NumericsConfig = field(default_factory=NumericsConfig)
    solver: SolverSettings = field(default_factory=SolverSettings)

    def to_grid(self):
        """Build the Grid described by this configuration."""
        from macflow.grid.fields import Grid

        return Grid.from_lengths(self.grid.imax, self.grid.jmax,
                                 self.grid.xlength, self.grid.ylength)

    def to_flow_params(self):
        """Build the FlowParams threaded through the kernels."""
        from macflow.params import FlowParams

        return FlowParams(
            reynolds=self.flow.reynolds,
            prandtl=self.flow.prandtl,
            gx=self.flow.gx,
            gy=self.flow.gy,
            beta=self.flow.beta,
            alpha=self.numerics.alpha,
            tau=self.numerics.tau,
        )

    def to_timestep_config(self):
        """Build the TimeStepConfig for the stepper."""
        from macflow.solvers.time_stepping import TimeStepConfig

        return TimeStepConfig(
            adaptive=self.numerics.adaptive,
            dt=self.numerics.dt,
            min_dt=self.numerics.min_dt,
            max_dt=self.numerics.max_dt,
        )

    def to_dict(self) -> dict:
        """Convert to nested dictionary."""
        return asdict(self)


# Preset configurations
def lid_driven_cavity_preset() -> 'SimulationConfig':
    """Isothermal lid-driven cavity, Re = 1000."""
    return SimulationConfig(
        grid=GridConfig(imax=50, jmax=50, xlength=1.0, ylength=1.0),
        flow=FlowConfig(reynolds=1000.0, prandtl=1.0),
        numerics=NumericsConfig(alpha=0.9, tau=0.5),
        solver=SolverSettings(t_end=50.0),
    )


def natural_convection_preset() -> 'SimulationConfig':
    """Differentially heated square cavity under gravity."""
    return SimulationConfig(
        grid=GridConfig(imax=50, jmax=50, xlength=1.0, ylength=1.0),
        flow=FlowConfig(reynolds=1000.0, prandtl=7.0, gy=-1.1, beta=2.1e-4),
        numerics=NumericsConfig(alpha=0.5, tau=0.5),
        solver=SolverSettings(t_end=1000.0),
    )


def fluid_trap_preset() -> 'SimulationConfig':
    """Heated cavity with obstacles, coarse grid."""
    return SimulationConfig(
        grid=GridConfig(imax=100, jmax=50, xlength=2.0, ylength=1.0),
        flow=FlowConfig(reynolds=10000.0, prandtl=7.0, gy=-1.1, beta=6.3e-4),
        numerics=NumericsConfig(alpha=0.5, tau=0.5),
        solver=SolverSettings(t_end=2000.0),
    )
