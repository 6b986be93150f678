"""
Explicit staggered-grid solver kernels for 2D incompressible flow with
Boussinesq temperature coupling.
"""

from .params import FlowParams
from .grid import Grid, FlowFields, CellFlags, Direction
from .numerics import (
    compute_fg,
    compute_rhs,
    correct_velocity,
    compute_temperature,
)
from .solvers import (
    TimeStepConfig,
    compute_timestep,
    SimulationState,
    ExplicitStepper,
)

__version__ = "0.1.0"

__all__ = [
    'FlowParams',
    'Grid',
    'FlowFields',
    'CellFlags',
    'Direction',
    'compute_fg',
    'compute_rhs',
    'correct_velocity',
    'compute_temperature',
    'TimeStepConfig',
    'compute_timestep',
    'SimulationState',
    'ExplicitStepper',
]
