"""
Solver components for the 2D staggered-grid Navier-Stokes/Boussinesq system.

This package provides:
    - Adaptive time step selection (CFL and diffusive bounds)
    - Explicit stepper wiring the numerical kernels to caller-supplied
      boundary conditions and pressure solver
"""

from .time_stepping import (
    TimeStepConfig,
    StabilityBounds,
    compute_stability_bounds,
    compute_timestep,
)

from .stepper import (
    BoundaryConditionFn,
    PressureSolverFn,
    SimulationState,
    StepInfo,
    ExplicitStepper,
)

__all__ = [
    # Time stepping
    'TimeStepConfig',
    'StabilityBounds',
    'compute_stability_bounds',
    'compute_timestep',
    # Stepper
    'BoundaryConditionFn',
    'PressureSolverFn',
    'SimulationState',
    'StepInfo',
    'ExplicitStepper',
]
