"""
Numerical kernels for the 2D staggered-grid Navier-Stokes/Boussinesq solver.

This module provides:
- Finite-difference stencils with donor-cell blending
- Intermediate velocities F, G from the momentum equations
- Pressure Poisson right-hand side
- Velocity correction (projection)
- Temperature advection-diffusion update
- Diagnostics
"""

from .stencils import (
    second_derivative_x,
    second_derivative_y,
    product_derivative_x,
    product_derivative_y,
    square_derivative_x,
    square_derivative_y,
)

from .momentum import compute_fg
from .pressure_rhs import compute_rhs
from .velocity import correct_velocity
from .temperature import compute_temperature

from .diagnostics import (
    VelocityMaxima,
    compute_velocity_maxima,
    compute_divergence,
    compute_field_bounds,
)

__all__ = [
    # Stencils
    'second_derivative_x',
    'second_derivative_y',
    'product_derivative_x',
    'product_derivative_y',
    'square_derivative_x',
    'square_derivative_y',
    # Kernels
    'compute_fg',
    'compute_rhs',
    'correct_velocity',
    'compute_temperature',
    # Diagnostics
    'VelocityMaxima',
    'compute_velocity_maxima',
    'compute_divergence',
    'compute_field_bounds',
]
