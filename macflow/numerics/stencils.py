"""
Finite-difference operators on the staggered grid.

Diffusion:   [d2A/dx2]_{i,j} = (A_{i-1,j} - 2 A_{i,j} + A_{i+1,j}) / h^2

Convection (donor-cell blending):
    [d(AB)/dx] = central flux difference
               + alpha * upwind correction using |face-averaged transport speed|

alpha = 0 gives central differences, alpha = 1 pure donor-cell.

Reference: Griebel, Dornseifer, Neunhoeffer (1998), "Numerical Simulation
in Fluid Dynamics: A Practical Introduction", SIAM, ch. 3.

Bounds are not checked: (i, j) must have valid neighbors in every
direction the operator reads.
"""

from numba import njit


@njit(cache=True)
def second_derivative_x(A, i, j, h):
    """Central second difference along x."""
    return (A[i - 1, j] - 2.0 * A[i, j] + A[i + 1, j]) / (h * h)


@njit(cache=True)
def second_derivative_y(A, i, j, h):
    """Central second difference along y."""
    return (A[i, j - 1] - 2.0 * A[i, j] + A[i, j + 1]) / (h * h)


@njit(cache=True)
def product_derivative_x(A, B, i, j, h, alpha):
    """
    d(AB)/dx at a V-point, e.g. d(uv)/dx.

    A is the x-transporting field (u), B the transported field (v).
    """
    a_e = 0.5 * (A[i, j] + A[i, j + 1])
    a_w = 0.5 * (A[i - 1, j] + A[i - 1, j + 1])

    central = (a_e * 0.5 * (B[i, j] + B[i + 1, j])
               - a_w * 0.5 * (B[i - 1, j] + B[i, j]))
    upwind = (abs(a_e) * 0.5 * (B[i, j] - B[i + 1, j])
              - abs(a_w) * 0.5 * (B[i - 1, j] - B[i, j]))

    return (central + alpha * upwind) / h


@njit(cache=True)
def product_derivative_y(A, B, i, j, h, alpha):
    """
    d(AB)/dy at a U-point, e.g. d(uv)/dy.

    A is the transported field (u), B the y-transporting field (v).
    """
    b_n = 0.5 * (B[i, j] + B[i + 1, j])
    b_s = 0.5 * (B[i, j - 1] + B[i + 1, j - 1])

    central = (b_n * 0.5 * (A[i, j] + A[i, j + 1])
               - b_s * 0.5 * (A[i, j - 1] + A[i, j]))
    upwind = (abs(b_n) * 0.5 * (A[i, j] - A[i, j + 1])
              - abs(b_s) * 0.5 * (A[i, j - 1] - A[i, j]))

    return (central + alpha * upwind) / h


@njit(cache=True)
def square_derivative_x(A, i, j, h, alpha):
    """d(A^2)/dx at a U-point, e.g. d(u^2)/dx."""
    a_e = 0.5 * (A[i, j] + A[i + 1, j])
    a_w = 0.5 * (A[i - 1, j] + A[i, j])

    central = a_e * a_e - a_w * a_w
    upwind = (abs(a_e) * 0.5 * (A[i, j] - A[i + 1, j])
              - abs(a_w) * 0.5 * (A[i - 1, j] - A[i, j]))

    return (central + alpha * upwind) / h


@njit(cache=True)
def square_derivative_y(A, i, j, h, alpha):
    """d(A^2)/dy at a V-point, e.g. d(v^2)/dy."""
    a_n = 0.5 * (A[i, j] + A[i, j + 1])
    a_s = 0.5 * (A[i, j - 1] + A[i, j])

    central = a_n * a_n - a_s * a_s
    upwind = (abs(a_n) * 0.5 * (A[i, j] - A[i, j + 1])
              - abs(a_s) * 0.5 * (A[i, j - 1] - A[i, j]))

    return (central + alpha * upwind) / h
