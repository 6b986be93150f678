"""
Global constants for the staggered-grid solver.

This module defines constants used throughout the codebase to ensure
consistency in array shapes and indexing.
"""

from enum import IntEnum

# Number of boundary layers on each side of the interior
# Every field has shape (imax + 2*NGHOST, jmax + 2*NGHOST)
NGHOST = 1


class Direction(IntEnum):
    """Axis-aligned neighbor directions of a cell."""
    TOP = 0
    BOTTOM = 1
    LEFT = 2
    RIGHT = 3


# Cell-flag bit layout
# Bit 0: the cell itself is fluid
# Bits 1-4: the neighbor in Direction d is fluid (bit 1 + d)
FLUID_BIT = 1 << 0
_NEIGHBOR_SHIFT = 1


def neighbor_bit(direction: Direction) -> int:
    """Return the flag bit marking the neighbor in `direction` as fluid."""
    return 1 << (_NEIGHBOR_SHIFT + int(direction))


# (di, dj) offset of each neighbor
NEIGHBOR_OFFSETS = {
    Direction.TOP: (0, 1),
    Direction.BOTTOM: (0, -1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


def get_interior_slice():
    """
    Return the slice for interior cells of a field.

    With NGHOST boundary layers on each side:
    - A.shape = (imax + 2*NGHOST, jmax + 2*NGHOST)
    - Interior cells: A[NGHOST:-NGHOST, NGHOST:-NGHOST]

    Returns
    -------
    tuple of slices
        (slice(NGHOST, -NGHOST), slice(NGHOST, -NGHOST))
    """
    return (slice(NGHOST, -NGHOST), slice(NGHOST, -NGHOST))


def get_field_shape(imax: int, jmax: int) -> tuple:
    """
    Get the shape of a scalar or velocity field.

    Parameters
    ----------
    imax, jmax : int
        Number of interior cells in x and y directions.

    Returns
    -------
    tuple
        Shape of the field: (imax + 2*NGHOST, jmax + 2*NGHOST)
    """
    return (imax + 2 * NGHOST, jmax + 2 * NGHOST)
