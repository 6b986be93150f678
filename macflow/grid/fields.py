"""
Uniform staggered grid and the field buffers living on it.

Index convention shared by every kernel:

    A[i, j],  i = 0..imax+1 (x),  j = 0..jmax+1 (y)

Row/column 0 and imax+1 / jmax+1 are the boundary layer. Pressure and
temperature sit at cell centers, U (and F) on the east face of cell (i, j),
V (and G) on the north face.
"""

from dataclasses import dataclass
from typing import NamedTuple, Dict

import numpy as np
import numpy.typing as npt

from ..constants import get_field_shape

NDArrayFloat = npt.NDArray[np.floating]


class Grid(NamedTuple):
    """Extents and spacings of a uniform staggered grid."""
    imax: int
    jmax: int
    dx: float
    dy: float

    @property
    def shape(self) -> tuple:
        return get_field_shape(self.imax, self.jmax)

    @classmethod
    def from_lengths(cls, imax: int, jmax: int,
                     xlength: float, ylength: float) -> 'Grid':
        """Build a grid from domain lengths instead of spacings."""
        return cls(imax=imax, jmax=jmax,
                   dx=xlength / imax, dy=ylength / jmax)


def check_grid(grid: Grid) -> None:
    """Raise ValueError unless extents and spacings are positive."""
    if grid.imax < 2 or grid.jmax < 2:
        raise ValueError(f"Grid needs at least 2x2 interior cells, got {grid.imax} x {grid.jmax}")
    if not (grid.dx > 0.0 and grid.dy > 0.0):
        raise ValueError(f"Grid spacings must be positive, got dx={grid.dx}, dy={grid.dy}")


def check_fields(grid: Grid, **arrays: np.ndarray) -> None:
    """
    Fail fast on inconsistent field extents.

    Parameters
    ----------
    grid : Grid
        Grid every array must match.
    **arrays
        Named arrays; the keyword is used in the error message.

    Raises
    ------
    ValueError
        If any array is not 2D with shape ``grid.shape``.
    """
    check_grid(grid)
    expected = grid.shape
    for name, arr in arrays.items():
        if arr.ndim != 2 or arr.shape != expected:
            raise ValueError(
                f"Field '{name}' has shape {arr.shape}, expected {expected} "
                f"for a {grid.imax} x {grid.jmax} grid"
            )


def allocate_field(grid: Grid, value: float = 0.0) -> NDArrayFloat:
    """Allocate one field over the extended domain filled with `value`."""
    return np.full(grid.shape, value, dtype=np.float64)


@dataclass
class FlowFields:
    """
    All field buffers of one simulation.

    Fields are mutated in place every timestep, except T which the
    temperature kernel replaces with a fresh buffer.
    """
    U: NDArrayFloat
    V: NDArrayFloat
    P: NDArrayFloat
    T: NDArrayFloat
    F: NDArrayFloat
    G: NDArrayFloat
    RS: NDArrayFloat

    @classmethod
    def allocate(cls, grid: Grid, u_init: float = 0.0, v_init: float = 0.0,
                 p_init: float = 0.0, t_init: float = 0.0) -> 'FlowFields':
        """Allocate all fields with uniform initial values."""
        U = allocate_field(grid, u_init)
        V = allocate_field(grid, v_init)
        return cls(
            U=U,
            V=V,
            P=allocate_field(grid, p_init),
            T=allocate_field(grid, t_init),
            F=U.copy(),
            G=V.copy(),
            RS=allocate_field(grid),
        )

    def as_dict(self) -> Dict[str, NDArrayFloat]:
        return {'U': self.U, 'V': self.V, 'P': self.P, 'T': self.T,
                'F': self.F, 'G': self.G, 'RS': self.RS}

    def check(self, grid: Grid) -> None:
        check_fields(grid, **self.as_dict())

    def copy(self) -> 'FlowFields':
        return FlowFields(**{k: v.copy() for k, v in self.as_dict().items()})
