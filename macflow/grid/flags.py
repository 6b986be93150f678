"""
Cell flags: fluid/obstacle classification of every cell and its neighbors.

The bit layout (see ``macflow.constants``) is private to this module.
Kernels only ever see the boolean masks returned by the predicates.
"""

from typing import NamedTuple, Optional

import numpy as np
import numpy.typing as npt

from ..constants import (
    Direction, FLUID_BIT, NEIGHBOR_OFFSETS, get_field_shape, neighbor_bit,
)

NDArrayBool = npt.NDArray[np.bool_]


class CellFlag(NamedTuple):
    """Flags of a single cell."""
    bits: int

    def is_fluid(self) -> bool:
        return bool(self.bits & FLUID_BIT)

    def is_obstacle(self) -> bool:
        return not self.is_fluid()

    def is_neighbor_fluid(self, direction: Direction) -> bool:
        return bool(self.bits & neighbor_bit(direction))

    def is_neighbor_obstacle(self, direction: Direction) -> bool:
        return not self.is_neighbor_fluid(direction)


def _shift(mask: NDArrayBool, di: int, dj: int) -> NDArrayBool:
    """Return out[i, j] = mask[i + di, j + dj], False outside the array."""
    out = np.zeros_like(mask)
    NI, NJ = mask.shape
    src_i = slice(max(di, 0), NI + min(di, 0))
    src_j = slice(max(dj, 0), NJ + min(dj, 0))
    dst_i = slice(max(-di, 0), NI + min(-di, 0))
    dst_j = slice(max(-dj, 0), NJ + min(-dj, 0))
    out[dst_i, dst_j] = mask[src_i, src_j]
    return out


class CellFlags:
    """
    Read-only flag field over the extended domain.

    Neighbors beyond the extended domain count as obstacle.

    Parameters
    ----------
    fluid : ndarray of bool, shape (imax+2, jmax+2)
        True where the cell is fluid.
    """

    def __init__(self, fluid: NDArrayBool) -> None:
        fluid = np.asarray(fluid, dtype=bool)
        if fluid.ndim != 2:
            raise ValueError(f"Fluid mask must be 2D, got shape {fluid.shape}")

        bits = np.where(fluid, FLUID_BIT, 0).astype(np.int32)
        for direction, (di, dj) in NEIGHBOR_OFFSETS.items():
            bits |= np.where(_shift(fluid, di, dj), neighbor_bit(direction), 0).astype(np.int32)

        bits.flags.writeable = False
        self._bits = bits

    @classmethod
    def from_fluid_mask(cls, fluid: NDArrayBool) -> 'CellFlags':
        return cls(fluid)

    @classmethod
    def cavity(cls, imax: int, jmax: int,
               obstacles: Optional[NDArrayBool] = None) -> 'CellFlags':
        """
        Closed box: walls on the boundary layer, fluid inside.

        Parameters
        ----------
        imax, jmax : int
            Interior cell counts.
        obstacles : ndarray of bool, optional
            Extra obstacle cells, same shape as a field.
        """
        fluid = np.zeros(get_field_shape(imax, jmax), dtype=bool)
        fluid[1:-1, 1:-1] = True
        if obstacles is not None:
            obstacles = np.asarray(obstacles, dtype=bool)
            if obstacles.shape != fluid.shape:
                raise ValueError(
                    f"Obstacle mask has shape {obstacles.shape}, expected {fluid.shape}"
                )
            fluid &= ~obstacles
        return cls(fluid)

    @property
    def shape(self) -> tuple:
        return self._bits.shape

    def at(self, i: int, j: int) -> CellFlag:
        return CellFlag(int(self._bits[i, j]))

    def is_fluid(self) -> NDArrayBool:
        return (self._bits & FLUID_BIT) != 0

    def is_obstacle(self) -> NDArrayBool:
        return (self._bits & FLUID_BIT) == 0

    def is_neighbor_fluid(self, direction: Direction) -> NDArrayBool:
        return (self._bits & neighbor_bit(direction)) != 0

    def is_neighbor_obstacle(self, direction: Direction) -> NDArrayBool:
        return (self._bits & neighbor_bit(direction)) == 0

    def fluid_edges(self, direction: Direction) -> NDArrayBool:
        """True where the cell and its neighbor in `direction` are both fluid."""
        return self.is_fluid() & self.is_neighbor_fluid(direction)

    def count_fluid(self) -> int:
        return int(np.count_nonzero(self.is_fluid()))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CellFlags):
            return NotImplemented
        return np.array_equal(self._bits, other._bits)

    def __repr__(self) -> str:
        NI, NJ = self.shape
        return f"CellFlags({NI - 2} x {NJ - 2}, fluid={self.count_fluid()})"
