"""
Shared pytest fixtures for the test suite.

Provides small grids, flag fields and random velocity/temperature fields
so that every kernel test starts from the same well-formed inputs.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from macflow.grid import Grid, FlowFields, CellFlags
from macflow.params import FlowParams


def make_obstacle_mask(grid: Grid) -> np.ndarray:
    """A 2x2 block obstacle roughly in the middle of the domain."""
    mask = np.zeros(grid.shape, dtype=bool)
    ic, jc = grid.imax // 2, grid.jmax // 2
    mask[ic:ic + 2, jc:jc + 2] = True
    return mask


def make_random_fields(grid: Grid, seed: int = 42) -> FlowFields:
    """Fields filled with reproducible random values of moderate size."""
    rng = np.random.default_rng(seed)
    fields = FlowFields.allocate(grid)
    fields.U[:] = rng.uniform(-1.0, 1.0, grid.shape)
    fields.V[:] = rng.uniform(-1.0, 1.0, grid.shape)
    fields.P[:] = rng.uniform(-1.0, 1.0, grid.shape)
    fields.T[:] = rng.uniform(0.0, 1.0, grid.shape)
    # Sentinels: entries the kernels must not touch stay recognizable
    fields.F[:] = -999.0
    fields.G[:] = -999.0
    fields.RS[:] = -999.0
    return fields


@pytest.fixture
def grid():
    """Small non-square grid with unequal spacings."""
    return Grid(imax=12, jmax=9, dx=0.1, dy=0.125)


@pytest.fixture
def cavity_flags(grid):
    """Closed cavity without interior obstacles."""
    return CellFlags.cavity(grid.imax, grid.jmax)


@pytest.fixture
def obstacle_flags(grid):
    """Closed cavity with a block obstacle."""
    return CellFlags.cavity(grid.imax, grid.jmax, obstacles=make_obstacle_mask(grid))


@pytest.fixture
def params():
    """Boussinesq parameters with gravity in -y."""
    return FlowParams(reynolds=100.0, prandtl=7.0, gx=0.0, gy=-1.1,
                      beta=2.1e-4, alpha=0.9, tau=0.5)


@pytest.fixture
def random_fields(grid):
    return make_random_fields(grid)


@pytest.fixture
def fields_factory():
    """Callable building random fields for a given grid and seed."""
    return make_random_fields


@pytest.fixture
def obstacle_mask(grid):
    return make_obstacle_mask(grid)
