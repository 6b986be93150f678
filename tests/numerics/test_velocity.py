"""Tests for the pressure-gradient velocity correction."""

import numpy as np
import pytest

from macflow.constants import Direction
from macflow.grid import Grid, FlowFields, CellFlags
from macflow.numerics.velocity import correct_velocity

DT = 0.05


class TestVelocityCorrection:

    def test_uniform_pressure_returns_fg(self, grid, cavity_flags, fields_factory):
        f = fields_factory(grid, seed=5)
        f.F[:] = np.random.default_rng(0).normal(size=grid.shape)
        f.G[:] = np.random.default_rng(1).normal(size=grid.shape)
        f.P[:] = 3.0

        U, V = correct_velocity(f.U, f.V, f.F, f.G, f.P, cavity_flags, grid, DT)

        assert np.array_equal(U[1:grid.imax, 1:grid.jmax + 1], f.F[1:grid.imax, 1:grid.jmax + 1])
        assert np.array_equal(V[1:grid.imax + 1, 1:grid.jmax], f.G[1:grid.imax + 1, 1:grid.jmax])

    def test_linear_pressure_gradient(self):
        grid = Grid(imax=6, jmax=5, dx=0.2, dy=0.5)
        flags = CellFlags.cavity(grid.imax, grid.jmax)
        fields = FlowFields.allocate(grid)
        i, j = np.meshgrid(np.arange(8.0), np.arange(7.0), indexing='ij')
        fields.P[:] = 1.5 * i * grid.dx - 0.5 * j * grid.dy   # dp/dx = 1.5, dp/dy = -0.5

        correct_velocity(fields.U, fields.V, fields.F, fields.G, fields.P, flags, grid, DT)

        assert np.allclose(fields.U[1:grid.imax, 1:grid.jmax + 1], -DT * 1.5)
        assert np.allclose(fields.V[1:grid.imax + 1, 1:grid.jmax], DT * 0.5)

    def test_obstacle_edges_keep_value(self, grid, obstacle_flags, random_fields):
        f = random_fields
        U0, V0 = f.U.copy(), f.V.copy()
        f.F[:] = 0.0
        f.G[:] = 0.0

        correct_velocity(f.U, f.V, f.F, f.G, f.P, obstacle_flags, grid, DT)

        edge_x = obstacle_flags.fluid_edges(Direction.RIGHT)
        edge_y = obstacle_flags.fluid_edges(Direction.TOP)
        blocked_x = ~edge_x[1:grid.imax, 1:grid.jmax + 1]
        blocked_y = ~edge_y[1:grid.imax + 1, 1:grid.jmax]
        assert blocked_x.any() and blocked_y.any()
        assert np.array_equal(f.U[1:grid.imax, 1:grid.jmax + 1][blocked_x],
                              U0[1:grid.imax, 1:grid.jmax + 1][blocked_x])
        assert np.array_equal(f.V[1:grid.imax + 1, 1:grid.jmax][blocked_y],
                              V0[1:grid.imax + 1, 1:grid.jmax][blocked_y])

    def test_outside_ranges_untouched(self, grid, cavity_flags, random_fields):
        f = random_fields
        U0, V0 = f.U.copy(), f.V.copy()

        correct_velocity(f.U, f.V, f.F, f.G, f.P, cavity_flags, grid, DT)

        assert np.array_equal(f.U[0, :], U0[0, :])
        assert np.array_equal(f.U[grid.imax:, :], U0[grid.imax:, :])
        assert np.array_equal(f.V[:, 0], V0[:, 0])
        assert np.array_equal(f.V[:, grid.jmax:], V0[:, grid.jmax:])

    def test_rejects_mismatched_pressure(self, grid, cavity_flags, random_fields):
        f = random_fields
        with pytest.raises(ValueError, match="Field 'P'"):
            correct_velocity(f.U, f.V, f.F, f.G, f.P[:, :-1], cavity_flags, grid, DT)
