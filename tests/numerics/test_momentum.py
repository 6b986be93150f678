"""
Tests for the intermediate velocity kernel.

Validates:
1. Boundary-copy law on the outer domain edges
2. Obstacle-adjacency law on edges touching obstacles
3. Zero fields give zero F, G
4. Agreement with a direct evaluation of the momentum formula
5. Buoyancy source and determinism
"""

import numpy as np
import pytest

from macflow.constants import Direction
from macflow.grid import Grid, FlowFields, CellFlags
from macflow.numerics.momentum import compute_fg
from macflow.numerics.stencils import (
    second_derivative_x, second_derivative_y,
    product_derivative_x, product_derivative_y,
    square_derivative_x, square_derivative_y,
)
from macflow.params import FlowParams

DT = 0.01


def reference_f(U, V, T, i, j, grid, params, dt):
    return U[i, j] + dt * (
        (second_derivative_x(U, i, j, grid.dx) + second_derivative_y(U, i, j, grid.dy)) / params.reynolds
        - square_derivative_x(U, i, j, grid.dx, params.alpha)
        - product_derivative_y(U, V, i, j, grid.dy, params.alpha)
        + (1.0 - params.beta * T[i, j]) * params.gx
    )


def reference_g(U, V, T, i, j, grid, params, dt):
    return V[i, j] + dt * (
        (second_derivative_x(V, i, j, grid.dx) + second_derivative_y(V, i, j, grid.dy)) / params.reynolds
        - product_derivative_x(U, V, i, j, grid.dx, params.alpha)
        - square_derivative_y(V, i, j, grid.dy, params.alpha)
        + (1.0 - params.beta * T[i, j]) * params.gy
    )


class TestBoundaryCopy:
    """F on left/right and G on bottom/top domain edges copy the velocity."""

    def test_domain_edges(self, grid, obstacle_flags, params, random_fields):
        f = random_fields
        F, G = compute_fg(f.U, f.V, f.T, obstacle_flags, grid, params, DT, F=f.F, G=f.G)

        imax, jmax = grid.imax, grid.jmax
        assert np.array_equal(F[0, :], f.U[0, :])
        assert np.array_equal(F[imax, :], f.U[imax, :])
        assert np.array_equal(G[:, 0], f.V[:, 0])
        assert np.array_equal(G[:, jmax], f.V[:, jmax])

    def test_independent_of_interior(self, grid, cavity_flags, params, fields_factory):
        a = fields_factory(grid, seed=1)
        b = fields_factory(grid, seed=2)
        # Same boundary columns/rows, different interiors
        b.U[0, :], b.U[grid.imax, :] = a.U[0, :], a.U[grid.imax, :]
        b.V[:, 0], b.V[:, grid.jmax] = a.V[:, 0], a.V[:, grid.jmax]

        Fa, Ga = compute_fg(a.U, a.V, a.T, cavity_flags, grid, params, DT)
        Fb, Gb = compute_fg(b.U, b.V, b.T, cavity_flags, grid, params, DT)

        assert np.array_equal(Fa[0, :], Fb[0, :])
        assert np.array_equal(Fa[grid.imax, :], Fb[grid.imax, :])
        assert np.array_equal(Ga[:, 0], Gb[:, 0])
        assert np.array_equal(Ga[:, grid.jmax], Gb[:, grid.jmax])


class TestObstacleAdjacency:

    def test_f_copies_u_next_to_obstacles(self, grid, obstacle_flags, params, random_fields):
        f = random_fields
        F, _ = compute_fg(f.U, f.V, f.T, obstacle_flags, grid, params, DT, F=f.F, G=f.G)

        blocked = obstacle_flags.is_obstacle() | obstacle_flags.is_neighbor_obstacle(Direction.RIGHT)
        n_checked = 0
        for i in range(1, grid.imax):
            for j in range(1, grid.jmax + 1):
                if blocked[i, j]:
                    assert F[i, j] == f.U[i, j]
                    n_checked += 1
        assert n_checked > 0

    def test_g_copies_v_next_to_obstacles(self, grid, obstacle_flags, params, random_fields):
        f = random_fields
        _, G = compute_fg(f.U, f.V, f.T, obstacle_flags, grid, params, DT, F=f.F, G=f.G)

        blocked = obstacle_flags.is_obstacle() | obstacle_flags.is_neighbor_obstacle(Direction.TOP)
        n_checked = 0
        for i in range(1, grid.imax + 1):
            for j in range(1, grid.jmax):
                if blocked[i, j]:
                    assert G[i, j] == f.V[i, j]
                    n_checked += 1
        assert n_checked > 0


def evaluated_masks(flags, grid):
    """Entries of F and G computed from the momentum formula."""
    eval_f = np.zeros(grid.shape, dtype=bool)
    eval_g = np.zeros(grid.shape, dtype=bool)
    eval_f[1:grid.imax, 1:grid.jmax + 1] = flags.fluid_edges(Direction.RIGHT)[1:grid.imax, 1:grid.jmax + 1]
    eval_g[1:grid.imax + 1, 1:grid.jmax] = flags.fluid_edges(Direction.TOP)[1:grid.imax + 1, 1:grid.jmax]
    return eval_f, eval_g


class TestUnevaluatedEntries:
    """F and G equal U and V everywhere the formula is not applied."""

    def test_allocated_outputs(self, grid, obstacle_flags, params, random_fields):
        f = random_fields
        F, G = compute_fg(f.U, f.V, f.T, obstacle_flags, grid, params, DT)

        eval_f, eval_g = evaluated_masks(obstacle_flags, grid)
        assert np.array_equal(F[~eval_f], f.U[~eval_f])
        assert np.array_equal(G[~eval_g], f.V[~eval_g])

    def test_caller_buffers(self, grid, obstacle_flags, params, random_fields):
        f = random_fields
        # Stale values in every entry of the buffers
        f.F[:] = -999.0
        f.G[:] = -999.0
        F, G = compute_fg(f.U, f.V, f.T, obstacle_flags, grid, params, DT, F=f.F, G=f.G)

        assert F is f.F and G is f.G
        eval_f, eval_g = evaluated_masks(obstacle_flags, grid)
        assert np.array_equal(F[~eval_f], f.U[~eval_f])
        assert np.array_equal(G[~eval_g], f.V[~eval_g])
        assert not np.any(F == -999.0)
        assert not np.any(G == -999.0)

    def test_outer_ring(self, grid, cavity_flags, params):
        fields = FlowFields.allocate(grid, u_init=0.3, v_init=-0.2)
        F, G = compute_fg(fields.U, fields.V, fields.T, cavity_flags, grid, params, DT)

        imax, jmax = grid.imax, grid.jmax
        assert np.all(F[1:imax, 0] == 0.3)
        assert np.all(F[1:imax, jmax + 1] == 0.3)
        assert np.all(F[imax + 1, :] == 0.3)
        assert np.all(G[0, 1:jmax] == -0.2)
        assert np.all(G[imax + 1, 1:jmax] == -0.2)
        assert np.all(G[:, jmax + 1] == -0.2)


class TestMomentumFormula:

    def test_matches_reference(self, grid, obstacle_flags, params, random_fields):
        f = random_fields
        F, G = compute_fg(f.U, f.V, f.T, obstacle_flags, grid, params, DT)

        edge_x = obstacle_flags.fluid_edges(Direction.RIGHT)
        edge_y = obstacle_flags.fluid_edges(Direction.TOP)
        for i in range(1, grid.imax):
            for j in range(1, grid.jmax + 1):
                if edge_x[i, j]:
                    assert F[i, j] == pytest.approx(reference_f(f.U, f.V, f.T, i, j, grid, params, DT), rel=1e-10, abs=1e-12)
        for i in range(1, grid.imax + 1):
            for j in range(1, grid.jmax):
                if edge_y[i, j]:
                    assert G[i, j] == pytest.approx(reference_g(f.U, f.V, f.T, i, j, grid, params, DT), rel=1e-10, abs=1e-12)

    @pytest.mark.parametrize("reynolds,alpha,dx,dy", [
        (1.0, 0.0, 1.0, 1.0),
        (100.0, 0.5, 0.1, 0.2),
        (1e4, 1.0, 0.01, 0.05),
    ])
    def test_zero_fields(self, reynolds, alpha, dx, dy):
        grid = Grid(imax=8, jmax=6, dx=dx, dy=dy)
        flags = CellFlags.cavity(grid.imax, grid.jmax)
        params = FlowParams(reynolds=reynolds, prandtl=1.0, gx=0.0, gy=0.0,
                            beta=0.5, alpha=alpha, tau=0.5)
        fields = FlowFields.allocate(grid)
        fields.F[:] = 1.0
        fields.G[:] = 1.0

        F, G = compute_fg(fields.U, fields.V, fields.T, flags, grid, params, 0.1,
                          F=fields.F, G=fields.G)

        assert np.all(F[:grid.imax + 1, 1:grid.jmax + 1] == 0.0)
        assert np.all(G[1:grid.imax + 1, :grid.jmax + 1] == 0.0)

    def test_buoyancy_at_rest(self, grid, cavity_flags):
        """Fluid at rest accelerates by dt * (1 - beta*T) * g."""
        params = FlowParams(reynolds=10.0, prandtl=1.0, gx=0.3, gy=-9.81,
                            beta=0.1, alpha=0.5, tau=0.5)
        fields = FlowFields.allocate(grid, t_init=2.0)

        F, G = compute_fg(fields.U, fields.V, fields.T, cavity_flags, grid, params, DT)

        assert np.allclose(F[1:grid.imax, 1:grid.jmax + 1], DT * 0.8 * 0.3)
        assert np.allclose(G[1:grid.imax + 1, 1:grid.jmax], DT * 0.8 * -9.81)

    def test_deterministic(self, grid, obstacle_flags, params, random_fields):
        f = random_fields
        F1, G1 = compute_fg(f.U, f.V, f.T, obstacle_flags, grid, params, DT)
        F2, G2 = compute_fg(f.U, f.V, f.T, obstacle_flags, grid, params, DT)
        assert np.array_equal(F1, F2)
        assert np.array_equal(G1, G2)

    def test_inputs_not_modified(self, grid, obstacle_flags, params, random_fields):
        f = random_fields
        U0, V0, T0 = f.U.copy(), f.V.copy(), f.T.copy()
        compute_fg(f.U, f.V, f.T, obstacle_flags, grid, params, DT, F=f.F, G=f.G)
        assert np.array_equal(f.U, U0)
        assert np.array_equal(f.V, V0)
        assert np.array_equal(f.T, T0)


class TestPreconditions:

    def test_mismatched_extents(self, grid, cavity_flags, params, random_fields):
        f = random_fields
        with pytest.raises(ValueError, match="Field 'V'"):
            compute_fg(f.U, f.V[:-1, :], f.T, cavity_flags, grid, params, DT)

    def test_mismatched_flags(self, grid, params, random_fields):
        f = random_fields
        flags = CellFlags.cavity(grid.imax + 1, grid.jmax)
        with pytest.raises(ValueError, match="Flags"):
            compute_fg(f.U, f.V, f.T, flags, grid, params, DT)

    @pytest.mark.parametrize("bad", [
        {'reynolds': 0.0},
        {'reynolds': -5.0},
        {'alpha': 1.5},
        {'tau': 0.0},
    ])
    def test_invalid_params(self, grid, cavity_flags, params, random_fields, bad):
        f = random_fields
        with pytest.raises(ValueError):
            compute_fg(f.U, f.V, f.T, cavity_flags, grid, params._replace(**bad), DT)

    def test_invalid_spacing(self, cavity_flags, params, random_fields, grid):
        f = random_fields
        with pytest.raises(ValueError, match="spacings"):
            compute_fg(f.U, f.V, f.T, cavity_flags, grid._replace(dx=0.0), params, DT)

    def test_invalid_dt(self, grid, cavity_flags, params, random_fields):
        f = random_fields
        with pytest.raises(ValueError, match="Timestep"):
            compute_fg(f.U, f.V, f.T, cavity_flags, grid, params, 0.0)
