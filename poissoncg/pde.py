"""Five-point Laplace operator on a rectangle, with boundary handling and solvers."""

from __future__ import annotations

import math
from collections.abc import Callable
from functools import lru_cache

import numpy as np

from .grid import HALO, Grid
from .kinds import BCType, Direction, SolverType
from .solver import Solver
from .timer import timed

PointFunc = Callable[[int, int, float, float], float]

_SIDES = (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)


def default_boundary(i: int, j: int, h_x: float, h_y: float) -> float:
    """Boundary profile ``sin(pi x) * sinh(pi y)``."""
    return math.sin(math.pi * i * h_x) * math.sinh(math.pi * j * h_y)


def zero_func(i: int, j: int, h_x: float, h_y: float) -> float:
    """The zero function."""
    return 0.0


@lru_cache(maxsize=32)
def _diagonals(rows: int, columns: int) -> tuple[tuple[np.ndarray, np.ndarray], ...]:
    """Inner points grouped by anti-diagonal ``row + column``, in ascending order."""
    groups = []
    for d in range(2, rows + columns - 3):
        js = np.arange(max(1, d - (columns - 2)), min(rows - 2, d - 1) + 1)
        if js.size:
            groups.append((js, d - js))
    return tuple(groups)


class PDE:
    """Poisson problem ``-Laplace(u) = f`` on ``[0, len_x] x [0, len_y]``."""

    def __init__(self, len_x: float, len_y: float, grids_x: int, grids_y: int) -> None:
        self.len_x = len_x
        self.len_y = len_y
        self.grids_x = grids_x + 2 * HALO
        self.grids_y = grids_y + 2 * HALO
        self.h_x = len_x / (self.grids_x - 1.0)
        self.h_y = len_y / (self.grids_y - 1.0)
        self.init_func: PointFunc = zero_func
        self.boundary: list[BCType] = [BCType.DIRICHLET] * 4
        self.boundary_func: list[PointFunc] = [zero_func] * 4

    def _bind(self, func: PointFunc) -> Callable[[int, int], float]:
        h_x, h_y = self.h_x, self.h_y
        return lambda i, j: func(i, j, h_x, h_y)

    def _check(self, *grids: Grid) -> None:
        shape = (self.grids_y, self.grids_x)
        for grid in grids:
            if grid.data.shape != shape:
                raise ValueError(
                    f"grid of size {grid.data.shape} does not match problem size {shape}"
                )

    def num_grids_x(self, halo: bool = False) -> int:
        """Number of points along x, with or without the halo."""
        return self.grids_x - (0 if halo else 2 * HALO)

    def num_grids_y(self, halo: bool = False) -> int:
        """Number of points along y, with or without the halo."""
        return self.grids_y - (0 if halo else 2 * HALO)

    def init(self, grid: Grid) -> None:
        """Fill the inner points of ``grid`` with ``init_func``."""
        self._check(grid)
        grid.fill(self._bind(self.init_func))

    def apply_boundary(self, u: Grid) -> None:
        """Set every Dirichlet side of ``u`` from its boundary function."""
        self._check(u)
        for side in _SIDES:
            if self.boundary[side] == BCType.DIRICHLET:
                u.fill_boundary(self._bind(self.boundary_func[side]), side)

    def refresh_boundary(self, u: Grid) -> None:
        """Refresh every Neumann side of ``u`` from the adjacent inner values."""
        self._check(u)
        for side in _SIDES:
            if self.boundary[side] == BCType.NEUMANN:
                u.copy_to_halo(self._bind(self.boundary_func[side]), side)

    def _weights(self) -> tuple[float, float]:
        return 1.0 / (self.h_x * self.h_x), 1.0 / (self.h_y * self.h_y)

    def apply_stencil(self, res: Grid, u: Grid) -> None:
        """Set ``res = A u`` on the inner points."""
        self._check(res, u)
        with timed("APPLY_STENCIL"):
            w_x, w_y = self._weights()
            w_c = 2.0 * w_x + 2.0 * w_y
            x = u.data
            res.data[1:-1, 1:-1] = (
                w_c * x[1:-1, 1:-1]
                - w_y * (x[2:, 1:-1] + x[:-2, 1:-1])
                - w_x * (x[1:-1, 2:] + x[1:-1, :-2])
            )

    def gs_precon(self, rhs: Grid, u: Grid) -> None:
        """Apply one forward and one backward Gauss-Seidel sweep: ``u = M^-1 rhs``."""
        self._check(rhs, u)
        with timed("GS_PRE_CON"):
            w_x, w_y = self._weights()
            w_c = 1.0 / (2.0 * w_x + 2.0 * w_y)
            x, r = u.data, rhs.data
            diagonals = _diagonals(*x.shape)
            for js, is_ in diagonals:
                x[js, is_] = w_c * (
                    r[js, is_] + (w_y * x[js - 1, is_] + w_x * x[js, is_ - 1])
                )
            for js, is_ in reversed(diagonals):
                x[js, is_] = x[js, is_] + w_c * (
                    w_y * x[js + 1, is_] + w_x * x[js, is_ + 1]
                )

    def solve(
        self, x: Grid, b: Grid, solver_type: SolverType, niter: int, tol: float = 1e-8
    ) -> int:
        """Solve ``A x = b`` in place; return the number of iterations done."""
        solver = Solver(self, x, b)
        if solver_type == SolverType.CG:
            return solver.cg(niter, tol)
        if solver_type == SolverType.PCG:
            return solver.pcg(niter, tol)
        raise ValueError(f"unknown solver type: {solver_type!r}")