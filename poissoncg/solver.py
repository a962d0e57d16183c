"""Conjugate-gradient solvers for the discrete operator of a :class:`PDE`."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from .grid import Grid, axpby, dot_product
from .timer import timed

if TYPE_CHECKING:
    from .pde import PDE

_log = logging.getLogger(__name__)

_RED = "\x1B[31m"
_NORMAL = "\x1B[0m"


def _warn_invalid(iterations: int) -> None:
    print(f"{_RED}WARNING: NaN/INF detected after iteration {iterations}{_NORMAL}")


class Solver:
    """Solves ``A x = b`` in place for ``x``, with ``A`` the operator of ``pde``."""

    def __init__(self, pde: PDE, x: Grid, b: Grid) -> None:
        self.pde = pde
        self.x = x
        self.b = b

    def _new_grid(self) -> Grid:
        return Grid(self.pde.num_grids_x(), self.pde.num_grids_y())

    def cg(self, niter: int, tol: float = 1e-8) -> int:
        """Run plain conjugate gradients; return the number of iterations done."""
        pde, x, b = self.pde, self.x, self.b
        p = self._new_grid()
        v = self._new_grid()

        pde.apply_stencil(p, x)
        axpby(p, 1.0, b, -1.0, p)
        alpha_0 = dot_product(p, p)
        r = p.copy()

        iterations = 0
        with timed("CG"):
            while iterations < niter and alpha_0 > tol * tol and math.isfinite(alpha_0):
                pde.apply_stencil(v, p)
                step = alpha_0 / dot_product(v, p)
                axpby(x, 1.0, x, step, p)
                axpby(r, 1.0, r, -step, v)
                alpha_1 = dot_product(r, r)
                axpby(p, 1.0, r, alpha_1 / alpha_0, p)
                alpha_0 = alpha_1
                _log.debug("iter = %d, res = %.15e", iterations, alpha_0)
                iterations += 1

        if not math.isfinite(alpha_0):
            _warn_invalid(iterations)
        return iterations

    def pcg(self, niter: int, tol: float = 1e-8) -> int:
        """Run symmetric Gauss-Seidel preconditioned CG; return the iterations done."""
        pde, x, b = self.pde, self.x, self.b
        r = self._new_grid()
        z = self._new_grid()
        v = self._new_grid()

        pde.apply_stencil(r, x)
        axpby(r, 1.0, b, -1.0, r)
        res_norm_sq = dot_product(r, r)
        pde.gs_precon(r, z)
        alpha_0 = dot_product(r, z)
        p = z.copy()

        iterations = 0
        with timed("PCG"):
            while (
                iterations < niter
                and res_norm_sq > tol * tol
                and math.isfinite(res_norm_sq)
            ):
                pde.apply_stencil(v, p)
                step = alpha_0 / dot_product(v, p)
                axpby(x, 1.0, x, step, p)
                axpby(r, 1.0, r, -step, v)
                res_norm_sq = dot_product(r, r)
                pde.gs_precon(r, z)
                alpha_1 = dot_product(r, z)
                axpby(p, 1.0, z, alpha_1 / alpha_0, p)
                alpha_0 = alpha_1
                _log.debug("iter = %d, res = %.15e", iterations, res_norm_sq)
                iterations += 1

        if not math.isfinite(res_norm_sq):
            _warn_invalid(iterations)
        return iterations