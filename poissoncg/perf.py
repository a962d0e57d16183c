"""Command that times the CG and PCG solvers on a sine test problem."""

from __future__ import annotations

import math
import sys
from collections.abc import Sequence
from pathlib import Path

from .grid import Grid, axpby, dot_product
from .kinds import SolverType
from .pde import PDE
from .timer import get_timer, print_time_summary

_NORMAL = "\x1B[0m"
_RED = "\x1B[31m"
_GREEN = "\x1B[32m"
_CYAN = "\x1B[36m"


def u_sine(i: int, j: int, h_x: float, h_y: float) -> float:
    """Exact solution ``sin(pi x) * sin(pi y)``."""
    return math.sin(math.pi * i * h_x) * math.sin(math.pi * j * h_y)


def rhs_sine(i: int, j: int, h_x: float, h_y: float) -> float:
    """Right-hand side ``2 pi^2 sin(pi x) sin(pi y)`` matching :func:`u_sine`."""
    return 2 * math.pi * math.pi * math.sin(math.pi * i * h_x) * math.sin(math.pi * j * h_y)


class _Checks:
    """Numbered pass/fail reporting for a fixed number of checks."""

    def __init__(self, total: int) -> None:
        self.total = total
        self.counter = 0
        self.success = True
        print(f"{_CYAN}TESTS started\nThere are {total} tests to pass{_NORMAL}")

    def less_than(self, a: float, b: float, label: str) -> None:
        self.counter += 1
        if a >= b:
            self.success = False
            print(f"{_RED}Test[{self.counter:2d}/{self.total:2d}] {label} failed")
        else:
            print(f"{_GREEN}Test[{self.counter:2d}/{self.total:2d}] {label} success")
        print(_NORMAL, end="")

    def finish(self) -> None:
        if self.success:
            print(f"{_CYAN}Congrats !!!, You did it !\nAll tests passed{_NORMAL}")
        else:
            print(f"{_RED}Sorry, some tests failed{_NORMAL}")


def _residual(laplace: PDE, res_vec: Grid, b: Grid, x: Grid) -> float:
    laplace.apply_stencil(res_vec, x)
    axpby(res_vec, 1.0, b, -1.0, res_vec)
    return dot_product(res_vec, res_vec)


def _mlups(iterations: int, points: float, seconds: float) -> float:
    work = iterations * points * 1e-6
    return work / seconds if seconds > 0 else math.inf


def main(argv: Sequence[str] | None = None) -> int:
    """Run both solvers for 20 iterations and report throughput and checks."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2:
        prog = Path(sys.argv[0]).name if sys.argv and sys.argv[0] else "perf"
        print(f"Usage: {prog} <outer dimension y> <inner dimension x>")
        return 0
    try:
        ny, nx = int(args[0]), int(args[1])
    except ValueError as exc:
        raise SystemExit(f"invalid grid dimension: {exc}") from exc

    print("Total number of threads active = 1")
    checks = _Checks(4)

    laplace = PDE(1, 1, nx, ny)
    u_exact = Grid(nx, ny)
    rhs = Grid(nx, ny)
    laplace.init_func = u_sine
    laplace.init(u_exact)
    laplace.init_func = rhs_sine
    laplace.init(rhs)
    residual = Grid(nx, ny)
    total_points = float(nx * ny)

    x = Grid(nx, ny)
    x.rand()
    axpby(residual, 1.0, u_exact, -1.0, x)
    err_start = dot_product(residual, residual)
    res_start = _residual(laplace, residual, rhs, x)

    for solver_type in (SolverType.CG, SolverType.PCG):
        name = solver_type.name
        if solver_type is SolverType.PCG:
            x.rand()
        iterations = laplace.solve(x, rhs, solver_type, 20)
        print(f"{name} iterations = {iterations}")
        seconds = get_timer(name)
        print(f"Performance {name} = {_mlups(iterations, total_points, seconds):f} [MLUP/s]")
        axpby(residual, 1.0, u_exact, -1.0, x)
        err = dot_product(residual, residual)
        res = _residual(laplace, residual, rhs, x)
        checks.less_than(res, res_start, f"Solver::{name} - residual check")
        checks.less_than(err, err_start, f"Solver::{name} - error check")

    checks.finish()
    print_time_summary()
    return 0


if __name__ == "__main__":
    sys.exit(main())