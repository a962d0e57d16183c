import math

import pytest

from poissoncg.grid import Grid, axpby, dot_product
from poissoncg.pde import PDE
from poissoncg.perf import rhs_sine, u_sine
from poissoncg.solver import Solver


def _problem(nx, ny):
    pde = PDE(1, 1, nx, ny)
    u = Grid(nx, ny)
    b = Grid(nx, ny)
    pde.init_func = u_sine
    pde.init(u)
    pde.init_func = rhs_sine
    pde.init(b)
    return pde, u, b


def _residual_norm(pde, x, b):
    r = Grid(pde.num_grids_x(), pde.num_grids_y())
    pde.apply_stencil(r, x)
    axpby(r, 1.0, b, -1.0, r)
    return math.sqrt(dot_product(r, r))


def _error_sq(u, x):
    diff = Grid(u.num_grids_x(), u.num_grids_y())
    axpby(diff, 1.0, u, -1.0, x)
    return dot_product(diff, diff)


def test_cg_reaches_tolerance():
    pde, u, b = _problem(15, 9)
    x = Grid(15, 9)
    x.rand()
    iterations = Solver(pde, x, b).cg(500, 1e-8)
    assert 0 < iterations < 500
    assert _residual_norm(pde, x, b) < 1e-6


def test_pcg_reaches_tolerance():
    pde, u, b = _problem(15, 9)
    x = Grid(15, 9)
    x.rand()
    iterations = Solver(pde, x, b).pcg(500, 1e-8)
    assert 0 < iterations < 500
    assert _residual_norm(pde, x, b) < 1e-6


def test_solvers_reduce_error():
    pde, u, b = _problem(11, 11)
    start = Grid(11, 11)
    start.rand()
    err_start = _error_sq(u, start)
    for method in ("cg", "pcg"):
        x = start.copy()
        getattr(Solver(pde, x, b), method)(20, 1e-8)
        assert _error_sq(u, x) < err_start


def test_pcg_needs_fewer_iterations_than_cg():
    pde, u, b = _problem(31, 31)
    x_cg = Grid(31, 31)
    x_pcg = Grid(31, 31)
    cg_iters = Solver(pde, x_cg, b).cg(1000, 1e-8)
    pcg_iters = Solver(pde, x_pcg, b).pcg(1000, 1e-8)
    assert pcg_iters < cg_iters


def test_zero_iterations_leave_x_unchanged():
    pde, u, b = _problem(7, 5)
    x = Grid(7, 5)
    x.rand()
    before = x.data.copy()
    assert Solver(pde, x, b).cg(0, 1e-8) == 0
    assert (x.data == before).all()


def test_exact_start_needs_no_iterations():
    pde = PDE(1, 1, 6, 6)
    x = Grid(6, 6)
    x.rand()
    b = Grid(6, 6)
    pde.apply_stencil(b, x)
    assert Solver(pde, x, b).cg(100, 1e-8) == 0
    assert Solver(pde, x, b).pcg(100, 1e-8) == 0


@pytest.mark.parametrize("method", ["cg", "pcg"])
def test_nan_rhs_warns(method, capsys):
    pde = PDE(1, 1, 4, 4)
    x = Grid(4, 4)
    b = Grid(4, 4)
    b.fill(float("nan"))
    iterations = getattr(Solver(pde, x, b), method)(10, 1e-8)
    assert iterations == 0
    assert "NaN/INF detected after iteration 0" in capsys.readouterr().out