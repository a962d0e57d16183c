# poissoncg

Solve the two-dimensional Poisson equation `-Δu = f` on a rectangular domain
with a five-point finite-difference stencil. Solutions are computed with the
conjugate gradient method (CG) or with CG preconditioned by one forward and one
backward Gauss-Seidel sweep (PCG). Grid data is held in NumPy arrays.

## Installation

```
pip install .
```

To run the tests, install with the test extra:

```
pip install ".[test]"
pytest
```

## Modules

- `poissoncg.kinds` — the enumerations `BCType` (`DIRICHLET`, `NEUMANN`),
  `Direction` (`NORTH`, `SOUTH`, `EAST`, `WEST`, `CENTER`) and `SolverType`
  (`CG`, `PCG`).
- `poissoncg.grid` — `Grid` and the vector operations on grids.
- `poissoncg.pde` — `PDE`, the discrete Laplace operator and its boundary
  handling, plus the point functions `default_boundary` and `zero_func`.
- `poissoncg.solver` — `Solver` with the `cg` and `pcg` methods.
- `poissoncg.timer` — `TimerRegistry` and the shared-registry helpers `timed`,
  `get_timer` and `print_time_summary`.
- `poissoncg.perf` — the performance run (see below) and the test-problem
  functions `u_sine` and `rhs_sine`.

## Concepts

- `Grid(columns, rows, ghost=None)` holds the inner points plus one layer of
  halo points on every side; `grid.data` is the full array including the halo,
  and `grid[row, column]` reads or writes one value. Most methods take a `halo`
  flag that decides whether the halo is included. `fill` accepts a number or a
  function of `(x, y)`; `rand(halo=False, seed=1)` fills with reproducible
  pseudo-random values in `[0, 1]`; `fill_boundary` and `copy_to_halo` set one
  halo side; `read_file` and `write_file` load and store a
  `rows columns` header followed by tab-separated rows (`read_file` raises
  `ValueError` if the header does not match the grid).
- `PDE(len_x, len_y, grids_x, grids_y)` describes the domain size and the
  number of inner points. Its attributes `init_func`, `boundary` (one `BCType`
  per side, indexed by `Direction`) and `boundary_func` can be set freely; all
  point functions take `(i, j, h_x, h_y)`. `init` fills a grid's inner points,
  `apply_boundary` sets the Dirichlet sides, `refresh_boundary` updates the
  Neumann sides, `apply_stencil` computes `res = A u`, and `gs_precon` applies
  the preconditioner. `solve(x, b, solver_type, niter, tol=1e-8)` solves in
  place and returns the number of iterations; an unknown solver type raises
  `ValueError`. Grids of the wrong size raise `ValueError`.
- `Solver(pde, x, b)` runs `cg(niter, tol=1e-8)` or `pcg(niter, tol=1e-8)`,
  stopping when `niter` is reached, the squared residual norm falls below
  `tol**2`, or it stops being finite (in which case a warning is printed).
- `axpby(res, a, x, b, y)`, `scale_copy(res, a, x)` and `dot_product(x, y)`
  work on the inner points (or everywhere with `halo=True`);
  `is_symmetric(u, tol=1e-10)` checks a square grid;
  `write_gnuplot_file(name, src, len_x, len_y)` writes `x y u(x,y)` lines,
  creating the target directory if needed.
- `axpby`, `scale_copy`, `dot_product`, `PDE.apply_stencil`,
  `PDE.gs_precon`, `Solver.cg` and `Solver.pcg` record their running time in
  the shared timer registry under `AXPBY`, `COPY`, `DOT_PRODUCT`,
  `APPLY_STENCIL`, `GS_PRE_CON`, `CG` and `PCG`. `timed(name)` works as a
  context manager or a decorator.

## Example

```python
from poissoncg.grid import Grid, axpby, dot_product, write_gnuplot_file
from poissoncg.kinds import SolverType
from poissoncg.pde import PDE
from poissoncg.perf import rhs_sine, u_sine

nx, ny = 199, 99
laplace = PDE(1, 1, nx, ny)

exact = Grid(nx, ny)
laplace.init_func = u_sine
laplace.init(exact)

rhs = Grid(nx, ny)
laplace.init_func = rhs_sine
laplace.init(rhs)

x = Grid(nx, ny)
x.rand()
iterations = laplace.solve(x, rhs, SolverType.PCG, 350)

error = Grid(nx, ny)
axpby(error, 1.0, exact, -1.0, x)
print(iterations, dot_product(error, error) ** 0.5)

write_gnuplot_file("results/PCG_sine.dat", x, 1, 1)
```

The file written by `write_gnuplot_file` has one `x  y  u(x,y)` line per grid
point and a blank line after every row, so it plots directly with gnuplot's
`splot`.

## Performance run

```
poissoncg-perf <outer dimension y> <inner dimension x>
```

This solves the sine problem from a random starting guess with 20 iterations of
CG and then of PCG, reports the throughput of each in MLUP/s, checks that the
residual and the error have fallen below their starting values, and prints a
timing summary of the kernels. With fewer than two arguments it prints a usage
line; a non-integer dimension ends it with an error message.

## What it does not do

- All computation runs in a single thread; the performance run always reports
  one active thread.
- There is no general command-line solver: apart from the performance run, the
  package is used from Python. Results are stored only through
  `Grid.write_file` and `write_gnuplot_file`; the package draws no plots itself.