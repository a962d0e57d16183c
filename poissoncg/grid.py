"""Rectangular grid with a one-point halo, plus vector operations on grids."""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path

import numpy as np

from .kinds import BCType, Direction
from .timer import timed

HALO = 1
RAND_MAX = 2147483647

GridFunc = Callable[[int, int], float]


def _rand_r(seed: int) -> Iterator[int]:
    """Reentrant pseudo-random sequence matching the classic glibc ``rand_r``."""
    state = seed & 0xFFFFFFFF

    def step(value: int) -> int:
        return (value * 1103515245 + 12345) & 0xFFFFFFFF

    while True:
        state = step(state)
        result = (state >> 16) % 2048
        state = step(state)
        result = (result << 10) ^ ((state >> 16) % 1024)
        state = step(state)
        result = (result << 10) ^ ((state >> 16) % 1024)
        yield result


class Grid:
    """Values on an inner domain surrounded by a halo layer.

    ``columns`` and ``rows`` count the halo; ``grid[row, column]`` indexes
    the full array including the halo.
    """

    def __init__(
        self, columns: int, rows: int, ghost: Sequence[BCType] | None = None
    ) -> None:
        if columns < 0 or rows < 0:
            raise ValueError("grid dimensions must be non-negative")
        self.ghost = list(ghost) if ghost is not None else [BCType.DIRICHLET] * 4
        if len(self.ghost) != 4:
            raise ValueError("ghost must give one boundary type per side")
        self.data = np.zeros((rows + 2 * HALO, columns + 2 * HALO))

    @property
    def rows(self) -> int:
        return self.data.shape[0]

    @property
    def columns(self) -> int:
        return self.data.shape[1]

    def __getitem__(self, index: tuple[int, int]) -> float:
        return float(self.data[index])

    def __setitem__(self, index: tuple[int, int], value: float) -> None:
        self.data[index] = value

    def __copy__(self) -> Grid:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> Grid:
        return self.copy()

    def _shift(self, halo: bool) -> int:
        return 0 if halo else HALO

    def _interior(self, halo: bool) -> tuple[slice, slice]:
        s = self._shift(halo)
        return slice(s, self.rows - s), slice(s, self.columns - s)

    def _points(self, halo: bool) -> Iterator[tuple[int, int]]:
        s = self._shift(halo)
        return itertools.product(range(s, self.rows - s), range(s, self.columns - s))

    def num_grids_x(self, halo: bool = False) -> int:
        """Number of points along x, with or without the halo."""
        return self.columns - (0 if halo else 2 * HALO)

    def num_grids_y(self, halo: bool = False) -> int:
        """Number of points along y, with or without the halo."""
        return self.rows - (0 if halo else 2 * HALO)

    def num_grids(self, halo: bool = False) -> int:
        """Total number of points, with or without the halo."""
        return self.num_grids_x(halo) * self.num_grids_y(halo)

    def copy(self) -> Grid:
        """Return a deep copy."""
        other = Grid(self.num_grids_x(), self.num_grids_y(), self.ghost)
        other.data[...] = self.data
        return other

    def print(self, halo: bool = False) -> None:
        """Print the values row by row."""
        for row in self.data[self._interior(halo)]:
            print("".join(f" {value:10.5f}" for value in row))

    def read_file(self, name: str | Path, halo: bool = False) -> None:
        """Load values written by :meth:`write_file`; the header must match this grid."""
        with open(name, encoding="utf-8") as fh:
            tokens = fh.read().split()
        if len(tokens) < 2:
            raise ValueError(f"{name}: missing size header")
        file_rows, file_columns = int(tokens[0]), int(tokens[1])
        expected = (self.num_grids_y(halo), self.num_grids_x(halo))
        if (file_rows, file_columns) != expected:
            raise ValueError(
                f"{name}: size {file_rows}x{file_columns} does not match grid "
                f"{expected[0]}x{expected[1]}"
            )
        count = file_rows * file_columns
        values = tokens[2 : 2 + count]
        if len(values) < count:
            raise ValueError(f"{name}: expected {count} values, found {len(values)}")
        self.data[self._interior(halo)] = np.array(
            [float(v) for v in values]
        ).reshape(file_rows, file_columns)

    def write_file(self, name: str | Path, halo: bool = False) -> None:
        """Write a ``rows columns`` header followed by tab-separated rows."""
        with open(name, "w", encoding="utf-8") as fh:
            fh.write(f"{self.num_grids_y(halo)} {self.num_grids_x(halo)}\n")
            for row in self.data[self._interior(halo)]:
                fh.write("".join(f"{value:g}\t" for value in row))
                fh.write("\n")

    def fill(self, value: float | GridFunc, halo: bool = False) -> None:
        """Set every point to ``value``, or to ``value(x, y)`` if it is callable."""
        if callable(value):
            for j, i in self._points(halo):
                self.data[j, i] = value(i, j)
        else:
            self.data[self._interior(halo)] = value

    def rand(self, halo: bool = False, seed: int = 1) -> None:
        """Fill with reproducible pseudo-random values in [0, 1]."""
        stream = _rand_r(seed)
        for (j, i), number in zip(self._points(halo), stream):
            self.data[j, i] = number / RAND_MAX

    def fill_boundary(self, func: GridFunc, direction: Direction) -> None:
        """Set the halo on one side to ``func(x, y)`` at each halo point."""
        nx, ny = self.num_grids_x(True), self.num_grids_y(True)
        if direction == Direction.WEST:
            for j in range(ny):
                self.data[j, 0] = func(0, j)
        elif direction == Direction.EAST:
            for j in range(ny):
                self.data[j, nx - 1] = func(nx - 1, j)
        elif direction == Direction.NORTH:
            for i in range(nx):
                self.data[ny - 1, i] = func(i, ny - 1)
        elif direction == Direction.SOUTH:
            for i in range(nx):
                self.data[0, i] = func(i, 0)

    def copy_to_halo(self, func: GridFunc, direction: Direction) -> None:
        """Copy the adjacent inner values into one halo side, shifted by ``func``."""
        nx, ny = self.num_grids_x(True), self.num_grids_y(True)
        if direction == Direction.WEST:
            for j in range(ny):
                self.data[j, 0] = self.data[j, HALO] + func(0, j)
        elif direction == Direction.EAST:
            for j in range(ny):
                self.data[j, nx - 1] = self.data[j, nx - 1 - HALO] + func(nx, j)
        elif direction == Direction.NORTH:
            for i in range(nx):
                self.data[ny - 1, i] = self.data[ny - 1 - HALO, i] + func(i, ny)
        elif direction == Direction.SOUTH:
            for i in range(nx):
                self.data[0, i] = self.data[HALO, i] + func(i, 0)

    def swap(self, other: Grid) -> None:
        """Exchange the values of two grids of equal size."""
        if self.data.shape != other.data.shape:
            raise ValueError("cannot swap grids of different sizes")
        self.data, other.data = other.data, self.data


def _check_same_shape(*grids: Grid) -> None:
    shape = grids[0].data.shape
    if any(g.data.shape != shape for g in grids[1:]):
        raise ValueError("grids must have the same size")


@timed("AXPBY")
def axpby(res: Grid, a: float, x: Grid, b: float, y: Grid, halo: bool = False) -> None:
    """Set ``res = a*x + b*y`` on the inner points (or everywhere with ``halo``)."""
    _check_same_shape(res, x, y)
    region = res._interior(halo)
    res.data[region] = a * x.data[region] + b * y.data[region]


@timed("COPY")
def scale_copy(res: Grid, a: float, x: Grid, halo: bool = False) -> None:
    """Set ``res = a*x`` on the inner points (or everywhere with ``halo``)."""
    _check_same_shape(res, x)
    region = res._interior(halo)
    res.data[region] = a * x.data[region]


@timed("DOT_PRODUCT")
def dot_product(x: Grid, y: Grid, halo: bool = False) -> float:
    """Return the dot product of two grids over the inner points."""
    _check_same_shape(x, y)
    region = x._interior(halo)
    return float(np.sum(x.data[region] * y.data[region]))


def is_symmetric(u: Grid, tol: float = 1e-10, halo: bool = False) -> bool:
    """True unless some ``u[i, j] - u[j, i]`` exceeds ``tol``; the grid must be square."""
    if u.rows != u.columns:
        raise ValueError("symmetry is only defined for square grids")
    values = u.data[u._interior(halo)]
    return not bool(np.any(values - values.T > tol))


def write_gnuplot_file(
    name: str | Path, src: Grid, len_x: float, len_y: float, halo: bool = False
) -> bool:
    """Write ``x y u(x,y)`` lines for gnuplot, creating the directory if needed."""
    print("Writing solution file...")
    path = Path(name)
    directory = path.parent
    if not directory.exists():
        try:
            directory.mkdir(parents=True, exist_ok=True)
            print(f'Directory created: "{directory}"')
        except OSError:
            print(f'Failed to create directory: "{directory}"')
    hx = len_x / (src.num_grids_x(True) - 1.0)
    hy = len_y / (src.num_grids_y(True) - 1.0)
    shift = 0 if halo else HALO
    with open(path, "w", encoding="utf-8") as fh:
        fh.write("#x\ty\tu(x,y)\n")
        for y_index in range(shift, src.num_grids_y(True) - shift):
            for x_index in range(shift, src.num_grids_x(True) - shift):
                fh.write(
                    f"{x_index * hx:g}\t{y_index * hy:g}\t{src.data[y_index, x_index]:g}\n"
                )
            fh.write("\n")
    return True