"""Enumerations for boundary conditions, grid directions and solver choice."""

from __future__ import annotations

from enum import IntEnum


class BCType(IntEnum):
    """Kind of boundary condition applied on one side of the domain."""

    DIRICHLET = 0
    NEUMANN = 1


class Direction(IntEnum):
    """Side of the grid; the four boundary sides index per-side tables."""

    NORTH = 0
    SOUTH = 1
    EAST = 2
    WEST = 3
    CENTER = 4


class SolverType(IntEnum):
    """Iterative solver used to invert the discrete operator."""

    CG = 0
    PCG = 1