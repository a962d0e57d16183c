import pytest

from poissoncg.kinds import BCType, Direction, SolverType


def test_directions_index_a_four_sided_table():
    sides = [Direction(i) for i in range(4)]
    assert sides == [Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST]
    table = [BCType.DIRICHLET] * 4
    table[Direction(1)] = BCType.NEUMANN
    assert table[Direction.SOUTH] is BCType.NEUMANN
    assert [table[d] for d in (Direction.NORTH, Direction.EAST, Direction.WEST)] == [
        BCType.DIRICHLET
    ] * 3


def test_direction_lookup_by_value():
    assert Direction(2) is Direction.EAST
    assert Direction(3) is Direction.WEST


def test_solver_lookup_by_name_and_value():
    assert SolverType["PCG"] is SolverType(1)
    assert SolverType["CG"] is SolverType(0)


def test_unknown_values_raise():
    with pytest.raises(ValueError):
        BCType(7)
    with pytest.raises(KeyError):
        SolverType["GMRES"]