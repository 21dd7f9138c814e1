# tests/test_solver_basics.py
import pytest
from conftest import PUZZLE, SOLUTION, assert_valid_solution

from sudoku_engine import count_solutions, solve
from sudoku_engine.search import has_unique_solution

HARD = [
    [8, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 3, 6, 0, 0, 0, 0, 0],
    [0, 7, 0, 0, 9, 0, 2, 0, 0],
    [0, 5, 0, 0, 0, 7, 0, 0, 0],
    [0, 0, 0, 0, 4, 5, 7, 0, 0],
    [0, 0, 0, 1, 0, 0, 0, 3, 0],
    [0, 0, 1, 0, 0, 0, 0, 6, 8],
    [0, 0, 8, 5, 0, 0, 0, 1, 0],
    [0, 9, 0, 0, 0, 0, 4, 0, 0],
]


def test_solve_classic_puzzle():
    assert solve(PUZZLE) == SOLUTION


def test_solve_needs_backtracking_for_hard_puzzle():
    result = solve(HARD)
    assert result is not None
    assert_valid_solution(result)
    for r in range(9):
        for c in range(9):
            if HARD[r][c]:
                assert result[r][c] == HARD[r][c]
    assert count_solutions(HARD, 2) == 1


def test_empty_grid_solves_to_valid_grid():
    result = solve([[0] * 9 for _ in range(9)])
    assert_valid_solution(result)


def test_unique_puzzle_counts_one():
    assert count_solutions(PUZZLE, 2) == 1
    assert has_unique_solution(PUZZLE)


def test_ambiguous_puzzle_counts_two():
    # blanking every 1 and 2 lets the two digits swap everywhere
    grid = [[0 if v in (1, 2) else v for v in row] for row in SOLUTION]
    assert count_solutions(grid, 2) == 2
    assert count_solutions([[0] * 9 for _ in range(9)], 2) == 2


def test_count_is_capped_at_limit():
    assert count_solutions([[0] * 9 for _ in range(9)], 5) == 5
    assert count_solutions(PUZZLE, 0) == 0


def test_contradictory_clues_have_no_solution():
    grid = [row[:] for row in PUZZLE]
    grid[0][2] = 5  # second 5 in row 1
    assert solve(grid) is None
    assert count_solutions(grid, 2) == 0


def test_solve_does_not_mutate_input():
    grid = [row[:] for row in PUZZLE]
    solve(grid)
    assert grid == PUZZLE


def test_bad_shape_is_rejected():
    with pytest.raises(ValueError):
        solve([[0] * 9])
