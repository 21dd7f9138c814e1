"""Backtracking search over propagated candidate states.

Each branch works on a copy of the parent ``CandidateState`` (values and masks
are copied together), so sibling branches never see each other's
assignments. The branching cell is the unsolved cell with the fewest
candidates (first in row-major order on ties) and its digits are tried in
ascending order.
"""

from __future__ import annotations

import logging

from .candidates import CandidateState
from .grid import NUM_CELLS, flatten, unflatten

log = logging.getLogger(__name__)

MAX_DEPTH = NUM_CELLS


def _search(state: CandidateState, limit: int, found: list, depth: int = 0) -> None:
    if depth > MAX_DEPTH:
        return
    i = state.most_constrained()
    if i is None:
        found.append(state.values[:])
        return
    for d in state.candidates(i):
        trial = state.copy()
        if trial.assign(i, d):
            _search(trial, limit, found, depth + 1)
            if len(found) >= limit:
                return


def solve_values(values: list[int]) -> list[int] | None:
    """Solve a flat 81-value grid; returns the first solution found or None."""
    state = CandidateState.from_values(values)
    if state is None:
        return None
    found: list = []
    _search(state, 1, found)
    return found[0] if found else None


def count_solutions_values(values: list[int], limit: int = 2) -> int:
    if limit <= 0:
        return 0
    state = CandidateState.from_values(values)
    if state is None:
        return 0
    found: list = []
    _search(state, limit, found)
    return min(len(found), limit)


# PUBLIC_INTERFACE
def solve(grid) -> list[list[int]] | None:
    """Solve a 9x9 grid (0 = empty).

    Returns:
        The completed grid, or None when the clues admit no solution.

    Raises:
        ValueError: if the grid is not 9x9 or holds values outside 0..9.
    """
    solution = solve_values(flatten(grid))
    if solution is None:
        log.debug("solve: no solution")
        return None
    return unflatten(solution)


# PUBLIC_INTERFACE
def count_solutions(grid, limit: int = 2) -> int:
    """Count solutions of a 9x9 grid, stopping once ``limit`` have been found.

    With ``limit=2`` the answer reads: 0 unsolvable, 1 unique, 2 ambiguous.
    """
    return count_solutions_values(flatten(grid), limit)


def has_unique_solution(grid) -> bool:
    return count_solutions(grid, 2) == 1
