# types_sudoku.py
from __future__ import annotations

from typing import TypedDict

Grid = list[list[int]]
"""A 9x9 Sudoku grid as rows of integers (0 = empty)."""


class _AffectedCellBase(TypedDict):
    row: int  # 0-based
    col: int  # 0-based


class AffectedCell(_AffectedCellBase, total=False):
    """One cell touched by a hint: either a placement or a set of eliminations."""

    value: int  # digit to place
    eliminated: list[int]  # digits to remove from the cell's notes


class HintStep(TypedDict):
    """A single human-style deduction, recomputed on demand."""

    technique: str  # e.g. 'Naked Single', 'Hidden Single (Row)', 'Pointing Pair'
    description: str  # short label, e.g. 'R3C5 = 7'
    explanation: str  # prose for the hint panel
    affected_cells: list[AffectedCell]


class Strategy(TypedDict):
    title: str  # technique name
    freq: int  # how many times the technique fired


class Analysis(TypedDict):
    solved_by_logic: bool
    steps: int
    strategies: list[Strategy]
