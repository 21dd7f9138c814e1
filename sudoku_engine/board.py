"""Player-facing board: cells with values, notes and conflict flags.

A ``GameBoard`` is a 9x9 list of ``Cell``. Every mutation helper here is pure:
it returns a new board and leaves its argument untouched, which is what lets
the history tree keep plain snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from types_sudoku import AffectedCell, Grid

from .grid import (
    BOXES,
    COLS,
    DIGITS,
    PEERS,
    ROWS,
    SIZE,
    cell_index,
    check_cell,
    check_digit,
    flatten,
    index_to_rc,
    rc_label,
)
from .search import solve_values


@dataclass
class Cell:
    value: int = 0  # 0 = empty
    is_fixed: bool = False  # set once at board creation, never toggled
    notes: Set[int] = field(default_factory=set)
    is_conflict: bool = False

    def copy(self) -> "Cell":
        return Cell(self.value, self.is_fixed, set(self.notes), self.is_conflict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "is_fixed": self.is_fixed,
            "notes": sorted(self.notes),
            "is_conflict": self.is_conflict,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Cell":
        value = int(data.get("value") or 0)
        if value:
            check_digit(value)
        notes = set() if value else {int(d) for d in data.get("notes", ())}
        for d in notes:
            check_digit(d)
        return cls(value, bool(data.get("is_fixed", False)), notes, bool(data.get("is_conflict", False)))


GameBoard = List[List[Cell]]


def board_to_dicts(board: GameBoard) -> List[List[Dict[str, Any]]]:
    return [[cell.to_dict() for cell in row] for row in board]


def board_from_dicts(rows: Iterable[Iterable[Dict[str, Any]]]) -> GameBoard:
    board = [[Cell.from_dict(c) for c in row] for row in rows]
    if len(board) != SIZE or any(len(row) != SIZE for row in board):
        raise ValueError("board must be 9x9")
    return board


def clone_board(board: GameBoard) -> GameBoard:
    return [[cell.copy() for cell in row] for row in board]


def board_values(board: GameBoard) -> Grid:
    return [[cell.value for cell in row] for row in board]


def count_filled(board: GameBoard) -> int:
    return sum(1 for row in board for cell in row if cell.value)


def has_empty(board: GameBoard) -> bool:
    return any(not cell.value for row in board for cell in row)


def get_candidates(puzzle: Grid, row: int, col: int) -> Set[int]:
    """Digits not yet used by any filled peer; empty for a filled cell."""
    if puzzle[row][col]:
        return set()
    used = {puzzle[r][c] for r, c in map(index_to_rc, PEERS[cell_index(row, col)])}
    return set(DIGITS) - used


# PUBLIC_INTERFACE
def create_game_board(puzzle: Grid) -> GameBoard:
    """Build a board from clues: clue cells are fixed, the rest carry auto notes."""
    flatten(puzzle)  # shape / range validation
    return [
        [
            Cell(
                value=puzzle[r][c],
                is_fixed=bool(puzzle[r][c]),
                notes=get_candidates(puzzle, r, c),
            )
            for c in range(SIZE)
        ]
        for r in range(SIZE)
    ]


def conflict_indices(values: List[int]) -> Set[int]:
    """Linear indices of every filled cell sharing its digit with a peer."""
    out: Set[int] = set()
    for i, v in enumerate(values):
        if not v:
            continue
        for p in PEERS[i]:
            if values[p] == v:
                out.add(i)
                out.add(p)
    return out


# PUBLIC_INTERFACE
def update_conflicts(board: GameBoard) -> GameBoard:
    """Return a copy with ``is_conflict`` set on both cells of every equal-value peer pair."""
    new_board = clone_board(board)
    flat = [cell.value for row in new_board for cell in row]
    bad = conflict_indices(flat)
    for i in range(len(flat)):
        r, c = index_to_rc(i)
        new_board[r][c].is_conflict = i in bad
    return new_board


# PUBLIC_INTERFACE
def is_solved(board: GameBoard) -> bool:
    """True iff every cell is filled and no two peers share a digit."""
    flat = [cell.value for row in board for cell in row]
    return all(flat) and not conflict_indices(flat)


# PUBLIC_INTERFACE
def solve_puzzle(board) -> Optional[Grid]:
    """Solve a GameBoard or a plain Grid, treating every filled cell as given."""
    grid = board_values(board) if board and isinstance(board[0][0], Cell) else board
    solution = solve_values(flatten(grid))
    if solution is None:
        return None
    return [solution[r * SIZE:(r + 1) * SIZE] for r in range(SIZE)]


def eliminate_from_peers(board: GameBoard, row: int, col: int, value: int) -> None:
    """In place: drop ``value`` from the notes of every peer of (row, col)."""
    for p in PEERS[cell_index(row, col)]:
        r, c = index_to_rc(p)
        board[r][c].notes.discard(value)


def _fill(board: GameBoard, row: int, col: int, value: int) -> None:
    cell = board[row][col]
    cell.value = value
    cell.notes = set()
    eliminate_from_peers(board, row, col, value)


def auto_fill_naked_singles(board: GameBoard) -> int:
    """In place: fill non-fixed empty cells holding a single note, until none remain.

    Returns the number of cells filled.
    """
    filled = 0
    changed = True
    while changed:
        changed = False
        for r in range(SIZE):
            for c in range(SIZE):
                cell = board[r][c]
                if not cell.value and not cell.is_fixed and len(cell.notes) == 1:
                    _fill(board, r, c, next(iter(cell.notes)))
                    filled += 1
                    changed = True
    return filled


def place_value(
    board: GameBoard, row: int, col: int, value: int, auto_fill: bool = True
) -> Optional[Tuple[GameBoard, str]]:
    """Set (or with ``value=0`` clear) a cell; returns (new board, description).

    Returns None when the cell is fixed. Placing a digit strips it from the
    peers' notes and, with ``auto_fill``, cascades naked-single fills; the
    cascade is reported in the description as ``(+N auto)``. Clearing a cell
    never cascades.

    Raises:
        ValueError: for coordinates or a value outside the grid's range.
    """
    check_cell(row, col)
    if value:
        check_digit(value)
    if board[row][col].is_fixed:
        return None

    new_board = clone_board(board)
    label = rc_label(row, col)
    if value:
        _fill(new_board, row, col, value)
        description = f"{label} = {value}"
    else:
        new_board[row][col].value = 0
        new_board[row][col].notes = get_candidates(board_values(new_board), row, col)
        description = f"{label} ✕"

    if value and auto_fill:
        n = auto_fill_naked_singles(new_board)
        if n:
            description += f" (+{n} auto)"
    return update_conflicts(new_board), description


def toggle_note(board: GameBoard, row: int, col: int, digit: int) -> Optional[GameBoard]:
    """Flip one note of an empty, non-fixed cell; None when the cell can't take notes."""
    check_cell(row, col)
    check_digit(digit)
    cell = board[row][col]
    if cell.is_fixed or cell.value:
        return None
    new_board = clone_board(board)
    new_board[row][col].notes ^= {digit}
    return new_board


def set_notes(board: GameBoard, row: int, col: int, notes: Iterable[int]) -> Optional[GameBoard]:
    check_cell(row, col)
    notes = set(notes)
    for d in notes:
        check_digit(d)
    cell = board[row][col]
    if cell.is_fixed or cell.value:
        return None
    new_board = clone_board(board)
    new_board[row][col].notes = notes
    return new_board


def apply_eliminations(board: GameBoard, affected: Iterable[AffectedCell]) -> GameBoard:
    """Remove the ``eliminated`` digits of each affected cell from its notes."""
    new_board = clone_board(board)
    for item in affected:
        check_cell(item["row"], item["col"])
        cell = new_board[item["row"]][item["col"]]
        if cell.value:
            continue
        cell.notes.difference_update(item.get("eliminated", ()))
    return new_board


def notes_description(row: int, col: int, before: Set[int], after: Set[int]) -> str:
    """'R1C2 +3,4 -7' for a notes batch, or '' when nothing changed."""
    added = sorted(after - before)
    removed = sorted(before - after)
    parts = []
    if added:
        parts.append("+" + ",".join(map(str, added)))
    if removed:
        parts.append("-" + ",".join(map(str, removed)))
    if not parts:
        return ""
    return f"{rc_label(row, col)} {' '.join(parts)}"


def sanity_check(original: Grid, current: Grid) -> Dict[str, Any]:
    """Report overwritten givens and duplicate digits per row, column and box."""
    issues: List[Dict[str, Any]] = []
    for r in range(SIZE):
        for c in range(SIZE):
            if original[r][c] != 0 and current[r][c] not in (0, original[r][c]):
                issues.append({"type": "given_overwritten", "cell": rc_label(r, c),
                               "given": original[r][c], "found": current[r][c]})
    flat = flatten(current)
    for prefix, units in (("r", ROWS), ("c", COLS), ("b", BOXES)):
        for n, unit in enumerate(units, start=1):
            seen = set()
            dups = set()
            for i in unit:
                v = flat[i]
                if not v:
                    continue
                if v in seen:
                    dups.add(v)
                seen.add(v)
            if dups:
                cells = [rc_label(*index_to_rc(i)) for i in unit if flat[i] in dups]
                issues.append({"type": "duplicate", "unit": f"{prefix}{n}",
                               "digits": sorted(dups), "cells": cells})
    return {"ok": len(issues) == 0, "issues": issues}
