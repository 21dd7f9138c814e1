"""Human-style deductions over a player's board (values + notes).

Detectors run in ascending difficulty and the first match wins:
naked single, hidden single (rows, then columns, then boxes), pointing pair,
naked pair, claiming. When none applies the solution fallback reveals the
first empty cell. Detectors read notes only; they never raise, a miss is None.
"""

from __future__ import annotations

from itertools import combinations
from typing import Callable, Dict, List, Optional

from types_sudoku import AffectedCell, Analysis, Grid, HintStep

from .board import (
    GameBoard,
    apply_eliminations,
    board_values,
    clone_board,
    create_game_board,
    eliminate_from_peers,
    has_empty,
    is_solved,
    solve_puzzle,
)
from .grid import BOX, BOXES, COLS, DIGITS, ROWS, SIZE, index_to_rc, rc_label

NAKED_SINGLE = "Naked Single"
HIDDEN_SINGLE_ROW = "Hidden Single (Row)"
HIDDEN_SINGLE_COL = "Hidden Single (Column)"
HIDDEN_SINGLE_BOX = "Hidden Single (Box)"
POINTING_PAIR = "Pointing Pair"
NAKED_PAIR = "Naked Pair"
CLAIMING = "Claiming"
SOLUTION_CHECK = "Solution Check"


def _empty_with(board: GameBoard, r: int, c: int, d: int) -> bool:
    cell = board[r][c]
    return not cell.value and d in cell.notes


def find_naked_single(board: GameBoard) -> Optional[HintStep]:
    for r in range(SIZE):
        for c in range(SIZE):
            cell = board[r][c]
            if not cell.value and len(cell.notes) == 1:
                d = next(iter(cell.notes))
                return {
                    "technique": NAKED_SINGLE,
                    "description": f"{rc_label(r, c)} = {d}",
                    "explanation": (
                        f"Cell {rc_label(r, c)} has only one possible candidate: {d}. "
                        "This is the only number that can go here."
                    ),
                    "affected_cells": [{"row": r, "col": c, "value": d}],
                }
    return None


def find_naked_singles(board: GameBoard) -> List[AffectedCell]:
    """Every empty cell whose notes hold exactly one digit."""
    return [
        {"row": r, "col": c, "value": next(iter(board[r][c].notes))}
        for r in range(SIZE)
        for c in range(SIZE)
        if not board[r][c].value and len(board[r][c].notes) == 1
    ]


def _hidden_single_in(board: GameBoard, units, technique: str, explain: Callable) -> Optional[HintStep]:
    for n, unit in enumerate(units):
        for d in DIGITS:
            places = [index_to_rc(i) for i in unit if _empty_with(board, *index_to_rc(i), d)]
            if len(places) == 1:
                r, c = places[0]
                return {
                    "technique": technique,
                    "description": f"{rc_label(r, c)} = {d}",
                    "explanation": explain(n, r, c, d),
                    "affected_cells": [{"row": r, "col": c, "value": d}],
                }
    return None


def find_hidden_single(board: GameBoard) -> Optional[HintStep]:
    return (
        _hidden_single_in(
            board, ROWS, HIDDEN_SINGLE_ROW,
            lambda n, r, c, d: (
                f"In row {r + 1}, the number {d} can only go in column {c + 1}. "
                f"No other cell in this row can contain {d}."
            ),
        )
        or _hidden_single_in(
            board, COLS, HIDDEN_SINGLE_COL,
            lambda n, r, c, d: (
                f"In column {c + 1}, the number {d} can only go in row {r + 1}. "
                f"No other cell in this column can contain {d}."
            ),
        )
        or _hidden_single_in(
            board, BOXES, HIDDEN_SINGLE_BOX,
            lambda n, r, c, d: (
                f"In box {n + 1}, the number {d} can only go at {rc_label(r, c)}. "
                f"No other cell in this box can contain {d}."
            ),
        )
    )


def find_pointing_pair(board: GameBoard) -> Optional[HintStep]:
    """In a box, a digit confined to one row (or column) leaves the rest of that line."""
    for b, box in enumerate(BOXES):
        box_row, box_col = divmod(b, BOX)
        for d in DIGITS:
            places = [index_to_rc(i) for i in box if _empty_with(board, *index_to_rc(i), d)]
            if len(places) < 2 or len(places) > 3:
                continue

            rows = {r for r, _ in places}
            if len(rows) == 1:
                r = places[0][0]
                elim: List[AffectedCell] = [
                    {"row": r, "col": c, "eliminated": [d]}
                    for c in range(SIZE)
                    if c // BOX != box_col and _empty_with(board, r, c, d)
                ]
                if elim:
                    return {
                        "technique": POINTING_PAIR,
                        "description": f"Eliminate {d} from row {r + 1}",
                        "explanation": (
                            f"In box {b + 1}, the number {d} is confined to row {r + 1}. "
                            f"Therefore, {d} can be eliminated from other cells in row {r + 1} outside this box."
                        ),
                        "affected_cells": elim,
                    }

            cols = {c for _, c in places}
            if len(cols) == 1:
                c = places[0][1]
                elim = [
                    {"row": r, "col": c, "eliminated": [d]}
                    for r in range(SIZE)
                    if r // BOX != box_row and _empty_with(board, r, c, d)
                ]
                if elim:
                    return {
                        "technique": POINTING_PAIR,
                        "description": f"Eliminate {d} from column {c + 1}",
                        "explanation": (
                            f"In box {b + 1}, the number {d} is confined to column {c + 1}. "
                            f"Therefore, {d} can be eliminated from other cells in column {c + 1} outside this box."
                        ),
                        "affected_cells": elim,
                    }
    return None


def _unit_name(kind: str, n: int) -> str:
    return f"{kind} {n + 1}"


def find_naked_pair(board: GameBoard) -> Optional[HintStep]:
    """Two cells of a unit sharing the same two notes clear those digits from the unit."""
    for kind, units in (("row", ROWS), ("column", COLS), ("box", BOXES)):
        for n, unit in enumerate(units):
            pairs = []
            for i in unit:
                r, c = index_to_rc(i)
                if not board[r][c].value and len(board[r][c].notes) == 2:
                    pairs.append((r, c))
            for a, b in combinations(pairs, 2):
                notes = board[a[0]][a[1]].notes
                if notes != board[b[0]][b[1]].notes:
                    continue
                nums = sorted(notes)
                elim: List[AffectedCell] = []
                for i in unit:
                    r, c = index_to_rc(i)
                    if (r, c) in (a, b) or board[r][c].value:
                        continue
                    hit = [d for d in nums if d in board[r][c].notes]
                    if hit:
                        elim.append({"row": r, "col": c, "eliminated": hit})
                if elim:
                    digits = ",".join(map(str, nums))
                    where = _unit_name(kind, n)
                    return {
                        "technique": NAKED_PAIR,
                        "description": f"Eliminate {{{digits}}} from {where}",
                        "explanation": (
                            f"Cells {rc_label(*a)} and {rc_label(*b)} both contain only candidates {{{digits}}}. "
                            f"These two numbers must go in these two cells, so they can be eliminated "
                            f"from other cells in {where}."
                        ),
                        "affected_cells": elim,
                    }
    return None


def find_claiming(board: GameBoard) -> Optional[HintStep]:
    """In a row/column, a digit confined to one box leaves the rest of that box."""
    for kind, units in (("row", ROWS), ("column", COLS)):
        for n, unit in enumerate(units):
            for d in DIGITS:
                places = [index_to_rc(i) for i in unit if _empty_with(board, *index_to_rc(i), d)]
                if len(places) < 2:
                    continue
                boxes = {(r // BOX) * BOX + c // BOX for r, c in places}
                if len(boxes) != 1:
                    continue
                b = boxes.pop()
                elim: List[AffectedCell] = []
                for i in BOXES[b]:
                    r, c = index_to_rc(i)
                    on_line = r == n if kind == "row" else c == n
                    if not on_line and _empty_with(board, r, c, d):
                        elim.append({"row": r, "col": c, "eliminated": [d]})
                if elim:
                    where = _unit_name(kind, n)
                    return {
                        "technique": CLAIMING,
                        "description": f"Eliminate {d} from box {b + 1}",
                        "explanation": (
                            f"In {where}, the number {d} is confined to box {b + 1}. "
                            f"Therefore, {d} can be eliminated from other cells in box {b + 1}."
                        ),
                        "affected_cells": elim,
                    }
    return None


def find_solution_hint(board: GameBoard) -> Optional[HintStep]:
    """Fallback: reveal the first empty cell's value from a full solve."""
    solution = solve_puzzle(board_values(board))
    if solution is None:
        return None
    for r in range(SIZE):
        for c in range(SIZE):
            if not board[r][c].value:
                d = solution[r][c]
                return {
                    "technique": SOLUTION_CHECK,
                    "description": f"{rc_label(r, c)} = {d}",
                    "explanation": f"Based on the complete solution, the value at {rc_label(r, c)} is {d}.",
                    "affected_cells": [{"row": r, "col": c, "value": d}],
                }
    return None


DETECTORS = (
    find_naked_single,
    find_hidden_single,
    find_pointing_pair,
    find_naked_pair,
    find_claiming,
)


def find_technique(board: GameBoard) -> Optional[HintStep]:
    """First genuine technique that applies, without the solution fallback."""
    for detect in DETECTORS:
        step = detect(board)
        if step is not None:
            return step
    return None


# PUBLIC_INTERFACE
def get_hint(board: GameBoard) -> Optional[HintStep]:
    """Next logical step for the board, or None when it is full or unsolvable."""
    if not has_empty(board):
        return None
    return find_technique(board) or find_solution_hint(board)


def is_placement(step: HintStep) -> bool:
    return bool(step["affected_cells"]) and "value" in step["affected_cells"][0]


def apply_step(board: GameBoard, step: HintStep) -> GameBoard:
    """New board with a hint applied: placements fill cells, eliminations trim notes."""
    if not is_placement(step):
        return apply_eliminations(board, step["affected_cells"])
    new_board = clone_board(board)
    for item in step["affected_cells"]:
        r, c, d = item["row"], item["col"], item["value"]
        if new_board[r][c].is_fixed:
            continue
        new_board[r][c].value = d
        new_board[r][c].notes = set()
        eliminate_from_peers(new_board, r, c, d)
    return new_board


def analyze(grid: Grid) -> Analysis:
    """Solve by genuine techniques only, counting how often each one fired.

    Strategies come out in first-use order.
    """
    board = create_game_board(grid)
    freq: Dict[str, int] = {}
    steps = 0
    while has_empty(board):
        step = find_technique(board)
        if step is None:
            break
        freq[step["technique"]] = freq.get(step["technique"], 0) + 1
        board = apply_step(board, step)
        steps += 1
    return {
        "solved_by_logic": is_solved(board),
        "steps": steps,
        "strategies": [{"title": t, "freq": f} for t, f in freq.items()],
    }
