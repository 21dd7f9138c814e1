"""A single game in progress: board, stored solution and move history.

``GameSession`` is what a presentation layer drives. Every committed action
(a placement with its auto-fill cascade, a notes batch, an applied hint)
becomes exactly one history node; undo and node restore swap the board for
the stored snapshot.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Set, Tuple

from types_sudoku import Grid, HintStep

from .board import (
    GameBoard,
    apply_eliminations,
    board_values,
    clone_board,
    create_game_board,
    has_empty,
    is_solved,
    notes_description,
    place_value,
    set_notes,
    solve_puzzle,
    toggle_note,
    update_conflicts,
)
from .config import DotDict, default_config
from .generator import PuzzleResult, generate_puzzle
from .grid import check_cell, clone_grid, rc_label
from .history import HistoryNode, HistoryTree
from .techniques import get_hint, is_placement

log = logging.getLogger(__name__)

HINT = "hint"
SOLVED = "solved"
UNSOLVABLE = "unsolvable"
NO_HINT = "no_hint"


class GameSession:
    def __init__(self, puzzle: Grid, solution: Optional[Grid] = None,
                 result: Optional[PuzzleResult] = None, config: Optional[DotDict] = None):
        self.config = config or default_config()
        self.puzzle = clone_grid(puzzle)
        self.result = result
        self.board: GameBoard = create_game_board(self.puzzle)
        self.solution: Optional[Grid] = solution if solution is not None else solve_puzzle(self.puzzle)
        self.history = HistoryTree.from_config(self.config)
        self.history.start(self.board)
        self.is_complete = False

    @classmethod
    def new_game(cls, difficulty: Optional[str] = None, seed: Optional[int] = None,
                 config: Optional[DotDict] = None) -> "GameSession":
        cfg = config or default_config()
        result = generate_puzzle(difficulty, seed=seed, config=cfg)
        return cls(result.puzzle, result.solution, result=result, config=cfg)

    @property
    def move_count(self) -> int:
        node = self.history.current
        return node.move_count if node else 0

    def _commit(self, board: GameBoard, description: str) -> HistoryNode:
        self.board = board
        self.is_complete = is_solved(board)
        node = self.history.commit(board, description)
        log.debug("move %d: %s", node.move_count, description)
        return node

    def _load(self, node: HistoryNode) -> HistoryNode:
        self.board = clone_board(node.board)
        self.is_complete = is_solved(self.board)
        return node

    def set_value(self, row: int, col: int, value: int) -> Optional[HistoryNode]:
        """Place (or with 0 clear) a digit; None for fixed cells or a finished game."""
        if self.is_complete:
            check_cell(row, col)
            return None
        placed = place_value(self.board, row, col, value, auto_fill=self.config.game.auto_fill)
        if placed is None:
            return None
        board, description = placed
        return self._commit(board, description)

    def clear_cell(self, row: int, col: int) -> Optional[HistoryNode]:
        return self.set_value(row, col, 0)

    def toggle_note(self, row: int, col: int, digit: int) -> bool:
        """Flip a note without recording history; see ``commit_notes``."""
        board = toggle_note(self.board, row, col, digit)
        if board is None:
            return False
        self.board = board
        return True

    def commit_notes(self, row: int, col: int, original_notes: Iterable[int]) -> Optional[HistoryNode]:
        """Record the notes edited since ``original_notes`` as one history node."""
        check_cell(row, col)
        before: Set[int] = set(original_notes)
        description = notes_description(row, col, before, self.board[row][col].notes)
        if not description:
            return None
        return self._commit(clone_board(self.board), description)

    def edit_notes(self, row: int, col: int, notes: Iterable[int]) -> Optional[HistoryNode]:
        check_cell(row, col)
        before = set(self.board[row][col].notes)
        board = set_notes(self.board, row, col, notes)
        if board is None:
            return None
        self.board = board
        return self.commit_notes(row, col, before)

    def undo(self) -> Optional[HistoryNode]:
        node = self.history.undo()
        return self._load(node) if node is not None else None

    def restore_to(self, node_id: str) -> Optional[HistoryNode]:
        node = self.history.restore_to(node_id)
        return self._load(node) if node is not None else None

    def request_hint(self) -> Tuple[str, Optional[HintStep]]:
        """Return (status, step); status is one of hint, solved, unsolvable, no_hint.

        ``no_hint`` means a solvable board where nothing applied; the solution
        fallback in ``get_hint`` normally keeps it from happening.
        """
        if not has_empty(self.board):
            return (SOLVED, None) if is_solved(self.board) else (UNSOLVABLE, None)
        step = get_hint(self.board)
        if step is not None:
            return HINT, step
        if solve_puzzle(board_values(self.board)) is None:
            return UNSOLVABLE, None
        return NO_HINT, None

    def apply_hint(self, step: HintStep) -> Optional[HistoryNode]:
        if not step["affected_cells"]:
            return None
        if is_placement(step):
            first = step["affected_cells"][0]
            return self.set_value(first["row"], first["col"], first["value"])
        board = update_conflicts(apply_eliminations(self.board, step["affected_cells"]))
        return self._commit(board, f"{step['technique']}: {step['description']}")

    def reveal_cell(self, row: int, col: int) -> Optional[HistoryNode]:
        """Place the stored solution's digit in a non-fixed cell."""
        check_cell(row, col)
        if self.solution is None or self.board[row][col].is_fixed or self.is_complete:
            return None
        node = self.set_value(row, col, self.solution[row][col])
        if node is not None:
            log.debug("revealed %s", rc_label(row, col))
        return node

    def solve(self) -> Optional[Grid]:
        """Solution of the board as it stands (player digits count as givens)."""
        return solve_puzzle(board_values(self.board))
