"""
Sudoku puzzle engine.

Exports:
- generate_puzzle / PuzzleResult for unique-solution puzzle generation
- solve, count_solutions and solve_puzzle for search
- create_game_board, update_conflicts, is_solved for the player board
- get_hint and analyze for human-style technique hints
- HistoryTree and GameSession for move history and game flow

Nothing here touches rendering or input; callers own presentation.
"""

from .board import Cell, create_game_board, is_solved, solve_puzzle, update_conflicts
from .config import load_config
from .game import GameSession
from .generator import DIFFICULTIES, PuzzleResult, difficulty_label, generate_puzzle
from .history import HistoryNode, HistoryTree
from .search import count_solutions, solve
from .techniques import analyze, get_hint

__version__ = "1.0.0"
__all__ = [
    "Cell",
    "DIFFICULTIES",
    "GameSession",
    "HistoryNode",
    "HistoryTree",
    "PuzzleResult",
    "analyze",
    "count_solutions",
    "create_game_board",
    "difficulty_label",
    "generate_puzzle",
    "get_hint",
    "is_solved",
    "load_config",
    "solve",
    "solve_puzzle",
    "update_conflicts",
]
