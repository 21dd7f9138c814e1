"""Puzzle generation with a uniqueness guarantee.

1. Seed a solved grid: the three diagonal boxes share no house, so each gets
   an independent random permutation of 1..9; the solver completes the rest.
2. Carve: visit the 81 cells in random order and clear each one unless the
   grid would stop having exactly one solution, until the tier's clue target
   is reached.
3. Label: score from the clue count and tier multiplier, strategies from a
   logical solve of the carved puzzle (see ``techniques.analyze``).
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

import numpy as np

from types_sudoku import Grid, Strategy

from .config import DotDict, default_config
from .grid import BOXES, NUM_CELLS, unflatten
from .search import count_solutions_values, solve_values
from .techniques import analyze

log = logging.getLogger(__name__)

DIFFICULTIES = ("easy", "medium", "hard", "expert", "master")

_SEED_ATTEMPTS = 10


@dataclass(frozen=True)
class PuzzleResult:
    """A generated game: clues, full solution and difficulty labelling."""

    puzzle: Grid
    solution: Grid
    difficulty: str
    difficulty_score: int
    strategies: List[Strategy] = field(default_factory=list)

    @property
    def clue_count(self) -> int:
        return sum(1 for row in self.puzzle for v in row if v)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def resolve_difficulty(difficulty: str | None, config: DotDict) -> str:
    key = (difficulty or config.default_difficulty or "").strip().lower()
    if key not in config.difficulty:
        raise ValueError(
            f"Unknown difficulty: {difficulty!r} (expected one of {', '.join(config.difficulty)})"
        )
    return key


def difficulty_score(clue_count: int, multiplier: int) -> int:
    return (NUM_CELLS - clue_count) * 10 * multiplier


def difficulty_label(score: int) -> str:
    if score < 100:
        return "Easy"
    if score < 300:
        return "Medium"
    if score < 700:
        return "Hard"
    if score < 1500:
        return "Expert"
    return "Master"


def seed_solution(rng: np.random.Generator) -> list[int]:
    """A complete, valid flat grid grown from three random diagonal boxes."""
    for _ in range(_SEED_ATTEMPTS):
        values = [0] * NUM_CELLS
        for b in (0, 4, 8):
            perm = rng.permutation(9) + 1
            for i, d in zip(BOXES[b], perm):
                values[i] = int(d)
        solution = solve_values(values)
        if solution is not None:
            return solution
    raise RuntimeError("could not complete a seeded grid")


def carve(solution: list[int], target: int, rng: np.random.Generator) -> tuple[list[int], int]:
    """Remove clues in random order while the puzzle stays unique.

    Returns the carved flat grid and the number of rejected removals.
    """
    puzzle = solution[:]
    clues = NUM_CELLS
    rejected = 0
    for i in rng.permutation(NUM_CELLS):
        if clues <= target:
            break
        i = int(i)
        saved = puzzle[i]
        puzzle[i] = 0
        if count_solutions_values(puzzle, 2) != 1:
            puzzle[i] = saved
            rejected += 1
        else:
            clues -= 1
    return puzzle, rejected


# PUBLIC_INTERFACE
def generate_puzzle(
    difficulty: str | None = None,
    seed: int | None = None,
    config: DotDict | None = None,
) -> PuzzleResult:
    """Generate a puzzle with exactly one solution for the given tier.

    Parameters:
        difficulty: one of easy, medium, hard, expert, master
                    (None means the configured default).
        seed: optional RNG seed; the same seed reproduces the same puzzle.
        config: engine configuration (defaults when omitted).

    Raises:
        ValueError: for an unknown difficulty.
    """
    cfg = config or default_config()
    tier_name = resolve_difficulty(difficulty, cfg)
    tier = cfg.difficulty[tier_name]
    rng = np.random.default_rng(seed)

    solution = seed_solution(rng)
    lo, hi = tier.clues
    target = int(rng.integers(lo, hi + 1))
    puzzle, rejected = carve(solution, target, rng)
    clue_count = sum(1 for v in puzzle if v)
    log.debug("carved %s puzzle: target=%d clues=%d rejected=%d", tier_name, target, clue_count, rejected)
    if clue_count > target:
        log.warning("%s puzzle stopped at %d clues (target %d)", tier_name, clue_count, target)

    puzzle_grid = unflatten(puzzle)
    analysis = analyze(puzzle_grid)
    result = PuzzleResult(
        puzzle=puzzle_grid,
        solution=unflatten(solution),
        difficulty=tier_name,
        difficulty_score=difficulty_score(clue_count, tier.multiplier),
        strategies=analysis["strategies"],
    )
    log.info("generated %s puzzle with %d clues (score %d)", tier_name, clue_count, result.difficulty_score)
    return result
