"""End-to-end demo: generate a puzzle, print it, then walk the hint engine step by step."""

# demo_cli.py
# - Generates a puzzle for the chosen difficulty (seeded for repeatability)
# - Builds the player board with auto notes
# - Repeatedly asks for a hint and applies it, recording each step
# - Prints a JSON payload with the puzzle, the steps and the final state
#
# Usage:
#   python apps/cli/demo_cli.py --difficulty easy --seed 123 --max-hints 20

import argparse
import json
import sys
import time

from sudoku_engine import GameSession, difficulty_label, load_config
from sudoku_engine.board import board_values
from sudoku_engine.game import HINT


def ts() -> str:
    return time.strftime("%Y-%m-%d %H:%M:%S")


def log(msg: str, *, quiet: bool = False) -> None:
    if not quiet:
        print(f"[{ts()}] {msg}", file=sys.stderr, flush=True)


def format_grid(grid) -> str:
    lines = []
    for r, row in enumerate(grid):
        if r and r % 3 == 0:
            lines.append("------+-------+------")
        chunks = [" ".join(str(v) if v else "." for v in row[i:i + 3]) for i in (0, 3, 6)]
        lines.append(" | ".join(chunks))
    return "\n".join(lines)


def walk_hints(session: GameSession, max_hints: int):
    steps = []
    status = HINT
    for n in range(1, max_hints + 1):
        status, step = session.request_hint()
        if status != HINT:
            break
        session.apply_hint(step)
        steps.append({"index": n, **step})
    else:
        status, _ = session.request_hint()
    return steps, status


def main(args) -> int:
    quiet = bool(args.quiet)
    cfg = load_config(args.config)
    log(f"generating {args.difficulty} puzzle (seed={args.seed})", quiet=quiet)
    try:
        session = GameSession.new_game(args.difficulty, seed=args.seed, config=cfg)
    except ValueError as e:
        print(f"[error] {e}", file=sys.stderr)
        return 2
    result = session.result
    log(f"clues={result.clue_count} score={result.difficulty_score} "
        f"({difficulty_label(result.difficulty_score)})", quiet=quiet)
    if not quiet:
        print(format_grid(result.puzzle), file=sys.stderr)

    steps, status = walk_hints(session, args.max_hints)
    payload = {
        "difficulty": result.difficulty,
        "difficulty_score": result.difficulty_score,
        "strategies": result.strategies,
        "puzzle": result.puzzle,
        "steps": steps,
        "status": status,
        "current": board_values(session.board),
        "moves": session.move_count,
    }
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument("--difficulty", type=str, default="medium",
                    choices=["easy", "medium", "hard", "expert", "master"])
    ap.add_argument("--seed", type=int, default=123)
    ap.add_argument("--max-hints", type=int, default=10)
    ap.add_argument("--config", type=str, default=None, help="Optional YAML config override")
    ap.add_argument("--quiet", action="store_true")
    raise SystemExit(main(ap.parse_args()))
