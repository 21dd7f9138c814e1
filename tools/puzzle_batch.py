"""
Generate batches of puzzles to JSONL, or verify an existing batch.

Key behavior:
- `generate` writes one JSON object per line: puzzle, solution, difficulty,
  difficulty_score, strategies, seed.
- Seeds are consecutive from --seed, so any line can be regenerated alone.
- `verify` re-checks every line: the puzzle has exactly one solution and
  that solution matches the stored one.
- Progress logs during long runs so it never feels "stuck".
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path
from typing import List

from sudoku_engine import count_solutions, generate_puzzle, load_config, solve


def ts() -> str:
    # Local time timestamp for logs
    return time.strftime("%Y-%m-%d %H:%M:%S")


def log(msg: str, *, quiet: bool = False) -> None:
    if not quiet:
        print(f"[{ts()}] {msg}", flush=True)


def generate_batch(
    out_path: Path,
    *,
    count: int,
    difficulty: str,
    seed: int,
    overwrite: bool,
    quiet: bool,
    config=None,
) -> int:
    if count <= 0:
        raise ValueError("count must be >= 1")
    if out_path.exists() and not overwrite:
        raise FileExistsError(f"Refusing to overwrite existing output file: {out_path}")

    out_path.parent.mkdir(parents=True, exist_ok=True)
    t0 = time.time()
    with out_path.open("w", encoding="utf-8", newline="\n") as f:
        for n in range(count):
            result = generate_puzzle(difficulty, seed=seed + n, config=config)
            row = result.to_dict()
            row["seed"] = seed + n
            f.write(json.dumps(row) + "\n")
            elapsed = time.time() - t0
            log(f"progress: {n + 1}/{count} clues={result.clue_count} elapsed={elapsed:,.1f}s", quiet=quiet)
    return count


def verify_batch(in_path: Path, *, quiet: bool) -> List[str]:
    """Return a list of problems; empty means every line checked out."""
    if not in_path.exists():
        raise FileNotFoundError(f"Input file not found: {in_path}")
    problems: List[str] = []
    checked = 0
    with in_path.open("r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, 1):
            if not line.strip():
                continue
            try:
                row = json.loads(line)
                puzzle = row["puzzle"]
            except (json.JSONDecodeError, KeyError) as e:
                problems.append(f"line {lineno}: unreadable ({e})")
                continue
            n = count_solutions(puzzle, 2)
            if n != 1:
                problems.append(f"line {lineno}: {n if n < 2 else '2+'} solutions")
            elif row.get("solution") is not None and solve(puzzle) != row["solution"]:
                problems.append(f"line {lineno}: stored solution does not match")
            checked += 1
    log(f"verified {checked} puzzle(s), {len(problems)} problem(s)", quiet=quiet)
    return problems


def main(argv: List[str]) -> int:
    ap = argparse.ArgumentParser(description="Generate or verify JSONL puzzle batches.")
    ap.add_argument("--quiet", action="store_true", help="Suppress progress/status logs.")
    sub = ap.add_subparsers(dest="cmd", required=True)

    g = sub.add_parser("generate", help="Generate N puzzles into a JSONL file.")
    g.add_argument("--out", required=True, help="Output .jsonl path")
    g.add_argument("--count", type=int, default=10)
    g.add_argument("--difficulty", type=str, default="medium")
    g.add_argument("--seed", type=int, default=0)
    g.add_argument("--config", type=str, default=None, help="Optional YAML config override")
    g.add_argument("--overwrite", action="store_true")

    v = sub.add_parser("verify", help="Check uniqueness of every puzzle in a JSONL file.")
    v.add_argument("input", help="Input .jsonl path")

    args = ap.parse_args(argv)
    quiet = bool(args.quiet)

    if args.cmd == "generate":
        if args.count <= 0:
            print("[error] --count must be >= 1", file=sys.stderr)
            return 2
        try:
            cfg = load_config(args.config)
            n = generate_batch(
                Path(args.out),
                count=args.count,
                difficulty=args.difficulty,
                seed=args.seed,
                overwrite=bool(args.overwrite),
                quiet=quiet,
                config=cfg,
            )
        except (ValueError, FileExistsError) as e:
            print(f"[error] {e}", file=sys.stderr)
            return 2
        log(f"[ok] wrote {n} puzzle(s) to {args.out}", quiet=quiet)
        return 0

    try:
        problems = verify_batch(Path(args.input), quiet=quiet)
    except FileNotFoundError as e:
        print(f"[error] {e}", file=sys.stderr)
        return 2
    for p in problems:
        print(f"[error] {p}", file=sys.stderr)
    return 1 if problems else 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
