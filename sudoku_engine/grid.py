"""Grid geometry: index math, houses (rows, columns, boxes) and peer tables.

Cells are addressed either as (row, col) pairs in [0, 9) x [0, 9) or as a
linear index ``row * 9 + col``. Every table here is built once at import time
and is immutable afterwards, so it can be shared by any number of solvers and
boards.
"""

from __future__ import annotations

import numpy as np

SIZE = 9
BOX = 3
NUM_CELLS = SIZE * SIZE
DIGITS = tuple(range(1, SIZE + 1))

Cell = tuple[int, int]  # (row, col) 0-based


def in_bounds(r: int, c: int) -> bool:
    return 0 <= r < SIZE and 0 <= c < SIZE


def check_cell(r: int, c: int) -> None:
    """Raise ValueError for coordinates outside the 9x9 grid."""
    if not in_bounds(r, c):
        raise ValueError(f"cell ({r}, {c}) is outside the 9x9 grid")


def check_digit(d: int) -> None:
    if d not in DIGITS:
        raise ValueError(f"digit must be in 1..9, got {d!r}")


def cell_index(r: int, c: int) -> int:
    return r * SIZE + c


def index_to_rc(i: int) -> Cell:
    return divmod(i, SIZE)


def which_box(r: int, c: int) -> int:
    return BOX * (r // BOX) + (c // BOX)


def rc_label(r: int, c: int) -> str:
    """Human label with 1-based coordinates, e.g. 'R3C5'."""
    return f"R{r + 1}C{c + 1}"


def _build_tables():
    idx = np.arange(NUM_CELLS).reshape(SIZE, SIZE)
    rows = [tuple(int(i) for i in idx[r]) for r in range(SIZE)]
    cols = [tuple(int(i) for i in idx[:, c]) for c in range(SIZE)]
    # (band, row-in-band, stack, col-in-stack) -> (band, stack, row, col)
    blocks = idx.reshape(BOX, BOX, BOX, BOX).transpose(0, 2, 1, 3).reshape(SIZE, SIZE)
    boxes = [tuple(int(i) for i in blocks[b]) for b in range(SIZE)]

    units_of = []
    peers = []
    for i in range(NUM_CELLS):
        r, c = index_to_rc(i)
        units = (rows[r], cols[c], boxes[which_box(r, c)])
        units_of.append(units)
        ps = sorted(set().union(*units) - {i})
        peers.append(tuple(ps))
    return tuple(rows), tuple(cols), tuple(boxes), tuple(units_of), tuple(peers)


ROWS, COLS, BOXES, UNITS_OF, PEERS = _build_tables()
PEER_SETS = tuple(frozenset(p) for p in PEERS)


def peers(r: int, c: int) -> list[Cell]:
    """Return the 20 peer coordinates for a cell (same row, column, and 3x3 box)."""
    return [index_to_rc(i) for i in PEERS[cell_index(r, c)]]


def row_mates(r: int, c: int) -> list[Cell]:
    return [(r, cc) for cc in range(SIZE) if cc != c]


def col_mates(r: int, c: int) -> list[Cell]:
    return [(rr, c) for rr in range(SIZE) if rr != r]


def box_mates(r: int, c: int) -> list[Cell]:
    return [index_to_rc(i) for i in BOXES[which_box(r, c)] if i != cell_index(r, c)]


def are_peers(a: Cell, b: Cell) -> bool:
    return cell_index(*b) in PEER_SETS[cell_index(*a)]


def flatten(grid) -> list[int]:
    """Row-major copy of a 9x9 grid, validating its shape and digits."""
    arr = np.asarray(grid)
    if arr.shape != (SIZE, SIZE):
        raise ValueError(f"grid must be 9x9, got shape {arr.shape}")
    if arr.size and (arr.min() < 0 or arr.max() > SIZE):
        raise ValueError("grid values must be in 0..9")
    return [int(v) for v in arr.reshape(-1)]


def unflatten(values) -> list[list[int]]:
    return [list(values[r * SIZE:(r + 1) * SIZE]) for r in range(SIZE)]


def clone_grid(grid):
    return [row[:] for row in grid]
