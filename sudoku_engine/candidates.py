"""Bitmask candidate bookkeeping and constraint propagation.

Digit ``d`` is stored as bit ``d - 1``; ``ALL_CANDIDATES`` (0x1FF) means every
digit is still possible. ``CandidateState`` keeps two flat arrays, the solved
values and the candidate masks, and propagates with a worklist of pending
``(cell, digit)`` eliminations instead of native recursion:

- removing the last candidate of a cell is a contradiction;
- a cell left with one candidate has that digit removed from all its peers;
- a digit left with no place in a unit is a contradiction;
- a digit left with one place in a unit is assigned there.

Contradictions are reported by returning ``False``; the state is then
unusable and the caller is expected to drop it (search works on copies).
"""

from __future__ import annotations

from collections import deque
from typing import Iterable

from .grid import DIGITS, NUM_CELLS, PEERS, UNITS_OF

ALL_CANDIDATES = 0x1FF

BIT = {d: 1 << (d - 1) for d in DIGITS}


def popcount(mask: int) -> int:
    return bin(mask).count("1")


def is_single(mask: int) -> bool:
    return mask != 0 and mask & (mask - 1) == 0


def single_digit(mask: int) -> int:
    """Digit of a one-bit mask."""
    return mask.bit_length()


def mask_to_digits(mask: int) -> list[int]:
    return [d for d in DIGITS if mask & BIT[d]]


def digits_to_mask(digits: Iterable[int]) -> int:
    mask = 0
    for d in digits:
        mask |= BIT[d]
    return mask


class CandidateState:
    """Solved values plus per-cell candidate masks for one propagation line."""

    __slots__ = ("values", "masks")

    def __init__(self, values: list[int] | None = None, masks: list[int] | None = None):
        self.values = values if values is not None else [0] * NUM_CELLS
        self.masks = masks if masks is not None else [ALL_CANDIDATES] * NUM_CELLS

    @classmethod
    def from_values(cls, values: list[int]) -> "CandidateState | None":
        """Propagate every non-zero value of a flat grid; None on contradiction."""
        state = cls()
        for i, d in enumerate(values):
            if d and not state.assign(i, d):
                return None
        return state

    def copy(self) -> "CandidateState":
        return CandidateState(self.values[:], self.masks[:])

    def candidates(self, i: int) -> list[int]:
        return mask_to_digits(self.masks[i])

    def is_complete(self) -> bool:
        return all(self.values)

    def assign(self, i: int, d: int) -> bool:
        """Force cell ``i`` to ``d`` by eliminating every other candidate."""
        bit = BIT[d]
        mask = self.masks[i]
        if not mask & bit:
            return False
        others = mask & ~bit
        if not others:
            self.values[i] = d
            return True
        return self._propagate((i, e) for e in mask_to_digits(others))

    def eliminate(self, i: int, d: int) -> bool:
        """Remove ``d`` from cell ``i`` and propagate the consequences."""
        return self._propagate([(i, d)])

    def _propagate(self, pending) -> bool:
        queue = deque(pending)
        masks = self.masks
        while queue:
            i, d = queue.popleft()
            bit = BIT[d]
            mask = masks[i]
            if not mask & bit:
                continue
            mask &= ~bit
            masks[i] = mask
            if not mask:
                return False
            if is_single(mask):
                forced = single_digit(mask)
                self.values[i] = forced
                fbit = BIT[forced]
                queue.extend((p, forced) for p in PEERS[i] if masks[p] & fbit)
            for unit in UNITS_OF[i]:
                places = [j for j in unit if masks[j] & bit]
                if not places:
                    return False
                if len(places) == 1:
                    j = places[0]
                    rest = masks[j] & ~bit
                    if rest:
                        queue.extend((j, e) for e in mask_to_digits(rest))
        return True

    def most_constrained(self) -> int | None:
        """Unsolved cell with the fewest candidates, first in row-major order on ties."""
        best = None
        best_count = 10
        for i, mask in enumerate(self.masks):
            if self.values[i]:
                continue
            n = popcount(mask)
            if n < best_count:
                best, best_count = i, n
                if n == 2:
                    break
        return best
