# tests/test_board.py
import pytest
from conftest import PUZZLE, SOLUTION

from sudoku_engine import create_game_board, is_solved, solve_puzzle, update_conflicts
from sudoku_engine.board import (
    Cell,
    board_from_dicts,
    board_to_dicts,
    board_values,
    get_candidates,
    place_value,
    sanity_check,
    set_notes,
    toggle_note,
)
from sudoku_engine.grid import peers

EMPTY = [[0] * 9 for _ in range(9)]


def test_create_game_board_marks_clues_and_computes_notes():
    board = create_game_board(PUZZLE)
    for r in range(9):
        for c in range(9):
            cell = board[r][c]
            assert cell.is_fixed == bool(PUZZLE[r][c])
            assert not cell.is_conflict
            if cell.value:
                assert cell.notes == set()
            else:
                peer_values = {PUZZLE[pr][pc] for pr, pc in peers(r, c)}
                assert cell.notes.isdisjoint(peer_values)
                assert SOLUTION[r][c] in cell.notes
    assert board[0][2].notes == {1, 2, 4}


def test_get_candidates_of_filled_cell_is_empty():
    assert get_candidates(PUZZLE, 0, 0) == set()
    assert get_candidates(PUZZLE, 4, 4) == {5}


def test_same_row_duplicates_both_marked():
    board = create_game_board(EMPTY)
    board, _ = place_value(board, 0, 0, 5, auto_fill=False)
    board, _ = place_value(board, 0, 5, 5, auto_fill=False)
    flagged = {(r, c) for r in range(9) for c in range(9) if board[r][c].is_conflict}
    assert flagged == {(0, 0), (0, 5)}


def test_box_duplicates_both_marked():
    board = create_game_board(EMPTY)
    board[3][3].value = 7
    board[5][4].value = 7
    board = update_conflicts(board)
    assert board[3][3].is_conflict and board[5][4].is_conflict
    board[5][4].value = 0
    board = update_conflicts(board)
    assert not board[3][3].is_conflict


def test_update_conflicts_returns_a_copy():
    board = create_game_board(PUZZLE)
    board[0][2].value = 5
    marked = update_conflicts(board)
    assert marked[0][2].is_conflict
    assert not board[0][2].is_conflict


def test_is_solved():
    solved = create_game_board(SOLUTION)
    assert is_solved(solved)
    assert is_solved(solved)
    assert not is_solved(create_game_board(PUZZLE))
    broken = create_game_board(SOLUTION)
    broken[0][0].value, broken[0][1].value = broken[0][1].value, broken[0][0].value
    assert not is_solved(broken)


def test_solve_puzzle_accepts_board_or_grid():
    assert solve_puzzle(create_game_board(PUZZLE)) == SOLUTION
    assert solve_puzzle(PUZZLE) == SOLUTION
    bad = [row[:] for row in PUZZLE]
    bad[0][2] = 3
    assert solve_puzzle(bad) is None


def test_place_value_cascades_auto_fill():
    board = create_game_board(PUZZLE)
    new_board, description = place_value(board, 0, 2, 4)
    assert description.startswith("R1C3 = 4")
    assert "auto)" in description
    for r in range(9):
        for c in range(9):
            if new_board[r][c].value:
                assert new_board[r][c].value == SOLUTION[r][c]
                assert new_board[r][c].notes == set()
    # the input board is untouched
    assert board[0][2].value == 0


def test_place_value_on_fixed_cell_is_noop():
    board = create_game_board(PUZZLE)
    assert place_value(board, 0, 0, 9) is None
    assert board[0][0].value == 5


def test_place_value_rejects_bad_input():
    board = create_game_board(PUZZLE)
    with pytest.raises(ValueError):
        place_value(board, 9, 0, 1)
    with pytest.raises(ValueError):
        place_value(board, 0, 2, 10)


def test_clearing_a_cell_restores_its_notes():
    board = create_game_board(PUZZLE)
    board, _ = place_value(board, 0, 2, 1, auto_fill=False)
    board, description = place_value(board, 0, 2, 0, auto_fill=False)
    assert description == "R1C3 ✕"
    assert board[0][2].value == 0
    assert board[0][2].notes == {1, 2, 4}


def test_clearing_late_in_the_game_does_not_refill():
    board = create_game_board(PUZZLE)
    for r in range(9):
        for c in range(9):
            if not PUZZLE[r][c]:
                board, _ = place_value(board, r, c, SOLUTION[r][c], auto_fill=False)
    board, description = place_value(board, 0, 2, 0)
    assert description == "R1C3 ✕"
    assert board[0][2].value == 0
    assert board[0][2].notes == {4}


def test_toggle_note_and_set_notes():
    board = create_game_board(PUZZLE)
    toggled = toggle_note(board, 0, 2, 4)
    assert toggled[0][2].notes == {1, 2}
    assert toggle_note(toggled, 0, 2, 4)[0][2].notes == {1, 2, 4}
    assert toggle_note(board, 0, 0, 4) is None
    assert set_notes(board, 0, 2, [7])[0][2].notes == {7}
    with pytest.raises(ValueError):
        set_notes(board, 0, 2, [0])


def test_cell_from_dict_rejects_out_of_range_digits():
    with pytest.raises(ValueError):
        Cell.from_dict({"value": 10})
    with pytest.raises(ValueError):
        Cell.from_dict({"value": 0, "notes": [1, 12]})
    assert Cell.from_dict({"value": 0, "notes": [3, 1]}).notes == {1, 3}


def test_board_dict_round_trip_keeps_notes_consistent():
    board = create_game_board(PUZZLE)
    rows = board_to_dicts(board)
    assert rows[0][0] == {"value": 5, "is_fixed": True, "notes": [], "is_conflict": False}
    back = board_from_dicts(rows)
    assert board_values(back) == PUZZLE
    assert back[0][2].notes == {1, 2, 4}
    assert Cell.from_dict({"value": 3, "notes": [1, 2]}).notes == set()
    with pytest.raises(ValueError):
        board_from_dicts(rows[:8])


def test_sanity_check_reports_overwrites_and_duplicates():
    assert sanity_check(PUZZLE, PUZZLE)["ok"]
    current = [row[:] for row in PUZZLE]
    current[0][0] = 3
    report = sanity_check(PUZZLE, current)
    assert not report["ok"]
    kinds = {i["type"] for i in report["issues"]}
    assert kinds == {"given_overwritten", "duplicate"}
    dup_units = {i["unit"] for i in report["issues"] if i["type"] == "duplicate"}
    assert {"r1", "b1"} <= dup_units
