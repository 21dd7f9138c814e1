# tests/test_api.py
from conftest import PUZZLE, SOLUTION
from fastapi.testclient import TestClient

from apps.api.sudoku_tool_api import app
from sudoku_engine import create_game_board
from sudoku_engine.board import board_to_dicts

client = TestClient(app)


def board_payload(grid=PUZZLE):
    return {"board": board_to_dicts(create_game_board(grid))}


def test_generate():
    r = client.post("/generate", json={"difficulty": "easy", "seed": 1})
    assert r.status_code == 200
    body = r.json()
    assert body["difficulty"] == "easy"
    assert len(body["puzzle"]) == 9 and len(body["solution"]) == 9
    assert body["label"] in {"Easy", "Medium", "Hard", "Expert", "Master"}


def test_generate_unknown_difficulty_is_400():
    r = client.post("/generate", json={"difficulty": "nightmare"})
    assert r.status_code == 400


def test_game_board():
    r = client.post("/game_board", json={"grid": PUZZLE})
    assert r.status_code == 200
    cell = r.json()["board"][0][2]
    assert cell["value"] == 0 and not cell["is_fixed"]
    assert cell["notes"] == [1, 2, 4]


def test_game_board_rejects_bad_shape():
    r = client.post("/game_board", json={"grid": [[0] * 9] * 8})
    assert r.status_code == 400


def test_conflicts_marks_both_cells():
    payload = board_payload()
    payload["board"][0][2]["value"] = 5
    r = client.post("/conflicts", json=payload)
    board = r.json()["board"]
    assert board[0][0]["is_conflict"] and board[0][2]["is_conflict"]
    assert not board[0][1]["is_conflict"]


def test_is_solved():
    assert client.post("/is_solved", json=board_payload(SOLUTION)).json() == {"solved": True}
    assert client.post("/is_solved", json=board_payload()).json() == {"solved": False}


def test_hint():
    hint = client.post("/hint", json=board_payload()).json()["hint"]
    assert hint["technique"] == "Naked Single"
    assert hint["affected_cells"][0]["value"]
    assert client.post("/hint", json=board_payload(SOLUTION)).json() == {"hint": None}


def test_out_of_range_cells_are_400():
    payload = board_payload()
    for row in payload["board"]:
        for cell in row:
            cell["notes"] = []
    payload["board"][0][2]["value"] = 10
    for path in ("/hint", "/conflicts", "/is_solved"):
        assert client.post(path, json=payload).status_code == 400
    payload = board_payload()
    payload["board"][0][2]["notes"] = [0, 4]
    assert client.post("/hint", json=payload).status_code == 400


def test_solve():
    assert client.post("/solve", json={"grid": PUZZLE}).json() == {"solved": True, "solution": SOLUTION}
    bad = [row[:] for row in PUZZLE]
    bad[0][2] = 5
    assert client.post("/solve", json={"grid": bad}).json() == {"solved": False, "solution": None}


def test_sanity_check():
    current = [row[:] for row in PUZZLE]
    current[0][0] = 1
    body = client.post("/sanity_check", json={"original": PUZZLE, "current": current}).json()
    assert not body["ok"]
    assert body["issues"][0]["type"] == "given_overwritten"
